"""
fusemods - Inline message markup decorator

Decodes &-coded message text into styled HTML segments and tags status
indicators by their literal text.
"""

__version__ = "1.0.0"

from .lib import (
    MessageFormatter,
    message_format,
    segments_decode,
    text_escape,
    document_parse,
    BoardDecorator,
    StatusClassifier,
    Theme,
    styles_inject,
    rescan_schedule,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "MessageFormatter",
    "message_format",
    "segments_decode",
    "text_escape",
    "document_parse",
    "BoardDecorator",
    "StatusClassifier",
    "Theme",
    "styles_inject",
    "rescan_schedule",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
