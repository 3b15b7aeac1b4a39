"""
fusemods - Inline message markup decorator

Turns &-coded message text into styled HTML and tags status indicators.
"""

__version__ = "1.0.0"

from .escape import text_escape
from .codes import CODE_TABLE, CLASS_NAMES, CodeTable, code_lookup
from .tokenizer import Tokenizer, source_tokenize
from .formatter import MessageFormatter, message_format, segments_decode, segment_render, state_advance
from .document import Document, Element, document_parse
from .board import BoardDecorator, messages_format
from .status import StatusClassifier, statuses_apply
from .theme import Theme, ThemeError, styles_inject
from .scheduler import RescanHandle, rescan_schedule
from .log import LOG, state_connectToLogger

__all__ = [
    "text_escape",
    "CODE_TABLE",
    "CLASS_NAMES",
    "CodeTable",
    "code_lookup",
    "Tokenizer",
    "source_tokenize",
    "MessageFormatter",
    "message_format",
    "segments_decode",
    "segment_render",
    "state_advance",
    "Document",
    "Element",
    "document_parse",
    "BoardDecorator",
    "messages_format",
    "StatusClassifier",
    "statuses_apply",
    "Theme",
    "ThemeError",
    "styles_inject",
    "RescanHandle",
    "rescan_schedule",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
