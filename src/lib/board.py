"""
Message board decoration pass

Finds message containers that have not been decorated yet and replaces their
content with the formatter's output. A container is eligible when:

1. It carries the message class (default "message")
2. It does not yet carry the formatted class (default "message-formatted")
3. Its text content contains the marker character

Decorated containers receive the formatted class, which makes the pass
idempotent: running it again, for instance from the rescan scheduler, skips
them. The formatter itself must never see already decorated markup.
"""

import html
from typing import Optional

from .document import Document, RawNode
from .formatter import MessageFormatter, segment_render
from .log import LOG


class BoardDecorator:
    """
    Decorates message containers of a document

    Attributes:
        formatter: Engine used to decode container text
        message_class: Class marking eligible containers
        formatted_class: Class marking containers already decorated
    """

    def __init__(
        self,
        formatter: Optional[MessageFormatter] = None,
        message_class: Optional[str] = None,
        formatted_class: Optional[str] = None,
    ) -> None:
        from ..config import appsettings

        self.formatter = formatter or MessageFormatter(appsettings.marker)
        self.message_class = message_class or appsettings.message_class
        self.formatted_class = formatted_class or appsettings.formatted_class

    def messages_format(self, document: Document) -> int:
        """
        Decorate every eligible container in document

        Args:
            document: Parsed page, edited in place

        Returns:
            Number of containers decorated by this pass
        """
        marker = self.formatter.tokenizer.marker
        decorated = 0

        for element in document.elements_findByClass(self.message_class):
            if element.class_has(self.formatted_class):
                continue

            text = element.text_content()
            if marker not in text:
                continue

            segments = self.formatter.decode(text)
            markup = "".join(segment_render(segment) for segment in segments)
            # textContent of the decorated markup: the codes are gone
            plain = "".join(html.unescape(segment.text) for segment in segments)
            element.children_replace(RawNode(markup, plain))
            element.class_add(self.formatted_class)
            decorated += 1

        if decorated:
            LOG(f"Decorated {decorated} message container(s)", level=2)
        return decorated


def messages_format(document: Document) -> int:
    """Run one decoration pass with the configured defaults"""
    return BoardDecorator().messages_format(document)
