"""
Markup code, token and style data models

Type-safe structures shared by the tokenizer, the code table and the
formatting engine. Everything here is immutable: a StyleState is replaced,
never mutated, as tokens are consumed.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional, Tuple, Union


class CodeKind(Enum):
    """
    Kinds of inline markup codes

    COLOR codes replace each other, FORMAT codes stack, RESET clears both.
    UNRECOGNIZED is reported for alphabet members with no table entry.
    """
    COLOR = "color"
    FORMAT = "format"
    RESET = "reset"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class CodeEntry:
    """
    One row of the code table

    Attributes:
        code: Canonical (lower-case) two-character code, e.g. "&l"
        class_name: CSS class emitted for text styled by this code
        kind: How the code affects the active style

    Example:
        CodeEntry(code="&1", class_name="message-color-1", kind=CodeKind.COLOR)
    """
    code: str
    class_name: str
    kind: CodeKind


@dataclass(frozen=True)
class TextToken:
    """A run of literal input text (possibly empty), not yet escaped"""
    text: str


@dataclass(frozen=True)
class CodeToken:
    """
    A marker followed by one alphabet character

    The code keeps the casing it had in the input ("&B" stays "&B") so that
    unrecognized codes can be passed through verbatim.
    """
    code: str


Token = Union[TextToken, CodeToken]


@dataclass(frozen=True)
class Segment:
    """
    One unit of engine output

    Attributes:
        text: Escaped text content
        classes: Classes in effect when the text was met, formats first then
                 the color. Empty means the text is emitted unwrapped.
    """
    text: str
    classes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class StyleState:
    """
    Active style while decoding one input string

    Attributes:
        color: Class of the active color, or None
        formats: Active format classes in insertion order, no duplicates

    Example:
        >>> StyleState().format_add("message-format-bold").color_set("message-color-2").classes()
        ('message-format-bold', 'message-color-2')
    """
    color: Optional[str] = None
    formats: Tuple[str, ...] = ()

    def color_set(self, class_name: str) -> "StyleState":
        """Return a state whose color is class_name, replacing any previous one"""
        return StyleState(color=class_name, formats=self.formats)

    def format_add(self, class_name: str) -> "StyleState":
        """Return a state with class_name appended to the formats (no-op if present)"""
        if class_name in self.formats:
            return self
        return StyleState(color=self.color, formats=self.formats + (class_name,))

    def cleared(self) -> "StyleState":
        """Return the empty state"""
        return StyleState()

    def classes(self) -> Tuple[str, ...]:
        """Classes to apply to text met in this state: formats, then color"""
        if self.color is None:
            return self.formats
        return self.formats + (self.color,)
