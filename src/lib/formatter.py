"""
Formatting engine for inline message markup

Turns tokenized message text into HTML made of minimal <span> segments.

The engine is a state machine whose only state is a StyleState value. Each
token is handled by state_advance(), a pure function returning the next state
and at most one Segment. No state is shared between calls, so decoding is
safe to run concurrently on different inputs.

Rules:
- Text is emitted with the active formats (insertion order) then the color
- Color codes replace each other, format codes stack, reset clears both
- Empty text emits nothing and leaves the state alone
- Unrecognized codes are emitted as literal text in the active style

Example:
    >>> message_format("&l&nBoth &rplain")
    '<span class="message-format-bold message-format-underline">Both </span>plain'
"""

from typing import List, Optional, Tuple

from ..models.codes import CodeKind, CodeToken, Segment, StyleState, TextToken, Token
from .codes import CODE_TABLE, CodeTable
from .escape import text_escape
from .log import LOG
from .tokenizer import Tokenizer


def text_emit(text: str, state: StyleState) -> Optional[Segment]:
    """
    Build the segment for a run of literal text

    Args:
        text: Raw (unescaped) text
        state: Active style

    Returns:
        Segment with escaped text and the active classes, or None for empty text
    """
    if not text:
        return None
    return Segment(text=text_escape(text), classes=state.classes())


def state_advance(
    state: StyleState, token: Token, table: CodeTable = CODE_TABLE
) -> Tuple[StyleState, Optional[Segment]]:
    """
    Apply one token to the style state

    Args:
        state: Style in effect before the token
        token: Next token from the tokenizer
        table: Code table used to resolve code tokens

    Returns:
        (next state, segment emitted by this token or None)
    """
    if isinstance(token, TextToken):
        return state, text_emit(token.text, state)

    entry = table.lookup(token.code)
    if entry is None:
        LOG(f"Unrecognized code {token.code!r} kept as text", level=3)
        return state, text_emit(token.code, state)

    if entry.kind is CodeKind.RESET:
        return state.cleared(), None
    if entry.kind is CodeKind.COLOR:
        return state.color_set(entry.class_name), None
    if entry.kind is CodeKind.FORMAT:
        return state.format_add(entry.class_name), None

    # UNRECOGNIZED entries are never stored in a table, but stay literal if they are
    return state, text_emit(token.code, state)


def segment_render(segment: Segment) -> str:
    """
    Render a segment as HTML

    Args:
        segment: Segment with escaped text

    Returns:
        The text itself when unstyled, otherwise a <span> carrying the classes

    Example:
        >>> segment_render(Segment("Hi", ("message-color-1",)))
        '<span class="message-color-1">Hi</span>'
    """
    if not segment.classes:
        return segment.text
    return f'<span class="{" ".join(segment.classes)}">{segment.text}</span>'


class MessageFormatter:
    """
    Decodes message markup into styled HTML

    Holds only immutable configuration (tokenizer and code table). Every
    call to decode() or format() starts from an empty StyleState.

    Attributes:
        tokenizer: Splits source into text and code tokens
        table: Resolves code tokens to classes
    """

    def __init__(self, marker: str = "&", table: CodeTable = CODE_TABLE) -> None:
        self.tokenizer = Tokenizer(marker)
        self.table = table

    def decode(self, source: str) -> List[Segment]:
        """
        Decode source into segments

        Args:
            source: Raw message text

        Returns:
            Segments in input order; empty text produces none
        """
        state = StyleState()
        segments: List[Segment] = []

        for token in self.tokenizer.tokenize(source):
            state, segment = state_advance(state, token, self.table)
            if segment is not None:
                segments.append(segment)

        return segments

    def format(self, source: str) -> str:
        """
        Decode source and render it to an HTML fragment

        Args:
            source: Raw message text

        Returns:
            Concatenated segment markup
        """
        segments = self.decode(source)
        LOG(f"Decoded {len(source)} characters into {len(segments)} segments", level=3)
        return "".join(segment_render(segment) for segment in segments)


_DEFAULT_FORMATTER = MessageFormatter()


def segments_decode(source: str) -> List[Segment]:
    """Decode source with the default formatter"""
    return _DEFAULT_FORMATTER.decode(source)


def message_format(source: str) -> str:
    """Decode source with the default formatter and render it to HTML"""
    return _DEFAULT_FORMATTER.format(source)
