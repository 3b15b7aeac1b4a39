"""
Tokenizer for inline message markup

Splits raw message text into an alternating sequence of literal text runs and
code tokens. The scan is explicit rather than regex based:

1. Find the next marker that is immediately followed by an alphabet character
2. Everything before it becomes a TextToken, the two characters a CodeToken

A marker not followed by an alphabet character (including a marker at the
very end of the input) is ordinary text and produces no token of its own.

The sequence always starts and ends with a TextToken, possibly empty, and
text and code tokens strictly alternate:

    >>> source_tokenize("&lBold&rPlain")
    [TextToken(text=''), CodeToken(code='&l'), TextToken(text='Bold'),
     CodeToken(code='&r'), TextToken(text='Plain')]
"""

from typing import FrozenSet, List, Optional

from ..models.codes import CodeToken, TextToken, Token
from .codes import CODE_ALPHABET


class Tokenizer:
    """
    Scanner for marker + code-character pairs

    Attributes:
        marker: Character introducing a code
        alphabet: Characters that complete a code when they follow the marker
    """

    def __init__(self, marker: str = "&", alphabet: FrozenSet[str] = CODE_ALPHABET) -> None:
        if len(marker) != 1:
            raise ValueError(f"marker must be a single character, got {marker!r}")
        self.marker = marker
        self.alphabet = alphabet

    def code_find(self, source: str, start: int) -> int:
        """
        Locate the next code at or after start

        Args:
            source: Text being scanned
            start: Index to scan from

        Returns:
            Index of the marker of the next code, or -1 if there is none
        """
        position = source.find(self.marker, start)
        while position != -1:
            following = position + 1
            if following < len(source) and source[following] in self.alphabet:
                return position
            position = source.find(self.marker, following)
        return -1

    def tokenize(self, source: str) -> List[Token]:
        """
        Split source into alternating text and code tokens

        Args:
            source: Raw message text

        Returns:
            Tokens in input order, starting and ending with a TextToken
        """
        tokens: List[Token] = []
        position = 0

        while True:
            code_at = self.code_find(source, position)
            if code_at == -1:
                tokens.append(TextToken(source[position:]))
                return tokens

            tokens.append(TextToken(source[position:code_at]))
            tokens.append(CodeToken(source[code_at:code_at + 2]))
            position = code_at + 2


_DEFAULT_TOKENIZER = Tokenizer()


def source_tokenize(source: str, marker: Optional[str] = None) -> List[Token]:
    """
    Tokenize source with the default marker, or with an explicit one

    Args:
        source: Raw message text
        marker: Marker character; defaults to "&"

    Returns:
        Alternating token sequence
    """
    if marker is not None and marker != _DEFAULT_TOKENIZER.marker:
        return Tokenizer(marker).tokenize(source)
    return _DEFAULT_TOKENIZER.tokenize(source)
