"""
Custom Pygments lexer for message markup highlighting

Highlights inline codes in raw message text so the source of a message can
be inspected in a terminal (the CLI prints it at the highest verbosity).

Token types:
- Name.Variable: Color codes (&0 .. &5)
- Keyword: Format codes (&k &l &m &n &i &b, and &B)
- Keyword.Reserved: Reset code (&r)
- Generic.Error: Alphabet codes without a table entry (&6 .. &f, &o)
- Text: Everything else, including dangling markers

The token rules are built from the marker, so a lexer for another marker
character is obtained with lexer_get(marker).
"""

import re
from typing import Dict, List, Optional, Tuple, Type

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexer import RegexLexer
from pygments.token import Generic, Keyword, Name, Text


def _rules(marker: str) -> List[Tuple[str, object]]:
    m = re.escape(marker)
    return [
        (m + r'[0-5]', Name.Variable),
        (m + r'[klmnibB]', Keyword),
        (m + r'r', Keyword.Reserved),
        (m + r'[0-9a-fA-Fo]', Generic.Error),
        (r'[^' + m + r']+', Text),
        (m, Text),
    ]


class MessageLexer(RegexLexer):
    """
    Lexer for &-code message markup

    Example:
        &l&1Warning&r: disk low

    Tokens:
        &l → Keyword
        &1 → Name.Variable
        Warning → Text
        &r → Keyword.Reserved
    """

    name = 'Message markup'
    aliases = ['fusemods', 'message']
    filenames = ['*.msg']

    marker = '&'

    tokens = {
        'root': _rules('&'),
    }


_lexer_classes: Dict[str, Type[MessageLexer]] = {'&': MessageLexer}


def lexer_get(marker: Optional[str] = None) -> MessageLexer:
    """
    Get a lexer for the given marker character

    Args:
        marker: Marker character; defaults to the configured marker

    Returns:
        MessageLexer (or a subclass with rules for marker) instance
    """
    if marker is None:
        from ..config import appsettings
        marker = appsettings.marker

    if marker not in _lexer_classes:
        # Pygments compiles `tokens` once per class, hence one subclass per marker
        _lexer_classes[marker] = type(MessageLexer)(
            'MessageLexer',
            (MessageLexer,),
            {'marker': marker, 'tokens': {'root': _rules(marker)}},
        )
    return _lexer_classes[marker]()


def source_highlight(source: str, marker: Optional[str] = None) -> str:
    """
    Highlight message markup for a terminal

    Args:
        source: Raw message text
        marker: Marker character; defaults to the configured marker

    Returns:
        Text with ANSI color sequences around codes
    """
    return highlight(source, lexer_get(marker), TerminalFormatter())
