"""
Code table for inline message markup

Maps each recognized code to the CSS class it emits and the way it affects
the active style. The class names are a stable contract with whatever
stylesheet presents them (see theme.py).

The table is keyed by the lower-case code character. Lookups lower-case the
character first, so "&B" resolves like "&b". Alphabet members without an
entry ("&6".."&9", "&a", "&c".."&f", "&o") resolve to UNRECOGNIZED and are
rendered as literal text by the formatter.
"""

from typing import Dict, FrozenSet, Iterable, Optional

from ..models.codes import CodeEntry, CodeKind

HEX_DIGITS: FrozenSet[str] = frozenset("0123456789abcdefABCDEF")

# Code characters accepted by the tokenizer after the marker
CODE_ALPHABET: FrozenSet[str] = HEX_DIGITS | frozenset("klmnobir")

RESET_CLASS = "message-format-reset"


def _entries() -> Iterable[CodeEntry]:
    for digit in "012345":
        yield CodeEntry(f"&{digit}", f"message-color-{digit}", CodeKind.COLOR)

    yield CodeEntry("&k", "message-format-obfuscated", CodeKind.FORMAT)
    yield CodeEntry("&l", "message-format-bold", CodeKind.FORMAT)
    yield CodeEntry("&m", "message-format-strikethrough", CodeKind.FORMAT)
    yield CodeEntry("&n", "message-format-underline", CodeKind.FORMAT)
    yield CodeEntry("&i", "message-format-italic", CodeKind.FORMAT)

    # Alias for bold
    yield CodeEntry("&b", "message-format-bold", CodeKind.FORMAT)

    yield CodeEntry("&r", RESET_CLASS, CodeKind.RESET)


class CodeTable:
    """
    Immutable lookup from code character to CodeEntry

    Attributes:
        entries: Entries keyed by lower-case code character
    """

    def __init__(self, entries: Iterable[CodeEntry]) -> None:
        self.entries: Dict[str, CodeEntry] = {}
        for entry in entries:
            char = entry.code[-1].lower()
            if char not in CODE_ALPHABET:
                raise ValueError(f"Code {entry.code!r} is outside the code alphabet")
            self.entries[char] = entry

    def lookup(self, code: str) -> Optional[CodeEntry]:
        """
        Find the entry for a two-character code

        Only the code character is significant; the marker is assumed to have
        been matched by the tokenizer.

        Args:
            code: Code as it appeared in the input, e.g. "&L" or "&1"

        Returns:
            The matching CodeEntry, or None if the code is unrecognized
        """
        if len(code) != 2:
            return None
        return self.entries.get(code[1].lower())

    def kind_of(self, code: str) -> CodeKind:
        """Kind of a code, UNRECOGNIZED if absent"""
        entry = self.lookup(code)
        return entry.kind if entry else CodeKind.UNRECOGNIZED

    def classNames_list(self) -> FrozenSet[str]:
        """The closed set of class names this table can produce"""
        return frozenset(entry.class_name for entry in self.entries.values())

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"CodeTable(codes={sorted(self.entries)})"


CODE_TABLE = CodeTable(_entries())

CLASS_NAMES: FrozenSet[str] = CODE_TABLE.classNames_list()


def code_lookup(code: str) -> Optional[CodeEntry]:
    """Look a code up in the default table"""
    return CODE_TABLE.lookup(code)
