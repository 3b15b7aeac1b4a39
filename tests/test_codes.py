"""
Code table, escaping and style state tests
"""

import dataclasses

import pytest

from fusemods.lib.codes import CLASS_NAMES, CODE_TABLE, CodeTable, code_lookup
from fusemods.lib.escape import text_escape
from fusemods.models.codes import CodeEntry, CodeKind, StyleState


class TestCodeTable:
    """The static code to class mapping"""

    @pytest.mark.parametrize("digit", "012345")
    def test_colors(self, digit):
        entry = code_lookup(f"&{digit}")
        assert entry.kind is CodeKind.COLOR
        assert entry.class_name == f"message-color-{digit}"

    @pytest.mark.parametrize("code, class_name", [
        ("&k", "message-format-obfuscated"),
        ("&l", "message-format-bold"),
        ("&b", "message-format-bold"),
        ("&m", "message-format-strikethrough"),
        ("&n", "message-format-underline"),
        ("&i", "message-format-italic"),
    ])
    def test_formats(self, code, class_name):
        entry = code_lookup(code)
        assert entry.kind is CodeKind.FORMAT
        assert entry.class_name == class_name

    def test_reset(self):
        entry = code_lookup("&r")
        assert entry.kind is CodeKind.RESET
        assert entry.class_name == "message-format-reset"

    def test_lookup_is_case_normalized(self):
        assert code_lookup("&B") == code_lookup("&b")

    @pytest.mark.parametrize("code", ["&6", "&9", "&a", "&F", "&o", "&z", "&", "&11"])
    def test_unrecognized(self, code):
        assert code_lookup(code) is None
        assert CODE_TABLE.kind_of(code) is CodeKind.UNRECOGNIZED

    def test_table_size(self):
        """Six colors, six format codes (one alias), one reset"""
        assert len(CODE_TABLE) == 13

    def test_class_names_closed_set(self):
        assert CLASS_NAMES == {
            "message-color-0", "message-color-1", "message-color-2",
            "message-color-3", "message-color-4", "message-color-5",
            "message-format-obfuscated", "message-format-bold",
            "message-format-strikethrough", "message-format-underline",
            "message-format-italic", "message-format-reset",
        }

    def test_entry_outside_alphabet_rejected(self):
        with pytest.raises(ValueError, match="outside the code alphabet"):
            CodeTable([CodeEntry("&x", "message-format-x", CodeKind.FORMAT)])

    def test_entries_are_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            code_lookup("&1").class_name = "other"


class TestEscape:
    """HTML escaping of the five special characters"""

    @pytest.mark.parametrize("raw, escaped", [
        ("<script>", "&lt;script&gt;"),
        ("a & b", "a &amp; b"),
        ('"q"', "&quot;q&quot;"),
        ("it's", "it&#039;s"),
        ("plain", "plain"),
        ("", ""),
    ])
    def test_escape(self, raw, escaped):
        assert text_escape(raw) == escaped

    def test_not_idempotent(self):
        """Escaping twice double-escapes ampersands"""
        assert text_escape(text_escape("&")) == "&amp;amp;"


class TestStyleState:
    """Immutable style state transitions"""

    def test_empty(self):
        assert StyleState().classes() == ()
        assert StyleState() == StyleState(color=None, formats=())

    def test_color_replaces(self):
        state = StyleState().color_set("message-color-1").color_set("message-color-2")
        assert state.color == "message-color-2"

    def test_formats_keep_insertion_order(self):
        state = StyleState().format_add("b").format_add("a").format_add("b")
        assert state.formats == ("b", "a")

    def test_classes_formats_then_color(self):
        state = StyleState().color_set("c").format_add("f")
        assert state.classes() == ("f", "c")

    def test_cleared(self):
        state = StyleState(color="c", formats=("f",))
        assert state.cleared() == StyleState()

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            StyleState().color = "c"
