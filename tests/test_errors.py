"""
Tests for the assembler exception types.
"""

import typing

from cbasm.errors import AssemblerError, AssemblyErrors, UnknownMnemonicError


class TestAssemblerError:
    """Tests for AssemblerError formatting and attributes."""

    def test_message_without_location(self):
        err = AssemblerError("boom")
        assert str(err) == "boom"
        assert err.line_num is None and err.line_text is None and err.index is None

    def test_message_with_location(self):
        err = UnknownMnemonicError("Unknown instruction: foo", 3, "  foo x1  ", 2)
        assert str(err) == "Line 3: Unknown instruction: foo\n  foo x1"
        assert err.reason == "Unknown instruction: foo"
        assert err.index == 2

    def test_location_hints_are_optional(self):
        hints = typing.get_type_hints(AssemblerError.__init__)
        assert hints["line_num"] == typing.Optional[int]
        assert hints["line_text"] == typing.Optional[str]
        assert hints["index"] == typing.Optional[int]

    def test_aggregate(self):
        errors = [AssemblerError("a", 1), AssemblerError("b", 2)]
        agg = AssemblyErrors(errors)
        assert agg.errors == errors
        assert str(agg).splitlines() == ["2 error(s):", "Line 1: a", "Line 2: b"]
