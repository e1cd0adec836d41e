"""
Tests for register name normalization.
"""

import pytest

from cbasm.registers import get_register_name, is_valid_register, parse_register


class TestParseRegister:
    """Tests for parse_register."""

    @pytest.mark.parametrize("name, expected", [
        ("x0", 0),
        ("x1", 1),
        ("X17", 17),
        (" x31 ", 31),
        ("x07", 7),
    ])
    def test_valid_names(self, name, expected):
        assert parse_register(name) == expected

    @pytest.mark.parametrize("name", ["x32", "x100", "r1", "x", "x-1", "1", "zero", "x1a", ""])
    def test_invalid_names(self, name):
        with pytest.raises(ValueError):
            parse_register(name)

    def test_is_valid_register(self):
        assert is_valid_register("x31")
        assert not is_valid_register("x32")


class TestGetRegisterName:
    """Tests for get_register_name."""

    def test_round_trip(self):
        for num in range(32):
            assert parse_register(get_register_name(num)) == num

    def test_out_of_range(self):
        with pytest.raises(ValueError):
            get_register_name(32)
