"""Tests for operand.py - Trailing operand lookup."""

import pytest

from flux_calc.operand import (
    is_placeholder,
    operand_value,
    replace_trailing_operand,
    trailing_operand,
)


class TestTrailingOperand:
    """Tests for trailing_operand function."""

    @pytest.mark.parametrize(
        "expression,expected",
        [
            ("12+3.5", "3.5"),
            ("12*-4", "-4"),
            ("12*", ""),
            ("12-", "-"),
            ("-0", "-0"),
            ("0.", "0."),
            ("(", ""),
            ("(2+3)", ""),
            ("", ""),
            ("5-3", "-3"),
        ],
    )
    def test_trailing_operand(self, expression, expected):
        assert trailing_operand(expression) == expected


class TestOperandValue:
    """Tests for operand_value and is_placeholder."""

    def test_placeholders(self):
        assert is_placeholder("")
        assert is_placeholder("-")
        assert not is_placeholder("-0")

    def test_parses_number(self):
        assert operand_value("3.5") == 3.5
        assert operand_value("-4") == -4

    def test_placeholder_has_no_value(self):
        assert operand_value("-") is None
        assert operand_value("") is None

    def test_malformed_has_no_value(self):
        assert operand_value(".") is None


class TestReplaceTrailingOperand:
    """Tests for replace_trailing_operand."""

    def test_replace(self):
        assert replace_trailing_operand("12+3", "3", "-3") == "12+-3"

    def test_replace_whole_expression(self):
        assert replace_trailing_operand("50", "50", "0.5") == "0.5"
