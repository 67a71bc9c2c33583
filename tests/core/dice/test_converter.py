"""
Unit tests for infix-to-prefix conversion.
"""

import pytest

from robocombat.core.data import TokenKind
from robocombat.core.dice import MalformedExpressionError, to_prefix, tokenize


def prefix_texts(expression):
    return [token.text for token in to_prefix(tokenize(expression))]


class TestToPrefix:
    """Test conversion of well-formed expressions."""

    def test_dice_plus_integer(self):
        """2d6+3 converts to [plus, dice, integer]."""
        prefix = to_prefix(tokenize("2d6+3"))
        assert [token.kind for token in prefix] == [TokenKind.PLUS, TokenKind.DICE, TokenKind.INTEGER]

    def test_single_operand(self):
        assert prefix_texts("1d7") == ["1d7"]

    def test_empty(self):
        assert to_prefix([]) == []

    def test_left_to_right_grouping(self):
        """No precedence: 2+3*4 is (2+3)*4."""
        assert prefix_texts("2+3*4") == ["*", "+", "2", "3", "4"]

    def test_parentheses_group(self):
        assert prefix_texts("2+(3*4)") == ["+", "2", "*", "3", "4"]

    def test_nested_parentheses(self):
        assert prefix_texts("((1d6))") == ["1d6"]
        assert prefix_texts("1 + ((2 - 3) * 4)") == ["+", "1", "*", "-", "2", "3", "4"]

    def test_two_groups(self):
        assert prefix_texts("(1d2 * 2d2) + (1d2 * 2d2)") == [
            "+", "*", "1d2", "2d2", "*", "1d2", "2d2",
        ]

    def test_group_as_left_operand(self):
        assert prefix_texts("(1d4)^2") == ["^", "1d4", "2"]

    def test_parentheses_removed(self):
        prefix = to_prefix(tokenize("(1)+(2)"))
        assert all(token.kind not in (TokenKind.LEFT_PAREN, TokenKind.RIGHT_PAREN) for token in prefix)

    def test_input_not_modified(self):
        tokens = tokenize("1+2")
        snapshot = list(tokens)
        to_prefix(tokens)
        assert tokens == snapshot


class TestToPrefixErrors:
    """Test structural errors."""

    @pytest.mark.parametrize("expression", [
        "()",
        "1 + ()",
        "(1d6",
        "((1) + 2",
        "1d6)",
        "1 + 2)",
        "1 +",
        "1d6 *",
        "* 2",
        "1 + * 2",
        "1 2",
        "(1)(2)",
    ])
    def test_malformed(self, expression):
        with pytest.raises(MalformedExpressionError):
            to_prefix(tokenize(expression))

    def test_malformed_is_value_error(self):
        with pytest.raises(ValueError):
            to_prefix(tokenize("(("))
