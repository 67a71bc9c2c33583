"""Exceptions raised by the dice-expression engine.

All of them derive from ``ExpressionError`` (itself a ``ValueError``), so
catalog loading can treat any malformed damage or armor formula uniformly.
"""

from typing import Optional


class ExpressionError(ValueError):
    """Base class for dice-expression failures."""


class ParseError(ExpressionError):
    """An expression contains a substring no token pattern recognises."""

    def __init__(self, position: int, expression: str, message: Optional[str] = None):
        self.position = position
        self.expression = expression
        if message is None:
            fragment = expression[position:position + 10]
            message = f"Unrecognized input at position {position} in '{expression}': '{fragment}'"
        super().__init__(message)


class MalformedExpressionError(ExpressionError):
    """Tokens are valid but do not form a well-structured expression."""


class DivisionByZeroError(ExpressionError, ZeroDivisionError):
    """A divisor (or one of its bounds) evaluates to zero."""


class UnknownEvaluationModeError(ExpressionError):
    """An evaluation mode outside Random/Minimum/Expected/Maximum."""
