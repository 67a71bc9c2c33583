"""Dice-expression engine.

Pipeline: ``tokenize`` -> ``to_prefix`` -> ``evaluate``. The helpers below
run the whole pipeline for a single expression string.
"""

from typing import Optional, Union

import numpy as np

from ..data import DamageObject, EvaluationMode
from .converter import to_prefix
from .errors import (
    DivisionByZeroError,
    ExpressionError,
    MalformedExpressionError,
    ParseError,
    UnknownEvaluationModeError,
)
from .evaluator import coerce_mode, evaluate, parse_dice
from .tokenizer import tokenize


def calculate_damage(
    expression: str,
    mode: Union[EvaluationMode, int] = EvaluationMode.RANDOM,
    rng: Optional[np.random.Generator] = None,
) -> DamageObject:
    """Evaluate a dice expression string.

    An empty (or whitespace-only) expression yields zero damage.
    """
    return evaluate(to_prefix(tokenize(expression)), mode, rng, source_expression=expression)


def combined_expression(expression: str, count: int) -> str:
    """Build the expression for ``count`` identical weapons firing together.

    ``combined_expression("1d6", 3)`` is ``"(1d6) + (1d6) + (1d6)"``.
    """
    if count <= 1:
        return expression
    return " + ".join(f"({expression})" for _ in range(count))


def validate_expression(expression: str) -> None:
    """Check that an expression parses and evaluates without rolling dice.

    Raises:
        ExpressionError: If the expression is malformed
    """
    prefix = to_prefix(tokenize(expression))
    for mode in (EvaluationMode.MINIMUM, EvaluationMode.MAXIMUM, EvaluationMode.EXPECTED):
        evaluate(prefix, mode, source_expression=expression)


__all__ = [
    "tokenize",
    "to_prefix",
    "evaluate",
    "coerce_mode",
    "parse_dice",
    "calculate_damage",
    "combined_expression",
    "validate_expression",
    "ExpressionError",
    "ParseError",
    "MalformedExpressionError",
    "DivisionByZeroError",
    "UnknownEvaluationModeError",
]
