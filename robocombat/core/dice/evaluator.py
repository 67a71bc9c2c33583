"""Prefix-notation evaluator for dice expressions.

The evaluator walks the prefix list from the end, keeping three parallel
stacks: the mode-specific value and the minimum and maximum the
sub-expression can reach. Bounds are tracked in every mode because
division safety and the Minimum/Maximum results depend on them.
"""

import operator
from typing import Callable, Optional, Union

import numpy as np

from ..data import DamageObject, DieRoll, EvaluationMode, Token, TokenKind
from .errors import DivisionByZeroError, MalformedExpressionError, UnknownEvaluationModeError

Bounds = tuple[float, float, float]  # value, minimum, maximum


def coerce_mode(mode: Union[EvaluationMode, int, str]) -> EvaluationMode:
    """Resolve a mode given as a member, its integer value, or its name.

    Raises:
        UnknownEvaluationModeError: If the mode is not one of the four
    """
    if isinstance(mode, EvaluationMode):
        return mode
    if isinstance(mode, str):
        try:
            return EvaluationMode[mode.strip().upper()]
        except KeyError:
            raise UnknownEvaluationModeError(f"Unknown evaluation mode: '{mode}'") from None
    try:
        return EvaluationMode(mode)
    except ValueError:
        raise UnknownEvaluationModeError(f"Unknown evaluation mode: {mode!r}") from None


def parse_dice(token: Token) -> tuple[int, int]:
    """Split an ``NdM`` token into (count, faces).

    Raises:
        MalformedExpressionError: If the die has zero faces
    """
    count_text, faces_text = token.text.lower().split("d")
    count, faces = int(count_text), int(faces_text)
    if faces < 1:
        raise MalformedExpressionError(f"Die '{token.text}' must have at least one face")
    return count, faces


def evaluate(
    prefix_tokens: list[Token],
    mode: Union[EvaluationMode, int] = EvaluationMode.RANDOM,
    rng: Optional[np.random.Generator] = None,
    source_expression: str = "",
) -> DamageObject:
    """Evaluate a prefix token list.

    Args:
        prefix_tokens: Output of ``to_prefix``; not modified
        mode: Evaluation mode
        rng: Random source for Random mode (a fresh generator if omitted)
        source_expression: Recorded on the resulting damage object

    Returns:
        DamageObject with the result and, in Random mode, the individual rolls

    Raises:
        MalformedExpressionError: On operand/operator count mismatch
        DivisionByZeroError: When a divisor or its range bound is zero
        UnknownEvaluationModeError: On an unrecognised mode
    """
    mode = coerce_mode(mode)
    if not prefix_tokens:
        return DamageObject(source_expression=source_expression, damage=0, mode=mode)
    if mode == EvaluationMode.RANDOM and rng is None:
        rng = np.random.default_rng()

    stack: list[Bounds] = []
    rolls: list[DieRoll] = []

    for token in reversed(prefix_tokens):
        if token.kind == TokenKind.INTEGER:
            literal = int(token.text)
            stack.append((literal, literal, literal))
        elif token.kind == TokenKind.DICE:
            count, faces = parse_dice(token)
            minimum, maximum = count, count * faces
            if mode == EvaluationMode.RANDOM:
                outcome = rng.integers(1, faces, size=count, endpoint=True)
                # Evaluation runs right to left; prepending keeps rolls in source order
                rolls[:0] = [DieRoll(faces, int(value)) for value in outcome]
                value = int(np.sum(outcome))
            elif mode == EvaluationMode.EXPECTED:
                value = count * (faces + 1) / 2
            elif mode == EvaluationMode.MINIMUM:
                value = minimum
            else:
                value = maximum
            stack.append((value, minimum, maximum))
        elif token.is_operator:
            if len(stack) < 2:
                raise MalformedExpressionError(
                    f"Operator '{token.text}' at position {token.position} needs two operands"
                )
            left = stack.pop()
            right = stack.pop()
            stack.append(_combine(token.kind, left, right))
        else:
            raise MalformedExpressionError(
                f"Unexpected token '{token.text}' at position {token.position} in prefix expression"
            )

    if len(stack) != 1:
        raise MalformedExpressionError(
            f"Expression '{source_expression}' leaves {len(stack)} values after evaluation"
        )

    value, minimum, maximum = stack[0]
    if mode == EvaluationMode.MINIMUM:
        damage = minimum
    elif mode == EvaluationMode.MAXIMUM:
        damage = maximum
    else:
        damage = value

    return DamageObject(
        source_expression=source_expression,
        damage=damage,
        rolls=tuple(rolls),
        mode=mode,
    )


def _combine(kind: TokenKind, left: Bounds, right: Bounds) -> Bounds:
    left_value, left_min, left_max = left
    right_value, right_min, right_max = right

    if kind == TokenKind.PLUS:
        return left_value + right_value, left_min + right_min, left_max + right_max
    if kind == TokenKind.MINUS:
        return left_value - right_value, left_min - right_max, left_max - right_min

    function: Callable[[float, float], float]
    if kind == TokenKind.TIMES:
        function = operator.mul
    elif kind == TokenKind.DIVIDE:
        if right_value == 0 or right_min == 0 or right_max == 0:
            raise DivisionByZeroError("Division by an expression that can evaluate to zero")
        function = operator.truediv
    else:
        function = _power

    corners = [function(a, b) for a in (left_min, left_max) for b in (right_min, right_max)]
    return function(left_value, right_value), min(corners), max(corners)


def _power(base: float, exponent: float) -> float:
    if base == 0 and exponent < 0:
        raise DivisionByZeroError("Zero raised to a negative power")
    try:
        result = base ** exponent
    except OverflowError as error:
        raise MalformedExpressionError(f"Exponent overflow: {base}^{exponent}") from error
    if isinstance(result, complex):
        raise MalformedExpressionError(f"Exponent produces a complex number: {base}^{exponent}")
    return result
