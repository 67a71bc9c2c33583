"""Infix-to-prefix conversion for dice expressions.

The language has no operator precedence. Parenthesised groups are
converted recursively; at a single nesting level everything converted so
far is the left operand of the next operator, so ``2+3*4`` groups as
``(2+3)*4``.
"""

from ..data import Token, TokenKind, OPERATOR_SYMBOLS
from .errors import MalformedExpressionError


def to_prefix(tokens: list[Token]) -> list[Token]:
    """Convert infix tokens into prefix (Polish) notation.

    Args:
        tokens: Output of ``tokenize``

    Returns:
        New token list in prefix order; parentheses are removed

    Raises:
        MalformedExpressionError: On unbalanced or empty parentheses,
            dangling operators, or operands with no operator between them
    """
    return _convert(tokens, 0, len(tokens))


def _convert(tokens: list[Token], start: int, end: int) -> list[Token]:
    output: list[Token] = []
    pending_operator = None
    expecting_operand = True
    index = start

    while index < end:
        token = tokens[index]

        if token.kind == TokenKind.LEFT_PAREN:
            close = _matching_paren(tokens, index, end)
            if close == index + 1:
                raise MalformedExpressionError(f"Empty parentheses at position {token.position}")
            operand = _convert(tokens, index + 1, close)
            index = close + 1
        elif token.kind == TokenKind.RIGHT_PAREN:
            raise MalformedExpressionError(f"Unmatched ')' at position {token.position}")
        elif token.is_operator:
            if expecting_operand:
                raise MalformedExpressionError(
                    f"Operator '{OPERATOR_SYMBOLS[token.kind]}' at position {token.position} "
                    f"has no left operand"
                )
            pending_operator = token
            expecting_operand = True
            index += 1
            continue
        else:
            operand = [token]
            index += 1

        if not expecting_operand:
            raise MalformedExpressionError(
                f"Missing operator before '{operand[0].text}' at position {token.position}"
            )

        if pending_operator is None:
            output = operand
        else:
            output = [pending_operator] + output + operand
            pending_operator = None
        expecting_operand = False

    if pending_operator is not None:
        raise MalformedExpressionError(
            f"Operator '{OPERATOR_SYMBOLS[pending_operator.kind]}' at position "
            f"{pending_operator.position} has no right operand"
        )

    return output


def _matching_paren(tokens: list[Token], open_index: int, end: int) -> int:
    """Find the ')' that closes the '(' at ``open_index``."""
    depth = 0
    for index in range(open_index, end):
        kind = tokens[index].kind
        if kind == TokenKind.LEFT_PAREN:
            depth += 1
        elif kind == TokenKind.RIGHT_PAREN:
            depth -= 1
            if depth == 0:
                return index
    raise MalformedExpressionError(f"Unmatched '(' at position {tokens[open_index].position}")
