"""Lexer for dice expressions such as ``2d6+3`` or ``(1d2 * 2d2) + 1``."""

import re

from ..data import Token, TokenKind
from .errors import ParseError

# Order matters: dice must be tried before integers so "2d6" is not split.
TOKEN_PATTERNS: list[tuple[TokenKind, re.Pattern]] = [
    (TokenKind.LEFT_PAREN, re.compile(r"\(")),
    (TokenKind.RIGHT_PAREN, re.compile(r"\)")),
    (TokenKind.DICE, re.compile(r"[0-9]+d[0-9]+", re.IGNORECASE)),
    (TokenKind.INTEGER, re.compile(r"[+-]?[0-9]+")),
    (TokenKind.PLUS, re.compile(r"\+")),
    (TokenKind.TIMES, re.compile(r"\*")),
    (TokenKind.MINUS, re.compile(r"-")),
    (TokenKind.DIVIDE, re.compile(r"/")),
    (TokenKind.EXPONENT, re.compile(r"\^")),
]

_WHITESPACE = re.compile(r"\s+")


def tokenize(expression: str) -> list[Token]:
    """Split an expression into tokens.

    A leading sign is part of an integer literal unless the character just
    before the scan position is a digit, in which case it is an operator
    (``"3-2"`` is ``3``, ``-``, ``2``; ``"-2"`` is the literal ``-2``).
    The check looks at the raw character before any skipped whitespace,
    so ``"3 -2"`` is also a subtraction.

    Args:
        expression: Dice expression text

    Returns:
        Tokens in source order (empty for an empty expression)

    Raises:
        ParseError: If some substring matches no token pattern
    """
    tokens: list[Token] = []
    index = 0
    length = len(expression)

    while index < length:
        previous_end = index
        whitespace = _WHITESPACE.match(expression, index)
        if whitespace:
            index = whitespace.end()
            if index >= length:
                break

        for kind, pattern in TOKEN_PATTERNS:
            match = pattern.match(expression, index)
            if not match:
                continue

            text = match.group(0)
            if kind == TokenKind.INTEGER and text[0] in "+-" and _follows_digit(expression, previous_end):
                # Sign belongs to a binary operator, the digits are scanned next round
                kind = TokenKind.PLUS if text[0] == "+" else TokenKind.MINUS
                text = text[0]
            elif kind == TokenKind.DICE:
                text = text.lower()

            tokens.append(Token(kind, text, index))
            index += len(text)
            break
        else:
            raise ParseError(index, expression)

    return tokens


def _follows_digit(expression: str, position: int) -> bool:
    return position > 0 and expression[position - 1].isdigit()
