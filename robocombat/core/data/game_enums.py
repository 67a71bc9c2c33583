"""Centralized game enums and constants.

This module contains the enums shared across the dice engine, the combat
resolver and the AI, providing a single source of truth for modes, token
kinds, weight classes and log categories.
"""

from enum import Enum, auto


class EvaluationMode(Enum):
    """How a dice expression is evaluated."""
    RANDOM = 0
    MINIMUM = 1
    EXPECTED = 2
    MAXIMUM = 3


class TokenKind(Enum):
    """Lexical token kinds of the dice-expression language."""
    DICE = auto()
    INTEGER = auto()
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    PLUS = auto()
    MINUS = auto()
    TIMES = auto()
    DIVIDE = auto()
    EXPONENT = auto()


class WeightClass(Enum):
    """Weight class shared by weapons and robots."""
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"
    ASSAULT = "assault"


class FactionType(Enum):
    """Who controls a faction."""
    HUMAN = "human"
    AI = "ai"


class LogCategory(Enum):
    """Categories for log messages."""
    SYSTEM = auto()     # Session and loading messages
    BATTLE = auto()     # Weapon fire and damage
    AI = auto()         # Attack selection reasoning
    DEBUG = auto()
    WARNING = auto()
    ERROR = auto()


class LogLevel(Enum):
    """Log levels for filtering."""
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


BINARY_OPERATORS = frozenset({
    TokenKind.PLUS,
    TokenKind.MINUS,
    TokenKind.TIMES,
    TokenKind.DIVIDE,
    TokenKind.EXPONENT,
})

OPERAND_KINDS = frozenset({TokenKind.DICE, TokenKind.INTEGER})

OPERATOR_SYMBOLS = {
    TokenKind.PLUS: "+",
    TokenKind.MINUS: "-",
    TokenKind.TIMES: "*",
    TokenKind.DIVIDE: "/",
    TokenKind.EXPONENT: "^",
}

LOG_CATEGORY_TAGS = {
    LogCategory.SYSTEM: "SYS",
    LogCategory.BATTLE: "BTL",
    LogCategory.AI: "AI",
    LogCategory.DEBUG: "DBG",
    LogCategory.WARNING: "WRN",
    LogCategory.ERROR: "ERR",
}
