"""Core data structures and definitions.

This package contains fundamental data types and game definitions:
- data_structures.py: Token, DieRoll, DamageObject, DamageReport, AttackRecommendation
- game_enums.py: Centralized enums for evaluation modes, tokens, classes and logging
"""

from .data_structures import Token, DieRoll, DamageObject, DamageReport, AttackRecommendation
from .game_enums import (
    EvaluationMode,
    TokenKind,
    WeightClass,
    FactionType,
    LogCategory,
    LogLevel,
    BINARY_OPERATORS,
    OPERAND_KINDS,
    OPERATOR_SYMBOLS,
    LOG_CATEGORY_TAGS,
)

__all__ = [
    "Token",
    "DieRoll",
    "DamageObject",
    "DamageReport",
    "AttackRecommendation",
    "EvaluationMode",
    "TokenKind",
    "WeightClass",
    "FactionType",
    "LogCategory",
    "LogLevel",
    "BINARY_OPERATORS",
    "OPERAND_KINDS",
    "OPERATOR_SYMBOLS",
    "LOG_CATEGORY_TAGS",
]
