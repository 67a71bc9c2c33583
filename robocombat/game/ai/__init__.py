"""Computer player: attack selection, configuration and roster drafting."""

from .ai_config import AIConfig, AIWeights, DifficultyTier, load_ai_config, DEFAULT_AI_CONFIG_PATH
from .ai_controller import AttackSelector, EnemyAssessment
from .roster_builder import choose_robots

__all__ = [
    "AIConfig",
    "AIWeights",
    "DifficultyTier",
    "load_ai_config",
    "DEFAULT_AI_CONFIG_PATH",
    "AttackSelector",
    "EnemyAssessment",
    "choose_robots",
]
