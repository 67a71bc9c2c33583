"""
Configuration for the attack selector and roster drafting.

Weights and tables live in ``assets/data/ai_config.yaml``. Sections missing
from a config file fall back to the built-in defaults below, which mirror
the packaged file.
"""
import os
from dataclasses import dataclass, field
from typing import Any, Optional

import numpy as np
import yaml

from ...core.data import WeightClass

DEFAULT_AI_CONFIG_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))),
    "assets", "data", "ai_config.yaml"
)

WEIGHT_KEYS = (
    "threat_to_self",
    "threat_to_others",
    "vulnerability_with_ammo",
    "vulnerability_without_ammo",
)


@dataclass(frozen=True)
class AIWeights:
    """Heuristic weights w1..w4 for one combat class."""
    threat_to_self: float = 1.0
    threat_to_others: float = 1.0
    vulnerability_with_ammo: float = 1.0
    vulnerability_without_ammo: float = 1.0

    def as_array(self) -> np.ndarray:
        return np.array([getattr(self, key) for key in WEIGHT_KEYS], dtype=float)

    @property
    def is_default(self) -> bool:
        return bool(np.all(self.as_array() == 1.0))


@dataclass(frozen=True)
class DifficultyTier:
    """Class probabilities for multipliers up to ``max_multiplier`` (None = unbounded)."""
    max_multiplier: Optional[float]
    class_probabilities: tuple[float, float, float, float]


DEFAULT_CLASS_WEIGHTS: dict[WeightClass, AIWeights] = {
    WeightClass.LIGHT: AIWeights(0.25, 0.5, 1.0, 1.0),
    WeightClass.MEDIUM: AIWeights(1.0, 1.0, 0.5, 0.75),
    WeightClass.HEAVY: AIWeights(1.0, 0.1, 0.05, 0.05),
    WeightClass.ASSAULT: AIWeights(0.75, 1.0, 0.20, 0.25),
}

DEFAULT_FACTION_HATRED: dict[str, float] = {
    "The Star Alliance": 0.0,
    "The Prime Edict": 0.2,
}

DEFAULT_HATRED_SCALE = 0.1

DEFAULT_ROSTER_DIFFICULTY: tuple[DifficultyTier, ...] = (
    DifficultyTier(0.75, (0.50, 0.45, 0.05, 0.00)),
    DifficultyTier(1.0, (0.32, 0.32, 0.32, 0.04)),
    DifficultyTier(1.25, (0.20, 0.35, 0.40, 0.05)),
    DifficultyTier(1.5, (0.10, 0.20, 0.60, 0.10)),
    DifficultyTier(None, (0.14, 0.01, 0.50, 0.35)),
)


@dataclass
class AIConfig:
    """Attack selector and roster drafting parameters."""
    class_weights: dict[WeightClass, AIWeights] = field(
        default_factory=lambda: dict(DEFAULT_CLASS_WEIGHTS)
    )
    faction_hatred: dict[str, float] = field(default_factory=lambda: dict(DEFAULT_FACTION_HATRED))
    hatred_scale: float = DEFAULT_HATRED_SCALE
    roster_difficulty: tuple[DifficultyTier, ...] = DEFAULT_ROSTER_DIFFICULTY

    def weights_for(self, robot_class: Optional[WeightClass]) -> AIWeights:
        """Weights for a combat class; unknown classes weigh everything 1.0."""
        return self.class_weights.get(robot_class, AIWeights())

    def class_probabilities(self, multiplier: float) -> tuple[float, float, float, float]:
        """Drafting probabilities (light, medium, heavy, assault) for a point multiplier."""
        for tier in self.roster_difficulty:
            if tier.max_multiplier is None or multiplier <= tier.max_multiplier:
                return tier.class_probabilities
        return self.roster_difficulty[-1].class_probabilities

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AIConfig":
        """Build a config from parsed YAML, keeping defaults for missing sections.

        Raises:
            ValueError: On an unknown class name or a malformed difficulty tier
        """
        config = cls()

        for class_name, weights in (data.get("class_weights") or {}).items():
            try:
                robot_class = WeightClass(str(class_name).lower())
            except ValueError:
                raise ValueError(f"Invalid class name in AI config: {class_name}") from None
            config.class_weights[robot_class] = AIWeights(
                **{key: float(weights.get(key, 1.0)) for key in WEIGHT_KEYS}
            )

        if data.get("faction_hatred") is not None:
            config.faction_hatred = {
                str(name): float(value) for name, value in data["faction_hatred"].items()
            }

        if data.get("hatred_scale") is not None:
            config.hatred_scale = float(data["hatred_scale"])

        if data.get("roster_difficulty"):
            tiers = []
            for tier in data["roster_difficulty"]:
                probabilities = tuple(float(p) for p in tier["class_probabilities"])
                if len(probabilities) != 4:
                    raise ValueError(
                        f"Difficulty tier needs 4 class probabilities, got {len(probabilities)}"
                    )
                limit = tier.get("max_multiplier")
                tiers.append(DifficultyTier(None if limit is None else float(limit), probabilities))
            config.roster_difficulty = tuple(tiers)

        return config


def load_ai_config(path: Optional[str] = None) -> AIConfig:
    """Load AI configuration from YAML.

    Args:
        path: YAML file to read; defaults to the packaged config

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the data is invalid
    """
    yaml_path = path or DEFAULT_AI_CONFIG_PATH
    try:
        with open(yaml_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        raise FileNotFoundError(f"AI config file not found: {yaml_path}")

    return AIConfig.from_dict(data)
