"""Roster drafting for computer-controlled factions."""

from typing import TYPE_CHECKING, Optional

import numpy as np

from ...core.data import WeightClass
from ..entities.catalog import PLACEHOLDER_MODELS
from .ai_config import AIConfig

if TYPE_CHECKING:
    from ..entities import Catalog

DRAFT_ORDER = (WeightClass.LIGHT, WeightClass.MEDIUM, WeightClass.HEAVY, WeightClass.ASSAULT)


def choose_robots(
    catalog: "Catalog",
    total_points: float,
    multiplier: float = 1.0,
    rng: Optional[np.random.Generator] = None,
    config: Optional[AIConfig] = None,
    excluded: tuple[str, ...] = PLACEHOLDER_MODELS
) -> list[str]:
    """Draft robot models worth up to ``total_points * multiplier``.

    Higher multipliers shift the class mix toward heavy and assault
    models. Each draw picks a class by probability, then a random model
    of that class the remaining budget can pay for.

    Args:
        catalog: Source of robot models and their scores
        total_points: Point budget of the opposing side
        multiplier: Difficulty multiplier applied to the budget
        rng: Random source
        config: Supplies the class probability tables
        excluded: Models never drafted

    Returns:
        Drafted model ids in draft order
    """
    rng = rng if rng is not None else np.random.default_rng()
    config = config or AIConfig()
    probabilities = np.array(config.class_probabilities(multiplier), dtype=float)

    models_by_class: dict[WeightClass, list] = {robot_class: [] for robot_class in DRAFT_ORDER}
    for template in catalog.playable_models(excluded):
        # Models costing nothing are never drafted
        if template.robot_class in models_by_class and template.score > 0:
            models_by_class[template.robot_class].append(template)

    remaining = total_points * multiplier
    drafted: list[str] = []

    while True:
        affordable = [
            [template for template in models_by_class[robot_class] if template.score <= remaining]
            for robot_class in DRAFT_ORDER
        ]
        draftable = np.array([bool(models) for models in affordable]) & (probabilities > 0)
        if not draftable.any():
            break

        # Renormalize over classes that still have something affordable
        weights = np.where(draftable, probabilities, 0.0)
        class_index = int(rng.choice(len(DRAFT_ORDER), p=weights / weights.sum()))
        choices = affordable[class_index]
        template = choices[int(rng.integers(len(choices)))]

        drafted.append(template.model)
        remaining -= template.score

    return drafted
