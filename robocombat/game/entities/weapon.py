"""Mutable weapon instances carried by robots."""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ...core.data import DamageObject, EvaluationMode, WeightClass
from ...core.dice import calculate_damage


@dataclass
class Weapon:
    """A weapon mounted on a robot.

    ``ammo_per_round`` of zero (or less) means the weapon never runs dry.
    Only ``ammo`` changes after creation.
    """
    weapon_id: str
    long_name: str
    short_name: str
    weapon_class: WeightClass
    damage: str
    ammo_capacity: int
    ammo_per_round: int
    ammo: int

    @property
    def has_unlimited_ammo(self) -> bool:
        return self.ammo_per_round <= 0

    def matches(self, selector: str) -> bool:
        """Case-insensitive match against the id, short name or long name."""
        wanted = selector.lower()
        return wanted in (self.weapon_id.lower(), self.short_name.lower(), self.long_name.lower())

    def can_fire(self) -> bool:
        return self.ammo >= self.ammo_per_round

    def consume_ammo(self) -> None:
        """Spend one round of ammunition."""
        if not self.has_unlimited_ammo:
            self.ammo -= self.ammo_per_round

    def fire(self, rng: Optional[np.random.Generator] = None) -> DamageObject:
        """Fire this weapon alone, spending one round.

        Returns:
            Random-mode damage, or zero damage if the weapon cannot fire
        """
        if not self.can_fire():
            return DamageObject.zero(self.damage)
        self.consume_ammo()
        return calculate_damage(self.damage, EvaluationMode.RANDOM, rng)

    def ammo_display(self) -> str:
        if self.has_unlimited_ammo:
            return "--"
        return f"{self.ammo}/{self.ammo_capacity}"
