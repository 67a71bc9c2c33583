"""Robot entities: hitpoints, armor, jump capability and an arsenal."""

from dataclasses import dataclass, field

from ...core.data import WeightClass
from .weapon import Weapon


@dataclass(eq=False)
class Robot:
    """A combatant in a session.

    Attributes:
        robot_id: Unique within a session
        model: Catalog id the robot was built from
        long_name: Display name of the model
        faction: Owning faction name
        robot_class: Combat weight class, selects AI weights
        hitpoints: Current hitpoints; may go negative after a lethal hit
        max_hitpoints: Hitpoints at creation
        armor: Dice expression subtracted from incoming damage ("" for none)
        can_jump: Whether the robot can dodge by jumping
        arsenal: Mounted weapons, possibly with repeated ids
    """
    robot_id: str
    model: str
    long_name: str
    faction: str
    robot_class: WeightClass
    hitpoints: float
    max_hitpoints: float
    armor: str = ""
    can_jump: bool = False
    arsenal: list[Weapon] = field(default_factory=list)
    model_number: str = ""
    speed: int = 0
    score: int = 0

    @property
    def is_alive(self) -> bool:
        return self.hitpoints > 0

    def find_weapons(self, selector: str) -> list[Weapon]:
        """Weapons matching ``selector`` that have ammo for a round, in arsenal order."""
        return [weapon for weapon in self.arsenal if weapon.matches(selector) and weapon.can_fire()]

    def has_ammo(self) -> bool:
        """True if at least one weapon can still fire."""
        return any(weapon.can_fire() for weapon in self.arsenal)

    def weapon_ids(self, usable_only: bool = False) -> list[str]:
        """Distinct weapon ids in arsenal order."""
        seen: list[str] = []
        for weapon in self.arsenal:
            if usable_only and not weapon.can_fire():
                continue
            if weapon.weapon_id not in seen:
                seen.append(weapon.weapon_id)
        return seen

    def weapon_count(self, weapon_id: str) -> int:
        return sum(1 for weapon in self.arsenal if weapon.weapon_id == weapon_id)

    def take_damage(self, amount: float) -> None:
        self.hitpoints -= amount

    def __str__(self) -> str:
        return f"{self.long_name} {self.robot_id}"
