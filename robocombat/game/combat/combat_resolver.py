"""
Combat resolution: weapon discharge, jump dodge and armor mitigation.

The resolver turns "robot A fires weapon W at robot B" into a DamageReport.
With ``commit=False`` it is a pure forecast (the AI uses Expected mode this
way); with ``commit=True`` it spends ammunition and applies damage.
"""
import math
from typing import Optional, TYPE_CHECKING, Union

import numpy as np

from ...core.data import DamageObject, DamageReport, EvaluationMode, LogCategory, LogLevel
from ...core.dice import calculate_damage, coerce_mode, combined_expression
from ...core.events import EventPriority, RobotDefeated, WeaponFired, publish_log

if TYPE_CHECKING:
    from ...core.events import EventManager
    from ..entities import Robot


class CombatResolver:
    """Resolves weapon fire between two robots."""

    JUMP_ROLL = "1d10"
    FULL_DODGE_MAX_ROLL = 4
    HALF_DODGE_ROLL = 5

    # Expected share of damage a jump prevents: 40% full, 10% half, 50% none
    EXPECTED_DODGE_FRACTION = 0.45
    # Expected-mode armor scale when the defender jumps
    JUMPING_ARMOR_FACTOR = 0.60

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        event_manager: Optional["EventManager"] = None
    ):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.event_manager = event_manager

    def _emit_log(self, message: str, category: LogCategory = LogCategory.BATTLE,
                  level: LogLevel = LogLevel.INFO) -> None:
        publish_log(self.event_manager, message, category, level, "CombatResolver")

    def fire(
        self,
        attacker: "Robot",
        defender: "Robot",
        weapon_selector: str,
        mode: Union[EvaluationMode, int] = EvaluationMode.RANDOM,
        commit: bool = True
    ) -> DamageReport:
        """Fire every matching weapon of ``attacker`` at ``defender`` as one volley.

        Args:
            attacker: The robot firing
            defender: The robot being fired upon
            weapon_selector: Weapon id, short name or long name (case-insensitive)
            mode: Evaluation mode for damage, dodge and armor
            commit: Spend ammo and apply damage when True

        Returns:
            DamageReport; empty when no weapon matches or all are out of ammo
        """
        mode = coerce_mode(mode)
        weapons = attacker.find_weapons(weapon_selector)
        if not weapons:
            self._emit_log(
                f"{attacker} has no usable weapon matching '{weapon_selector}'",
                LogCategory.WARNING, LogLevel.WARNING
            )
            return DamageReport.empty()

        volley = combined_expression(weapons[0].damage, len(weapons))
        original = calculate_damage(volley, mode, self.rng)

        dodged, dodge = self._resolve_dodge(defender, original.damage, mode)
        armor = self._resolve_armor(defender, mode)

        final_damage = max(
            0,
            original.damage - math.floor(dodge.damage) - math.floor(max(0, armor.damage))
        )

        report = DamageReport(
            original_damage=original,
            dodged=dodged,
            dodge_mitigation=dodge,
            armor_mitigation=armor,
            final_damage=final_damage,
            weapons_fired=len(weapons),
        )

        if commit:
            self._commit(attacker, defender, weapon_selector, weapons, report)

        return report

    def _resolve_dodge(self, defender: "Robot", damage: float,
                       mode: EvaluationMode) -> tuple[bool, DamageObject]:
        """Work out how much damage the defender's jump prevents."""
        if not defender.can_jump:
            return False, DamageObject.zero()

        if mode == EvaluationMode.RANDOM:
            jump = calculate_damage(self.JUMP_ROLL, mode, self.rng)
            roll = jump.rolls[0].value
            if roll <= self.FULL_DODGE_MAX_ROLL:
                prevented = damage
            elif roll == self.HALF_DODGE_ROLL:
                prevented = damage * 0.5
            else:
                prevented = 0
            return roll <= self.HALF_DODGE_ROLL, DamageObject(self.JUMP_ROLL, prevented, jump.rolls, mode)

        if mode == EvaluationMode.EXPECTED:
            return True, DamageObject("", self.EXPECTED_DODGE_FRACTION * damage, mode=mode)
        if mode == EvaluationMode.MINIMUM:
            return True, DamageObject("", damage, mode=mode)
        return False, DamageObject.zero()

    def _resolve_armor(self, defender: "Robot", mode: EvaluationMode) -> DamageObject:
        """Evaluate the defender's armor.

        Armor works against the attacker, so the attacker's best case
        (Maximum) meets the weakest armor and vice versa.
        """
        armor_mode = {
            EvaluationMode.MINIMUM: EvaluationMode.MAXIMUM,
            EvaluationMode.MAXIMUM: EvaluationMode.MINIMUM,
        }.get(mode, mode)
        armor = calculate_damage(defender.armor, armor_mode, self.rng)

        if mode == EvaluationMode.EXPECTED and defender.can_jump:
            return DamageObject(
                armor.source_expression,
                armor.damage * self.JUMPING_ARMOR_FACTOR,
                armor.rolls,
                armor_mode,
            )
        return armor

    def _commit(self, attacker: "Robot", defender: "Robot", weapon_selector: str,
                weapons: list, report: DamageReport) -> None:
        for weapon in weapons:
            weapon.consume_ammo()

        was_alive = defender.is_alive
        defender.take_damage(report.final_damage)

        message = f"{attacker} → {defender} ({report.final_damage:g} damage"
        if report.dodged:
            message += ", dodged"
        self._emit_log(message + ")")

        if self.event_manager is not None:
            self.event_manager.publish(
                WeaponFired(attacker=attacker, defender=defender,
                            weapon_selector=weapon_selector, report=report),
                source="CombatResolver"
            )
            if was_alive and not defender.is_alive:
                self._emit_log(f"{defender} was destroyed")
                self.event_manager.publish(
                    RobotDefeated(robot=defender, attacker=attacker),
                    priority=EventPriority.HIGH,
                    source="CombatResolver"
                )
