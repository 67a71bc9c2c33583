"""
Attack selection for computer-controlled robots.

The selector scores every living enemy with four Expected-mode subscores
and an optional hatred bonus, then recommends the highest-scoring enemy
and the weapon that works best against it.

Subscores (each clamped to [0, 1]):
- threat_to_self: share of our hitpoints the enemy's best volley removes
- threat_to_others: the same, against our most threatened ally
- vulnerability_with_ammo: share of the enemy's hitpoints our best
  finite-ammo weapon removes
- vulnerability_without_ammo: the same for unlimited-ammo weapons

Weights come from the acting robot's combat class (see ``AIConfig``).
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

import numpy as np

from ...core.data import AttackRecommendation, EvaluationMode, FactionType, LogCategory, LogLevel
from ...core.events import AttackRecommended, publish_log
from ..combat import CombatResolver
from .ai_config import AIConfig, AIWeights

if TYPE_CHECKING:
    from ...core.events import EventManager
    from ..entities import Robot
    from ..session import Session


@dataclass
class EnemyAssessment:
    """Subscores and supporting facts for one enemy."""
    enemy: "Robot"
    threat_to_self: float = 0.0
    threat_to_others: float = 0.0
    vulnerability_with_ammo: float = 0.0
    vulnerability_without_ammo: float = 0.0
    hatred: float = 0.0
    damage_to_self: float = 0.0
    weapon_against_self: Optional[str] = None
    most_threatened_ally: Optional["Robot"] = None
    best_weapon_with_ammo: Optional[str] = None
    best_weapon_without_ammo: Optional[str] = None
    score: float = 0.0

    def subscores(self) -> list[float]:
        return [
            self.threat_to_self,
            self.threat_to_others,
            self.vulnerability_with_ammo,
            self.vulnerability_without_ammo,
        ]


def _clamp(damage: float, hitpoints: float) -> float:
    if hitpoints <= 0:
        return 1.0
    return float(np.clip(damage / hitpoints, 0.0, 1.0))


class AttackSelector:
    """Chooses a target and weapon for a robot using Expected-mode forecasts."""

    def __init__(
        self,
        config: Optional[AIConfig] = None,
        resolver: Optional[CombatResolver] = None,
        rng: Optional[np.random.Generator] = None,
        event_manager: Optional["EventManager"] = None
    ):
        self.config = config or AIConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.resolver = resolver or CombatResolver(rng=self.rng)
        self.event_manager = event_manager

    def _emit_log(self, message: str, level: LogLevel = LogLevel.DEBUG) -> None:
        publish_log(self.event_manager, message, LogCategory.AI, level, "AttackSelector")

    def choose_best_attack(self, actor: "Robot", roster: "Session") -> AttackRecommendation:
        """Recommend what ``actor`` should attack and with which weapon.

        Args:
            actor: The robot whose turn it is
            roster: Source of robots, factions and game state

        Returns:
            AttackRecommendation; empty (with a rationale) when no attack
            is possible
        """
        if not roster.is_game_in_progress:
            return self._decline("Cannot attack.  There is no game in progress.")
        if not actor.is_alive:
            return self._decline("This robot is dead.  It cannot attack.")
        if not actor.has_ammo():
            return self._decline("This robot is out of ammunition.  It cannot attack.")

        enemies = [robot for robot in roster.robots(living_only=True) if robot.faction != actor.faction]
        if not enemies:
            return self._decline("There are no living enemies to attack.")

        allies = roster.robots(actor.faction, living_only=True)
        weights = self.config.weights_for(actor.robot_class)
        hatred_weight = self._hatred_weight(actor, roster)

        assessments = []
        for enemy in enemies:
            assessment = self._assess(actor, enemy, allies)
            if hatred_weight is not None and roster.faction_type(enemy.faction) == FactionType.HUMAN:
                assessment.hatred = hatred_weight
            assessments.append(assessment)

        subscores = np.array([assessment.subscores() for assessment in assessments], dtype=float)
        hatred = np.array([assessment.hatred for assessment in assessments], dtype=float)
        scores = subscores @ weights.as_array() + hatred
        for assessment, score in zip(assessments, scores):
            assessment.score = float(score)

        # Stable sort keeps enumeration order among equal scores
        order = np.argsort(-scores, kind="stable")
        best = assessments[order[0]]
        weapon_id = self._choose_weapon(best, weights)

        recommendation = AttackRecommendation(
            weapon_id=weapon_id,
            target_id=best.enemy.robot_id,
            rationale=self._explain(actor, best, weapon_id, assessments, order, weights, hatred_weight),
            score=best.score,
        )

        self._emit_log(recommendation.rationale[0])
        if self.event_manager is not None:
            self.event_manager.publish(
                AttackRecommended(actor=actor, recommendation=recommendation),
                source="AttackSelector"
            )
        return recommendation

    def _decline(self, reason: str) -> AttackRecommendation:
        self._emit_log(reason, LogLevel.INFO)
        return AttackRecommendation(rationale=[reason])

    def _hatred_weight(self, actor: "Robot", roster: "Session") -> Optional[float]:
        """Hatred bonus for human-controlled enemies; None with two factions or fewer."""
        if len(roster.factions()) <= 2:
            return None
        if actor.faction in self.config.faction_hatred:
            return self.config.faction_hatred[actor.faction]
        return float(self.rng.random()) * self.config.hatred_scale

    def _forecast(self, attacker: "Robot", defender: "Robot", weapon_id: str) -> float:
        report = self.resolver.fire(attacker, defender, weapon_id, EvaluationMode.EXPECTED, commit=False)
        return report.final_damage

    def _assess(self, actor: "Robot", enemy: "Robot", allies: list["Robot"]) -> EnemyAssessment:
        assessment = EnemyAssessment(enemy)

        # Enemy's best expected volley against each of us
        best_against: dict[str, tuple[float, str]] = {}
        for weapon_id in enemy.weapon_ids(usable_only=True):
            for ally in allies:
                damage = self._forecast(enemy, ally, weapon_id)
                current = best_against.get(ally.robot_id)
                if current is None or damage > current[0]:
                    best_against[ally.robot_id] = (damage, weapon_id)

        if actor.robot_id in best_against:
            assessment.damage_to_self, assessment.weapon_against_self = best_against[actor.robot_id]
        assessment.threat_to_self = _clamp(assessment.damage_to_self, actor.hitpoints)

        best_other = -1.0
        for ally in allies:
            if ally is actor or ally.robot_id not in best_against:
                continue
            threat = _clamp(best_against[ally.robot_id][0], ally.hitpoints)
            if threat > best_other:
                best_other = threat
                assessment.most_threatened_ally = ally
        assessment.threat_to_others = max(0.0, best_other)

        # Our best expected volley against the enemy, per ammo category
        best_with_ammo = -1.0
        best_without_ammo = -1.0
        for weapon_id in actor.weapon_ids(usable_only=True):
            vulnerability = _clamp(self._forecast(actor, enemy, weapon_id), enemy.hitpoints)
            unlimited = next(w for w in actor.arsenal if w.weapon_id == weapon_id).has_unlimited_ammo
            if unlimited:
                if vulnerability > best_without_ammo:
                    best_without_ammo = vulnerability
                    assessment.best_weapon_without_ammo = weapon_id
            elif vulnerability > best_with_ammo:
                best_with_ammo = vulnerability
                assessment.best_weapon_with_ammo = weapon_id

        assessment.vulnerability_with_ammo = max(0.0, best_with_ammo)
        assessment.vulnerability_without_ammo = max(0.0, best_without_ammo)
        return assessment

    @staticmethod
    def _choose_weapon(assessment: EnemyAssessment, weights: AIWeights) -> str:
        """Pick the finite-ammo weapon only when its weighted vulnerability wins outright."""
        weighted_with = weights.vulnerability_with_ammo * assessment.vulnerability_with_ammo
        weighted_without = weights.vulnerability_without_ammo * assessment.vulnerability_without_ammo
        if weighted_with > weighted_without:
            return assessment.best_weapon_with_ammo or assessment.best_weapon_without_ammo
        return assessment.best_weapon_without_ammo or assessment.best_weapon_with_ammo

    def _explain(
        self,
        actor: "Robot",
        best: EnemyAssessment,
        weapon_id: str,
        assessments: list[EnemyAssessment],
        order: np.ndarray,
        weights: AIWeights,
        hatred_weight: Optional[float]
    ) -> list[str]:
        target = best.enemy
        weapon_name = next(w.long_name for w in actor.arsenal if w.weapon_id == weapon_id)
        rationale = [
            f"Recommendation: Attack {target} (weighted score {best.score:.4f}) with '{weapon_name}' weapon."
        ]

        if best.hatred > 0:
            rationale.append(f"We hold a grudge against {target.faction} (+{best.hatred:.4f}).")

        if best.weapon_against_self is not None and best.threat_to_self > 0:
            line = (f"Threat level to us: {best.threat_to_self:.4f} "
                    f"(its '{best.weapon_against_self}' can do {best.damage_to_self:g} damage)")
            if best.threat_to_self >= 1.0:
                line += " (it can kill us next turn)"
            rationale.append(line + ".")
        else:
            rationale.append(f"{target} poses no threat to us.")

        if best.most_threatened_ally is not None:
            line = (f"Threat level to our allies: {best.threat_to_others:.4f} "
                    f"(most threatened: {best.most_threatened_ally})")
            if best.threat_to_others >= 1.0:
                line += " (it can kill them next turn)"
            rationale.append(line + ".")

        rationale.append(
            f"Our threat level to {target}: {best.vulnerability_with_ammo:.4f} with ammunition, "
            f"{best.vulnerability_without_ammo:.4f} without."
        )

        most_dangerous = max(assessments, key=lambda a: a.damage_to_self)
        if most_dangerous.damage_to_self > 0:
            rationale.append(
                f"Most dangerous enemy: {most_dangerous.enemy} "
                f"({most_dangerous.damage_to_self:g} expected damage against us)."
            )
        else:
            rationale.append("No remaining enemy is a threat to us.")

        if len(assessments) > 1:
            worst = assessments[order[-1]]
            rationale.append(f"Least attractive target: {worst.enemy} (weighted score {worst.score:.4f}).")

        if not weights.is_default:
            line = (f"Weights: threat to us {weights.threat_to_self}, "
                    f"threat to allies {weights.threat_to_others}, "
                    f"vulnerability with ammo {weights.vulnerability_with_ammo}, "
                    f"vulnerability without ammo {weights.vulnerability_without_ammo}")
            if hatred_weight is not None:
                line += f", hatred {hatred_weight:.4f}"
            rationale.append(line + ".")

        return rationale
