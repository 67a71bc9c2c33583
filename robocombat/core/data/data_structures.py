"""Value objects passed between the dice engine, combat and AI layers.

Data Flow:
1. Token (tokenizer) -> prefix Token list (converter) -> DamageObject (evaluator)
2. DamageObject x3 (original, dodge, armor) -> DamageReport (combat resolver)
3. DamageReport per enemy/weapon -> AttackRecommendation (attack selector)

All of these are immutable snapshots; entities themselves live in
``robocombat.game.entities``.
"""

from dataclasses import dataclass, field
from typing import Optional

from .game_enums import BINARY_OPERATORS, OPERAND_KINDS, EvaluationMode, TokenKind


@dataclass(frozen=True)
class Token:
    """A lexical unit of a dice expression.

    ``position`` is the character offset of the token in the source
    expression, kept for error reporting.
    """
    kind: TokenKind
    text: str
    position: int = 0

    @property
    def is_operator(self) -> bool:
        return self.kind in BINARY_OPERATORS

    @property
    def is_operand(self) -> bool:
        return self.kind in OPERAND_KINDS

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class DieRoll:
    """Outcome of rolling a single die with ``faces`` sides."""
    faces: int
    value: int

    @property
    def die(self) -> str:
        """The die in dice notation, e.g. ``1d6``."""
        return f"1d{self.faces}"

    def __str__(self) -> str:
        return f"{self.die}={self.value}"


@dataclass(frozen=True)
class DamageObject:
    """Result of evaluating a dice expression.

    Attributes:
        source_expression: The expression that produced this damage
        damage: Computed value (float; Expected mode yields fractions)
        rolls: Individual die outcomes in source order; only populated
            in Random mode when the expression contains dice
    """
    source_expression: str
    damage: float
    rolls: tuple[DieRoll, ...] = ()
    mode: Optional[EvaluationMode] = None

    @classmethod
    def zero(cls, source_expression: str = "") -> "DamageObject":
        """Create a damage object that deals no damage."""
        return cls(source_expression=source_expression, damage=0)

    @property
    def roll_total(self) -> int:
        return sum(roll.value for roll in self.rolls)

    def roll_summary(self) -> str:
        """Describe the individual rolls, e.g. ``1d6=4, 1d6=2``."""
        if not self.rolls:
            return "no rolls"
        return ", ".join(str(roll) for roll in self.rolls)


@dataclass(frozen=True)
class DamageReport:
    """Auditable breakdown of one weapon discharge.

    ``final_damage`` equals
    ``max(0, original - floor(dodge) - floor(max(0, armor)))``.
    """
    original_damage: DamageObject
    dodged: bool
    dodge_mitigation: DamageObject
    armor_mitigation: DamageObject
    final_damage: float
    weapons_fired: int = 0

    @classmethod
    def empty(cls) -> "DamageReport":
        """Report for a discharge that never happened (no usable weapon)."""
        return cls(
            original_damage=DamageObject.zero(),
            dodged=False,
            dodge_mitigation=DamageObject.zero(),
            armor_mitigation=DamageObject.zero(),
            final_damage=0,
            weapons_fired=0,
        )

    @property
    def is_empty(self) -> bool:
        return self.weapons_fired == 0

    @property
    def damage_prevented(self) -> float:
        """Damage absorbed by dodging and armor combined."""
        return self.original_damage.damage - self.final_damage


@dataclass
class AttackRecommendation:
    """The attack selector's decision.

    An empty recommendation (no weapon, no target) still carries a
    rationale explaining why no attack is possible.
    """
    weapon_id: Optional[str] = None
    target_id: Optional[str] = None
    rationale: list[str] = field(default_factory=list)
    score: Optional[float] = None

    @property
    def is_empty(self) -> bool:
        return self.weapon_id is None or self.target_id is None
