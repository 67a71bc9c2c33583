"""Combat resolution."""

from .combat_resolver import CombatResolver

__all__ = ["CombatResolver"]
