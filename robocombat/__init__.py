"""Robot combat engine.

Dice-expression damage evaluation, combat mitigation, and a heuristic
attack selector for turn-based robot battles.
"""

__version__ = "0.1.0"
