"""Combat events and logging events.

Event Design Principles:
- Events are immutable dataclasses with rich object payloads
- Events carry no wall-clock time; the event bus orders them by priority
  and publish sequence
- Events use proper enums instead of magic strings
"""

from abc import ABC
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, TYPE_CHECKING

from ..data import LogCategory, LogLevel

if TYPE_CHECKING:
    from ..data import AttackRecommendation, DamageReport
    from ...game.entities.robot import Robot


class EventType(Enum):
    """Types of events that managers can subscribe to."""
    # Session Events
    GAME_STARTED = auto()
    GAME_ENDED = auto()

    # Combat Events
    WEAPON_FIRED = auto()
    ROBOT_DEFEATED = auto()

    # AI Events
    ATTACK_RECOMMENDED = auto()

    # Logging Events
    LOG_MESSAGE = auto()


@dataclass(frozen=True)
class GameEvent(ABC):
    """Base class for all events."""
    event_type: EventType = field(init=False)


@dataclass(frozen=True)
class GameStarted(GameEvent):
    """Event emitted when a session starts with two or more factions."""
    factions: tuple[str, ...]

    def __post_init__(self):
        # Set event_type since dataclass frozen=True prevents normal assignment
        object.__setattr__(self, 'event_type', EventType.GAME_STARTED)


@dataclass(frozen=True)
class GameEnded(GameEvent):
    """Event emitted when only one faction has living robots left."""
    winning_faction: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.GAME_ENDED)


@dataclass(frozen=True)
class WeaponFired(GameEvent):
    """Event emitted after a committed weapon discharge."""
    attacker: "Robot"
    defender: "Robot"
    weapon_selector: str
    report: "DamageReport"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.WEAPON_FIRED)


@dataclass(frozen=True)
class RobotDefeated(GameEvent):
    """Event emitted when committed damage takes a robot to zero hitpoints or below."""
    robot: "Robot"
    attacker: Optional["Robot"] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.ROBOT_DEFEATED)


@dataclass(frozen=True)
class AttackRecommended(GameEvent):
    """Event emitted when the attack selector reaches a decision."""
    actor: "Robot"
    recommendation: "AttackRecommendation"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.ATTACK_RECOMMENDED)


@dataclass(frozen=True)
class LogMessage(GameEvent):
    """Event emitted when a log message is created."""
    message: str
    category: LogCategory
    level: LogLevel
    source: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_MESSAGE)
