"""Event bus and event definitions."""

from .event_manager import EventManager, EventPriority, QueuedEvent, publish_log
from .events import (
    EventType,
    GameEvent,
    GameStarted,
    GameEnded,
    WeaponFired,
    RobotDefeated,
    AttackRecommended,
    LogMessage,
)

__all__ = [
    "EventManager",
    "EventPriority",
    "QueuedEvent",
    "publish_log",
    "EventType",
    "GameEvent",
    "GameStarted",
    "GameEnded",
    "WeaponFired",
    "RobotDefeated",
    "AttackRecommended",
    "LogMessage",
]
