"""Game layer: entities, combat, AI and the session that ties them together."""

from .log_manager import LogEntry, LogManager
from .session import Session

__all__ = ["LogEntry", "LogManager", "Session"]
