"""
Log management for combat and AI messages.

This module provides centralized logging with categorization and filtering.
Components never hold a reference to the log manager; they publish
``LogMessage`` events and the manager collects them from the event bus.
"""
from collections import deque
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from ..core.data import LOG_CATEGORY_TAGS, LogCategory, LogLevel
from ..core.events import EventType, LogMessage as LogEvent

if TYPE_CHECKING:
    from ..core.events import EventManager


@dataclass
class LogEntry:
    """A single stored log message with metadata."""
    text: str
    category: LogCategory
    level: LogLevel = LogLevel.INFO
    source: str = ""

    def format(self, include_category: bool = True, include_source: bool = False) -> str:
        """Format the message for display, e.g. ``[BTL] Kraken hits Hermes``."""
        parts = []

        if include_category:
            parts.append(f"[{LOG_CATEGORY_TAGS.get(self.category, '???')}]")

        if include_source and self.source:
            parts.append(f"<{self.source}>")

        parts.append(self.text)
        return " ".join(parts)


class LogManager:
    """Collects log events with categorization and level filtering."""

    def __init__(
        self,
        event_manager: "EventManager",
        max_messages: int = 1000,
        default_level: LogLevel = LogLevel.INFO
    ):
        """Initialize the log manager.

        Args:
            event_manager: Event manager for event-driven logging (required)
            max_messages: Maximum number of messages to store in the buffer
            default_level: Minimum level returned by unfiltered queries
        """
        self.messages: deque[LogEntry] = deque(maxlen=max_messages)
        self.log_level = default_level
        self.enabled_categories = set(LogCategory)  # All categories enabled by default
        self.event_manager = event_manager

        # Floor level per category; messages are shown at the higher of this and their own level
        self.category_levels = {
            LogCategory.DEBUG: LogLevel.DEBUG,
            LogCategory.AI: LogLevel.DEBUG,       # AI reasoning is verbose
            LogCategory.WARNING: LogLevel.WARNING,
            LogCategory.ERROR: LogLevel.ERROR,
        }

        self.event_manager.subscribe(
            EventType.LOG_MESSAGE,
            self._handle_log_message_event,
            subscriber_name="LogManager.log_message"
        )

    def _handle_log_message_event(self, event) -> None:
        if isinstance(event, LogEvent):
            self.messages.append(
                LogEntry(text=event.message, category=event.category, level=event.level, source=event.source)
            )

    def log(self, text: str, category: LogCategory = LogCategory.SYSTEM,
            level: LogLevel = LogLevel.INFO) -> None:
        """Add a message to the log directly.

        Args:
            text: The message text
            category: The category of the message
            level: Severity of the message
        """
        self.messages.append(LogEntry(text=text, category=category, level=level, source="LogManager"))

    # Convenience methods for common categories
    def system(self, text: str) -> None:
        self.log(text, LogCategory.SYSTEM)

    def battle(self, text: str) -> None:
        self.log(text, LogCategory.BATTLE)

    def ai(self, text: str) -> None:
        self.log(text, LogCategory.AI, LogLevel.DEBUG)

    def debug(self, text: str) -> None:
        self.log(text, LogCategory.DEBUG, LogLevel.DEBUG)

    def warning(self, text: str) -> None:
        self.log(text, LogCategory.WARNING, LogLevel.WARNING)

    def error(self, text: str) -> None:
        self.log(text, LogCategory.ERROR, LogLevel.ERROR)

    def effective_level(self, entry: LogEntry) -> LogLevel:
        """Level used for filtering: the category floor or the entry's own level."""
        floor = self.category_levels.get(entry.category, LogLevel.DEBUG)
        return entry.level if entry.level.value > floor.value else floor

    def get_messages(self, count: Optional[int] = None,
                     categories: Optional[set[LogCategory]] = None) -> list[LogEntry]:
        """Get recent messages, optionally filtered by category.

        Args:
            count: Maximum number of messages to return (None for all)
            categories: Set of categories to include; when given the level
                filter is skipped

        Returns:
            List of recent messages, oldest first
        """
        if categories:
            filtered = [msg for msg in self.messages
                        if msg.category in categories and msg.category in self.enabled_categories]
        else:
            filtered = [
                msg for msg in self.messages
                if msg.category in self.enabled_categories
                and self.effective_level(msg).value >= self.log_level.value
            ]

        if count is not None and count < len(filtered):
            return filtered[-count:]
        return filtered

    def get_formatted_messages(self, count: Optional[int] = None) -> list[str]:
        return [msg.format() for msg in self.get_messages(count)]

    def clear(self) -> None:
        """Clear all messages from the log."""
        self.messages.clear()

    def enable_category(self, category: LogCategory) -> None:
        self.enabled_categories.add(category)

    def disable_category(self, category: LogCategory) -> None:
        self.enabled_categories.discard(category)

    def set_log_level(self, level: LogLevel) -> None:
        """Set the minimum log level."""
        self.log_level = level

    def is_debug_enabled(self) -> bool:
        """Check if debug messages are currently enabled."""
        return (LogCategory.DEBUG in self.enabled_categories and
                self.log_level == LogLevel.DEBUG)

    def toggle_debug(self) -> None:
        """Toggle debug message visibility."""
        if self.is_debug_enabled():
            self.disable_category(LogCategory.DEBUG)
            self.set_log_level(LogLevel.INFO)
        else:
            self.enable_category(LogCategory.DEBUG)
            self.set_log_level(LogLevel.DEBUG)
