"""
Unit tests for the EventManager.

Tests subscription, queued and immediate publishing, priority ordering and
subscriber error isolation.
"""

import pytest
from unittest.mock import Mock

from robocombat.core.data import LogCategory, LogLevel
from robocombat.core.events import (
    EventManager,
    EventPriority,
    EventType,
    GameEnded,
    GameStarted,
    LogMessage,
    publish_log,
)


class TestEventManager:
    """Test the EventManager class."""

    @pytest.fixture
    def manager(self):
        return EventManager()

    def test_subscribe_and_process(self, manager):
        """Test that queued events reach type subscribers."""
        subscriber = Mock()
        manager.subscribe(EventType.GAME_STARTED, subscriber)

        event = GameStarted(factions=("Red", "Blue"))
        manager.publish(event)
        subscriber.assert_not_called()

        assert manager.process_events() == 1
        subscriber.assert_called_once_with(event)

    def test_event_type_set_automatically(self):
        assert GameStarted(factions=()).event_type == EventType.GAME_STARTED
        assert GameEnded(winning_faction="Red").event_type == EventType.GAME_ENDED

    def test_other_types_not_delivered(self, manager):
        subscriber = Mock()
        manager.subscribe(EventType.GAME_ENDED, subscriber)
        manager.publish(GameStarted(factions=()))
        manager.process_events()
        subscriber.assert_not_called()

    def test_subscribe_all(self, manager):
        subscriber = Mock()
        manager.subscribe_all(subscriber)
        manager.publish(GameStarted(factions=()))
        manager.publish(GameEnded(winning_faction="Red"))
        manager.process_events()
        assert subscriber.call_count == 2

    def test_unsubscribe(self, manager):
        subscriber = Mock()
        manager.subscribe(EventType.GAME_STARTED, subscriber)
        assert manager.unsubscribe(EventType.GAME_STARTED, subscriber) is True
        assert manager.unsubscribe(EventType.GAME_STARTED, subscriber) is False

        manager.publish(GameStarted(factions=()))
        manager.process_events()
        subscriber.assert_not_called()

    def test_publish_immediate(self, manager):
        subscriber = Mock()
        manager.subscribe(EventType.GAME_ENDED, subscriber)
        manager.publish_immediate(GameEnded(winning_faction="Red"))
        subscriber.assert_called_once()
        assert not manager.has_queued_events()

    def test_priority_order(self, manager):
        """Higher priority first, then publish order."""
        received = []
        manager.subscribe_all(lambda event: received.append(event.winning_faction))

        manager.publish(GameEnded(winning_faction="low"), priority=EventPriority.LOW)
        manager.publish(GameEnded(winning_faction="normal-1"))
        manager.publish(GameEnded(winning_faction="critical"), priority=EventPriority.CRITICAL)
        manager.publish(GameEnded(winning_faction="normal-2"))
        manager.publish(GameEnded(winning_faction="high"), priority=EventPriority.HIGH)
        manager.process_events()

        assert received == ["critical", "high", "normal-1", "normal-2", "low"]

    def test_max_events_keeps_remainder(self, manager):
        subscriber = Mock()
        manager.subscribe(EventType.GAME_ENDED, subscriber)
        for name in ("a", "b", "c"):
            manager.publish(GameEnded(winning_faction=name))

        assert manager.process_events(max_events=2) == 2
        assert manager.has_queued_events()
        assert manager.process_events() == 1
        assert [c.args[0].winning_faction for c in subscriber.call_args_list] == ["a", "b", "c"]

    def test_events_published_during_processing_wait(self, manager):
        """Events published by a subscriber are processed on the next call."""
        def republish(event):
            manager.publish(GameEnded(winning_faction="later"))

        manager.subscribe(EventType.GAME_STARTED, republish)
        manager.publish(GameStarted(factions=()))
        assert manager.process_events() == 1
        assert manager.has_queued_events()
        assert manager.process_events() == 1

    def test_failing_subscriber_isolated(self, manager):
        """A raising subscriber does not stop the others."""
        failing = Mock(side_effect=RuntimeError("boom"))
        healthy = Mock()
        manager.subscribe(EventType.GAME_STARTED, failing)
        manager.subscribe(EventType.GAME_STARTED, healthy)

        manager.publish(GameStarted(factions=()))
        manager.process_events()

        healthy.assert_called_once()
        assert manager.get_statistics()['subscriber_errors'] == 1

    def test_debug_callback(self):
        messages = []
        manager = EventManager(enable_debug_logging=True)
        manager.set_debug_callback(messages.append)
        manager.publish(GameStarted(factions=()))
        assert any(message.startswith("[EVENT] Published GameStarted") for message in messages)

    def test_clear_queue(self, manager):
        manager.publish(GameStarted(factions=()))
        manager.publish(GameStarted(factions=()))
        assert manager.clear_queue() == 2
        assert manager.process_events() == 0

    def test_statistics_and_recent_events(self, manager):
        manager.subscribe(EventType.GAME_STARTED, Mock())
        manager.publish(GameStarted(factions=()), source="test")
        manager.process_events()

        stats = manager.get_statistics()
        assert stats['events_published'] == 1
        assert stats['events_processed'] == 1
        assert stats['events_queued'] == 0
        assert stats['subscribers_count'] == 1

        recent = manager.get_recent_events()
        assert recent[-1]['event_type'] == "GAME_STARTED"
        assert recent[-1]['source'] == "test"


class TestPublishLog:
    """Test the log publishing helper."""

    def test_publishes_log_message(self):
        manager = EventManager()
        subscriber = Mock()
        manager.subscribe(EventType.LOG_MESSAGE, subscriber)

        publish_log(manager, "hello", LogCategory.BATTLE, LogLevel.INFO, "Test")
        manager.process_events()

        event = subscriber.call_args.args[0]
        assert isinstance(event, LogMessage)
        assert event.message == "hello"
        assert event.category == LogCategory.BATTLE
        assert event.source == "Test"

    def test_no_manager_is_noop(self):
        publish_log(None, "ignored", LogCategory.SYSTEM, LogLevel.INFO, "Test")
