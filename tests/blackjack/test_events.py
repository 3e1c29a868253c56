"""Tests for the event system."""

import pytest

from blackjack import EventEmitter, EventType, GameEvent


class TestGameEvent:
    """Tests for GameEvent."""

    def test_event_creation(self):
        """Test creating an event."""
        event = GameEvent(event_type=EventType.PLAYER_HIT, data={"card": "ace of spades"})
        assert event.event_type == EventType.PLAYER_HIT
        assert event.data["card"] == "ace of spades"
        assert event.timestamp is not None

    def test_event_is_frozen(self):
        """Test that events cannot be reassigned."""
        event = GameEvent(event_type=EventType.ROUND_STARTED)
        with pytest.raises(AttributeError):
            event.event_type = EventType.ROUND_ENDED

    def test_event_str(self):
        """Test event string representation."""
        event = GameEvent(event_type=EventType.PLAYER_STICK, data={"best": 18})
        assert str(event) == "PLAYER_STICK: {'best': 18}"


class TestEventEmitter:
    """Tests for EventEmitter."""

    def test_subscribe_to_type(self):
        """Test type-specific handlers only see their type."""
        emitter = EventEmitter()
        seen = []
        emitter.subscribe(seen.append, EventType.PLAYER_HIT)

        emitter.emit_new(EventType.PLAYER_HIT, card="2 of clubs")
        emitter.emit_new(EventType.PLAYER_STICK)

        assert [e.event_type for e in seen] == [EventType.PLAYER_HIT]

    def test_subscribe_to_all(self):
        """Test catch-all handlers see everything."""
        emitter = EventEmitter()
        seen = []
        emitter.subscribe(seen.append)

        emitter.emit_new(EventType.PLAYER_HIT)
        emitter.emit_new(EventType.ROUND_ENDED)

        assert len(seen) == 2

    def test_specific_handlers_run_first(self):
        """Test ordering between specific and catch-all handlers."""
        emitter = EventEmitter()
        order = []
        emitter.subscribe(lambda e: order.append("all"))
        emitter.subscribe(lambda e: order.append("hit"), EventType.PLAYER_HIT)

        emitter.emit_new(EventType.PLAYER_HIT)

        assert order == ["hit", "all"]

    def test_unsubscribe(self):
        """Test removed handlers stop receiving events."""
        emitter = EventEmitter()
        seen = []
        emitter.subscribe(seen.append, EventType.PLAYER_HIT)
        emitter.unsubscribe(seen.append, EventType.PLAYER_HIT)

        emitter.emit_new(EventType.PLAYER_HIT)

        assert seen == []

    def test_unsubscribe_unknown_handler(self):
        """Test unsubscribing something never subscribed is ignored."""
        emitter = EventEmitter()
        emitter.unsubscribe(print)
        emitter.unsubscribe(print, EventType.PLAYER_HIT)

    def test_emit_new_returns_event(self):
        """Test emit_new builds the event from keyword data."""
        emitter = EventEmitter()
        event = emitter.emit_new(EventType.CARD_DEALT, player="Alice", card="joker")
        assert event.data == {"player": "Alice", "card": "joker"}

    def test_history(self):
        """Test history records every emitted event and can be cleared."""
        emitter = EventEmitter()
        emitter.emit_new(EventType.TABLE_RESET)
        emitter.emit_new(EventType.DECK_BUILT, cards=52)

        history = emitter.history
        assert [e.event_type for e in history] == [EventType.TABLE_RESET, EventType.DECK_BUILT]
        history.clear()
        assert len(emitter.history) == 2

        emitter.clear_history()
        assert emitter.history == []

    def test_handler_may_subscribe_during_emit(self):
        """Test handlers run outside the emitter lock."""
        emitter = EventEmitter()
        late = []

        def register(event):
            emitter.subscribe(late.append, EventType.ROUND_ENDED)

        emitter.subscribe(register, EventType.ROUND_STARTED)
        emitter.emit_new(EventType.ROUND_STARTED)
        emitter.emit_new(EventType.ROUND_ENDED)

        assert len(late) == 1

    def test_history_is_bounded(self):
        """Test only the most recent events are kept."""
        emitter = EventEmitter(history_limit=3)
        for i in range(5):
            emitter.emit_new(EventType.CARD_DEALT, n=i)
        assert [e.data["n"] for e in emitter.history] == [2, 3, 4]

    def test_events_of(self):
        """Test filtering the history by type."""
        emitter = EventEmitter()
        emitter.emit_new(EventType.PLAYER_HIT, card="2 of clubs")
        emitter.emit_new(EventType.PLAYER_STICK)
        emitter.emit_new(EventType.PLAYER_HIT, card="3 of clubs")

        hits = emitter.events_of(EventType.PLAYER_HIT)
        assert [e.data["card"] for e in hits] == ["2 of clubs", "3 of clubs"]
        assert emitter.events_of(EventType.ROUND_ENDED) == []
