"""Tests for the match event emitter."""

from core.game.events import EventEmitter, EventType, GameEvent


class TestEventEmitter:
    """Tests for EventEmitter."""

    def test_typed_and_catch_all_handlers(self):
        emitter = EventEmitter()
        typed, everything = [], []
        emitter.subscribe(typed.append, EventType.SUR)
        emitter.subscribe(everything.append)

        emitter.emit_new(EventType.CARD_PLAYED, slot="p1", card="7♣")
        emitter.emit_new(EventType.SUR, slot="p1", surs=1)

        assert [e.event_type for e in typed] == [EventType.SUR]
        assert [e.event_type for e in everything] == [EventType.CARD_PLAYED, EventType.SUR]
        assert typed[0].slot == "p1"
        assert typed[0].data == {"surs": 1}

    def test_events_are_numbered(self):
        emitter = EventEmitter()
        first = emitter.emit_new(EventType.GAME_STARTED, turn="p1")
        second = emitter.emit_new(EventType.HANDS_DEALT, deck_count=36)

        assert (first.seq, second.seq) == (1, 2)
        assert first.slot is None

    def test_history(self):
        emitter = EventEmitter()
        dealt = emitter.emit_new(EventType.HANDS_DEALT, deck_count=36)
        played = emitter.emit_new(EventType.CARD_PLAYED, slot="p2", card="K♠")

        assert emitter.history == [dealt, played]
        # Callers get a copy
        emitter.history.clear()
        assert emitter.history == [dealt, played]

    def test_str(self):
        assert str(GameEvent(EventType.GAME_ENDED, {"winner": "draw"})) == "GAME_ENDED: {'winner': 'draw'}"
        assert str(GameEvent(EventType.SUR, {"surs": 2}, slot="p1")) == "SUR [p1]: {'surs': 2}"


def test_match_records_history(make_game):
    game = make_game(floor=["9♠"], p1=["5♦", "2♦"], p2=["3♥"])
    game.play_card("p1", "5♦")

    types = [e.event_type for e in game.events.history]
    assert types == [EventType.GAME_STARTED, EventType.CARD_PLAYED, EventType.CARD_TO_FLOOR]
    assert [e.data["card"] for e in game.events.history if e.slot == "p1"] == ["5♦", "5♦"]
