"""Chahar Barg match engine with state machine."""

import logging
from dataclasses import dataclass, field
from random import Random
from typing import Any, Callable

from transitions import Machine

from core.capture import is_sur, resolve_capture
from core.cards import Card, Deck, new_shuffled_deck
from core.deal import FLOOR_SIZE, deal_hands, deal_initial_floor
from core.game.errors import CardNotInHand, MatchNotStarted, MatchOver, NotYourTurn
from core.game.events import EventEmitter, EventType, GameEvent
from core.game.state import SLOTS, RoomState, Slot, opponent_of
from core.hand import HAND_SIZE, Hand
from core.scoring import FinalResult, finalize

logger = logging.getLogger(__name__)

TOTAL_CARDS = 52


@dataclass
class PlayerState:
    """Per-seat game state."""

    hand: Hand = field(default_factory=Hand)
    captured: list[Card] = field(default_factory=list)
    surs: int = 0


@dataclass(frozen=True)
class PlayResult:
    """What a single accepted play did."""

    slot: Slot
    played: Card
    captured: tuple[Card, ...] = ()
    sur: bool = False

    @property
    def is_capture(self) -> bool:
        return bool(self.captured)


class ChaharBargGame:
    """
    Two-player Chahar Barg match using a state machine.

    Owns the deck, floor, hands, captured piles and sur counters. It knows
    nothing about connections; seating lives in the session layer, which
    calls `start` once both seats are filled.
    """

    # State machine states
    STATES = [s.name.lower() for s in RoomState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "begin_match", "source": "waiting", "dest": "active"},
        {"trigger": "end_match", "source": "active", "dest": "ended"},
    ]

    def __init__(
        self,
        rng: Random | None = None,
        deck: Deck | None = None,
        hand_size: int = HAND_SIZE,
        floor_size: int = FLOOR_SIZE,
    ) -> None:
        """
        Initialize a new match and deal the opening floor and hands.

        Args:
            rng: Random number generator for reproducible matches
            deck: Pre-arranged deck (shuffled fresh when omitted)
            hand_size: Cards dealt to each hand per round
            floor_size: Cards laid on the opening floor
        """
        self.deck = deck if deck is not None else new_shuffled_deck(rng)
        self.floor: list[Card] = []
        self.players: dict[Slot, PlayerState] = {
            slot: PlayerState(hand=Hand(capacity=hand_size)) for slot in SLOTS
        }
        self.turn: Slot = "p1"
        self.last_capturer: Slot | None = None
        self.final_result: FinalResult | None = None
        self.events = EventEmitter()

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="waiting",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

        deal_initial_floor(self.deck, self.floor, floor_size)
        deal_hands(self.deck, self.players["p1"].hand, self.players["p2"].hand)

    @property
    def state(self) -> RoomState:
        """Get current match state as enum."""
        return RoomState[self._machine_state.upper()]  # type: ignore

    @property
    def started(self) -> bool:
        return self.state != RoomState.WAITING

    @property
    def game_over(self) -> bool:
        return self.state == RoomState.ENDED

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    def hand(self, slot: Slot) -> Hand:
        return self.players[slot].hand

    def captured(self, slot: Slot) -> list[Card]:
        return self.players[slot].captured

    def surs(self, slot: Slot) -> int:
        return self.players[slot].surs

    def start(self) -> bool:
        """
        Move from WAITING to ACTIVE.

        Returns:
            True if the match was started by this call
        """
        if self.state != RoomState.WAITING:
            return False
        self.begin_match()
        self.events.emit_new(EventType.GAME_STARTED, turn=self.turn)
        return True

    def play_card(self, slot: Slot, card_id: str) -> PlayResult:
        """
        Play a card from a hand.

        Args:
            slot: Seat making the play
            card_id: Id of the card, e.g. '7♣'

        Returns:
            What the play captured

        Raises:
            MatchOver, MatchNotStarted, NotYourTurn, CardNotInHand
        """
        if self.state == RoomState.ENDED:
            raise MatchOver()
        if self.state == RoomState.WAITING:
            raise MatchNotStarted()
        if self.turn != slot:
            raise NotYourTurn()

        player = self.players[slot]
        if player.hand.find(card_id) is None:
            raise CardNotInHand()

        played = player.hand.remove(card_id)
        self.events.emit_new(EventType.CARD_PLAYED, slot=slot, card=played.id)

        captured = resolve_capture(played, self.floor)
        sur = False
        if captured:
            self.last_capturer = slot
            for card in captured:
                self.floor.remove(card)
            player.captured.append(played)
            player.captured.extend(captured)
            self.events.emit_new(
                EventType.CARDS_CAPTURED,
                slot=slot,
                card=played.id,
                captured=[c.id for c in captured],
            )

            sur = is_sur(played, captured, self.floor)
            if sur:
                player.surs += 1
                self.events.emit_new(EventType.SUR, slot=slot, surs=player.surs)
        else:
            self.floor.append(played)
            self.events.emit_new(EventType.CARD_TO_FLOOR, slot=slot, card=played.id)

        self.turn = opponent_of(slot)
        self.check_and_deal_next()

        return PlayResult(slot=slot, played=played, captured=tuple(captured), sur=sur)

    def check_and_deal_next(self) -> None:
        """Deal a new round once both hands are empty, or end the match."""
        if not (self.hand("p1").is_empty and self.hand("p2").is_empty):
            return

        if not len(self.deck):
            self._end_game()
            return

        deal_hands(self.deck, self.hand("p1"), self.hand("p2"))
        self.events.emit_new(EventType.HANDS_DEALT, deck_count=len(self.deck))

    def _end_game(self) -> None:
        """Award the leftover floor and fix the result."""
        if self.final_result is not None:
            return

        if self.floor and self.last_capturer is not None:
            leftover = list(self.floor)
            self.captured(self.last_capturer).extend(leftover)
            self.floor.clear()
            self.events.emit_new(
                EventType.FLOOR_AWARDED,
                slot=self.last_capturer,
                cards=[c.id for c in leftover],
            )

        self.final_result = finalize(
            self.captured("p1"),
            self.surs("p1"),
            self.captured("p2"),
            self.surs("p2"),
        )
        self.end_match()
        logger.debug("Match ended, winner %s", self.final_result.winner)
        self.events.emit_new(EventType.GAME_ENDED, winner=self.final_result.winner)

    def card_count(self) -> int:
        """Total cards across deck, floor, hands and piles."""
        return (
            len(self.deck)
            + len(self.floor)
            + sum(len(p.hand) + len(p.captured) for p in self.players.values())
        )

    def all_cards(self) -> list[Card]:
        """Every card the match holds, wherever it currently is."""
        cards = list(self.deck) + list(self.floor)
        for player in self.players.values():
            cards.extend(player.hand)
            cards.extend(player.captured)
        return cards

    def view_for(
        self,
        slot: Slot,
        room_id: str = "",
        opp_seated: bool = True,
    ) -> dict[str, Any]:
        """
        Sanitized state for one seat.

        The viewer's own hand is listed by id; the opponent's hand appears
        only as a count. While the opponent's seat is empty the match reads
        as not started.
        """
        opp = opponent_of(slot)
        me_state = self.players[slot]
        opp_state = self.players[opp]
        return {
            "room_id": room_id,
            "started": self.started and opp_seated,
            "game_over": self.game_over,
            "turn": self.turn,
            "deck_count": len(self.deck),
            "floor": [c.id for c in self.floor],
            "me": {
                "slot": slot,
                "hand": me_state.hand.ids,
                "captured_count": len(me_state.captured),
                "surs": me_state.surs,
            },
            "opp": {
                "slot": opp,
                "seated": opp_seated,
                "hand_count": len(opp_state.hand),
                "captured_count": len(opp_state.captured),
                "surs": opp_state.surs,
            },
            "final": self.final_result.to_dict() if self.final_result else None,
        }
