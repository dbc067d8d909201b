"""Room seating and the keyed room registry."""

import asyncio
import logging
import string
import time
from dataclasses import dataclass, field
from random import Random
from typing import Any

from api.notifier import MatchFinished, MatchNotifier, NullNotifier, deliver
from config import GameConfig, config
from core.game import (
    ChaharBargGame,
    MatchNotStarted,
    NotSeated,
    PlayResult,
    RoomFull,
    RoomNotFound,
)
from core.game.state import SLOTS, RoomState, Slot, opponent_of

logger = logging.getLogger(__name__)

ROOM_ID_ALPHABET = string.ascii_uppercase + string.digits


def normalize_room_id(room_id: Any) -> str:
    """Room ids are case-insensitive and stored upper-case."""
    return str(room_id or "").strip().upper()


@dataclass
class Seat:
    """A connection bound to a player slot."""

    connection_id: str
    display_name: str | None = None
    external_id: str | None = None


class Room:
    """
    One match plus the two seats playing it.

    Every method here must be called with `lock` held; the registry takes
    care of that.
    """

    def __init__(self, room_id: str, game: ChaharBargGame) -> None:
        self.room_id = room_id
        self.game = game
        self.seats: dict[Slot, Seat | None] = {slot: None for slot in SLOTS}
        self.lock = asyncio.Lock()
        self.created_at = time.monotonic()
        self.closed = False
        self._finish_reported = False

    @property
    def state(self) -> RoomState:
        return self.game.state

    @property
    def is_empty(self) -> bool:
        return all(seat is None for seat in self.seats.values())

    @property
    def is_full(self) -> bool:
        return all(seat is not None for seat in self.seats.values())

    def slot_of(self, connection_id: str) -> Slot | None:
        """Return the slot a connection occupies, if any."""
        for slot, seat in self.seats.items():
            if seat is not None and seat.connection_id == connection_id:
                return slot
        return None

    def seat(
        self,
        connection_id: str,
        display_name: str | None = None,
        external_id: str | None = None,
    ) -> Slot:
        """
        Bind a connection to the first free slot.

        Starts the match once both slots are filled. A connection that is
        already seated keeps its slot.

        Raises:
            RoomFull: if both slots are taken by other connections
        """
        existing = self.slot_of(connection_id)
        if existing is not None:
            return existing

        for slot in SLOTS:
            if self.seats[slot] is None:
                self.seats[slot] = Seat(connection_id, display_name, external_id)
                break
        else:
            raise RoomFull()

        if self.is_full and self.game.start():
            logger.info("Room %s started", self.room_id)
        return slot

    def vacate(self, connection_id: str) -> Slot | None:
        """Free the slot held by a connection. The match state is untouched."""
        slot = self.slot_of(connection_id)
        if slot is not None:
            self.seats[slot] = None
        return slot

    def connections(self) -> dict[Slot, str]:
        """Connection ids of the occupied slots."""
        return {
            slot: seat.connection_id
            for slot, seat in self.seats.items()
            if seat is not None
        }

    def views(self) -> dict[str, dict[str, Any]]:
        """Sanitized state for every seated connection, from one snapshot."""
        return {
            connection_id: self.game.view_for(
                slot,
                self.room_id,
                opp_seated=self.seats[opponent_of(slot)] is not None,
            )
            for slot, connection_id in self.connections().items()
        }

    def play_card(self, connection_id: str, card_id: str) -> PlayResult:
        """
        Play a card on behalf of a seated connection.

        Raises:
            NotSeated: if the connection holds no slot here
            MatchNotStarted: while the other seat is empty
            GameError: any rejection from the match engine
        """
        slot = self.slot_of(connection_id)
        if slot is None:
            raise NotSeated()
        if not self.is_full and not self.game.game_over:
            raise MatchNotStarted()
        return self.game.play_card(slot, card_id)

    def take_match_finished(self) -> MatchFinished | None:
        """Return the finished-match notification once, after the match ends."""
        if self._finish_reported or self.game.final_result is None:
            return None
        self._finish_reported = True
        return MatchFinished(
            room_id=self.room_id,
            names={s: seat.display_name if seat else None for s, seat in self.seats.items()},
            external_ids={
                s: seat.external_id if seat else None for s, seat in self.seats.items()
            },
            result=self.game.final_result,
        )

    def summary(self) -> dict[str, Any]:
        """Public, hand-free description of the room."""
        return {
            "room_id": self.room_id,
            "state": self.state.name,
            "players": {
                slot: (seat.display_name or slot) if seat else None
                for slot, seat in self.seats.items()
            },
            "deck_count": len(self.game.deck),
        }


@dataclass
class Outcome:
    """Result of a registry mutation, ready for delivery."""

    room_id: str
    slot: Slot | None
    views: dict[str, dict[str, Any]] = field(default_factory=dict)
    finished: MatchFinished | None = None
    play: PlayResult | None = None


class RoomRegistry:
    """
    Owned store of live rooms keyed by room id.

    The registry lock guards only the mapping itself. Room state is read
    and written under the room's own lock, so different rooms never wait
    on each other.
    """

    def __init__(
        self,
        notifier: MatchNotifier | None = None,
        rng: Random | None = None,
        settings: GameConfig | None = None,
    ) -> None:
        self._rooms: dict[str, Room] = {}
        self._lock = asyncio.Lock()
        self._notifier = notifier or NullNotifier()
        self._rng = rng or Random()
        self._settings = settings or config.game
        self._pending: set[asyncio.Task] = set()

    def __len__(self) -> int:
        return len(self._rooms)

    def __contains__(self, room_id: object) -> bool:
        return normalize_room_id(room_id) in self._rooms

    def get(self, room_id: str) -> Room | None:
        """Look up a live room."""
        room = self._rooms.get(normalize_room_id(room_id))
        if room is None or room.closed:
            return None
        return room

    def room_for(self, connection_id: str) -> Room | None:
        """First live room in which a connection is seated."""
        for room in self._rooms.values():
            if not room.closed and room.slot_of(connection_id) is not None:
                return room
        return None

    def _new_game(self, room_id: str) -> ChaharBargGame:
        game = ChaharBargGame(
            rng=Random(self._rng.getrandbits(64)),
            hand_size=self._settings.hand_size,
            floor_size=self._settings.floor_size,
        )
        game.subscribe(lambda event: logger.debug("Room %s: %s", room_id, event))
        return game

    def _new_room_id(self) -> str:
        while True:
            room_id = "".join(
                self._rng.choices(ROOM_ID_ALPHABET, k=self._settings.room_id_length)
            )
            if room_id not in self._rooms:
                return room_id

    async def _get_or_create(self, room_id: str) -> Room:
        async with self._lock:
            room = self._rooms.get(room_id)
            if room is None or room.closed:
                room = Room(room_id, self._new_game(room_id))
                self._rooms[room_id] = room
                logger.info("Room %s created on join", room_id)
            return room

    async def _discard(self, room: Room) -> None:
        async with self._lock:
            if self._rooms.get(room.room_id) is room:
                del self._rooms[room.room_id]
                logger.info("Room %s destroyed", room.room_id)

    async def create_room(
        self,
        connection_id: str,
        display_name: str | None = None,
        external_id: str | None = None,
    ) -> Outcome:
        """Create a room with a fresh id and seat the creator as p1."""
        await self.cleanup_expired()

        async with self._lock:
            room_id = self._new_room_id()
            room = Room(room_id, self._new_game(room_id))
            self._rooms[room_id] = room

        async with room.lock:
            slot = room.seat(connection_id, display_name, external_id)
            views = room.views()

        logger.info("Room %s created by %s", room_id, connection_id)
        return Outcome(room_id=room_id, slot=slot, views=views)

    async def join_room(
        self,
        room_id: str,
        connection_id: str,
        display_name: str | None = None,
        external_id: str | None = None,
    ) -> Outcome:
        """
        Seat a connection in a room, creating the room if the id is unknown.

        Raises:
            RoomFull: if both slots are taken
        """
        room_id = normalize_room_id(room_id)
        if not room_id:
            raise RoomNotFound("Room id is required.")

        await self.cleanup_expired()

        while True:
            room = await self._get_or_create(room_id)
            async with room.lock:
                if room.closed:
                    continue
                slot = room.seat(connection_id, display_name, external_id)
                views = room.views()
            logger.info("%s joined room %s as %s", connection_id, room_id, slot)
            return Outcome(room_id=room_id, slot=slot, views=views)

    async def play_card(self, room_id: str, connection_id: str, card_id: str) -> Outcome:
        """
        Apply a play and compute both views.

        Raises:
            RoomNotFound: for an unknown room id
            GameError: any rejection from the room or match engine
        """
        room = self.get(room_id)
        if room is None:
            raise RoomNotFound()

        async with room.lock:
            if room.closed:
                raise RoomNotFound()
            play = room.play_card(connection_id, card_id)
            views = room.views()
            finished = room.take_match_finished()

        if finished is not None:
            logger.info("Room %s finished, winner %s", room.room_id, finished.result.winner)
            self._dispatch(finished)
        return Outcome(
            room_id=room.room_id,
            slot=play.slot,
            views=views,
            finished=finished,
            play=play,
        )

    async def leave(self, connection_id: str) -> list[Outcome]:
        """
        Free every seat a connection holds.

        Rooms left with no seated players are destroyed. The remaining player
        in a half-empty room keeps the match as it is; the free seat goes to
        whoever joins next.
        """
        outcomes: list[Outcome] = []
        while True:
            room = self.room_for(connection_id)
            if room is None:
                return outcomes

            async with room.lock:
                slot = room.vacate(connection_id)
                if slot is None:
                    continue
                empty = room.is_empty
                if empty:
                    room.closed = True
                views = room.views()

            logger.info("%s left room %s (%s)", connection_id, room.room_id, slot)
            if empty:
                await self._discard(room)
            outcomes.append(Outcome(room_id=room.room_id, slot=slot, views=views))

    async def cleanup_expired(self, now: float | None = None) -> int:
        """Destroy rooms that have waited too long for a second player."""
        now = time.monotonic() if now is None else now
        ttl = self._settings.waiting_ttl
        async with self._lock:
            expired = [
                room
                for room in self._rooms.values()
                if room.state == RoomState.WAITING and now - room.created_at > ttl
            ]
            for room in expired:
                room.closed = True
                del self._rooms[room.room_id]
                logger.info("Room %s expired while waiting", room.room_id)
        return len(expired)

    def _dispatch(self, event: MatchFinished) -> None:
        """Fire-and-forget delivery to the notifier."""
        task = asyncio.create_task(deliver(self._notifier, event))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        """Wait for outstanding notifications (used on shutdown and in tests)."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
