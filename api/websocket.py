"""WebSocket transport: maps socket messages onto room events."""

import logging
from typing import Any
from uuid import uuid4

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from api.notifier import build_notifier
from api.rooms import Outcome, RoomRegistry
from api.schemas import (
    CreateRoomMessage,
    JoinRoomMessage,
    LeaveRoomMessage,
    PlayCardMessage,
    client_message_adapter,
)
from core.game import GameError

logger = logging.getLogger(__name__)

router = APIRouter()


class ConnectionManager:
    """Track open sockets and deliver room outcomes to them."""

    def __init__(self, registry: RoomRegistry) -> None:
        self.registry = registry
        self._connections: dict[str, WebSocket] = {}

    async def connect(self, websocket: WebSocket, connection_id: str) -> None:
        """Accept and register a new connection."""
        await websocket.accept()
        self._connections[connection_id] = websocket

    def disconnect(self, connection_id: str) -> None:
        """Remove a connection."""
        self._connections.pop(connection_id, None)

    async def send_message(self, connection_id: str, message: dict[str, Any]) -> None:
        """Send a message to one connection; delivery failures are only logged."""
        websocket = self._connections.get(connection_id)
        if websocket is None:
            return
        try:
            await websocket.send_json(message)
        except Exception as exc:
            logger.debug("Dropping message to %s: %s", connection_id, exc)

    async def send_error(self, connection_id: str, text: str) -> None:
        await self.send_message(connection_id, {"type": "error", "message": text})

    async def send_views(self, outcome: Outcome) -> None:
        """Deliver each seated connection its own view of the room."""
        for connection_id, view in outcome.views.items():
            await self.send_message(connection_id, {"type": "state", "state": view})


# Global connection manager
manager = ConnectionManager(RoomRegistry(notifier=build_notifier()))


def get_registry() -> RoomRegistry:
    """FastAPI dependency for the live room registry."""
    return manager.registry


def _external_id(value: str | int | None) -> str | None:
    return None if value is None else str(value)


async def _handle(message: Any, connection_id: str) -> None:
    registry = manager.registry

    if isinstance(message, CreateRoomMessage):
        outcome = await registry.create_room(
            connection_id,
            display_name=message.display_name,
            external_id=_external_id(message.external_id),
        )
        await manager.send_message(connection_id, {
            "type": "room_created",
            "room_id": outcome.room_id,
            "your_slot": outcome.slot,
        })
        await manager.send_views(outcome)

    elif isinstance(message, JoinRoomMessage):
        outcome = await registry.join_room(
            message.room_id,
            connection_id,
            display_name=message.display_name,
            external_id=_external_id(message.external_id),
        )
        await manager.send_message(connection_id, {
            "type": "joined",
            "room_id": outcome.room_id,
            "your_slot": outcome.slot,
        })
        await manager.send_views(outcome)

    elif isinstance(message, PlayCardMessage):
        outcome = await registry.play_card(message.room_id, connection_id, message.card_id)
        await manager.send_views(outcome)

    elif isinstance(message, LeaveRoomMessage):
        for outcome in await registry.leave(connection_id):
            await manager.send_views(outcome)


@router.websocket("/play")
async def play_websocket(websocket: WebSocket) -> None:
    """
    WebSocket endpoint for a player.

    Messages from client:
    - {"type": "create_room", "display_name"?: "...", "external_id"?: "..."}
    - {"type": "join_room", "room_id": "ABC123", "display_name"?: "...", "external_id"?: "..."}
    - {"type": "play_card", "room_id": "ABC123", "card_id": "7♣"}
    - {"type": "leave_room"}

    Messages to client:
    - {"type": "room_created", "room_id": "...", "your_slot": "p1"}
    - {"type": "joined", "room_id": "...", "your_slot": "p1"|"p2"}
    - {"type": "state", "state": {...}}
    - {"type": "error", "message": "..."}
    """
    connection_id = str(uuid4())
    await manager.connect(websocket, connection_id)

    try:
        while True:
            frame = await websocket.receive()
            if frame["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(frame.get("code", 1000))
            data = frame.get("text")
            if data is None:
                logger.debug("Binary frame from %s", connection_id)
                await manager.send_error(connection_id, "Malformed message.")
                continue
            try:
                message = client_message_adapter.validate_json(data)
            except ValidationError as exc:
                logger.debug("Malformed message from %s: %s", connection_id, exc)
                await manager.send_error(connection_id, "Malformed message.")
                continue

            try:
                await _handle(message, connection_id)
            except GameError as exc:
                logger.debug("Rejected %s from %s: %s", message.type, connection_id, exc)
                await manager.send_error(connection_id, exc.text)

    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(connection_id)
        for outcome in await manager.registry.leave(connection_id):
            await manager.send_views(outcome)
