"""Room lookup endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from api.rooms import RoomRegistry
from api.schemas import RoomCountResponse, RoomSummaryResponse
from api.websocket import get_registry

router = APIRouter()


@router.get("")
async def count_rooms(
    registry: Annotated[RoomRegistry, Depends(get_registry)],
) -> RoomCountResponse:
    """Number of live rooms."""
    return RoomCountResponse(rooms=len(registry))


@router.get("/{room_id}")
async def get_room(
    room_id: str,
    registry: Annotated[RoomRegistry, Depends(get_registry)],
) -> RoomSummaryResponse:
    """Public summary of a room. Hands are never included."""
    room = registry.get(room_id)
    if room is None:
        raise HTTPException(status_code=404, detail="Room not found")
    return RoomSummaryResponse(**room.summary())
