"""Pydantic schemas for socket messages and API responses."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter


# Client -> server socket messages
class CreateRoomMessage(BaseModel):
    """Open a new room and take seat p1."""

    type: Literal["create_room"]
    display_name: str | None = Field(default=None, max_length=64)
    external_id: str | int | None = None


class JoinRoomMessage(BaseModel):
    """Join a room by id; unknown ids create the room."""

    type: Literal["join_room"]
    room_id: str = Field(..., min_length=1, max_length=64)
    display_name: str | None = Field(default=None, max_length=64)
    external_id: str | int | None = None


class PlayCardMessage(BaseModel):
    """Play one card from the sender's hand."""

    type: Literal["play_card"]
    room_id: str = Field(..., min_length=1, max_length=64)
    card_id: str = Field(..., min_length=2, max_length=4)


class LeaveRoomMessage(BaseModel):
    """Give up the sender's seat."""

    type: Literal["leave_room"]


ClientMessage = Annotated[
    Union[CreateRoomMessage, JoinRoomMessage, PlayCardMessage, LeaveRoomMessage],
    Field(discriminator="type"),
]

client_message_adapter: TypeAdapter[ClientMessage] = TypeAdapter(ClientMessage)


# REST responses
class RoomSummaryResponse(BaseModel):
    """Public room description (no hands)."""

    room_id: str
    state: Literal["WAITING", "ACTIVE", "ENDED"]
    players: dict[str, str | None]
    deck_count: int


class RoomCountResponse(BaseModel):
    """Number of live rooms."""

    rooms: int
