from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from sketchroom.domain.common.errors import MalformedRequest, RoomNotFound
from sketchroom.domain.lifecycle.membership import create_room

router = APIRouter(prefix="/api/rooms", tags=["rooms"])


class CreateRoomBody(BaseModel):
    playerName: str = ""


@router.get("/{room_code}")
async def get_room(room_code: str, request: Request):
    """
    Existence check used by the lobby before opening a socket.
    """
    rt = request.app.state.runtime
    room = rt.registry.get(room_code)
    if room is None:
        raise HTTPException(status_code=404, detail=RoomNotFound(room_code).message)

    return {
        "id": room.code,
        "playerCount": len(room.players),
        "gameState": room.game_state,
        "maxPlayers": rt.rules.max_players,
    }


@router.post("")
async def post_room(body: CreateRoomBody, request: Request):
    """
    Create an empty room; the creator joins it over the socket afterwards.
    """
    rt = request.app.state.runtime
    try:
        room = create_room(rt, body.playerName)
    except MalformedRequest as exc:
        raise HTTPException(status_code=400, detail=exc.message)

    return {"roomCode": room.code, "message": "Room created successfully"}
