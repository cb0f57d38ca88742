# sketchroom/domain/common/events.py
from __future__ import annotations

"""
Common event builders.
Events are defined in sketchroom/transport/protocols.py; these helpers turn room
state into their payloads consistently.
"""

from typing import Any, Dict, List

from sketchroom.store.models import PlayerStore, RoomStore
from sketchroom.transport.protocols import (
    OutJoinSuccess,
    OutNewRound,
    OutPlayerJoined,
    OutPlayerLeft,
    OutTimerUpdate,
)


def player_view(player: PlayerStore) -> Dict[str, Any]:
    return {
        "id": player.pid,
        "name": player.name,
        "score": player.score,
        "isDrawing": player.is_drawing,
    }


def players_view(room: RoomStore) -> List[Dict[str, Any]]:
    return [player_view(p) for p in room.players.values()]


def join_success(room: RoomStore, pid: str) -> OutJoinSuccess:
    return OutJoinSuccess(
        roomCode=room.code,
        playerId=pid,
        players=players_view(room),
        gameState=room.game_state,
        timeLeft=room.time_left,
        currentWord=room.current_word,
        roundNumber=room.round_number,
    )


def player_joined(room: RoomStore, player: PlayerStore) -> OutPlayerJoined:
    return OutPlayerJoined(
        player=player_view(player),
        players=players_view(room),
        gameState=room.game_state,
        timeLeft=room.time_left,
    )


def player_left(room: RoomStore, player: PlayerStore) -> OutPlayerLeft:
    return OutPlayerLeft(
        playerId=player.pid,
        playerName=player.name,
        players=players_view(room),
        gameState=room.game_state,
        timeLeft=room.time_left,
    )


def new_round(room: RoomStore) -> OutNewRound:
    return OutNewRound(
        currentWord=room.current_word,
        players=players_view(room),
        roundNumber=room.round_number,
        timeLeft=room.time_left,
    )


def timer_update(room: RoomStore) -> OutTimerUpdate:
    return OutTimerUpdate(timeLeft=room.time_left)
