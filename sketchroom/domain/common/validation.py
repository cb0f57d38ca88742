# sketchroom/domain/common/validation.py
from __future__ import annotations

from typing import Optional

from sketchroom.store.models import PlayerStore, RoomStore

# A white stroke wider than any canvas is how clients ask for a full clear.
CLEAR_COLOR = "#FFFFFF"
CLEAR_MIN_SIZE = 500


def is_drawer(player: Optional[PlayerStore]) -> bool:
    """Check if player currently holds the pen."""
    return player is not None and player.is_drawing


def is_clear_signal(color: str, size: float) -> bool:
    """Check if a stroke is the reserved clear-canvas sentinel."""
    return (color or "").strip().upper() == CLEAR_COLOR and size > CLEAR_MIN_SIZE


def is_name_taken(room: RoomStore, name: str, *, pid: Optional[str] = None) -> bool:
    """Check if another connected player in the room already uses `name`."""
    return any(p.name == name and p.pid != pid for p in room.players.values())


def matches_word(guess: str, word: str) -> bool:
    return (guess or "").strip().casefold() == (word or "").strip().casefold()
