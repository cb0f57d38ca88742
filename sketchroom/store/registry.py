# sketchroom/store/registry.py
from __future__ import annotations

import logging
import random
import string
from typing import Callable, Dict, List, Optional

from sketchroom.store.models import RoomStore
from sketchroom.util.timeutil import now_ts

logger = logging.getLogger(__name__)

CODE_PREFIX = "ROOM"


def gen_room_code(n: int = 6) -> str:
    alphabet = string.ascii_uppercase + string.digits
    return CODE_PREFIX + "".join(random.choice(alphabet) for _ in range(n))


class RoomRegistry:
    """
    In-memory room store keyed by room code.
    Store-only: no timers, no broadcasting, no game rules.
    """

    def __init__(self, code_factory: Callable[[], str] = gen_room_code, max_code_attempts: int = 32) -> None:
        self._rooms: Dict[str, RoomStore] = {}
        self._code_factory = code_factory
        self._max_code_attempts = max_code_attempts

    def __len__(self) -> int:
        return len(self._rooms)

    def __contains__(self, room_code: object) -> bool:
        return room_code in self._rooms

    def _unique_code(self) -> str:
        for _ in range(self._max_code_attempts):
            code = self._code_factory()
            if code not in self._rooms:
                return code
            logger.debug("room code collision on %s, retrying", code)
        raise RuntimeError(f"could not generate a unique room code after {self._max_code_attempts} attempts")

    def create(self, host_name: str, *, word: str, time_left: int) -> RoomStore:
        room = RoomStore(
            code=self._unique_code(),
            host_name=host_name,
            created_at=now_ts(),
            current_word=word,
            time_left=time_left,
        )
        self._rooms[room.code] = room
        return room

    def get(self, room_code: str) -> Optional[RoomStore]:
        return self._rooms.get(room_code)

    def delete(self, room_code: str) -> Optional[RoomStore]:
        return self._rooms.pop(room_code, None)

    def rooms_with_player(self, pid: str) -> List[RoomStore]:
        return [room for room in self._rooms.values() if pid in room.players]

    def clear(self) -> None:
        self._rooms.clear()
