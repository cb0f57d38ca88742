# sketchroom/domain/game/runtime.py
from __future__ import annotations

import random
from typing import Dict, Optional, Tuple

from sketchroom.domain.common.outbox import Outbox
from sketchroom.domain.common.scheduler import Handle, Scheduler
from sketchroom.domain.game.timer import RoundTimer
from sketchroom.settings import GameRules
from sketchroom.store.models import PlayerStore, RoomStore
from sketchroom.store.registry import RoomRegistry
from sketchroom.transport.protocols import OutBase


class GameRuntime:
    """
    Everything the room state machine needs from the outside world:
    the registry, a clock, an outbox and the rules.

    Also owns the per-room scheduling slots: one RoundTimer and one pending
    round advance per room code, plus the unclaimed-room expiry.
    """

    def __init__(
        self,
        *,
        registry: RoomRegistry,
        scheduler: Scheduler,
        outbox: Outbox,
        rules: Optional[GameRules] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.registry = registry
        self.scheduler = scheduler
        self.outbox = outbox
        self.rules = rules or GameRules()
        self.rng = rng or random.Random()
        self.timers: Dict[str, RoundTimer] = {}
        self.advances: Dict[str, Handle] = {}
        self.expiries: Dict[str, Handle] = {}

    def send(self, pid: str, event: OutBase) -> None:
        self.outbox.send(pid, event)

    def broadcast(self, room: RoomStore, event: OutBase, *, exclude_pid: Optional[str] = None) -> None:
        for pid in list(room.players):
            if exclude_pid and pid == exclude_pid:
                continue
            self.outbox.send(pid, event)

    def is_live(self, room: RoomStore) -> bool:
        """True while `room` is still the registered room for its code."""
        return self.registry.get(room.code) is room

    def resolve(self, room_code: str, pid: str) -> Tuple[Optional[RoomStore], Optional[PlayerStore]]:
        room = self.registry.get(room_code)
        if room is None:
            return None, None
        return room, room.players.get(pid)

    def shutdown(self) -> None:
        for timer in self.timers.values():
            timer.stop()
        for handle in self.advances.values():
            handle.cancel()
        for handle in self.expiries.values():
            handle.cancel()
        self.timers.clear()
        self.advances.clear()
        self.expiries.clear()
        self.registry.clear()
