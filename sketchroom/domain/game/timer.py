# sketchroom/domain/game/timer.py
from __future__ import annotations

from typing import Callable, Optional

from sketchroom.domain.common.scheduler import Handle, Scheduler
from sketchroom.store.models import RoomStore

RoomCallback = Callable[[RoomStore], None]


class RoundTimer:
    """
    Once-per-second countdown over `room.time_left`.

    Each tick with time left decrements it and calls `on_tick`. The first tick
    that finds it at 0 deactivates the timer and calls `on_expire`, once per
    activation. `start()` on a live timer replaces the old tick stream.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        room: RoomStore,
        *,
        on_tick: RoomCallback,
        on_expire: RoomCallback,
        interval: float = 1.0,
    ) -> None:
        self._scheduler = scheduler
        self._room = room
        self._on_tick = on_tick
        self._on_expire = on_expire
        self._interval = interval
        self._handle: Optional[Handle] = None

    @property
    def active(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        self.stop()
        self._schedule()

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _schedule(self) -> None:
        self._handle = self._scheduler.call_later(self._interval, self._tick)

    def _tick(self) -> None:
        self._handle = None
        room = self._room
        if room.time_left > 0:
            room.time_left -= 1
            self._schedule()
            self._on_tick(room)
            return
        self._on_expire(room)
