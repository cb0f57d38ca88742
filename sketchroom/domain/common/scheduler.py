# sketchroom/domain/common/scheduler.py
from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class Handle(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    """
    Source of delayed callbacks for timers and round advances.
    Cancelling a handle that already fired (or was already cancelled) is a no-op.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> Handle:
        ...


class LoopScheduler:
    """Scheduler backed by the running asyncio loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, _guarded, callback)


def _guarded(callback: Callable[[], None]) -> None:
    try:
        callback()
    except Exception:
        logger.exception("scheduled callback %r failed", callback)
