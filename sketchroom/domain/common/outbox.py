from __future__ import annotations

from typing import Protocol

from sketchroom.transport.protocols import OutBase


class Outbox(Protocol):
    """
    Best-effort, non-blocking delivery of one event to one connection.
    Sending to an unknown connection is a no-op.
    """

    def send(self, pid: str, event: OutBase) -> None:
        ...
