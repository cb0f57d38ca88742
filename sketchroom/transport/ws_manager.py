# sketchroom/transport/ws_manager.py
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from fastapi import WebSocket

from sketchroom.transport.protocols import OutBase, to_wire

logger = logging.getLogger(__name__)


@dataclass
class Conn:
    pid: str
    ws: WebSocket
    queue: "asyncio.Queue[Optional[Dict[str, Any]]]" = field(default_factory=asyncio.Queue)


class WSManager:
    """
    In-memory connection registry.
    - pid -> websocket + outbound queue
    Transport-only: no rooms, no domain rules.

    send() never blocks: frames are queued and written by pump(), so game
    state is never mutated across an await.
    """
    def __init__(self) -> None:
        self._conns: Dict[str, Conn] = {}

    def add(self, pid: str, ws: WebSocket) -> Conn:
        conn = Conn(pid=pid, ws=ws)
        self._conns[pid] = conn
        return conn

    def remove(self, pid: str) -> None:
        conn = self._conns.pop(pid, None)
        if conn is not None:
            conn.queue.put_nowait(None)

    def send(self, pid: str, event: OutBase) -> None:
        conn = self._conns.get(pid)
        if conn is None:
            return
        conn.queue.put_nowait(to_wire(event))

    async def pump(self, conn: Conn) -> None:
        """Write queued frames to the socket until removed or the socket dies."""
        while True:
            frame = await conn.queue.get()
            if frame is None:
                return
            try:
                await conn.ws.send_json(frame)
            except Exception as exc:
                # dead socket; ws.py cleans up on disconnect
                logger.debug("send to %s failed: %s", conn.pid, exc)
                return
