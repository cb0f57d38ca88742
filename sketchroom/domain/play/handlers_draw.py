from __future__ import annotations

import logging
from typing import List, Optional

from sketchroom.domain.common.validation import is_clear_signal
from sketchroom.transport.protocols import InDrawing, OutBase, OutClearCanvas, OutDrawing

logger = logging.getLogger(__name__)

Outgoing = List[OutBase]


async def handle_drawing(*, app, pid: Optional[str], msg: InDrawing) -> Outgoing:
    """Relay a stroke to everyone in the room but its author."""
    if not pid:
        return []

    rt = app.state.runtime
    room, player = rt.resolve(msg.roomCode, pid)
    if room is None or player is None:
        logger.debug("drawing for %s dropped: not a member", msg.roomCode)
        return []

    if is_clear_signal(msg.color, msg.size):
        rt.broadcast(room, OutClearCanvas(), exclude_pid=pid)
    else:
        rt.broadcast(room, OutDrawing(stroke=msg.model_dump(exclude={"event"})), exclude_pid=pid)
    return []
