from __future__ import annotations

import logging
from typing import List, Optional

from sketchroom.domain.game.scoring import submit_message
from sketchroom.transport.protocols import InSendMessage, OutBase

logger = logging.getLogger(__name__)

Outgoing = List[OutBase]


async def handle_send_message(*, app, pid: Optional[str], msg: InSendMessage) -> Outgoing:
    if not pid:
        return []

    rt = app.state.runtime
    room, player = rt.resolve(msg.roomCode, pid)
    if room is None or player is None:
        logger.debug("send-message for %s dropped: not a member", msg.roomCode)
        return []

    submit_message(rt, room, player, msg.message, msg.type)
    return []
