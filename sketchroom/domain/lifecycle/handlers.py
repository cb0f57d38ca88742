# sketchroom/domain/lifecycle/handlers.py
from __future__ import annotations

import logging
from typing import List, Optional

from sketchroom.domain.common.errors import GameError
from sketchroom.domain.common.events import join_success
from sketchroom.domain.lifecycle.membership import join_room, leave_room
from sketchroom.transport.protocols import (
    InJoinRoom,
    InLeaveRoom,
    OutBase,
    OutError,
    OutJoinError,
)

logger = logging.getLogger(__name__)

# Events for the requesting connection only; room fan-out goes through the runtime.
# Handlers never await: each one runs as a single uninterrupted step on the loop.
Outgoing = List[OutBase]


async def handle_join(*, app, pid: Optional[str], msg: InJoinRoom) -> Outgoing:
    """
    Join:
    - room must exist, have a free seat and no other player with that name
    - snapshot to the joiner, player-joined to everyone else
    """
    if not pid:
        return [OutError(code="NO_PID", message="Missing pid for this connection")]

    rt = app.state.runtime
    try:
        room = join_room(rt, msg.roomCode, pid, msg.playerName)
    except GameError as exc:
        logger.info("join of %s to %s refused: %s", msg.playerName, msg.roomCode, exc.code)
        return [OutJoinError(message=exc.message)]

    return [join_success(room, pid)]


async def handle_leave(*, app, pid: Optional[str], msg: InLeaveRoom) -> Outgoing:
    if not pid:
        return []

    rt = app.state.runtime
    room, player = rt.resolve(msg.roomCode, pid)
    if room is None or player is None:
        logger.debug("leave-room for %s ignored: not a member", msg.roomCode)
        return []

    leave_room(rt, room, pid)
    return []


async def handle_disconnect(*, app, pid: Optional[str]) -> Outgoing:
    """
    Called by transport when the socket goes away.
    Same as leave-room for every room the connection is in.
    """
    if not pid:
        return []

    rt = app.state.runtime
    for room in rt.registry.rooms_with_player(pid):
        leave_room(rt, room, pid)
    return []
