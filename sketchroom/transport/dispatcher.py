# sketchroom/transport/dispatcher.py
from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from sketchroom.domain.common.errors import GameError, MalformedRequest
from sketchroom.domain.lifecycle.handlers import handle_join, handle_leave
from sketchroom.domain.play import handle_drawing, handle_send_message
from sketchroom.transport.protocols import (
    INCOMING_TYPES,
    InDrawing,
    InJoinRoom,
    InLeaveRoom,
    InSendMessage,
    OutBase,
    OutError,
    parse_incoming,
)

logger = logging.getLogger(__name__)

Handler = Callable[..., Awaitable[List[OutBase]]]

# One handler per inbound event kind.
_HANDLERS: Dict[type, Handler] = {
    InJoinRoom: handle_join,
    InDrawing: handle_drawing,
    InSendMessage: handle_send_message,
    InLeaveRoom: handle_leave,
}

_unhandled = set(INCOMING_TYPES) - set(_HANDLERS)
if _unhandled:
    raise RuntimeError(f"no handler for inbound events: {sorted(t.__name__ for t in _unhandled)}")


async def dispatch_message(
    *,
    app,
    pid: Optional[str],
    raw: Any,
) -> List[OutBase]:
    """
    Transport layer calls this.
    - Parses + validates the raw frame
    - Routes to the handler for its event
    - Returns the events meant for the sender only

    NOTE: This file contains NO game rules.
    """
    try:
        msg = parse_incoming(raw)
    except ValueError as e:
        err = MalformedRequest(str(e))
        logger.debug("malformed frame from %s: %s", pid, err.message)
        return [OutError(code=err.code, message=err.message)]

    handler = _HANDLERS[type(msg)]
    try:
        return await handler(app=app, pid=pid, msg=msg)
    except GameError as e:
        return [OutError(code=e.code, message=e.message)]
