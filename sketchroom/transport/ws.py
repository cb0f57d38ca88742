from __future__ import annotations

import asyncio
import json
import logging
import uuid

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from sketchroom.domain.lifecycle.handlers import handle_disconnect
from sketchroom.transport.dispatcher import dispatch_message
from sketchroom.transport.protocols import OutConnected

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws")
async def ws_endpoint(websocket: WebSocket):
    await websocket.accept()

    pid = uuid.uuid4().hex[:10]
    wsman = websocket.app.state.wsman
    conn = wsman.add(pid, websocket)
    writer = asyncio.create_task(wsman.pump(conn))
    wsman.send(pid, OutConnected(playerId=pid))
    logger.info("connection %s opened", pid)

    try:
        while True:
            frame = await websocket.receive()
            if frame["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(frame.get("code", 1000))

            # binary frames are not part of the protocol
            raw = None
            text = frame.get("text")
            if text is not None:
                try:
                    raw = json.loads(text)
                except ValueError:
                    pass

            for e in await dispatch_message(app=websocket.app, pid=pid, raw=raw):
                wsman.send(pid, e)

    except WebSocketDisconnect:
        logger.info("connection %s closed", pid)

    finally:
        await handle_disconnect(app=websocket.app, pid=pid)
        wsman.remove(pid)
        writer.cancel()
