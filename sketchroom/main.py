# sketchroom/main.py
from __future__ import annotations

import logging
import random
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sketchroom.domain.common.scheduler import LoopScheduler, Scheduler
from sketchroom.domain.game.runtime import GameRuntime
from sketchroom.settings import Settings, get_settings
from sketchroom.store.registry import RoomRegistry
from sketchroom.transport.rooms import router as rooms_router
from sketchroom.transport.ws import router as ws_router
from sketchroom.transport.ws_manager import WSManager

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    *,
    scheduler: Optional[Scheduler] = None,
    rng: Optional[random.Random] = None,
) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = FastAPI(title=settings.APP_NAME)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins(),
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    wsman = WSManager()
    app.state.settings = settings
    app.state.wsman = wsman
    app.state.runtime = GameRuntime(
        registry=RoomRegistry(),
        scheduler=scheduler or LoopScheduler(),
        outbox=wsman,
        rules=settings.rules(),
        rng=rng,
    )

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        app.state.runtime.shutdown()
        logger.info("runtime shut down")

    @app.get("/health")
    async def health():
        return {"ok": True, "rooms": len(app.state.runtime.registry)}

    app.include_router(ws_router)
    app.include_router(rooms_router)
    return app


app = create_app()


def run() -> None:
    settings = app.state.settings
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
