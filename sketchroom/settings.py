from __future__ import annotations

from pydantic import BaseModel
import os


class GameRules(BaseModel):
    """Tunables the room state machine reads."""

    round_seconds: int = 60
    max_players: int = 8
    min_players: int = 2
    guess_points: int = 10
    drawer_points: int = 5
    # "time's up" pause between the 0 tick and the next round
    expiry_grace_sec: float = 1.0
    correct_guess_delay_sec: float = 3.0
    # rooms created over HTTP that nobody ever joins
    unclaimed_room_ttl_sec: float = 300.0


class Settings(BaseModel):
    APP_NAME: str = "sketchroom-server"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3001

    # Dev
    LOG_LEVEL: str = "INFO"

    # CORS origin policy (comma-separated, "*" allows all)
    CORS_ALLOWED_ORIGINS: str = "*"

    # Game
    ROUND_SECONDS: int = 60
    MAX_PLAYERS: int = 8
    MIN_PLAYERS: int = 2
    GUESS_POINTS: int = 10
    DRAWER_POINTS: int = 5
    EXPIRY_GRACE_SEC: float = 1.0
    CORRECT_GUESS_DELAY_SEC: float = 3.0
    UNCLAIMED_ROOM_TTL_SEC: float = 300.0

    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ALLOWED_ORIGINS.split(",") if o.strip()]

    def rules(self) -> GameRules:
        return GameRules(
            round_seconds=self.ROUND_SECONDS,
            max_players=self.MAX_PLAYERS,
            min_players=self.MIN_PLAYERS,
            guess_points=self.GUESS_POINTS,
            drawer_points=self.DRAWER_POINTS,
            expiry_grace_sec=self.EXPIRY_GRACE_SEC,
            correct_guess_delay_sec=self.CORRECT_GUESS_DELAY_SEC,
            unclaimed_room_ttl_sec=self.UNCLAIMED_ROOM_TTL_SEC,
        )


def get_settings() -> Settings:
    return Settings(
        APP_NAME=os.getenv("APP_NAME", "sketchroom-server"),
        HOST=os.getenv("HOST", "0.0.0.0"),
        PORT=int(os.getenv("PORT", "3001")),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
        CORS_ALLOWED_ORIGINS=os.getenv("CORS_ALLOWED_ORIGINS", "*"),
        ROUND_SECONDS=int(os.getenv("ROUND_SECONDS", "60")),
        MAX_PLAYERS=int(os.getenv("MAX_PLAYERS", "8")),
        MIN_PLAYERS=int(os.getenv("MIN_PLAYERS", "2")),
        GUESS_POINTS=int(os.getenv("GUESS_POINTS", "10")),
        DRAWER_POINTS=int(os.getenv("DRAWER_POINTS", "5")),
        EXPIRY_GRACE_SEC=float(os.getenv("EXPIRY_GRACE_SEC", "1")),
        CORRECT_GUESS_DELAY_SEC=float(os.getenv("CORRECT_GUESS_DELAY_SEC", "3")),
        UNCLAIMED_ROOM_TTL_SEC=float(os.getenv("UNCLAIMED_ROOM_TTL_SEC", "300")),
    )
