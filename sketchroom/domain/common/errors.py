"""
Game errors.

Raised by the domain, caught at the boundary of the request that caused them and
reported to that requester only.
"""
from __future__ import annotations


class GameError(Exception):
    """Base class for every error a single request can fail with."""

    code = "GAME_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class RoomNotFound(GameError):
    code = "ROOM_NOT_FOUND"

    def __init__(self, room_code: str):
        self.room_code = room_code
        super().__init__("Room not found")


class RoomFull(GameError):
    code = "ROOM_FULL"

    def __init__(self, room_code: str):
        self.room_code = room_code
        super().__init__("Room is full")


class NameTaken(GameError):
    code = "NAME_TAKEN"

    def __init__(self, name: str):
        self.name = name
        super().__init__("Player name already taken")


class MalformedRequest(GameError):
    code = "MALFORMED_REQUEST"
