# sketchroom/transport/protocols.py
from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


# =========================
# Shared enums / literals
# =========================

GameState = Literal["waiting", "playing"]
MessageKind = Literal["chat", "guess"]
Tool = Literal["brush", "eraser"]


# =========================
# Incoming (Client -> Server)
#
# Wire frame: {"event": "<name>", "data": {...}}
# parse_incoming() folds "event" into the payload and validates the
# discriminated union below.
# =========================

class InBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    event: str
    roomCode: str = Field(min_length=1, max_length=32)


class InJoinRoom(InBase):
    event: Literal["join-room"] = "join-room"
    playerName: str = Field(min_length=1, max_length=24)


class InDrawing(InBase):
    # extra keys are relayed untouched
    model_config = ConfigDict(str_strip_whitespace=True, extra="allow")

    event: Literal["drawing"] = "drawing"
    x: float
    y: float
    lastX: float
    lastY: float
    color: str = Field(max_length=32)
    size: float = Field(ge=0)
    tool: Tool = "brush"


class InSendMessage(InBase):
    event: Literal["send-message"] = "send-message"
    message: str = Field(min_length=1, max_length=200)
    type: MessageKind = "chat"


class InLeaveRoom(InBase):
    event: Literal["leave-room"] = "leave-room"


# Every inbound event kind; the dispatcher checks it has a handler for each.
INCOMING_TYPES = (InJoinRoom, InDrawing, InSendMessage, InLeaveRoom)

IncomingMessage = Annotated[
    Union[InJoinRoom, InDrawing, InSendMessage, InLeaveRoom],
    Field(discriminator="event"),
]

_incoming_adapter: TypeAdapter = TypeAdapter(IncomingMessage)


def parse_incoming(frame: Any) -> IncomingMessage:
    """
    Convert a raw frame -> validated message model.
    Raises ValueError (pydantic ValidationError included) if invalid.
    """
    if not isinstance(frame, dict):
        raise ValueError("Frame must be a JSON object")

    event = frame.get("event")
    if not isinstance(event, str):
        raise ValueError("Missing/invalid event")

    data = frame.get("data")
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("Event data must be a JSON object")

    return _incoming_adapter.validate_python({**data, "event": event})


# =========================
# Outgoing (Server -> Client)
# =========================

class OutBase(BaseModel):
    event: str

    def data(self) -> Dict[str, Any]:
        return self.model_dump(exclude={"event"}, exclude_none=True)


class OutConnected(OutBase):
    event: Literal["connected"] = "connected"
    playerId: str


class OutError(OutBase):
    event: Literal["error"] = "error"
    code: str
    message: str


class OutJoinSuccess(OutBase):
    event: Literal["join-success"] = "join-success"
    roomCode: str
    playerId: str
    players: List[Dict[str, Any]]
    gameState: GameState
    timeLeft: int
    currentWord: str
    roundNumber: int


class OutJoinError(OutBase):
    event: Literal["join-error"] = "join-error"
    message: str


class OutPlayerJoined(OutBase):
    event: Literal["player-joined"] = "player-joined"
    player: Dict[str, Any]
    players: List[Dict[str, Any]]
    gameState: GameState
    timeLeft: int


class OutPlayerLeft(OutBase):
    event: Literal["player-left"] = "player-left"
    playerId: str
    playerName: str
    players: List[Dict[str, Any]]
    gameState: GameState
    timeLeft: int


class OutDrawing(OutBase):
    event: Literal["drawing"] = "drawing"
    stroke: Dict[str, Any]

    def data(self) -> Dict[str, Any]:
        return dict(self.stroke)


class OutClearCanvas(OutBase):
    event: Literal["clear-canvas"] = "clear-canvas"


class OutNewMessage(OutBase):
    event: Literal["new-message"] = "new-message"
    id: str
    player: str
    message: str
    type: MessageKind


class OutCorrectGuess(OutBase):
    event: Literal["correct-guess"] = "correct-guess"
    guessingPlayer: str
    drawingPlayer: Optional[str] = None
    word: str
    players: List[Dict[str, Any]]


class OutNewRound(OutBase):
    event: Literal["new-round"] = "new-round"
    currentWord: str
    players: List[Dict[str, Any]]
    roundNumber: int
    timeLeft: int


class OutTimerUpdate(OutBase):
    event: Literal["timer-update"] = "timer-update"
    timeLeft: int


def to_wire(event: OutBase) -> Dict[str, Any]:
    return {"event": event.event, "data": event.data()}
