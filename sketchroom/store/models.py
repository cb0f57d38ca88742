# sketchroom/store/models.py
from __future__ import annotations

from typing import Dict, List, Literal

from pydantic import BaseModel, Field


GameState = Literal["waiting", "playing"]
MessageKind = Literal["chat", "guess"]


class PlayerStore(BaseModel):
    pid: str                    # connection id
    name: str
    score: int = 0
    is_drawing: bool = False
    joined_at: int = 0


class ChatMessage(BaseModel):
    id: str
    player: str                 # display name of the author
    message: str
    type: MessageKind = "chat"
    ts: int = 0


class RoomStore(BaseModel):
    """
    Live state of one room. Held in process memory only.
    `players` keeps insertion order, which is the join order used for turns.
    """
    code: str
    host_name: str = ""
    created_at: int = 0

    players: Dict[str, PlayerStore] = Field(default_factory=dict)
    game_state: GameState = "waiting"
    current_word: str
    round_number: int = 1
    drawer_index: int = 0
    time_left: int = 60
    messages: List[ChatMessage] = Field(default_factory=list)

    # bumped on every round advance and every drop back to "waiting";
    # a scheduled advance only runs while its captured token is current
    round_token: int = 0
    round_solved: bool = False

    def player_list(self) -> List[PlayerStore]:
        return list(self.players.values())
