# sketchroom/domain/game/scoring.py
from __future__ import annotations

import logging
import uuid
from typing import Optional

from sketchroom.domain.common.events import players_view
from sketchroom.domain.common.validation import is_drawer, matches_word
from sketchroom.domain.game.runtime import GameRuntime
from sketchroom.domain.game.turns import current_drawer, schedule_advance, stop_timer
from sketchroom.store.models import ChatMessage, MessageKind, PlayerStore, RoomStore
from sketchroom.transport.protocols import OutCorrectGuess, OutNewMessage
from sketchroom.util.timeutil import now_ms

logger = logging.getLogger(__name__)


def submit_message(
    rt: GameRuntime,
    room: RoomStore,
    player: PlayerStore,
    text: str,
    kind: MessageKind = "chat",
) -> Optional[ChatMessage]:
    """
    Record a chat line or guess and relay it to the whole room, sender included.
    The drawer's guesses are dropped; the drawer may still chat.
    Returns the recorded message, or None if it was dropped.
    """
    if kind == "guess" and is_drawer(player):
        logger.debug("drawer %s tried to guess in room %s", player.name, room.code)
        return None

    entry = ChatMessage(
        id=uuid.uuid4().hex[:12],
        player=player.name,
        message=text,
        type=kind,
        ts=now_ms(),
    )
    room.messages.append(entry)
    rt.broadcast(
        room,
        OutNewMessage(id=entry.id, player=entry.player, message=entry.message, type=entry.type),
    )

    if kind == "guess" and is_winning_guess(room, text):
        award_correct_guess(rt, room, player)

    return entry


def is_winning_guess(room: RoomStore, text: str) -> bool:
    if room.game_state != "playing" or room.round_solved:
        return False
    return matches_word(text, room.current_word)


def award_correct_guess(rt: GameRuntime, room: RoomStore, guesser: PlayerStore) -> None:
    rules = rt.rules
    drawer = current_drawer(room)

    guesser.score += rules.guess_points
    if drawer is not None:
        drawer.score += rules.drawer_points

    room.round_solved = True
    stop_timer(rt, room)

    logger.info("correct guess in room %s: %s guessed %r", room.code, guesser.name, room.current_word)

    rt.broadcast(
        room,
        OutCorrectGuess(
            guessingPlayer=guesser.name,
            drawingPlayer=drawer.name if drawer else None,
            word=room.current_word,
            players=players_view(room),
        ),
    )
    schedule_advance(rt, room, rules.correct_guess_delay_sec)
