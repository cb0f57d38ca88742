# sketchroom/domain/game/turns.py
from __future__ import annotations

import logging
from typing import Optional

from sketchroom.domain.common.events import new_round, timer_update
from sketchroom.domain.common.words import random_word
from sketchroom.domain.game.runtime import GameRuntime
from sketchroom.domain.game.timer import RoundTimer
from sketchroom.store.models import PlayerStore, RoomStore
from sketchroom.transport.protocols import OutClearCanvas

logger = logging.getLogger(__name__)


# -------------------------
# Drawer assignment
# -------------------------

def assign_drawer(room: RoomStore) -> Optional[PlayerStore]:
    """
    Clear the pen from everyone, then hand it to the player at
    `drawer_index` (join order). Nobody draws while the room is waiting.
    """
    players = room.player_list()
    for p in players:
        p.is_drawing = False

    if room.game_state != "playing" or not players:
        return None

    drawer = players[room.drawer_index % len(players)]
    drawer.is_drawing = True
    return drawer


def current_drawer(room: RoomStore) -> Optional[PlayerStore]:
    for p in room.players.values():
        if p.is_drawing:
            return p
    return None


# -------------------------
# Round timer slot
# -------------------------

def start_timer(rt: GameRuntime, room: RoomStore) -> RoundTimer:
    timer = rt.timers.get(room.code)
    if timer is None:
        timer = RoundTimer(
            rt.scheduler,
            room,
            on_tick=lambda r: rt.broadcast(r, timer_update(r)),
            on_expire=lambda r: _on_time_up(rt, r),
        )
        rt.timers[room.code] = timer
    timer.start()
    return timer


def stop_timer(rt: GameRuntime, room: RoomStore) -> None:
    timer = rt.timers.get(room.code)
    if timer is not None:
        timer.stop()


def _on_time_up(rt: GameRuntime, room: RoomStore) -> None:
    logger.info("time's up in room %s (round %s)", room.code, room.round_number)
    schedule_advance(rt, room, rt.rules.expiry_grace_sec)


# -------------------------
# Round-advance slot
# -------------------------

def cancel_advance(rt: GameRuntime, room: RoomStore) -> None:
    handle = rt.advances.pop(room.code, None)
    if handle is not None:
        handle.cancel()


def schedule_advance(rt: GameRuntime, room: RoomStore, delay: float) -> None:
    """
    Arrange a single advance_round() after `delay` seconds.

    Replaces any advance already pending for the room. The call is dropped at
    fire time if the round moved on (token mismatch), the room dropped back to
    waiting, or the room is gone.
    """
    cancel_advance(rt, room)
    token = room.round_token

    def _fire() -> None:
        if rt.advances.get(room.code) is handle:
            rt.advances.pop(room.code, None)
        if not rt.is_live(room):
            return
        if room.round_token != token or room.game_state != "playing":
            logger.debug("stale round advance dropped for room %s", room.code)
            return
        advance_round(rt, room)

    handle = rt.scheduler.call_later(delay, _fire)
    rt.advances[room.code] = handle


# -------------------------
# State transitions
# -------------------------

def start_playing(rt: GameRuntime, room: RoomStore) -> None:
    """waiting -> playing: fresh clock, timer on."""
    room.game_state = "playing"
    room.round_solved = False
    room.time_left = rt.rules.round_seconds
    start_timer(rt, room)
    logger.info("room %s is playing with %s players", room.code, len(room.players))


def stop_playing(rt: GameRuntime, room: RoomStore) -> None:
    """playing -> waiting: timer off, pending advance dropped, clock reset."""
    room.game_state = "waiting"
    stop_timer(rt, room)
    cancel_advance(rt, room)
    room.round_token += 1
    room.round_solved = False
    room.time_left = rt.rules.round_seconds
    assign_drawer(room)
    logger.info("room %s is waiting (%s player(s) left)", room.code, len(room.players))


def advance_round(rt: GameRuntime, room: RoomStore) -> None:
    count = len(room.players)
    if count == 0:
        return

    room.drawer_index = (room.drawer_index + 1) % count
    room.round_number += 1
    room.round_token += 1
    room.round_solved = False
    room.current_word = random_word(rt.rng)
    room.time_left = rt.rules.round_seconds

    drawer = assign_drawer(room)
    start_timer(rt, room)

    rt.broadcast(room, OutClearCanvas())
    rt.broadcast(room, new_round(room))
    logger.info(
        "room %s round %s, drawer=%s",
        room.code,
        room.round_number,
        drawer.name if drawer else None,
    )
