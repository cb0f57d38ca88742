# sketchroom/domain/lifecycle/membership.py
from __future__ import annotations

import logging

from sketchroom.domain.common.errors import MalformedRequest, NameTaken, RoomFull, RoomNotFound
from sketchroom.domain.common.events import player_joined, player_left, timer_update
from sketchroom.domain.common.validation import is_name_taken
from sketchroom.domain.common.words import random_word
from sketchroom.domain.game.runtime import GameRuntime
from sketchroom.domain.game.turns import (
    assign_drawer,
    cancel_advance,
    start_playing,
    stop_playing,
    stop_timer,
)
from sketchroom.store.models import PlayerStore, RoomStore
from sketchroom.util.timeutil import now_ts

logger = logging.getLogger(__name__)


def create_room(rt: GameRuntime, host_name: str) -> RoomStore:
    """
    Register a new, empty room.
    If nobody joins within `unclaimed_room_ttl_sec` it is dropped again.
    """
    host_name = (host_name or "").strip()
    if not host_name:
        raise MalformedRequest("Player name is required")

    room = rt.registry.create(
        host_name,
        word=random_word(rt.rng),
        time_left=rt.rules.round_seconds,
    )
    logger.info("room %s created by %s", room.code, host_name)

    def _expire_if_unclaimed() -> None:
        rt.expiries.pop(room.code, None)
        if rt.is_live(room) and not room.players:
            logger.info("room %s expired unclaimed", room.code)
            close_room(rt, room)

    rt.expiries[room.code] = rt.scheduler.call_later(rt.rules.unclaimed_room_ttl_sec, _expire_if_unclaimed)
    return room


def cancel_expiry(rt: GameRuntime, room: RoomStore) -> None:
    handle = rt.expiries.pop(room.code, None)
    if handle is not None:
        handle.cancel()


def close_room(rt: GameRuntime, room: RoomStore) -> None:
    """Cancel everything scheduled for the room and drop it from the registry."""
    stop_timer(rt, room)
    cancel_advance(rt, room)
    cancel_expiry(rt, room)
    rt.timers.pop(room.code, None)
    room.round_token += 1
    if rt.is_live(room):
        rt.registry.delete(room.code)
    logger.info("room %s deleted", room.code)


def join_room(rt: GameRuntime, room_code: str, pid: str, name: str) -> RoomStore:
    """
    Add connection `pid` to the room as `name`.
    Raises RoomNotFound, RoomFull or NameTaken; on success the other members get
    player-joined and the caller sends the joiner its snapshot.
    """
    room = rt.registry.get(room_code)
    if room is None:
        raise RoomNotFound(room_code)

    name = (name or "").strip()
    if not name:
        raise MalformedRequest("Player name is required")

    existing = room.players.get(pid)
    if existing is not None and existing.name == name:
        # same connection, same name: just a snapshot refresh
        return room

    if existing is None and len(room.players) >= rt.rules.max_players:
        raise RoomFull(room_code)
    if is_name_taken(room, name, pid=pid):
        raise NameTaken(name)

    if existing is not None:
        existing.name = name
        player = existing
    else:
        player = PlayerStore(pid=pid, name=name, joined_at=now_ts())
        room.players[pid] = player
        cancel_expiry(rt, room)

    if room.game_state == "waiting" and len(room.players) >= rt.rules.min_players:
        start_playing(rt, room)

    assign_drawer(room)
    logger.info("%s joined room %s (%s players)", name, room.code, len(room.players))

    rt.broadcast(room, player_joined(room, player), exclude_pid=pid)
    return room


def leave_room(rt: GameRuntime, room: RoomStore, pid: str) -> None:
    """
    Remove connection `pid` from the room (explicit leave or disconnect).
    Deletes the room when it empties; drops back to waiting below min players.
    """
    player = room.players.get(pid)
    if player is None:
        return

    order = list(room.players)
    gone_idx = order.index(pid)
    was_drawing = player.is_drawing
    del room.players[pid]
    logger.info("%s left room %s", player.name, room.code)

    count = len(room.players)
    if count == 0:
        close_room(rt, room)
        return

    # keep the same drawer when someone ahead of them in the order leaves
    if gone_idx < room.drawer_index:
        room.drawer_index -= 1
    room.drawer_index %= count

    if room.game_state == "playing" and count < rt.rules.min_players:
        stop_playing(rt, room)
        rt.broadcast(room, timer_update(room))
    elif was_drawing:
        drawer = assign_drawer(room)
        logger.info("room %s: drawer left, %s takes the pen", room.code, drawer.name if drawer else None)

    rt.broadcast(room, player_left(room, player))
