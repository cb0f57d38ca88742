from sketchroom.domain.game.scoring import submit_message
from sketchroom.domain.game.turns import schedule_advance
from sketchroom.domain.lifecycle.membership import create_room, join_room, leave_room


def _room_ab(rt):
    room = create_room(rt, "Alice")
    join_room(rt, room.code, "a", "Alice")
    join_room(rt, room.code, "b", "Bob")
    return room


def _drawers(room):
    return [p.name for p in room.players.values() if p.is_drawing]


def test_correct_guess_scores_and_advances(rt, scheduler, outbox):
    room = _room_ab(rt)
    word = room.current_word
    alice, bob = room.players["a"], room.players["b"]
    assert _drawers(room) == ["Alice"]

    submit_message(rt, room, bob, word.lower(), "guess")

    assert bob.score == 10
    assert alice.score == 5
    assert room.round_solved
    assert not rt.timers[room.code].active

    guess = outbox.events_for("a", "correct-guess")[0]
    assert guess.guessingPlayer == "Bob"
    assert guess.drawingPlayer == "Alice"
    assert guess.word == word
    assert {p["name"]: p["score"] for p in guess.players} == {"Alice": 5, "Bob": 10}
    assert outbox.events_for("b", "correct-guess")

    # nothing flips until the post-guess delay has passed
    scheduler.advance(2)
    assert room.round_number == 1

    scheduler.advance(1)
    assert room.drawer_index == 1
    assert _drawers(room) == ["Bob"]
    assert room.round_number == 2
    assert room.time_left == 60
    assert not room.round_solved

    names = outbox.names_for("a")
    assert names.index("clear-canvas") < names.index("new-round")
    new_round = outbox.events_for("a", "new-round")[0]
    assert new_round.roundNumber == 2
    assert new_round.timeLeft == 60
    assert new_round.currentWord == room.current_word
    assert outbox.count("new-round") == 2


def test_guess_is_case_insensitive(rt):
    room = _room_ab(rt)
    bob = room.players["b"]

    submit_message(rt, room, bob, room.current_word.swapcase(), "guess")
    assert bob.score == 10


def test_wrong_guess_is_just_a_message(rt, outbox):
    room = _room_ab(rt)
    bob = room.players["b"]

    entry = submit_message(rt, room, bob, "definitely not it", "guess")

    assert entry is not None
    assert room.messages == [entry]
    assert bob.score == 0
    msg = outbox.events_for("b", "new-message")[0]
    assert (msg.player, msg.message, msg.type) == ("Bob", "definitely not it", "guess")
    assert outbox.events_for("a", "new-message")
    assert outbox.count("correct-guess") == 0


def test_chat_with_the_word_does_not_score(rt):
    room = _room_ab(rt)
    bob = room.players["b"]

    submit_message(rt, room, bob, room.current_word, "chat")
    assert bob.score == 0
    assert not room.round_solved


def test_drawer_cannot_guess_but_can_chat(rt, outbox):
    room = _room_ab(rt)
    alice = room.players["a"]

    assert submit_message(rt, room, alice, room.current_word, "guess") is None
    assert room.messages == []
    assert outbox.count("new-message") == 0
    assert alice.score == 0

    assert submit_message(rt, room, alice, "hint: it's round", "chat") is not None
    assert len(room.messages) == 1
    assert outbox.count("new-message") == 2


def test_guess_while_waiting_does_not_score(rt):
    room = create_room(rt, "Alice")
    join_room(rt, room.code, "a", "Alice")
    alice = room.players["a"]

    submit_message(rt, room, alice, room.current_word, "guess")
    assert alice.score == 0
    assert len(room.messages) == 1


def test_only_first_correct_guess_counts(rt, scheduler, outbox):
    room = _room_ab(rt)
    join_room(rt, room.code, "c", "Cara")
    word = room.current_word

    submit_message(rt, room, room.players["b"], word, "guess")
    submit_message(rt, room, room.players["c"], word, "guess")

    assert room.players["b"].score == 10
    assert room.players["c"].score == 0
    assert room.players["a"].score == 5
    assert outbox.count("correct-guess") == 3

    scheduler.advance(10)
    assert room.round_number == 2
    assert outbox.count("new-round") == 3


def test_expiry_advances_exactly_once(rt, scheduler, outbox):
    room = _room_ab(rt)

    scheduler.advance(60)
    assert room.time_left == 0
    assert len(outbox.events_for("a", "timer-update")) == 60
    assert room.round_number == 1

    # the tick that finds 0 only arms the grace delay
    scheduler.advance(1)
    assert not rt.timers[room.code].active
    assert room.round_number == 1
    assert len(outbox.events_for("a", "timer-update")) == 60

    scheduler.advance(1)
    assert room.round_number == 2
    assert room.time_left == 60
    assert _drawers(room) == ["Bob"]
    assert outbox.count("new-round") == 2

    scheduler.advance(59)
    assert room.round_number == 2
    assert room.time_left == 1


def test_correct_guess_racing_expiry_advances_once(rt, scheduler, outbox):
    room = _room_ab(rt)
    scheduler.advance(61)
    assert room.time_left == 0

    # guess lands in the grace window, after the 0 tick
    submit_message(rt, room, room.players["b"], room.current_word, "guess")
    assert room.players["b"].score == 10

    scheduler.advance(1)
    assert room.round_number == 1

    scheduler.advance(2)
    assert room.round_number == 2

    scheduler.advance(5)
    assert room.round_number == 2
    assert outbox.count("new-round") == 2


def test_rescheduling_replaces_pending_advance(rt, scheduler):
    room = _room_ab(rt)

    schedule_advance(rt, room, 1)
    schedule_advance(rt, room, 2)
    scheduler.advance(5)

    assert room.round_number == 2


def test_stale_token_drops_advance(rt, scheduler):
    room = _room_ab(rt)

    schedule_advance(rt, room, 1)
    room.round_token += 1
    scheduler.advance(1)

    assert room.round_number == 1


def test_leave_during_post_guess_delay_cancels_advance(rt, scheduler, outbox):
    room = _room_ab(rt)
    submit_message(rt, room, room.players["b"], room.current_word, "guess")

    leave_room(rt, room, "b")
    scheduler.advance(10)

    assert room.game_state == "waiting"
    assert room.round_number == 1
    assert outbox.count("new-round") == 0
    # scores survive the drop back to waiting
    assert room.players["a"].score == 5
