import random

import pytest

from sketchroom.domain.game.runtime import GameRuntime
from sketchroom.settings import GameRules
from sketchroom.store.registry import RoomRegistry


class FakeHandle:
    def __init__(self, when, seq, callback):
        self.when = when
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """Manual clock: nothing fires until advance() is called."""

    def __init__(self):
        self.now = 0.0
        self._seq = 0
        self._handles = []

    def call_later(self, delay, callback):
        self._seq += 1
        h = FakeHandle(self.now + delay, self._seq, callback)
        self._handles.append(h)
        return h

    def pending(self):
        return [h for h in self._handles if not h.cancelled]

    def advance(self, seconds):
        target = self.now + seconds
        while True:
            due = [h for h in self.pending() if h.when <= target]
            if not due:
                break
            h = min(due, key=lambda x: (x.when, x.seq))
            self._handles.remove(h)
            self.now = h.when
            h.callback()
        self.now = target


class RecordingOutbox:
    def __init__(self):
        self.sent = []

    def send(self, pid, event):
        self.sent.append((pid, event))

    def events_for(self, pid, name=None):
        return [e for p, e in self.sent if p == pid and (name is None or e.event == name)]

    def names_for(self, pid):
        return [e.event for p, e in self.sent if p == pid]

    def count(self, name):
        return sum(1 for _, e in self.sent if e.event == name)

    def clear(self):
        self.sent.clear()


class FakeApp:
    def __init__(self, runtime):
        self.state = type("State", (), {"runtime": runtime})()


@pytest.fixture()
def scheduler():
    return FakeScheduler()


@pytest.fixture()
def outbox():
    return RecordingOutbox()


@pytest.fixture()
def rt(scheduler, outbox):
    return GameRuntime(
        registry=RoomRegistry(),
        scheduler=scheduler,
        outbox=outbox,
        rules=GameRules(),
        rng=random.Random(7),
    )


@pytest.fixture()
def app(rt):
    return FakeApp(rt)
