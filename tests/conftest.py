import random

import pytest

from mathsnake.game import GameState
from mathsnake.grid import Grid


class ScriptedRandom:
    """Feeds queued values first, then falls back to a seeded generator."""

    def __init__(self, floats=(), picks=(), seed=0):
        self.floats = list(floats)
        self.picks = list(picks)
        self.fallback = random.Random(seed)
        self.randrange_calls = 0

    def random(self):
        if self.floats:
            return self.floats.pop(0)
        return self.fallback.random()

    def choice(self, seq):
        if self.picks:
            pick = self.picks.pop(0)
            assert pick in seq
            return pick
        return self.fallback.choice(seq)

    def randint(self, a, b):
        return self.fallback.randint(a, b)

    def randrange(self, n):
        self.randrange_calls += 1
        return self.fallback.randrange(n)


class RecordingAudio:
    def __init__(self):
        self.cues = []

    def play(self, cue):
        self.cues.append(cue)


@pytest.fixture
def audio():
    return RecordingAudio()


@pytest.fixture
def game(audio):
    g = GameState(grid=Grid(10, 10, 20), audio=audio, rng=random.Random(7))
    g.start_game("1")
    return g
