"""Shared fixtures: the first level's board and a scripted random source."""

import pytest

from mazechase.board import Board


class ScriptedRandom:
    """Stands in for random.Random where a test needs to force a choice.

    ``choice`` returns ``pick`` when it is one of the options, else the first
    option; ``randrange`` returns ``value`` capped to the range.
    """

    def __init__(self, value: int = 99, pick=None):
        self.value = value
        self.pick = pick

    def randrange(self, n: int) -> int:
        return min(self.value, n - 1)

    def choice(self, seq):
        if self.pick is None:
            return seq[0]
        return self.pick if self.pick in seq else seq[0]


@pytest.fixture
def board():
    return Board(0)


@pytest.fixture
def never_slow():
    return ScriptedRandom(value=99)


@pytest.fixture
def scripted():
    return ScriptedRandom
