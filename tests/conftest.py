import itertools

import pytest

from plantsim.scheduler import EventLoop


class ScriptedRng:
    """
    Stand-in for numpy.random.Generator with scripted draws.

    draws: uniform samples returned by random(), the last one repeats
    picks: values returned by integers(n) (taken modulo n), the last one repeats
    """

    def __init__(self, draws=(1.0,), picks=(0,)):
        self._draws = itertools.chain(draws, itertools.repeat(draws[-1]))
        self._picks = itertools.chain(picks, itertools.repeat(picks[-1]))

    def random(self):
        return next(self._draws)

    def integers(self, n):
        return next(self._picks) % n


@pytest.fixture
def loop():
    return EventLoop()


@pytest.fixture
def never_damage():
    return ScriptedRng(draws=(1.0,))


@pytest.fixture
def always_damage():
    return ScriptedRng(draws=(0.0,))


@pytest.fixture
def scripted_rng():
    return ScriptedRng
