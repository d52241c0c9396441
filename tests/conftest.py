"""Shared fixtures for the tower simulation tests."""

import pytest

from atc_tower.aircraft import Aircraft, AircraftStatus, WeightClass
from atc_tower.airport import Point
from atc_tower.clock import ManualClock
from atc_tower.simulator import SimulationEngine

START = 1000.0


class ScriptedRandom:
    """
    Deterministic stand-in for ``random.Random``.

    ``random()`` returns scripted values in order, then ``default``.
    ``sample`` and ``choice`` always take from the front.
    """

    def __init__(self, values=None, default=0.99):
        self.values = list(values or [])
        self.default = default

    def random(self):
        if self.values:
            return self.values.pop(0)
        return self.default

    def sample(self, population, k):
        return list(population[:k])

    def choice(self, seq):
        return seq[0]


@pytest.fixture
def clock():
    return ManualClock(START)


@pytest.fixture
def rng():
    return ScriptedRandom()


@pytest.fixture
def engine(clock, rng):
    """Engine with an empty fleet on a manual clock."""
    return SimulationEngine(clock=clock, rng=rng)


@pytest.fixture
def make_aircraft():
    def _make(callsign="TST100", x=0.0, y=0.0, weight_class=WeightClass.REGULAR,
              status=AircraftStatus.AIRBORNE, is_in_air=True, **attrs):
        aircraft = Aircraft(
            callsign=callsign,
            weight_class=weight_class,
            model="B777" if weight_class is WeightClass.HEAVY else "A320",
            position=Point(x, y),
            is_in_air=is_in_air,
            status=status
        )
        for name, value in attrs.items():
            setattr(aircraft, name, value)
        return aircraft
    return _make
