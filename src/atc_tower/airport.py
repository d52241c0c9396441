"""
Airport layout module.

Static geography of the simulated airport: runways with their approach
anchors and opposite ends, and the taxi waiting points. All lookups are
non-raising; an unknown code yields ``None``.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Point:
    """2D position on the simulation plane."""
    x: float
    y: float

    def distance_to(self, other: 'Point') -> float:
        """Calculate straight-line distance to another point."""
        return math.hypot(other.x - self.x, other.y - self.y)

    def offset(self, dx: float, dy: float) -> 'Point':
        return Point(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Runway:
    """One runway end."""
    code: str
    position: Point
    approach: Point  # anchor short of the threshold
    opposite: str    # code of the other end, used for taxi-in routing


@dataclass(frozen=True)
class WaitingPoint:
    """Taxi holding position. No reservation semantics."""
    code: str
    position: Point


# Map extent used for spawning airborne traffic on the edges
MAP_WIDTH = 2000.0
MAP_HEIGHT = 1500.0

# Off-map point diverting aircraft fly to
DIVERSION_POINT = Point(-400.0, -400.0)

APPROACH_OFFSET = 100.0

_RUNWAY_POSITIONS = {
    '06': Point(1034, 629),
    '24': Point(1891, 629),
    '07': Point(1946, 1144),
    '25': Point(1035, 1144),
}

# Runway 24 is approached from the east, the others from the west
_APPROACH_SIDE = {
    '06': -1,
    '24': 1,
    '07': -1,
    '25': -1,
}

OPPOSITE_RUNWAYS = {
    '06': '24',
    '24': '06',
    '07': '25',
    '25': '07',
}

_WAITING_POINT_POSITIONS = {
    'C1': Point(1031, 670),
    'C2': Point(1082, 670),
    'C7': Point(1847, 670),
    'C8': Point(1899, 670),
    'A1': Point(1030, 1111),
    'A2': Point(1082, 1111),
    'A7': Point(1900, 1111),
    'A8': Point(1950, 1111),
}


class AirportLayout:
    """
    Read-only registry of runways and waiting points.

    Provides coordinate lookups by code; unknown codes return ``None`` so
    callers can treat them as "no effect".
    """

    def __init__(
        self,
        runways: Optional[Dict[str, Runway]] = None,
        waiting_points: Optional[Dict[str, WaitingPoint]] = None
    ):
        self._runways = dict(runways) if runways is not None else _default_runways()
        self._waiting_points = (
            dict(waiting_points) if waiting_points is not None else _default_waiting_points()
        )

    @property
    def runway_codes(self) -> List[str]:
        return list(self._runways)

    @property
    def waiting_point_codes(self) -> List[str]:
        return list(self._waiting_points)

    def get_runway(self, code: Optional[str]) -> Optional[Runway]:
        return self._runways.get(code) if code is not None else None

    def get_waiting_point(self, code: Optional[str]) -> Optional[WaitingPoint]:
        return self._waiting_points.get(code) if code is not None else None

    def runway_position(self, code: Optional[str]) -> Optional[Point]:
        """Runway threshold coordinate, or None for an unknown code."""
        runway = self.get_runway(code)
        return runway.position if runway else None

    def approach_point(self, code: Optional[str]) -> Optional[Point]:
        runway = self.get_runway(code)
        return runway.approach if runway else None

    def opposite_runway(self, code: Optional[str]) -> Optional[str]:
        runway = self.get_runway(code)
        return runway.opposite if runway else None

    def waiting_point_position(self, code: Optional[str]) -> Optional[Point]:
        point = self.get_waiting_point(code)
        return point.position if point else None

    def is_runway(self, code: str) -> bool:
        return code in self._runways

    def is_waiting_point(self, code: str) -> bool:
        return code in self._waiting_points

    def get_state(self) -> dict:
        """Layout tables as plain dictionaries for renderers."""
        return {
            'runways': {
                code: {
                    'x': rw.position.x,
                    'y': rw.position.y,
                    'approach': {'x': rw.approach.x, 'y': rw.approach.y},
                    'opposite': rw.opposite,
                }
                for code, rw in self._runways.items()
            },
            'waiting_points': {
                code: {'x': wp.position.x, 'y': wp.position.y}
                for code, wp in self._waiting_points.items()
            },
        }


def _default_runways() -> Dict[str, Runway]:
    runways = {}
    for code, position in _RUNWAY_POSITIONS.items():
        runways[code] = Runway(
            code=code,
            position=position,
            approach=position.offset(_APPROACH_SIDE[code] * APPROACH_OFFSET, 0.0),
            opposite=OPPOSITE_RUNWAYS[code]
        )
    return runways


def _default_waiting_points() -> Dict[str, WaitingPoint]:
    return {code: WaitingPoint(code, pos) for code, pos in _WAITING_POINT_POSITIONS.items()}
