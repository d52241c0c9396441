"""
Initial fleet construction.

Builds the startup fleet from a fixed roster of callsigns and weight
classes, drawing the model and initial placement at random.
"""

import random
from typing import List, Optional, Sequence, Tuple

from .aircraft import Aircraft, AircraftStatus, WeightClass
from .airport import AirportLayout, Point, MAP_WIDTH, MAP_HEIGHT

AIRCRAFT_MODELS = {
    WeightClass.REGULAR: ["A320", "A319", "B737", "B757"],
    WeightClass.HEAVY: ["A380", "B747", "B777", "A350"],
}

DEFAULT_ROSTER: List[Tuple[str, WeightClass]] = [
    ("AAL123", WeightClass.REGULAR),
    ("DAL456", WeightClass.HEAVY),
    ("UAL789", WeightClass.REGULAR),
    ("SWA234", WeightClass.HEAVY),
    ("ACA567", WeightClass.REGULAR),
    ("BAW890", WeightClass.REGULAR),
    ("LAX123", WeightClass.HEAVY),
    ("KLM456", WeightClass.REGULAR),
]


def edge_position(rng: random.Random, width: float = MAP_WIDTH, height: float = MAP_HEIGHT) -> Point:
    """Random point on one of the four map edges."""
    side = rng.randrange(4)
    if side == 0:  # top
        return Point(rng.random() * width, 0.0)
    if side == 1:  # right
        return Point(width, rng.random() * height)
    if side == 2:  # bottom
        return Point(rng.random() * width, height)
    return Point(0.0, rng.random() * height)


def create_fleet(
    layout: AirportLayout,
    rng: Optional[random.Random] = None,
    roster: Sequence[Tuple[str, WeightClass]] = DEFAULT_ROSTER,
    max_go_arounds: int = Aircraft.MAX_GO_AROUNDS
) -> List[Aircraft]:
    """
    Create the startup fleet.

    Each aircraft is airborne with even odds. Airborne aircraft appear on a
    map edge awaiting a landing clearance; grounded aircraft sit at a random
    waiting point ready for takeoff.

    Args:
        layout: Airport layout supplying waiting points
        rng: Random source (module-level random if None)
        roster: (callsign, weight class) pairs
        max_go_arounds: Go-around limit given to every aircraft

    Returns:
        List of new aircraft in roster order
    """
    rng = rng or random.Random()
    callsigns = [callsign for callsign, _ in roster]
    if len(set(callsigns)) != len(callsigns):
        raise ValueError("roster callsigns must be unique")

    fleet = []
    for callsign, weight_class in roster:
        model = rng.choice(AIRCRAFT_MODELS[weight_class])
        in_air = rng.random() > 0.5

        if in_air:
            aircraft = Aircraft(
                callsign=callsign,
                weight_class=weight_class,
                model=model,
                position=edge_position(rng),
                is_in_air=True,
                status=AircraftStatus.APPROACHING,
                max_go_arounds=max_go_arounds
            )
        else:
            point = rng.choice(layout.waiting_point_codes)
            aircraft = Aircraft(
                callsign=callsign,
                weight_class=weight_class,
                model=model,
                position=layout.waiting_point_position(point),
                is_in_air=False,
                status=AircraftStatus.READY_FOR_TAKEOFF,
                max_go_arounds=max_go_arounds
            )

        fleet.append(aircraft)

    return fleet
