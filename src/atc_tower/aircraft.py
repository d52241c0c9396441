"""
Aircraft simulation module.

Per-aircraft operational state and the per-tick motion integrator that
steers an aircraft straight at its destination.
"""

import math
import logging
from enum import Enum
from typing import Optional

from .airport import Point
from .config import SimulationConfig

logger = logging.getLogger(__name__)


class AircraftStatus(Enum):
    """Aircraft operational status."""
    APPROACHING = "approaching"
    LANDING = "landing"
    GO_AROUND = "go-around"
    DIVERTING = "diverting"
    TAXIING = "taxing"
    READY_FOR_TAKEOFF = "ready-for-takeoff"
    TAKING_OFF = "taking-off"
    AIRBORNE = "airborne"
    WAITING = "waiting"
    ON_GROUND = "on-ground"


class WeightClass(Enum):
    """Wake turbulence category, drives runway reservation length."""
    REGULAR = "regular"
    HEAVY = "heavy"


class EmergencyType(Enum):
    """Faults the emergency generator can inject."""
    FIRE = "fire"
    ENGINE_OUT = "engine-out"
    BIRD_HIT = "bird-hit"
    HYDRAULIC_FAILURE = "hydraulic-failure"
    ELECTRICAL_FAILURE = "electrical-failure"

    @property
    def label(self) -> str:
        """Upper-case display form, e.g. ``ENGINE OUT``."""
        return self.value.replace('-', ' ').upper()


class Aircraft:
    """
    Simulates an individual aircraft on the abstract 2D plane.

    Attributes:
        callsign: Unique aircraft identifier (e.g., "AAL123")
        weight_class: Regular or heavy
        model: Aircraft model, descriptive only (e.g., "B737")
        x, y: Current position
        heading: Facing direction in radians
        destination: Point the aircraft is flying or taxiing to, if any
        status: Current operational status
        is_in_air: Whether the aircraft is airborne
    """

    MAX_GO_AROUNDS = 2

    def __init__(
        self,
        callsign: str,
        weight_class: WeightClass = WeightClass.REGULAR,
        model: str = "A320",
        position: Point = Point(0.0, 0.0),
        is_in_air: bool = True,
        status: Optional[AircraftStatus] = None,
        max_go_arounds: int = MAX_GO_AROUNDS
    ):
        self.callsign = callsign
        self.weight_class = weight_class
        self.model = model

        # Kinematic state
        self.x = float(position.x)
        self.y = float(position.y)
        self.heading = 0.0
        self.destination: Optional[Point] = None

        # Operational state
        self.is_in_air = is_in_air
        if status is None:
            status = AircraftStatus.APPROACHING if is_in_air else AircraftStatus.ON_GROUND
        self.status = status
        self.assigned_runway: Optional[str] = None
        self.assigned_waiting_point: Optional[str] = None
        self.taxi_deadline: Optional[float] = None

        # Emergency state
        self.emergency: Optional[EmergencyType] = None
        self.emergency_time: Optional[float] = None
        self.has_windshear = False
        self.go_around_attempts = 0
        self.max_go_arounds = max_go_arounds

        # Set by update() when the destination is reached, consumed by the
        # arrival handler within the same tick
        self.arrived = False

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    @property
    def is_heavy(self) -> bool:
        return self.weight_class is WeightClass.HEAVY

    def distance_to_destination(self) -> Optional[float]:
        if self.destination is None:
            return None
        return self.position.distance_to(self.destination)

    def set_destination(self, destination: Optional[Point]):
        """Point the aircraft at a new target, or stop it with ``None``."""
        self.destination = destination
        self.arrived = False

    def current_speed(self, config: SimulationConfig) -> float:
        """Speed in units per tick for the current status."""
        if self.status is AircraftStatus.LANDING:
            return config.base_speed * config.landing_speed_factor
        if not self.is_in_air and self.status in (
            AircraftStatus.TAXIING, AircraftStatus.READY_FOR_TAKEOFF
        ):
            return config.base_speed * config.taxi_speed_factor
        return config.base_speed

    def update(self, config: SimulationConfig):
        """
        Advance the aircraft one tick towards its destination.

        Heading is re-aimed at the destination every tick. Once the
        remaining distance drops below the arrival threshold the aircraft
        snaps onto the destination, which is then cleared and ``arrived``
        is raised for the arrival handler.

        Args:
            config: Engine configuration supplying speeds and thresholds
        """
        if self.destination is None:
            return

        if self._check_arrival(config):
            return

        dx = self.destination.x - self.x
        dy = self.destination.y - self.y
        distance = math.hypot(dx, dy)

        self.heading = math.atan2(dy, dx)

        # Final approach: fly straight along the x axis until aligned
        if (self.status is AircraftStatus.LANDING
                and distance <= config.final_approach_distance
                and abs(dx) >= config.arrival_threshold):
            self.heading = 0.0 if dx >= 0 else math.pi

        speed = self.current_speed(config)
        self.x += math.cos(self.heading) * speed
        self.y += math.sin(self.heading) * speed

        self._check_arrival(config)

    def _check_arrival(self, config: SimulationConfig) -> bool:
        """Snap onto the destination if within the arrival threshold."""
        if self.position.distance_to(self.destination) >= config.arrival_threshold:
            return False

        self.x = float(self.destination.x)
        self.y = float(self.destination.y)
        self.destination = None
        self.arrived = True
        logger.debug("%s reached destination at (%.1f, %.1f)", self.callsign, self.x, self.y)
        return True

    def assign_emergency(self, emergency: EmergencyType, timestamp: float):
        self.emergency = emergency
        self.emergency_time = timestamp

    def clear_emergency(self) -> Optional[EmergencyType]:
        """Clear any active emergency, returning what was cleared."""
        cleared = self.emergency
        self.emergency = None
        self.emergency_time = None
        return cleared

    @property
    def location(self) -> str:
        """Short location description for flight lists."""
        if self.assigned_runway:
            return f"Runway {self.assigned_runway}"
        if self.assigned_waiting_point:
            return f"Waiting Point {self.assigned_waiting_point}"
        if self.is_in_air:
            return "Approaching"
        return "On Ground"

    def get_state(self) -> dict:
        """Get current aircraft state as dictionary."""
        return {
            'callsign': self.callsign,
            'weight_class': self.weight_class.value,
            'model': self.model,
            'position': {'x': self.x, 'y': self.y},
            'heading': self.heading,
            'destination': (
                {'x': self.destination.x, 'y': self.destination.y}
                if self.destination else None
            ),
            'status': self.status.value,
            'is_in_air': self.is_in_air,
            'assigned_runway': self.assigned_runway,
            'assigned_waiting_point': self.assigned_waiting_point,
            'taxi_deadline': self.taxi_deadline,
            'location': self.location,
            'emergency': self.emergency.value if self.emergency else None,
            'emergency_time': self.emergency_time,
            'has_windshear': self.has_windshear,
            'go_around_attempts': self.go_around_attempts,
            'max_go_arounds': self.max_go_arounds,
        }

    def __repr__(self):
        return (f"Aircraft({self.callsign}, {self.weight_class.value}, {self.status.value}, "
                f"pos=({self.x:.1f}, {self.y:.1f}), hdg={math.degrees(self.heading):.0f}°)")
