"""
Simulation configuration.

Groups the timing, speed and probability constants of the engine in a
single dataclass so each engine can be tuned independently.
"""

import logging
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict

logger = logging.getLogger(__name__)


@dataclass
class SimulationConfig:
    """Tunable constants for the simulation engine.

    Distances are abstract plane units, speeds are units per tick and
    durations are seconds.
    """

    # Motion
    arrival_threshold: float = 5.0
    base_speed: float = 2.0
    landing_speed_factor: float = 0.4
    taxi_speed_factor: float = 0.5
    final_approach_distance: float = 200.0

    # Runway reservations
    regular_reservation: float = 60.0
    heavy_reservation: float = 180.0

    # Taxi-in timer started at a successful landing
    taxi_dwell: float = 5.0

    # Emergencies
    initial_emergency_delay: float = 20.0
    emergency_check_interval: float = 180.0
    max_active_emergencies: int = 2
    double_emergency_probability: float = 0.4

    # Windshear / go-around
    windshear_probability: float = 0.15
    max_go_arounds: int = 2
    go_around_offset: float = 100.0

    # Tick driver
    tick_rate: float = 60.0  # Hz
    event_log_size: int = 20

    def __post_init__(self):
        positive = (
            'arrival_threshold', 'base_speed', 'final_approach_distance',
            'regular_reservation', 'heavy_reservation', 'emergency_check_interval',
            'tick_rate', 'event_log_size',
        )
        for name in positive:
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)!r}")

        probabilities = ('double_emergency_probability', 'windshear_probability')
        for name in probabilities:
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value!r}")

        if self.max_active_emergencies < 0 or self.max_go_arounds < 0:
            raise ValueError("emergency and go-around limits cannot be negative")

    @property
    def time_step(self) -> float:
        """Seconds per tick."""
        return 1.0 / self.tick_rate

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SimulationConfig':
        """
        Build a config from a plain mapping, e.g. a parsed JSON document.

        Unknown keys are ignored with a warning.
        """
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            if key in known:
                values[key] = value
            else:
                logger.warning("Ignoring unknown config key %r", key)
        return cls(**values)

    def to_dict(self) -> dict:
        return asdict(self)
