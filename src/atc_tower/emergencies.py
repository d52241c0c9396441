"""
Emergency and windshear generation.

Injects random in-flight faults on a fixed schedule and rolls for
windshear when a landing aircraft reaches the runway. Both are advisory:
they never block the aircraft state machine.
"""

import logging
import random
from typing import List, Optional, Sequence

from .aircraft import Aircraft, AircraftStatus, EmergencyType
from .clock import Clock
from .config import SimulationConfig
from .events import EventLog

logger = logging.getLogger(__name__)


class EmergencyGenerator:
    """
    Time-gated fault injector, polled once per tick.

    No fault is injected before ``initial_emergency_delay`` has elapsed since
    ``start_time``; after that at most one injection pass runs per
    ``emergency_check_interval``. A pass only affects airborne aircraft
    without a fault and never raises the active count above
    ``max_active_emergencies``.
    """

    def __init__(
        self,
        clock: Clock,
        events: EventLog,
        config: Optional[SimulationConfig] = None,
        rng: Optional[random.Random] = None,
        start_time: Optional[float] = None
    ):
        self.clock = clock
        self.events = events
        self.config = config or SimulationConfig()
        self.rng = rng or random.Random()
        self.start_time = clock() if start_time is None else start_time

        self.last_trigger_time: Optional[float] = None
        self.active_count = 0
        self.total_injected = 0
        self.windshear_count = 0

    def _pass_due(self, now: float) -> bool:
        if now - self.start_time < self.config.initial_emergency_delay:
            return False
        if self.last_trigger_time is None:
            return True
        return now - self.last_trigger_time >= self.config.emergency_check_interval

    def poll(self, fleet: Sequence[Aircraft]) -> List[Aircraft]:
        """
        Run an injection pass if one is due.

        Args:
            fleet: All aircraft in the simulation

        Returns:
            Aircraft that received a fault during this call
        """
        now = self.clock()
        if not self._pass_due(now):
            return []

        # The interval restarts even when capacity or candidates are lacking
        self.last_trigger_time = now

        capacity = self.config.max_active_emergencies - self.active_count
        if capacity <= 0:
            return []

        candidates = [ac for ac in fleet if ac.is_in_air and ac.emergency is None]
        if not candidates:
            return []

        batch = 2 if self.rng.random() < self.config.double_emergency_probability else 1
        count = min(batch, capacity, len(candidates))

        affected = self.rng.sample(candidates, count)
        for aircraft in affected:
            emergency = self.rng.choice(list(EmergencyType))
            aircraft.assign_emergency(emergency, now)
            self.active_count += 1
            self.total_injected += 1
            self.events.error(f"EMERGENCY: {aircraft.callsign} - {emergency.label}!", aircraft.callsign)

        return affected

    def resolve(self, aircraft: Aircraft) -> Optional[EmergencyType]:
        """Clear an aircraft's emergency and release its capacity slot."""
        cleared = aircraft.clear_emergency()
        if cleared is not None:
            self.active_count = max(0, self.active_count - 1)
        return cleared

    def roll_windshear(self, aircraft: Aircraft) -> bool:
        """
        Roll for windshear on a landing aircraft.

        On a hit the aircraft is flagged and its go-around attempts
        incremented; the caller decides the resulting transition.
        """
        if aircraft.status is not AircraftStatus.LANDING:
            return False

        if self.rng.random() >= self.config.windshear_probability:
            return False

        aircraft.has_windshear = True
        aircraft.go_around_attempts += 1
        self.windshear_count += 1
        self.events.warning(
            f"WINDSHEAR: {aircraft.callsign} experiencing windshear, initiating go-around!",
            aircraft.callsign
        )
        return True
