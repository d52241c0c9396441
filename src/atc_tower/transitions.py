"""
Arrival and transition handling.

Drives the aircraft state machine forward when an aircraft reaches its
destination, and retires landed aircraft once their taxi-in timer runs out.
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence

from .aircraft import Aircraft, AircraftStatus
from .airport import AirportLayout, DIVERSION_POINT
from .clock import Clock
from .config import SimulationConfig
from .emergencies import EmergencyGenerator
from .events import EventLog

logger = logging.getLogger(__name__)


class ArrivalHandler:
    """
    Applies arrival-triggered transitions.

    Transitions:
        approaching -> landing       (at the approach anchor)
        landing     -> taxing        (touchdown)
                    -> go-around     (windshear)
                    -> diverting     (go-around attempts exhausted)
        go-around   -> landing       (re-attempt)
        taking-off  -> airborne
        taxing      -> ready-for-takeoff (at the waiting point)

    Diverting, airborne, waiting, on-ground and ready-for-takeoff aircraft
    have no arrival transition.
    """

    def __init__(
        self,
        layout: AirportLayout,
        emergencies: EmergencyGenerator,
        events: EventLog,
        clock: Clock,
        config: Optional[SimulationConfig] = None
    ):
        self.layout = layout
        self.emergencies = emergencies
        self.events = events
        self.clock = clock
        self.config = config or SimulationConfig()

        self.landings = 0
        self.takeoffs = 0
        self.go_arounds = 0
        self.diversions = 0
        self.taxi_completions = 0

        self._handlers: Dict[AircraftStatus, Callable[[Aircraft], None]] = {
            AircraftStatus.APPROACHING: self._begin_final_approach,
            AircraftStatus.LANDING: self._touchdown,
            AircraftStatus.GO_AROUND: self._reattempt_landing,
            AircraftStatus.TAKING_OFF: self._lift_off,
            AircraftStatus.TAXIING: self._reach_waiting_point,
            AircraftStatus.DIVERTING: self._no_transition,
            AircraftStatus.READY_FOR_TAKEOFF: self._no_transition,
            AircraftStatus.AIRBORNE: self._no_transition,
            AircraftStatus.WAITING: self._no_transition,
            AircraftStatus.ON_GROUND: self._no_transition,
        }
        missing = set(AircraftStatus) - set(self._handlers)
        if missing:
            raise RuntimeError(f"No arrival handler for {sorted(s.value for s in missing)}")

    def process(self, fleet: Sequence[Aircraft]) -> List[Aircraft]:
        """
        Consume this tick's arrivals and collect finished taxi-ins.

        Args:
            fleet: All aircraft in the simulation

        Returns:
            Aircraft whose taxi-in timer expired and should leave the fleet
        """
        for aircraft in fleet:
            if aircraft.arrived:
                aircraft.arrived = False
                self.handle_arrival(aircraft)

        now = self.clock()
        finished = [ac for ac in fleet if self._taxi_in_complete(ac, now)]
        for aircraft in finished:
            self.taxi_completions += 1
            self.events.success(f"{aircraft.callsign} taxied to gate and departed", aircraft.callsign)
        return finished

    def handle_arrival(self, aircraft: Aircraft):
        """Apply the transition for an aircraft that reached its destination."""
        self._handlers[aircraft.status](aircraft)

    @staticmethod
    def _taxi_in_complete(aircraft: Aircraft, now: float) -> bool:
        return (aircraft.status is AircraftStatus.TAXIING
                and aircraft.taxi_deadline is not None
                and now > aircraft.taxi_deadline)

    def _begin_final_approach(self, aircraft: Aircraft):
        runway = self.layout.runway_position(aircraft.assigned_runway)
        if runway is None:
            logger.warning("%s reached approach point without a valid runway (%r)",
                           aircraft.callsign, aircraft.assigned_runway)
            return

        aircraft.status = AircraftStatus.LANDING
        aircraft.set_destination(runway)
        aircraft.is_in_air = False
        self.events.info(
            f"{aircraft.callsign} starting final approach to runway {aircraft.assigned_runway}",
            aircraft.callsign
        )

    def _touchdown(self, aircraft: Aircraft):
        if self.emergencies.roll_windshear(aircraft):
            self._go_around(aircraft)
            return

        runway = aircraft.assigned_runway
        aircraft.status = AircraftStatus.TAXIING
        aircraft.is_in_air = False
        aircraft.has_windshear = False
        aircraft.taxi_deadline = self.clock() + self.config.taxi_dwell
        aircraft.set_destination(self.layout.runway_position(self.layout.opposite_runway(runway)))
        aircraft.assigned_runway = None
        self.landings += 1

        resolved = self.emergencies.resolve(aircraft)
        if resolved is not None:
            self.events.success(
                f"{aircraft.callsign} successfully landed despite {resolved.value} - "
                f"emergency resolved, taxiing to gate",
                aircraft.callsign
            )
        else:
            self.events.success(
                f"{aircraft.callsign} successfully landed on runway {runway}, taxiing to gate",
                aircraft.callsign
            )

    def _go_around(self, aircraft: Aircraft):
        offset = self.config.go_around_offset
        aircraft.status = AircraftStatus.GO_AROUND
        aircraft.is_in_air = True
        aircraft.set_destination(aircraft.position.offset(-offset, -offset))
        self.go_arounds += 1

        if aircraft.go_around_attempts > aircraft.max_go_arounds:
            aircraft.status = AircraftStatus.DIVERTING
            aircraft.set_destination(DIVERSION_POINT)
            aircraft.assigned_runway = None
            self.diversions += 1
            self.events.warning(
                f"{aircraft.callsign} exceeded maximum go-around attempts, "
                f"diverting to alternate airport",
                aircraft.callsign
            )

    def _reattempt_landing(self, aircraft: Aircraft):
        runway = self.layout.runway_position(aircraft.assigned_runway)
        if runway is None:
            logger.warning("%s completed go-around without a valid runway (%r)",
                           aircraft.callsign, aircraft.assigned_runway)
            return

        aircraft.status = AircraftStatus.LANDING
        aircraft.set_destination(runway)
        aircraft.is_in_air = False
        self.events.warning(
            f"{aircraft.callsign} re-attempting landing on runway {aircraft.assigned_runway}",
            aircraft.callsign
        )

    def _lift_off(self, aircraft: Aircraft):
        aircraft.status = AircraftStatus.AIRBORNE
        aircraft.is_in_air = True
        self.takeoffs += 1
        self.events.success(
            f"{aircraft.callsign} airborne from runway {aircraft.assigned_runway}", aircraft.callsign
        )
        aircraft.assigned_runway = None

    def _reach_waiting_point(self, aircraft: Aircraft):
        aircraft.status = AircraftStatus.READY_FOR_TAKEOFF
        aircraft.taxi_deadline = None
        if aircraft.assigned_waiting_point:
            self.events.success(
                f"{aircraft.callsign} reached waiting point {aircraft.assigned_waiting_point}",
                aircraft.callsign
            )
        else:
            self.events.success(f"{aircraft.callsign} reached end of runway", aircraft.callsign)

    def _no_transition(self, aircraft: Aircraft):
        logger.debug("%s arrived while %s, no transition", aircraft.callsign, aircraft.status.value)
