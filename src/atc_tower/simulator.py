"""
Main simulation engine.

Owns the fleet, the controller selection, the runway scheduler and the
emergency state, and advances them once per tick in a fixed order:
aircraft motion, arrival transitions, emergency injection.
"""

import logging
import random
import time
from typing import List, Optional

from .aircraft import Aircraft
from .airport import AirportLayout
from .atc_system import Command, CommandDispatcher, CommandResult, available_commands
from .clock import Clock, ManualClock, wall_clock
from .config import SimulationConfig
from .emergencies import EmergencyGenerator
from .events import EventLog
from .roster import create_fleet
from .runway_scheduler import RunwayScheduler
from .transitions import ArrivalHandler

logger = logging.getLogger(__name__)


class SimulationEngine:
    """
    Air traffic control simulation engine.

    All engine state is mutated from a single thread: ticks and controller
    commands must not run concurrently. Commands execute fully when called
    and take effect before the next tick.
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        layout: Optional[AirportLayout] = None,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize the engine with an empty fleet.

        Args:
            config: Engine tunables (defaults if None)
            layout: Airport layout (default airport if None)
            clock: Time source in seconds (``time.monotonic`` if None)
            rng: Random source for faults, windshear and fleet creation
        """
        self.config = config or SimulationConfig()
        self.layout = layout or AirportLayout()
        self.clock = clock or wall_clock
        self.rng = rng or random.Random()

        self.events = EventLog(self.clock, max_size=self.config.event_log_size)
        self.scheduler = RunwayScheduler(self.clock, self.config)
        self.dispatcher = CommandDispatcher(self.layout, self.scheduler, self.events, self.clock)
        self.emergencies = EmergencyGenerator(self.clock, self.events, self.config, self.rng)
        self.arrivals = ArrivalHandler(
            self.layout, self.emergencies, self.events, self.clock, self.config
        )

        self.aircraft: List[Aircraft] = []
        self.selected_callsign: Optional[str] = None
        self.start_time = self.clock()
        self.tick_count = 0
        self.departed: List[str] = []

    @classmethod
    def with_default_fleet(
        cls,
        config: Optional[SimulationConfig] = None,
        clock: Optional[Clock] = None,
        seed: Optional[int] = None
    ) -> 'SimulationEngine':
        """Create an engine populated with the default roster."""
        engine = cls(config=config, clock=clock, rng=random.Random(seed))
        for aircraft in create_fleet(engine.layout, engine.rng,
                                     max_go_arounds=engine.config.max_go_arounds):
            engine.add_aircraft(aircraft)
        engine.events.success("ATC Simulator initialized")
        return engine

    # Fleet management

    def add_aircraft(self, aircraft: Aircraft):
        """Add an aircraft to the simulation under the engine's go-around limit."""
        if self.get_aircraft(aircraft.callsign) is not None:
            raise ValueError(f"Duplicate callsign {aircraft.callsign}")
        aircraft.max_go_arounds = self.config.max_go_arounds
        self.aircraft.append(aircraft)

    def remove_aircraft(self, callsign: str):
        """Remove an aircraft from the simulation, dropping it from the selection."""
        self.aircraft = [ac for ac in self.aircraft if ac.callsign != callsign]
        if self.selected_callsign == callsign:
            self.selected_callsign = None

    def get_aircraft(self, callsign: str) -> Optional[Aircraft]:
        """Get aircraft by callsign."""
        for ac in self.aircraft:
            if ac.callsign == callsign:
                return ac
        return None

    # Selection

    def select_aircraft(self, callsign: Optional[str]) -> bool:
        """
        Set the aircraft subsequent commands apply to.

        Passing None clears the selection. An unknown callsign is logged
        and also clears it.
        """
        if callsign is None:
            self.selected_callsign = None
            return True

        if self.get_aircraft(callsign) is None:
            self.events.error(f"Unknown aircraft {callsign}")
            self.selected_callsign = None
            return False

        self.selected_callsign = callsign
        return True

    @property
    def selected(self) -> Optional[Aircraft]:
        """Currently selected aircraft; a stale selection reads as None."""
        if self.selected_callsign is None:
            return None
        aircraft = self.get_aircraft(self.selected_callsign)
        if aircraft is None:
            self.selected_callsign = None
        return aircraft

    # Commands

    def apply_command(self, command: str, value: Optional[str] = None) -> CommandResult:
        """
        Apply a controller command to the selected aircraft.

        Args:
            command: Instruction name ("runway", "runway-takeoff", "taxi",
                "hold" or "wait-airspace")
            value: Runway or waiting-point code where the instruction needs one

        Returns:
            CommandResult; rejected commands leave engine state unchanged
        """
        return self.dispatcher.apply_named(self.selected, command, value)

    def issue(self, command: Command, callsign: Optional[str] = None) -> CommandResult:
        """Apply a typed command to the named aircraft, or to the selection."""
        aircraft = self.get_aircraft(callsign) if callsign is not None else self.selected
        return self.dispatcher.apply(aircraft, command)

    # Tick driver

    @property
    def current_time(self) -> float:
        """Seconds since the engine started."""
        return self.clock() - self.start_time

    def tick(self):
        """Advance the simulation by one frame."""
        for aircraft in self.aircraft:
            aircraft.update(self.config)

        for aircraft in self.arrivals.process(self.aircraft):
            self.remove_aircraft(aircraft.callsign)
            self.departed.append(aircraft.callsign)

        self.emergencies.poll(self.aircraft)
        self.tick_count += 1

    def run(self, duration: float, verbose: bool = False):
        """
        Run simulation for specified duration.

        A ``ManualClock`` is advanced one time step per tick; any other
        clock is real time, so the driver sleeps between ticks.

        Args:
            duration: Simulation duration in seconds
            verbose: Print progress updates
        """
        time_step = self.config.time_step
        steps = int(duration / time_step)
        report_every = max(1, int(60 * self.config.tick_rate))

        for i in range(steps):
            self.tick()

            if isinstance(self.clock, ManualClock):
                self.clock.advance(time_step)
            else:
                time.sleep(time_step)

            if verbose and i % report_every == 0:
                print(f"Simulation time: {self.current_time:.0f}s "
                      f"({self.current_time/60:.1f} min), "
                      f"Aircraft: {len(self.aircraft)}")

        if verbose:
            print(f"\nSimulation completed: {duration}s ({duration/60:.1f} min)")

    # Read-only views

    def flights_in_air(self) -> List[Aircraft]:
        return [ac for ac in self.aircraft if ac.is_in_air]

    def flights_on_ground(self) -> List[Aircraft]:
        return [ac for ac in self.aircraft if not ac.is_in_air]

    def snapshot(self) -> dict:
        """State for renderers and UI panels, copied so callers cannot mutate the engine."""
        selected = self.selected
        aircraft_states = []
        for ac in self.aircraft:
            state = ac.get_state()
            state['selected'] = ac is selected
            state['available_commands'] = [c.value for c in available_commands(ac)]
            aircraft_states.append(state)

        return {
            'time': self.current_time,
            'aircraft': aircraft_states,
            'selected': selected.callsign if selected else None,
            'reservations': self.scheduler.get_state(),
            'active_emergencies': self.emergencies.active_count,
            'events': [e.to_dict() for e in self.events.recent()],
            **self.layout.get_state(),
        }

    def get_status(self) -> dict:
        """Get current simulation status."""
        return {
            'current_time': self.current_time,
            'ticks': self.tick_count,
            'num_aircraft': len(self.aircraft),
            'in_air': len(self.flights_in_air()),
            'on_ground': len(self.flights_on_ground()),
            'active_emergencies': self.emergencies.active_count,
            'total_emergencies': self.emergencies.total_injected,
            'windshear_events': self.emergencies.windshear_count,
            'landings': self.arrivals.landings,
            'takeoffs': self.arrivals.takeoffs,
            'go_arounds': self.arrivals.go_arounds,
            'diversions': self.arrivals.diversions,
            'departed': len(self.departed),
            'instructions': self.dispatcher.get_statistics(),
        }

    def print_status(self):
        """Print current simulation status."""
        status = self.get_status()
        instructions = status['instructions']
        print(f"\n{'='*60}")
        print(f"Simulation Time: {status['current_time']:.1f}s "
              f"({status['current_time']/60:.1f} min)")
        print(f"Aircraft: {status['num_aircraft']} "
              f"(air: {status['in_air']}, ground: {status['on_ground']})")
        print(f"Active Emergencies: {status['active_emergencies']} "
              f"(total: {status['total_emergencies']})")
        print(f"Landings: {status['landings']}  Takeoffs: {status['takeoffs']}")
        print(f"Go-arounds: {status['go_arounds']}  Diversions: {status['diversions']}")
        print(f"Taxied to gate: {status['departed']}")
        print(f"ATC Instructions: {instructions['total_instructions']} "
              f"(rejected: {instructions['rejected']})")
        print(f"{'='*60}\n")
