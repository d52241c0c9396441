"""
Controller command dispatch.

Translates controller input into typed instructions, validates their
targets against the airport layout and applies them to the selected
aircraft. Rejected instructions are logged and leave all state untouched.
"""

import math
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, List, Optional, Union

from .aircraft import Aircraft, AircraftStatus
from .airport import AirportLayout
from .clock import Clock
from .events import EventLog
from .runway_scheduler import RunwayScheduler

logger = logging.getLogger(__name__)


class InstructionType(Enum):
    """Controller instruction names as sent by the UI."""
    CLEARED_TO_LAND = "runway"
    CLEARED_FOR_TAKEOFF = "runway-takeoff"
    TAXI = "taxi"
    HOLD = "hold"
    WAIT_AIRSPACE = "wait-airspace"


class CommandError(ValueError):
    """Raised when controller input cannot be turned into a valid command."""


@dataclass(frozen=True)
class ClearLanding:
    runway: str
    instruction_type: ClassVar[InstructionType] = InstructionType.CLEARED_TO_LAND


@dataclass(frozen=True)
class ClearTakeoff:
    runway: str
    instruction_type: ClassVar[InstructionType] = InstructionType.CLEARED_FOR_TAKEOFF


@dataclass(frozen=True)
class ClearTaxi:
    point: str
    instruction_type: ClassVar[InstructionType] = InstructionType.TAXI


@dataclass(frozen=True)
class Hold:
    instruction_type: ClassVar[InstructionType] = InstructionType.HOLD


@dataclass(frozen=True)
class WaitAirspace:
    instruction_type: ClassVar[InstructionType] = InstructionType.WAIT_AIRSPACE


Command = Union[ClearLanding, ClearTakeoff, ClearTaxi, Hold, WaitAirspace]


def parse_command(name: str, value: Optional[str], layout: AirportLayout) -> Command:
    """
    Build a typed command from a command name and its string value.

    Args:
        name: Instruction name (e.g. "runway", "taxi")
        value: Runway or waiting-point code, ignored for hold instructions
        layout: Airport layout used to validate the target code

    Raises:
        CommandError: Unknown instruction name or target code
    """
    try:
        instruction_type = InstructionType(name)
    except ValueError:
        raise CommandError(f"Unknown command '{name}'") from None

    if instruction_type is InstructionType.HOLD:
        return Hold()
    if instruction_type is InstructionType.WAIT_AIRSPACE:
        return WaitAirspace()

    if instruction_type is InstructionType.TAXI:
        if value is None or not layout.is_waiting_point(value):
            raise CommandError(f"Unknown waiting point '{value}'")
        return ClearTaxi(point=value)

    if value is None or not layout.is_runway(value):
        raise CommandError(f"Unknown runway '{value}'")
    if instruction_type is InstructionType.CLEARED_TO_LAND:
        return ClearLanding(runway=value)
    return ClearTakeoff(runway=value)


@dataclass
class CommandResult:
    """Outcome of applying a command."""
    accepted: bool
    reason: str = ""
    callsign: Optional[str] = None
    instruction_type: Optional[InstructionType] = None

    def __bool__(self):
        return self.accepted


@dataclass
class ATCInstruction:
    """Record of a controller instruction and whether it took effect."""
    callsign: str
    timestamp: float
    instruction_type: InstructionType
    parameters: Dict = field(default_factory=dict)
    accepted: bool = True
    reason: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary format."""
        return {
            'callsign': self.callsign,
            'timestamp': self.timestamp,
            'instruction_type': self.instruction_type.value,
            'parameters': self.parameters,
            'accepted': self.accepted,
            'reason': self.reason,
        }


def available_commands(aircraft: Aircraft) -> List[InstructionType]:
    """Instruction groups offered for an aircraft: landing in the air, takeoff and taxi on the ground."""
    if aircraft.is_in_air:
        commands = [InstructionType.CLEARED_TO_LAND]
    else:
        commands = [InstructionType.CLEARED_FOR_TAKEOFF, InstructionType.TAXI]
    return commands + [InstructionType.HOLD, InstructionType.WAIT_AIRSPACE]


class CommandDispatcher:
    """
    Applies controller instructions to aircraft.

    Runway clearances are checked against and recorded in the runway
    scheduler. Every instruction, accepted or not, is kept in the history.
    """

    def __init__(
        self,
        layout: AirportLayout,
        scheduler: RunwayScheduler,
        events: EventLog,
        clock: Clock
    ):
        self.layout = layout
        self.scheduler = scheduler
        self.events = events
        self.clock = clock
        self.instructions: List[ATCInstruction] = []

    def apply_named(
        self,
        aircraft: Optional[Aircraft],
        name: str,
        value: Optional[str] = None
    ) -> CommandResult:
        """Parse a UI command name/value pair and apply it."""
        if aircraft is None:
            return self._no_selection()

        try:
            command = parse_command(name, value, self.layout)
        except CommandError as e:
            self.events.error(f"{aircraft.callsign} - {e}", aircraft.callsign)
            return CommandResult(False, str(e), aircraft.callsign)

        return self.apply(aircraft, command)

    def apply(self, aircraft: Optional[Aircraft], command: Command) -> CommandResult:
        """
        Apply a typed command to an aircraft.

        Args:
            aircraft: Target aircraft, None when nothing is selected
            command: Command to apply

        Returns:
            CommandResult describing whether the command took effect
        """
        if aircraft is None:
            return self._no_selection()

        if isinstance(command, ClearLanding):
            result = self._clear_landing(aircraft, command)
        elif isinstance(command, ClearTakeoff):
            result = self._clear_takeoff(aircraft, command)
        elif isinstance(command, ClearTaxi):
            result = self._clear_taxi(aircraft, command)
        elif isinstance(command, Hold):
            self._hold(aircraft)
            self.events.warning(f"{aircraft.callsign} instructed to hold", aircraft.callsign)
            result = CommandResult(True)
        elif isinstance(command, WaitAirspace):
            self._hold(aircraft)
            self.events.warning(f"{aircraft.callsign} cleared to wait in airspace", aircraft.callsign)
            result = CommandResult(True)
        else:
            raise TypeError(f"Unsupported command {command!r}")

        result.callsign = aircraft.callsign
        result.instruction_type = command.instruction_type
        self._record(aircraft, command, result)
        return result

    def _clear_landing(self, aircraft: Aircraft, command: ClearLanding) -> CommandResult:
        approach = self.layout.approach_point(command.runway)
        if approach is None:
            return self._unknown_target(aircraft, f"Unknown runway '{command.runway}'")

        if not self.scheduler.is_free(command.runway):
            return self._runway_busy(aircraft, command.runway)

        aircraft.set_destination(approach)
        aircraft.status = AircraftStatus.APPROACHING
        aircraft.is_in_air = True
        aircraft.assigned_runway = command.runway
        aircraft.assigned_waiting_point = None
        aircraft.taxi_deadline = None
        self.scheduler.reserve(command.runway, aircraft)

        self.events.success(
            f"{aircraft.callsign} cleared to land on runway {command.runway}", aircraft.callsign
        )
        return CommandResult(True)

    def _clear_takeoff(self, aircraft: Aircraft, command: ClearTakeoff) -> CommandResult:
        runway = self.layout.runway_position(command.runway)
        if runway is None:
            return self._unknown_target(aircraft, f"Unknown runway '{command.runway}'")

        if not self.scheduler.is_free(command.runway):
            return self._runway_busy(aircraft, command.runway)

        aircraft.set_destination(runway)
        aircraft.status = AircraftStatus.TAKING_OFF
        aircraft.assigned_runway = command.runway
        aircraft.assigned_waiting_point = None
        aircraft.taxi_deadline = None
        self.scheduler.reserve(command.runway, aircraft)

        self.events.success(
            f"{aircraft.callsign} cleared for takeoff from runway {command.runway}", aircraft.callsign
        )
        return CommandResult(True)

    def _clear_taxi(self, aircraft: Aircraft, command: ClearTaxi) -> CommandResult:
        point = self.layout.waiting_point_position(command.point)
        if point is None:
            return self._unknown_target(aircraft, f"Unknown waiting point '{command.point}'")

        aircraft.set_destination(point)
        aircraft.status = AircraftStatus.TAXIING
        aircraft.assigned_runway = None
        aircraft.assigned_waiting_point = command.point
        aircraft.taxi_deadline = None

        self.events.success(f"{aircraft.callsign} cleared to taxi to {command.point}", aircraft.callsign)
        return CommandResult(True)

    @staticmethod
    def _hold(aircraft: Aircraft):
        aircraft.set_destination(None)
        aircraft.status = AircraftStatus.WAITING
        aircraft.assigned_runway = None
        aircraft.taxi_deadline = None

    def _runway_busy(self, aircraft: Aircraft, runway: str) -> CommandResult:
        remaining = math.ceil(self.scheduler.remaining(runway))
        message = f"Runway {runway} in use, clear in {remaining}s"
        self.events.warning(f"{aircraft.callsign} - {message}", aircraft.callsign)
        return CommandResult(False, message)

    def _unknown_target(self, aircraft: Aircraft, message: str) -> CommandResult:
        self.events.error(f"{aircraft.callsign} - {message}", aircraft.callsign)
        return CommandResult(False, message)

    def _no_selection(self) -> CommandResult:
        self.events.error("No aircraft selected")
        return CommandResult(False, "No aircraft selected")

    def _record(self, aircraft: Aircraft, command: Command, result: CommandResult):
        parameters = {}
        if isinstance(command, (ClearLanding, ClearTakeoff)):
            parameters['runway'] = command.runway
        elif isinstance(command, ClearTaxi):
            parameters['waiting_point'] = command.point

        self.instructions.append(ATCInstruction(
            callsign=aircraft.callsign,
            timestamp=self.clock(),
            instruction_type=command.instruction_type,
            parameters=parameters,
            accepted=result.accepted,
            reason=result.reason
        ))

    def get_instructions_for_aircraft(self, callsign: str) -> List[ATCInstruction]:
        """Get all instructions issued to a specific aircraft."""
        return [inst for inst in self.instructions if inst.callsign == callsign]

    def get_statistics(self) -> dict:
        """Get instruction statistics."""
        by_type = {}
        rejected = 0

        for instruction in self.instructions:
            inst_type = instruction.instruction_type.value
            by_type[inst_type] = by_type.get(inst_type, 0) + 1
            if not instruction.accepted:
                rejected += 1

        return {
            'total_instructions': len(self.instructions),
            'accepted': len(self.instructions) - rejected,
            'rejected': rejected,
            'by_type': by_type,
        }
