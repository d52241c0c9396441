"""
ATC Tower Simulator

Tower control simulation: runway clearances, taxi instructions, and
randomly injected emergencies for a small fleet of aircraft.
"""

__version__ = "0.1.0"

from .aircraft import Aircraft, AircraftStatus, EmergencyType, WeightClass
from .airport import AirportLayout, Point
from .atc_system import (
    ClearLanding,
    ClearTakeoff,
    ClearTaxi,
    CommandDispatcher,
    CommandResult,
    Hold,
    InstructionType,
    WaitAirspace,
)
from .clock import ManualClock
from .config import SimulationConfig
from .emergencies import EmergencyGenerator
from .events import EventLog, Severity, SimulationEvent
from .runway_scheduler import RunwayScheduler
from .simulator import SimulationEngine
from .transitions import ArrivalHandler

__all__ = [
    "Aircraft",
    "AircraftStatus",
    "EmergencyType",
    "WeightClass",
    "AirportLayout",
    "Point",
    "ClearLanding",
    "ClearTakeoff",
    "ClearTaxi",
    "CommandDispatcher",
    "CommandResult",
    "Hold",
    "InstructionType",
    "WaitAirspace",
    "ManualClock",
    "SimulationConfig",
    "EmergencyGenerator",
    "EventLog",
    "Severity",
    "SimulationEvent",
    "RunwayScheduler",
    "SimulationEngine",
    "ArrivalHandler",
]
