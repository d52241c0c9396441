"""
Controller event log.

Discrete notifications emitted by the dispatcher, arrival handler and
emergency generator. Each event is kept in a bounded history, forwarded to
the standard logging system and handed to any subscribed callbacks.
"""

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from .clock import Clock

logger = logging.getLogger(__name__)


class Severity(Enum):
    """Event severity tag."""
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"

    @property
    def log_level(self) -> int:
        return _LOG_LEVELS[self]


_LOG_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.SUCCESS: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


@dataclass(frozen=True)
class SimulationEvent:
    """A single controller-facing notification."""
    timestamp: float
    message: str
    severity: Severity
    callsign: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'timestamp': self.timestamp,
            'message': self.message,
            'severity': self.severity.value,
            'callsign': self.callsign,
        }


class EventLog:
    """
    Bounded event sink.

    Only the most recent ``max_size`` events are retained. Subscribers are
    called synchronously, in subscription order, for every event.
    """

    def __init__(self, clock: Clock, max_size: int = 20):
        self.clock = clock
        self._events = deque(maxlen=max_size)
        self._subscribers: List[Callable[[SimulationEvent], None]] = []
        self.total_emitted = 0

    def emit(
        self,
        message: str,
        severity: Severity = Severity.INFO,
        callsign: Optional[str] = None
    ) -> SimulationEvent:
        """Record an event and fan it out."""
        event = SimulationEvent(
            timestamp=self.clock(),
            message=message,
            severity=severity,
            callsign=callsign
        )
        self._events.append(event)
        self.total_emitted += 1

        logger.log(severity.log_level, "[%s] %s", severity.value, message)

        for callback in self._subscribers:
            callback(event)

        return event

    def info(self, message: str, callsign: Optional[str] = None) -> SimulationEvent:
        return self.emit(message, Severity.INFO, callsign)

    def success(self, message: str, callsign: Optional[str] = None) -> SimulationEvent:
        return self.emit(message, Severity.SUCCESS, callsign)

    def warning(self, message: str, callsign: Optional[str] = None) -> SimulationEvent:
        return self.emit(message, Severity.WARNING, callsign)

    def error(self, message: str, callsign: Optional[str] = None) -> SimulationEvent:
        return self.emit(message, Severity.ERROR, callsign)

    def subscribe(self, callback: Callable[[SimulationEvent], None]):
        """Register a callback invoked for every new event."""
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Callable[[SimulationEvent], None]):
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def recent(self, severity: Optional[Severity] = None) -> List[SimulationEvent]:
        """Return retained events, newest first, optionally filtered by severity."""
        events = reversed(self._events)
        if severity is None:
            return list(events)
        return [e for e in events if e.severity == severity]

    def clear(self):
        self._events.clear()

    def __len__(self):
        return len(self._events)
