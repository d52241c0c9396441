"""
Runway reservation scheduler.

Tracks, per runway code, the instant until which the runway is claimed.
Reservations are never released early; they lapse when the clock passes
their expiry.
"""

import logging
from typing import Dict, Optional

from .aircraft import Aircraft
from .clock import Clock
from .config import SimulationConfig

logger = logging.getLogger(__name__)


class RunwayScheduler:
    """Accepts or rejects runway clearance requests by expiry comparison."""

    def __init__(self, clock: Clock, config: Optional[SimulationConfig] = None):
        self.clock = clock
        self.config = config or SimulationConfig()
        self._reservations: Dict[str, float] = {}

    def reservation_duration(self, aircraft: Aircraft) -> float:
        """Seconds a runway is held for this aircraft, longer for heavies."""
        if aircraft.is_heavy:
            return self.config.heavy_reservation
        return self.config.regular_reservation

    def is_free(self, runway: str) -> bool:
        """A runway is free with no entry or an expiry at or before now."""
        expiry = self._reservations.get(runway)
        return expiry is None or expiry <= self.clock()

    def remaining(self, runway: str) -> float:
        """Seconds until the runway frees up, 0 if already free."""
        expiry = self._reservations.get(runway)
        if expiry is None:
            return 0.0
        return max(0.0, expiry - self.clock())

    def expiry(self, runway: str) -> Optional[float]:
        return self._reservations.get(runway)

    def reserve(self, runway: str, aircraft: Aircraft) -> Optional[float]:
        """
        Claim a runway for an aircraft.

        Args:
            runway: Runway code
            aircraft: Aircraft being cleared; its weight class sets the hold

        Returns:
            The new expiry instant, or None if the runway is still held
        """
        if not self.is_free(runway):
            logger.debug("Reservation refused for %s on %s (%.1fs left)",
                         aircraft.callsign, runway, self.remaining(runway))
            return None

        expiry = self.clock() + self.reservation_duration(aircraft)
        self._reservations[runway] = expiry
        logger.debug("Runway %s reserved by %s until %.1f", runway, aircraft.callsign, expiry)
        return expiry

    def get_state(self) -> Dict[str, float]:
        """Active reservations as runway code -> seconds remaining."""
        now = self.clock()
        return {code: expiry - now for code, expiry in self._reservations.items() if expiry > now}
