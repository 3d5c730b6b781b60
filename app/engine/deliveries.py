"""
Delivery scheduling.

A delivery is one ball in flight. Its travel time is random within a fixed
window and its expected arrival is the moment a perfectly timed swing should
happen. Only one delivery can be in flight at a time.
"""
import logging
import math
import random
from dataclasses import dataclass
from typing import Callable, Optional

from app.engine.errors import (
    AlreadyInFlightError, NoActiveDeliveryError, AlreadySwungError, InvalidTimestampError,
)

logger = logging.getLogger(__name__)

# Travel time window in ms, [min, max)
TRAVEL_MIN_MS = 1350
TRAVEL_MAX_MS = 2250


@dataclass
class Delivery:
    """One bowled ball and its timing window"""
    travel_duration_ms: int
    expected_arrival_timestamp: float
    swung: bool = False

    @property
    def released_at(self) -> float:
        return self.expected_arrival_timestamp - self.travel_duration_ms

    def progress(self, now: float) -> float:
        """Fraction of the travel completed at `now`, clamped to [0, 1]"""
        elapsed = now - self.released_at
        return min(1.0, max(0.0, elapsed / self.travel_duration_ms))

    def to_dict(self) -> dict:
        return {
            "travel_duration_ms": self.travel_duration_ms,
            "expected_arrival_timestamp": self.expected_arrival_timestamp,
            "hint": timing_hint(self),
        }


def timing_hint(delivery: Delivery) -> str:
    """Cue for new players: roughly when to swing after release"""
    return f"Hint: swing at ~{round(delivery.travel_duration_ms)}ms after the ball starts"


def check_timestamp(now: float) -> float:
    if isinstance(now, bool) or not isinstance(now, (int, float)) or not math.isfinite(now):
        raise InvalidTimestampError(f"Timestamp must be a finite number of ms, got {now!r}")
    return now


def draw_travel_duration(rng: Callable[[], float] = random.random) -> int:
    """Uniform integer in [TRAVEL_MIN_MS, TRAVEL_MAX_MS)"""
    span = TRAVEL_MAX_MS - TRAVEL_MIN_MS
    return min(TRAVEL_MAX_MS - 1, TRAVEL_MIN_MS + math.floor(rng() * span))


class DeliveryScheduler:
    """
    Creates and tracks the single in-flight delivery.
    """

    def __init__(self, rng: Callable[[], float] = random.random):
        self._rng = rng
        self._delivery: Optional[Delivery] = None

    def request_delivery(self, now: float) -> Delivery:
        check_timestamp(now)
        if self._delivery is not None:
            raise AlreadyInFlightError("A delivery is already in flight")

        travel = draw_travel_duration(self._rng)
        self._delivery = Delivery(
            travel_duration_ms=travel,
            expected_arrival_timestamp=now + travel,
        )
        logger.debug("Delivery released at %.1f, travel %dms", now, travel)
        return self._delivery

    def current_delivery(self) -> Optional[Delivery]:
        return self._delivery

    def clear(self) -> None:
        self._delivery = None

    def register_swing_attempt(self, now: float) -> float:
        """Mark the active delivery as swung and return the absolute timing error in ms"""
        check_timestamp(now)
        delivery = self._delivery
        if delivery is None:
            raise NoActiveDeliveryError("No delivery in flight")
        if delivery.swung:
            raise AlreadySwungError("Delivery has already been swung at")

        delivery.swung = True
        return abs(now - delivery.expected_arrival_timestamp)

    def has_timed_out(self, now: float) -> bool:
        delivery = self._delivery
        if delivery is None or delivery.swung:
            return False
        return now >= delivery.expected_arrival_timestamp
