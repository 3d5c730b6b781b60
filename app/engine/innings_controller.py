"""
Innings controller - the operations a host (renderer, CLI, API) calls.

Drives the delivery scheduler and the outcome classifier against the innings
state. Every delivery is resolved exactly once, either by a swing or by a
timeout, and the end of the innings is checked straight after each resolution.
"""
import logging
import math
import random
from dataclasses import dataclass
from typing import Callable, Optional

from app.engine.deliveries import Delivery, DeliveryScheduler
from app.engine.errors import DeliveryInFlightError, InningsCompleteError
from app.engine.innings import (
    InningsState, InningsSnapshot, InningsPhase,
    DEFAULT_TOTAL_OVERS, DEFAULT_MAX_WICKETS,
)
from app.engine.outcomes import Outcome, classify

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SwingResult:
    """Outcome of a swing/timeout call. outcome is None when the call was a no-op."""
    outcome: Optional[Outcome]
    state: InningsSnapshot

    @property
    def resolved(self) -> bool:
        return self.outcome is not None


class InningsController:
    """
    Single-innings timing game.

    `now` arguments are milliseconds on whatever monotonic clock the host
    uses; the controller never reads a clock itself.
    """

    def __init__(
        self,
        total_overs: int = DEFAULT_TOTAL_OVERS,
        max_wickets: int = DEFAULT_MAX_WICKETS,
        rng: Callable[[], float] = random.random,
    ):
        self._rng = rng
        self.state = InningsState(total_overs=total_overs, max_wickets=max_wickets)
        self.scheduler = DeliveryScheduler(rng=rng)

    @property
    def phase(self) -> InningsPhase:
        return self.state.phase

    def snapshot(self) -> InningsSnapshot:
        return self.state.snapshot(delivery_in_flight=self.scheduler.current_delivery() is not None)

    def current_delivery(self) -> Optional[Delivery]:
        return self.scheduler.current_delivery()

    def configure(self, total_overs: int, max_wickets: int) -> InningsSnapshot:
        self.state.configure(total_overs, max_wickets)
        logger.info("Innings configured: %d overs, %d wickets", total_overs, max_wickets)
        return self.snapshot()

    def request_delivery(self, now: float) -> Delivery:
        if self.state.phase == InningsPhase.COMPLETE:
            raise InningsCompleteError(f"Innings complete: {self.snapshot().summary()}")
        if self.scheduler.current_delivery() is not None:
            raise DeliveryInFlightError("A delivery is already in flight")

        delivery = self.scheduler.request_delivery(now)
        self.state.started = True
        return delivery

    def register_swing(self, now: float) -> SwingResult:
        """
        Resolve the active delivery against a swing at `now`.

        A swing with nothing to hit (no delivery, already swung, innings not
        in progress) is an expected race with the timeout and is ignored.
        """
        if not self._can_resolve():
            logger.debug("Swing at %.1f ignored", now)
            return SwingResult(outcome=None, state=self.snapshot())

        diff_ms = self.scheduler.register_swing_attempt(now)
        return self._resolve(diff_ms)

    def resolve_timeout(self, now: float) -> SwingResult:
        """Resolve an unswung delivery whose travel time has elapsed"""
        if not self._can_resolve() or not self.scheduler.has_timed_out(now):
            logger.debug("Timeout check at %.1f ignored", now)
            return SwingResult(outcome=None, state=self.snapshot())

        self.scheduler.current_delivery().swung = True
        return self._resolve(math.inf)

    def reset(self) -> InningsSnapshot:
        """Back to NOT_STARTED; an in-flight delivery is discarded unscored"""
        self.scheduler.clear()
        self.state.reset()
        logger.info("Innings reset")
        return self.snapshot()

    def _can_resolve(self) -> bool:
        delivery = self.scheduler.current_delivery()
        return (
            self.state.phase == InningsPhase.IN_PROGRESS
            and delivery is not None
            and not delivery.swung
        )

    def _resolve(self, diff_ms: float) -> SwingResult:
        outcome = classify(diff_ms, self._rng)
        self.state.record_ball(
            runs=outcome.runs,
            is_wicket=outcome.is_wicket,
            label=outcome.label,
            commentary=outcome.commentary,
        )
        self.scheduler.clear()

        snapshot = self.snapshot()
        logger.info(
            "Ball %d: %s (diff %s ms) - %d/%d",
            snapshot.balls_bowled, outcome.label,
            "inf" if math.isinf(diff_ms) else f"{diff_ms:.0f}",
            snapshot.score, snapshot.wickets,
        )
        if snapshot.is_complete:
            logger.info("Innings complete: %s", snapshot.summary())
        return SwingResult(outcome=outcome, state=snapshot)
