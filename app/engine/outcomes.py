"""
Timing outcome classification.

Maps the absolute timing error of a swing (ms between the swing and the ball
reaching the bat) onto a scoring band. Anything outside the last scoring band
is a big mistime: 70% of those are out, the rest are dot balls.
"""
import math
import random
from dataclasses import dataclass
from typing import Callable, Optional

# Probability that a big mistime (or no swing at all) costs a wicket
MISTIME_WICKET_PROBABILITY = 0.7


@dataclass(frozen=True)
class OutcomeBand:
    """One row of the timing table. Upper bound is inclusive."""
    max_diff_ms: float
    label: str
    runs: int
    commentary: str


@dataclass(frozen=True)
class Outcome:
    """Result of a single resolved delivery"""
    label: str
    runs: int = 0
    is_wicket: bool = False
    commentary: str = ""

    @property
    def is_boundary(self) -> bool:
        return self.runs in (4, 6)

    @property
    def tone(self) -> str:
        """Coarse result category, used by renderers for colouring"""
        if self.is_wicket:
            return "wicket"
        if self.is_boundary:
            return "boundary"
        if self.runs > 0:
            return "runs"
        return "dot"

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "runs": self.runs,
            "is_wicket": self.is_wicket,
            "commentary": self.commentary,
            "tone": self.tone,
        }


# Ascending by max_diff_ms; first match wins
OUTCOME_BANDS = (
    OutcomeBand(45, "six", 6, "SIX! Timed to perfection"),
    OutcomeBand(95, "four", 4, "FOUR! Crunched through the gap"),
    OutcomeBand(160, "two", 2, "2 runs – well placed"),
    OutcomeBand(230, "single", 1, "Single taken"),
)

WICKET = Outcome(label="wicket", runs=0, is_wicket=True, commentary="WICKET! Big edge, taken")
DOT_BALL = Outcome(label="dot", runs=0, is_wicket=False, commentary="DOT ball – beaten!")


def find_band(diff_ms: float) -> Optional[OutcomeBand]:
    """Return the tightest scoring band containing diff_ms, or None for a mistime"""
    for band in OUTCOME_BANDS:
        if diff_ms <= band.max_diff_ms:
            return band
    return None


def classify(diff_ms: float, rng: Callable[[], float] = random.random) -> Outcome:
    """
    Classify a timing error into an outcome.

    diff_ms may be math.inf (delivery left unswung). rng is only consulted for
    mistimes, exactly once.
    """
    if math.isnan(diff_ms) or diff_ms < 0:
        raise ValueError(f"Timing diff must be a non-negative number, got {diff_ms}")

    band = find_band(diff_ms)
    if band is not None:
        return Outcome(label=band.label, runs=band.runs, commentary=band.commentary)

    if rng() < MISTIME_WICKET_PROBABILITY:
        return WICKET
    return DOT_BALL
