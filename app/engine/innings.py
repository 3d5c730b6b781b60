"""
Innings state: score, wickets, balls bowled and the innings configuration.
"""
import enum
from dataclasses import dataclass
from typing import Optional

from app.engine.errors import ConfigurationLockedError, InvalidConfigurationError

BALLS_PER_OVER = 6

# Choices offered by hosts; the engine itself accepts any positive int
OVERS_CHOICES = (1, 2, 3, 4, 5)
WICKETS_CHOICES = (1, 2, 3, 5, 10)

DEFAULT_TOTAL_OVERS = 2
DEFAULT_MAX_WICKETS = 3


class InningsPhase(enum.Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


def validate_setting(name: str, value) -> int:
    # bool is an int subclass but never a sensible setting
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidConfigurationError(f"{name} must be an integer >= 1, got {value!r}")
    return value


@dataclass(frozen=True)
class InningsSnapshot:
    """Read-only view of an innings for renderers"""
    score: int
    wickets: int
    balls_bowled: int
    total_balls: int
    total_overs: int
    balls_per_over: int
    max_wickets: int
    phase: InningsPhase
    last_outcome: Optional[str]
    last_commentary: Optional[str]
    delivery_in_flight: bool

    @property
    def overs_display(self) -> str:
        return f"{self.balls_bowled // self.balls_per_over}.{self.balls_bowled % self.balls_per_over}"

    @property
    def current_over(self) -> int:
        return self.balls_bowled // self.balls_per_over

    @property
    def ball_in_over(self) -> int:
        """1-based number of the next ball within its over"""
        return self.balls_bowled % self.balls_per_over + 1

    @property
    def balls_left(self) -> int:
        return self.total_balls - self.balls_bowled

    @property
    def is_complete(self) -> bool:
        return self.phase == InningsPhase.COMPLETE

    def summary(self) -> str:
        return f"{self.score}/{self.wickets} in {self.total_overs} ov"

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "wickets": self.wickets,
            "balls_bowled": self.balls_bowled,
            "total_balls": self.total_balls,
            "total_overs": self.total_overs,
            "balls_per_over": self.balls_per_over,
            "max_wickets": self.max_wickets,
            "phase": self.phase.value,
            "last_outcome": self.last_outcome,
            "last_commentary": self.last_commentary,
            "delivery_in_flight": self.delivery_in_flight,
            "overs_display": self.overs_display,
            "current_over": self.current_over,
            "ball_in_over": self.ball_in_over,
            "balls_left": self.balls_left,
        }


@dataclass
class InningsState:
    """Current state of an innings"""
    total_overs: int = DEFAULT_TOTAL_OVERS
    max_wickets: int = DEFAULT_MAX_WICKETS
    balls_per_over: int = BALLS_PER_OVER

    score: int = 0
    wickets: int = 0
    balls_bowled: int = 0
    last_outcome: Optional[str] = None
    last_commentary: Optional[str] = None

    # Set by the first successful delivery request
    started: bool = False

    def __post_init__(self):
        validate_setting("total_overs", self.total_overs)
        validate_setting("max_wickets", self.max_wickets)

    @property
    def total_balls(self) -> int:
        return self.total_overs * self.balls_per_over

    @property
    def is_innings_complete(self) -> bool:
        return self.wickets >= self.max_wickets or self.balls_bowled >= self.total_balls

    @property
    def phase(self) -> InningsPhase:
        if self.is_innings_complete:
            return InningsPhase.COMPLETE
        if self.started:
            return InningsPhase.IN_PROGRESS
        return InningsPhase.NOT_STARTED

    def configure(self, total_overs: int, max_wickets: int) -> None:
        if self.balls_bowled > 0:
            raise ConfigurationLockedError("Overs and wickets are locked once play has started")
        self.total_overs = validate_setting("total_overs", total_overs)
        self.max_wickets = validate_setting("max_wickets", max_wickets)

    def record_ball(self, runs: int, is_wicket: bool, label: str, commentary: str) -> None:
        """Apply one resolved delivery. Called exactly once per delivery."""
        if self.is_innings_complete:
            raise ValueError("Cannot record a ball on a completed innings")
        if runs > 0:
            self.score += runs
        if is_wicket:
            self.wickets += 1
        self.balls_bowled += 1
        self.last_outcome = label
        self.last_commentary = commentary

    def reset(self) -> None:
        self.score = 0
        self.wickets = 0
        self.balls_bowled = 0
        self.last_outcome = None
        self.last_commentary = None
        self.started = False

    def snapshot(self, delivery_in_flight: bool = False) -> InningsSnapshot:
        return InningsSnapshot(
            score=self.score,
            wickets=self.wickets,
            balls_bowled=self.balls_bowled,
            total_balls=self.total_balls,
            total_overs=self.total_overs,
            balls_per_over=self.balls_per_over,
            max_wickets=self.max_wickets,
            phase=self.phase,
            last_outcome=self.last_outcome,
            last_commentary=self.last_commentary,
            delivery_in_flight=delivery_in_flight,
        )
