"""Shared test fixtures for timing game tests."""
import pytest

from app.engine.innings_controller import InningsController


class ScriptedRandom:
    """Callable rng returning scripted values in order, then `default` forever."""

    def __init__(self, *values: float, default: float = 0.5):
        self.values = list(values)
        self.default = default
        self.calls = 0

    def __call__(self) -> float:
        self.calls += 1
        if self.values:
            return self.values.pop(0)
        return self.default


@pytest.fixture
def scripted_rng():
    return ScriptedRandom


@pytest.fixture
def controller() -> InningsController:
    """2 overs, 3 wickets, 1800ms deliveries, mistimes always out"""
    return InningsController(total_overs=2, max_wickets=3, rng=ScriptedRandom(default=0.5))
