"""
Tests for the command line interface.
"""
import random

from click.testing import CliRunner

import cli as cli_module
from app.engine.innings_controller import InningsController
from app.engine.errors import InningsCompleteError


class FixedErrorRandom:
    """Bot rng whose timing error is always `error_ms`"""

    def __init__(self, error_ms: float):
        self.error_ms = error_ms

    def gauss(self, mu, sigma):
        return mu + self.error_ms


class BrokenController(InningsController):
    def request_delivery(self, now):
        raise InningsCompleteError("Innings complete: 0/0 in 1 ov")


class TestBandsCommand:

    def test_lists_every_band(self):
        result = CliRunner().invoke(cli_module.cli, ["bands"])
        assert result.exit_code == 0
        for label in ("six", "four", "two", "single", "mistimed"):
            assert label in result.output


class TestBotInnings:

    def test_bot_plays_innings_to_completion(self):
        rng = random.Random(11)
        controller = InningsController(total_overs=2, max_wickets=3, rng=rng.random)
        results = list(cli_module.simulate_bot_innings(controller, rng, jitter_ms=120.0))

        assert all(result.resolved for result in results)
        assert controller.snapshot().is_complete
        assert len(results) == controller.snapshot().balls_bowled

    def test_perfect_bot_hits_sixes(self):
        rng = random.Random(1)
        controller = InningsController(total_overs=1, max_wickets=1, rng=rng.random)
        results = list(cli_module.simulate_bot_innings(controller, rng, jitter_ms=0.0))
        assert [result.outcome.label for result in results] == ["six"] * 6

    def test_late_swings_are_scored_as_swings(self, scripted_rng):
        controller = InningsController(total_overs=1, max_wickets=1, rng=scripted_rng(default=0.5))
        results = list(cli_module.simulate_bot_innings(controller, FixedErrorRandom(100.0), jitter_ms=120.0))

        assert [result.outcome.label for result in results] == ["two"] * 6
        assert controller.snapshot().score == 12

    def test_swing_before_release_times_out(self, scripted_rng):
        # travel 1800ms, mistime draw 0.5 -> out
        controller = InningsController(total_overs=1, max_wickets=1, rng=scripted_rng(default=0.5))
        results = list(cli_module.simulate_bot_innings(controller, FixedErrorRandom(-5000.0), jitter_ms=120.0))

        assert len(results) == 1
        assert results[0].outcome.is_wicket

    def test_benchmark_command(self):
        result = CliRunner().invoke(
            cli_module.cli, ["benchmark", "--innings", "5", "--seed", "42"],
        )
        assert result.exit_code == 0, result.output
        assert "Average Score" in result.output
        assert "Outcome Distribution" in result.output

    def test_benchmark_engine_error_exits_non_zero(self, monkeypatch):
        monkeypatch.setattr(cli_module, "InningsController", BrokenController)
        result = CliRunner().invoke(cli_module.cli, ["benchmark", "--innings", "2", "--seed", "1"])
        assert result.exit_code == 1
        assert "Error: Innings complete" in result.output

    def test_benchmark_rejects_zero_innings(self):
        result = CliRunner().invoke(cli_module.cli, ["benchmark", "--innings", "0"])
        assert result.exit_code != 0


class TestPlayCommand:

    def test_engine_error_exits_non_zero(self, monkeypatch):
        monkeypatch.setattr(cli_module.time, "sleep", lambda seconds: None)
        monkeypatch.setattr(cli_module, "_drain_stdin", lambda: None)
        monkeypatch.setattr(cli_module, "InningsController", BrokenController)

        result = CliRunner().invoke(cli_module.cli, ["play", "--overs", "1", "--wickets", "1"])
        assert result.exit_code == 1
        assert "Error: Innings complete" in result.output

    def test_unswung_innings_runs_to_completion(self, monkeypatch):
        """With no key presses every ball times out until the innings ends"""
        monkeypatch.setattr(cli_module.time, "sleep", lambda seconds: None)
        monkeypatch.setattr(cli_module, "_drain_stdin", lambda: None)
        monkeypatch.setattr(cli_module, "_wait_for_enter", lambda timeout_s: False)

        result = CliRunner().invoke(cli_module.cli, ["play", "--overs", "1", "--wickets", "1"])
        assert result.exit_code == 0, result.output
        assert "Innings Complete" in result.output
