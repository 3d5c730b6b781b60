"""
Tests for timing outcome classification.
"""
import math

import pytest

from app.engine.outcomes import classify, find_band, OUTCOME_BANDS, MISTIME_WICKET_PROBABILITY


def never_called():
    raise AssertionError("rng should not be consulted for scoring bands")


class TestScoringBands:
    """Timing errors inside a band score that band's runs without touching rng"""

    @pytest.mark.parametrize("diff_ms,label,runs", [
        (0, "six", 6),
        (12.5, "six", 6),
        (45, "six", 6),
        (45.0000001, "four", 4),
        (95, "four", 4),
        (95.5, "two", 2),
        (160, "two", 2),
        (160.1, "single", 1),
        (230, "single", 1),
    ])
    def test_band_lookup(self, diff_ms, label, runs):
        outcome = classify(diff_ms, never_called)
        assert outcome.label == label
        assert outcome.runs == runs
        assert not outcome.is_wicket

    def test_boundary_ties_go_to_tighter_band(self):
        """Exact band edges belong to the better band"""
        for band in OUTCOME_BANDS:
            assert find_band(band.max_diff_ms) is band

    def test_bands_are_ascending(self):
        bounds = [band.max_diff_ms for band in OUTCOME_BANDS]
        assert bounds == sorted(bounds)

    def test_commentary_and_tone(self):
        six = classify(10, never_called)
        assert six.commentary == "SIX! Timed to perfection"
        assert six.tone == "boundary"
        assert classify(200, never_called).tone == "runs"


class TestMistimes:
    """Beyond 230ms the rng decides between wicket and dot ball"""

    def test_just_under_threshold_is_wicket(self):
        outcome = classify(231, lambda: 0.69)
        assert outcome.is_wicket
        assert outcome.label == "wicket"
        assert outcome.runs == 0
        assert outcome.tone == "wicket"

    def test_threshold_is_dot_ball(self):
        outcome = classify(231, lambda: MISTIME_WICKET_PROBABILITY)
        assert not outcome.is_wicket
        assert outcome.label == "dot"
        assert outcome.runs == 0
        assert outcome.tone == "dot"

    def test_infinite_diff_is_mistime(self):
        assert classify(math.inf, lambda: 0.0).is_wicket
        assert classify(math.inf, lambda: 0.99).label == "dot"

    def test_rng_drawn_exactly_once(self, scripted_rng):
        rng = scripted_rng(0.9)
        classify(500, rng)
        assert rng.calls == 1

    @pytest.mark.parametrize("bad", [-1, float("nan")])
    def test_rejects_invalid_diff(self, bad):
        with pytest.raises(ValueError):
            classify(bad, lambda: 0.5)
