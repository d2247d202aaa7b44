"""Tests for the uncertainty band and lock-in time estimators."""

import pytest

from lockin_scorer.estimators import LockInTimeEstimator, UncertaintyBandEstimator
from lockin_scorer.schema import HistoricalMatch


class TestUncertaintyBandEstimator:
    """Tests for the score range."""

    def test_no_uncertainty(self):
        band = UncertaintyBandEstimator().estimate(65, 0)
        assert (band.lower, band.upper) == (65, 65)

    def test_partial_uncertainty(self):
        # factor = 0.4 * 0.5 = 0.2, half-width 13
        band = UncertaintyBandEstimator().estimate(65, 40)
        assert (band.lower, band.upper) == (52, 78)

    def test_full_uncertainty_halves_score(self):
        band = UncertaintyBandEstimator().estimate(60, 100)
        assert (band.lower, band.upper) == (30, 90)

    def test_upper_bound_clamped(self):
        band = UncertaintyBandEstimator().estimate(90, 100)
        assert (band.lower, band.upper) == (45, 100)

    @pytest.mark.parametrize("score", [0, 1, 10, 33, 50, 67, 99, 100])
    @pytest.mark.parametrize("uncertainty", [0, 25, 50, 75, 100])
    def test_bounds_bracket_score(self, score, uncertainty):
        band = UncertaintyBandEstimator().estimate(score, uncertainty)
        assert 0 <= band.lower <= score <= band.upper <= 100

    @pytest.mark.parametrize("score", [-40, -1, 101, 150, 310])
    @pytest.mark.parametrize("uncertainty", [-50, 0, 100, 300])
    def test_bounds_clamped_for_out_of_range_scores(self, score, uncertainty):
        band = UncertaintyBandEstimator().estimate(score, uncertainty)
        assert 0 <= band.lower <= band.upper <= 100

    def test_score_above_scale_collapses_to_top(self):
        band = UncertaintyBandEstimator().estimate(310, 100)
        assert (band.lower, band.upper) == (100, 100)

    def test_negative_score_collapses_to_bottom(self):
        band = UncertaintyBandEstimator().estimate(-40, 100)
        assert (band.lower, band.upper) == (0, 0)

    def test_custom_band_fraction(self):
        band = UncertaintyBandEstimator(max_band_fraction=0.1).estimate(50, 100)
        assert (band.lower, band.upper) == (45, 55)


class TestLockInTimeEstimator:
    """Tests for the years-until-lock-in heuristic."""

    def test_below_match_adds_offset(self):
        match = HistoricalMatch(year=2030, score=60, stage="Scaling")
        assert LockInTimeEstimator().estimate(match, 50, current_year=2025) == "~10 years"

    def test_at_match_subtracts_offset(self):
        match = HistoricalMatch(year=2030, score=60, stage="Scaling")
        assert LockInTimeEstimator().estimate(match, 60, current_year=2025) == "Passed"

    def test_above_match_subtracts_offset(self):
        match = HistoricalMatch(year=2040, score=60, stage="Scaling")
        assert LockInTimeEstimator().estimate(match, 65, current_year=2025) == "~10 years"

    def test_historical_match_passed(self):
        match = HistoricalMatch(year=1950, score=60, stage="Scaling")
        assert LockInTimeEstimator().estimate(match, 55, current_year=2025) == "Passed"

    def test_one_year_left(self):
        match = HistoricalMatch(year=2021, score=60, stage="Scaling")
        assert LockInTimeEstimator().estimate(match, 40, current_year=2025) == "~1 years"

    def test_no_match(self):
        assert LockInTimeEstimator().estimate(HistoricalMatch.empty(), 50, current_year=2025) == "Unknown"

    def test_years_to_match(self):
        match = HistoricalMatch(year=1955, score=72, stage="Infrastructure Building")
        assert LockInTimeEstimator().years_to_match(match, 70, current_year=2025) == -65

    def test_custom_offset(self):
        match = HistoricalMatch(year=2030, score=60, stage="Scaling")
        assert LockInTimeEstimator(year_offset=0).estimate(match, 50, current_year=2025) == "~5 years"
