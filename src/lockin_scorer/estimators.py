"""Range and lock-in time estimators for the weighted-7 strategy."""

from typing import Optional

from .config import get_config
from .normalizer import RATING_MAX, RATING_MIN, round_half_up
from .schema import HistoricalMatch, ScoreRange

UNKNOWN_LOCKIN = "Unknown"
PASSED_LOCKIN = "Passed"


def _clamp(value: int) -> int:
    return max(RATING_MIN, min(RATING_MAX, value))


class UncertaintyBandEstimator:
    """Derives a symmetric range around a score from the uncertainty rating.

    At uncertainty=100 the half-width is ``max_band_fraction`` of the
    score. Both bounds are clamped into [0, 100] whatever the score is.
    """

    def __init__(self, max_band_fraction: Optional[float] = None):
        if max_band_fraction is None:
            max_band_fraction = get_config().uncertainty.max_band_fraction
        self.max_band_fraction = max_band_fraction

    def estimate(self, score: int, uncertainty: int) -> ScoreRange:
        factor = uncertainty / 100.0 * self.max_band_fraction
        # Out-of-range scores or ratings can make the product negative
        half_width = abs(round_half_up(score * factor))
        return ScoreRange(
            lower=_clamp(score - half_width),
            upper=_clamp(score + half_width),
        )


class LockInTimeEstimator:
    """Rough years-until-lock-in from the matched historical point.

    Below the matched score we assume ``year_offset`` more years to reach
    it; at or above it we assume it was passed ``year_offset`` years ago.
    """

    def __init__(self, year_offset: Optional[int] = None):
        if year_offset is None:
            year_offset = get_config().lockin_time.year_offset
        self.year_offset = year_offset

    def years_to_match(self, match: HistoricalMatch, score: int, current_year: int) -> Optional[int]:
        if not match.found:
            return None
        offset = self.year_offset if score < match.score else -self.year_offset
        return match.year - current_year + offset

    def estimate(self, match: HistoricalMatch, score: int, current_year: int) -> str:
        years = self.years_to_match(match, score, current_year)
        if years is None:
            return UNKNOWN_LOCKIN
        if years > 0:
            return f"~{years} years"
        return PASSED_LOCKIN
