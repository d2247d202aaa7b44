"""Scorer - Phase 2 of the Scoring Engine.

Aggregates a normalized DimensionSet into a single lock-in risk score.
Two strategies exist, one per dimension schema; both are pure functions
of their input and neither clamps its result.
"""

from dataclasses import dataclass
from typing import Optional, Union

from .config import ScoringWeightsConfig, get_config
from .normalizer import round_half_up
from .schema import DimensionSet, LockInDimensions, ScoringStrategy, WeightedDimensions


@dataclass(frozen=True)
class ScoringWeights:
    """Weights for the weighted-7 strategy."""
    animals: float = 0.30  # Population scale
    suffering: float = 0.20
    can_they_feel: float = 0.15  # Sentience
    growth: float = 0.20  # Momentum
    support: float = 0.10  # Applied to the advocacy gap, 100 - support
    path_dependence: float = 0.05

    @classmethod
    def from_config(cls, cfg: ScoringWeightsConfig) -> "ScoringWeights":
        return cls(**cfg.model_dump())


class WeightedScorer:
    """Fixed-weight sum over the seven-dimension schema.

    Support for oversight contributes inversely: more support means less
    risk. Uncertainty is not scored; it only widens the range.
    """

    strategy = ScoringStrategy.WEIGHTED_7

    def __init__(self, weights: Optional[ScoringWeights] = None):
        """Initialize scorer with optional custom weights."""
        self.weights = weights or ScoringWeights.from_config(get_config().scoring_weights)

    def score(self, dimensions: WeightedDimensions) -> int:
        w = self.weights
        # Ratings are normalized to 0-1 and rescaled so results match the
        # dashboard's historical output bit for bit.
        animals = dimensions.animals / 100.0
        suffering = dimensions.suffering / 100.0
        can_they_feel = dimensions.can_they_feel / 100.0
        growth = dimensions.growth / 100.0
        support = dimensions.support / 100.0
        path_dependence = dimensions.path_dependence / 100.0

        return round_half_up(
            w.animals * animals * 100
            + w.suffering * suffering * 100
            + w.can_they_feel * can_they_feel * 100
            + w.growth * growth * 100
            + w.support * (100 - support * 100)
            + w.path_dependence * path_dependence * 100
        )


class EqualWeightScorer:
    """Arithmetic mean over the nine-dimension entrenchment schema."""

    strategy = ScoringStrategy.EQUAL_WEIGHT_9

    def score(self, dimensions: LockInDimensions) -> int:
        values = list(dimensions.as_dict().values())
        return round_half_up(sum(values) / len(values))


Scorer = Union[WeightedScorer, EqualWeightScorer]


def get_scorer(strategy: ScoringStrategy, weights: Optional[ScoringWeights] = None) -> Scorer:
    """Return the scorer implementing a strategy."""
    if strategy == ScoringStrategy.WEIGHTED_7:
        return WeightedScorer(weights)
    return EqualWeightScorer()


def score_dimensions(dimensions: DimensionSet, weights: Optional[ScoringWeights] = None) -> int:
    """Score a DimensionSet with the strategy matching its schema."""
    return get_scorer(dimensions.strategy, weights).score(dimensions)
