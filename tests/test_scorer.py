"""Tests for the score aggregation strategies."""

import pytest

from lockin_scorer.normalizer import DimensionNormalizer
from lockin_scorer.schema import LockInDimensions, ScoringStrategy, WeightedDimensions
from lockin_scorer.scorer import (
    EqualWeightScorer,
    ScoringWeights,
    WeightedScorer,
    get_scorer,
    score_dimensions,
)


def weighted(**ratings) -> WeightedDimensions:
    return WeightedDimensions.model_validate(ratings)


def lock_in(**ratings) -> LockInDimensions:
    return LockInDimensions.model_validate(ratings)


class TestWeightedScorer:
    """Tests for the fixed-weight seven-dimension strategy."""

    def test_reference_ratings(self, weighted_inputs):
        dims = DimensionNormalizer().normalize(weighted_inputs)
        assert WeightedScorer().score(dims) == 65

    def test_all_zero_scores_advocacy_gap_only(self):
        # No support at all leaves the full 10-point advocacy gap
        assert WeightedScorer().score(weighted()) == 10

    def test_maximum_risk(self):
        dims = weighted(animals=100, suffering=100, canTheyFeel=100, growth=100, support=0, pathDependence=100)
        assert WeightedScorer().score(dims) == 100

    def test_full_support_minimum(self):
        assert WeightedScorer().score(weighted(support=100)) == 0

    def test_uncertainty_does_not_affect_score(self):
        base = weighted(animals=50, suffering=50)
        uncertain = weighted(animals=50, suffering=50, uncertainty=100)
        assert WeightedScorer().score(base) == WeightedScorer().score(uncertain)

    def test_default_weights_sum_to_one(self):
        w = ScoringWeights()
        total = w.animals + w.suffering + w.can_they_feel + w.growth + w.support + w.path_dependence
        assert total == pytest.approx(1.0)

    def test_custom_weights(self):
        weights = ScoringWeights(animals=1.0, suffering=0, can_they_feel=0, growth=0, support=0, path_dependence=0)
        assert WeightedScorer(weights).score(weighted(animals=37, support=0)) == 37

    def test_score_not_clamped(self):
        dims = weighted(animals=1000)
        assert WeightedScorer().score(dims) == 310

    @pytest.mark.parametrize("dimension", ["animals", "suffering", "canTheyFeel", "growth", "pathDependence"])
    def test_monotonic_increasing(self, dimension):
        scorer = WeightedScorer()
        base = {"uncertainty": 50, "animals": 50, "canTheyFeel": 50, "suffering": 50,
                "growth": 50, "support": 50, "pathDependence": 50}
        scores = []
        for value in range(0, 101, 5):
            scores.append(scorer.score(weighted(**{**base, dimension: value})))
        assert scores == sorted(scores)

    def test_support_monotonic_decreasing(self):
        scorer = WeightedScorer()
        base = {"animals": 50, "canTheyFeel": 50, "suffering": 50, "growth": 50, "pathDependence": 50}
        scores = [scorer.score(weighted(**base, support=value)) for value in range(0, 101, 5)]
        assert scores == sorted(scores, reverse=True)


class TestEqualWeightScorer:
    """Tests for the nine-dimension mean strategy."""

    def test_all_fifty(self):
        dims = lock_in(**{key: 50 for key in LockInDimensions.dimension_keys()})
        assert EqualWeightScorer().score(dims) == 50

    def test_rounded_mean(self):
        # 575 / 9 = 63.9
        dims = lock_in(
            regulatoryCapture=65, infrastructureHardening=70, supplyChainStandardization=60,
            corporateConsolidation=75, pathDependency=65, aiAutomationEmbedding=45,
            internationalExpansion=70, slaughterInertia=60, breedingLockIn=65,
        )
        assert EqualWeightScorer().score(dims) == 64

    def test_missing_dimensions_pull_mean_down(self):
        # 90 / 9 = 10
        assert EqualWeightScorer().score(lock_in(regulatoryCapture=90)) == 10

    def test_all_zero(self):
        assert EqualWeightScorer().score(lock_in()) == 0


class TestStrategySelection:
    """Tests for picking a scorer by strategy."""

    def test_get_scorer(self):
        assert isinstance(get_scorer(ScoringStrategy.WEIGHTED_7), WeightedScorer)
        assert isinstance(get_scorer(ScoringStrategy.EQUAL_WEIGHT_9), EqualWeightScorer)

    def test_score_dimensions_follows_schema(self):
        assert score_dimensions(weighted()) == 10
        assert score_dimensions(lock_in()) == 0

    def test_score_dimensions_uses_given_weights(self):
        weights = ScoringWeights(animals=1.0, suffering=0, can_they_feel=0, growth=0, support=0, path_dependence=0)
        assert score_dimensions(weighted(animals=40, suffering=90), weights) == 40
