"""Assessment Engine - orchestrates the scoring pipeline.

raw ratings -> normalize -> score -> (range, stage/intervention,
historical match -> lock-in time) -> assemble.
"""

from datetime import date
from typing import Any, Mapping, Optional, Union

from .app_logging import get_logger
from .classifier import LockInClassifier
from .config import ScorerConfig, get_config
from .estimators import LockInTimeEstimator, UncertaintyBandEstimator
from .exceptions import DimensionSchemaError
from .explainer import ResultAssembler
from .matcher import HistoricalMatcher
from .normalizer import DimensionNormalizer
from .schema import AssessmentResult, DimensionSet, ScoringStrategy, WeightedDimensions
from .scorer import ScoringWeights, score_dimensions
from .trajectories import TrajectoryStore

logger = get_logger("engine")


class AssessmentEngine:
    """Produces lock-in assessments from dimension ratings.

    The engine holds no per-request state; one instance can serve any
    number of concurrent assessments.
    """

    def __init__(
        self,
        store: Optional[TrajectoryStore] = None,
        config: Optional[ScorerConfig] = None,
    ):
        cfg = config or get_config()
        self.store = store or TrajectoryStore.from_config(cfg)
        self.normalizer = DimensionNormalizer(clamp_inputs=cfg.normalizer.clamp_inputs)
        self.weights = ScoringWeights.from_config(cfg.scoring_weights)
        self.classifier = LockInClassifier(cfg.stage_thresholds, cfg.intervention_thresholds)
        self.band_estimator = UncertaintyBandEstimator(cfg.uncertainty.max_band_fraction)
        self.time_estimator = LockInTimeEstimator(cfg.lockin_time.year_offset)
        self.matcher = HistoricalMatcher()
        self.assembler = ResultAssembler(cfg.key_metrics)

    def assess(
        self,
        raw: Union[Mapping[str, Any], DimensionSet],
        strategy: Optional[Union[ScoringStrategy, str]] = None,
        current_year: Optional[int] = None,
    ) -> AssessmentResult:
        """Assess a set of dimension ratings.

        Args:
            raw: Dimension ratings (raw mapping or an already normalized set)
            strategy: Scoring strategy; detected from the keys when omitted
            current_year: Year the lock-in time is measured from
                (default: today's year)

        Returns:
            AssessmentResult

        Raises:
            DimensionValidationError: If the ratings cannot be normalized
        """
        if isinstance(strategy, str) and not isinstance(strategy, ScoringStrategy):
            strategy = self.parse_strategy(strategy)

        if isinstance(raw, DimensionSet):
            dimensions = raw
        else:
            dimensions = self.normalizer.normalize(raw, strategy)

        score = score_dimensions(dimensions, self.weights)
        stage = self.classifier.classify_stage(score)
        window = self.classifier.classify_intervention(score)
        match = self.matcher.match(self.store.get_baseline(), score)

        score_range = None
        time_until_lockin = None
        if isinstance(dimensions, WeightedDimensions):
            if current_year is None:
                current_year = date.today().year
            score_range = self.band_estimator.estimate(score, dimensions.uncertainty)
            time_until_lockin = self.time_estimator.estimate(match, score, current_year)

        logger.debug(
            "Assessed %s dimensions: score=%d stage=%s window=%s match_year=%s",
            dimensions.strategy.value, score, stage.value, window.value, match.year,
        )

        return self.assembler.assemble(
            dimensions,
            score=score,
            stage=stage,
            intervention_window=window,
            historical_match=match,
            score_range=score_range,
            time_until_lockin=time_until_lockin,
        )

    @staticmethod
    def parse_strategy(value: str) -> ScoringStrategy:
        """Parse a strategy name, raising DimensionSchemaError if unknown."""
        try:
            return ScoringStrategy.from_string(value)
        except ValueError as e:
            raise DimensionSchemaError(str(e))
