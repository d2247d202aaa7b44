"""Explainer - final phase of the Scoring Engine.

Assembles scores, labels and the historical match into the assessment
result, with a one-line summary and illustrative key metrics.

The key metrics are presentation aids scaled from the raw ratings. They
are not validated estimates and never feed back into the score.
"""

from typing import Optional

from .config import KeyMetricsConfig, get_config
from .normalizer import round_half_up
from .schema import (
    AssessmentResult,
    DimensionSet,
    HistoricalMatch,
    InterventionWindow,
    KeyMetrics,
    ScoreRange,
    Stage,
    WeightedDimensions,
)


def _format_number(value: float) -> str:
    """Format like a JavaScript number: 250.0 -> '250', 2.5 -> '2.5'."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


class ResultAssembler:
    """Builds AssessmentResult objects."""

    def __init__(self, metrics_config: Optional[KeyMetricsConfig] = None):
        self.metrics_config = metrics_config or get_config().key_metrics

    def assemble(
        self,
        dimensions: DimensionSet,
        score: int,
        stage: Stage,
        intervention_window: InterventionWindow,
        historical_match: HistoricalMatch,
        score_range: Optional[ScoreRange] = None,
        time_until_lockin: Optional[str] = None,
    ) -> AssessmentResult:
        key_metrics = None
        if isinstance(dimensions, WeightedDimensions):
            key_metrics = self.build_key_metrics(dimensions, time_until_lockin)

        return AssessmentResult(
            score=score,
            range=score_range,
            stage=stage,
            intervention_window=intervention_window,
            time_until_lockin=time_until_lockin,
            historical_match=historical_match,
            key_metrics=key_metrics,
            message=self.build_message(score, stage, intervention_window, score_range),
            dimensions=dimensions.as_dict(),
            strategy=dimensions.strategy,
        )

    def build_key_metrics(
        self,
        dimensions: WeightedDimensions,
        time_until_lockin: Optional[str],
    ) -> KeyMetrics:
        animals = dimensions.animals / 100.0
        suffering = dimensions.suffering / 100.0

        total_animals = round_half_up(animals * self.metrics_config.animals_scale)
        total_suffering = round_half_up(suffering * animals * self.metrics_config.suffering_scale) / 10

        return KeyMetrics(
            animals_affected=f"{total_animals}B animals/year",
            suffering_hours=f"{_format_number(total_suffering)}T hours",
            advocacy_orgs=max(0, 100 - dimensions.support),
            expected_lock_in=time_until_lockin or "Unknown",
        )

    @staticmethod
    def build_message(
        score: int,
        stage: Stage,
        intervention_window: InterventionWindow,
        score_range: Optional[ScoreRange] = None,
    ) -> str:
        if score_range is not None:
            return (
                f"Current score {score} ({score_range.lower}-{score_range.upper}) "
                f"indicates {stage.value} phase with {intervention_window.value} window"
            )
        return f"Current score {score} indicates {stage.value} phase with {intervention_window.value} window"
