"""Stage and intervention classification for lock-in scores."""

from typing import Optional

from .config import InterventionThresholdsConfig, StageThresholdsConfig, get_config
from .schema import InterventionWindow, Stage


class LockInClassifier:
    """Maps a score to a development stage and an intervention window.

    Bands are inclusive on their upper bound and evaluated in ascending
    order; the first band the score fits in wins. The score is classified
    as given, without clamping.
    """

    def __init__(
        self,
        stage_thresholds: Optional[StageThresholdsConfig] = None,
        intervention_thresholds: Optional[InterventionThresholdsConfig] = None,
    ):
        cfg = get_config()
        stages = stage_thresholds or cfg.stage_thresholds
        interventions = intervention_thresholds or cfg.intervention_thresholds

        self.stage_bands: list[tuple[int, Stage]] = [
            (stages.early_research_max, Stage.EARLY_RESEARCH),
            (stages.early_commercialization_max, Stage.EARLY_COMMERCIALIZATION),
            (stages.scaling_max, Stage.SCALING),
            (stages.infrastructure_building_max, Stage.INFRASTRUCTURE_BUILDING),
        ]
        self.intervention_bands: list[tuple[int, InterventionWindow]] = [
            (interventions.monitor_max, InterventionWindow.MONITOR),
            (interventions.act_soon_max, InterventionWindow.ACT_SOON),
        ]

    def classify_stage(self, score: int) -> Stage:
        for upper, stage in self.stage_bands:
            if score <= upper:
                return stage
        return Stage.LOCK_IN

    def classify_intervention(self, score: int) -> InterventionWindow:
        for upper, window in self.intervention_bands:
            if score <= upper:
                return window
        return InterventionWindow.ACT_NOW
