"""Pydantic models for the Lock-in Scoring Engine.

Input schemas for dimension ratings, the historical trajectory dataset,
and output schemas for assessments. JSON keys use the camelCase names of
the dashboard API; Python attributes are snake_case.
"""

from enum import Enum
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


# =============================================================================
# Enums
# =============================================================================


class ScoringStrategy(str, Enum):
    """Named scoring strategies, one per dimension schema."""
    WEIGHTED_7 = "weighted-7"  # Fixed weights, uncertainty band, lock-in time
    EQUAL_WEIGHT_9 = "equal-weight-9"  # Flat mean of nine entrenchment dimensions

    @classmethod
    def from_string(cls, value: str) -> "ScoringStrategy":
        """Parse a strategy name (accepts 'weighted7', 'equal_weight_9', ...)."""
        key = value.lower().replace("_", "").replace("-", "").replace(" ", "")
        mapping = {
            "weighted7": cls.WEIGHTED_7,
            "weighted": cls.WEIGHTED_7,
            "equalweight9": cls.EQUAL_WEIGHT_9,
            "equalweight": cls.EQUAL_WEIGHT_9,
        }
        if key not in mapping:
            raise ValueError(f"Unknown scoring strategy: {value}")
        return mapping[key]


class Stage(str, Enum):
    """Development stage, ordered by ascending score band."""
    EARLY_RESEARCH = "Early Research"
    EARLY_COMMERCIALIZATION = "Early Commercialization"
    SCALING = "Scaling"
    INFRASTRUCTURE_BUILDING = "Infrastructure Building"
    LOCK_IN = "Lock-in/Regulatory Capture"


class InterventionWindow(str, Enum):
    """Intervention urgency, ordered by ascending score band."""
    MONITOR = "Monitor"
    ACT_SOON = "Act Soon"
    ACT_NOW = "Act Now"


class TrajectoryUncertainty(str, Enum):
    """How well documented a historical trajectory point is."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# =============================================================================
# Dimension Sets
# =============================================================================


class DimensionSet(BaseModel):
    """Base class for a complete set of dimension ratings."""
    strategy: ClassVar[ScoringStrategy]

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @classmethod
    def dimension_keys(cls) -> tuple[str, ...]:
        """Wire (camelCase) names of the dimensions in this schema."""
        return tuple(field.alias or name for name, field in cls.model_fields.items())

    @classmethod
    def accepted_keys(cls) -> dict[str, str]:
        """Map every accepted key spelling to its wire name."""
        keys = {}
        for name, field in cls.model_fields.items():
            alias = field.alias or name
            keys[name] = alias
            keys[alias] = alias
        return keys

    def as_dict(self) -> dict[str, int]:
        return self.model_dump(by_alias=True)


class WeightedDimensions(DimensionSet):
    """Seven-dimension schema scored with fixed weights."""
    strategy: ClassVar[ScoringStrategy] = ScoringStrategy.WEIGHTED_7

    uncertainty: int = 0
    animals: int = 0
    can_they_feel: int = Field(0, alias="canTheyFeel")
    suffering: int = 0
    growth: int = 0
    support: int = 0
    path_dependence: int = Field(0, alias="pathDependence")


class LockInDimensions(DimensionSet):
    """Nine-dimension entrenchment schema scored as a flat mean."""
    strategy: ClassVar[ScoringStrategy] = ScoringStrategy.EQUAL_WEIGHT_9

    regulatory_capture: int = Field(0, alias="regulatoryCapture")
    infrastructure_hardening: int = Field(0, alias="infrastructureHardening")
    supply_chain_standardization: int = Field(0, alias="supplyChainStandardization")
    corporate_consolidation: int = Field(0, alias="corporateConsolidation")
    path_dependency: int = Field(0, alias="pathDependency")
    ai_automation_embedding: int = Field(0, alias="aiAutomationEmbedding")
    international_expansion: int = Field(0, alias="internationalExpansion")
    slaughter_inertia: int = Field(0, alias="slaughterInertia")
    breeding_lock_in: int = Field(0, alias="breedingLockIn")


DIMENSION_SCHEMAS: dict[ScoringStrategy, type[DimensionSet]] = {
    ScoringStrategy.WEIGHTED_7: WeightedDimensions,
    ScoringStrategy.EQUAL_WEIGHT_9: LockInDimensions,
}


# Labels and descriptions shown next to each dimension
DIMENSION_DESCRIPTIONS: dict[str, dict[str, str]] = {
    # weighted-7
    "uncertainty": {"label": "Uncertainty", "description": "How uncertain the assessment is; widens the score range"},
    "animals": {"label": "Animals", "description": "Population scale of animals affected"},
    "canTheyFeel": {"label": "Can They Feel", "description": "Sentience of the animals involved"},
    "suffering": {"label": "Suffering", "description": "Intensity of suffering imposed by the system"},
    "growth": {"label": "Growth", "description": "Momentum of investment and adoption"},
    "support": {"label": "Support", "description": "Support for oversight and advocacy; higher support lowers risk"},
    "pathDependence": {"label": "Path Dependence", "description": "How strongly early choices constrain later ones"},
    # equal-weight-9
    "regulatoryCapture": {"label": "Regulatory Capture", "description": "How deeply the system is embedded in policy and regulation"},
    "infrastructureHardening": {"label": "Infrastructure Hardening", "description": "Physical infrastructure purpose-built for the system"},
    "supplyChainStandardization": {"label": "Supply Chain Standardization", "description": "How standardized and optimized the supply chains are"},
    "corporateConsolidation": {"label": "Corporate Consolidation", "description": "Degree of corporate control and concentration"},
    "pathDependency": {"label": "Path Dependency", "description": "How interconnected and self-reinforcing the system is"},
    "aiAutomationEmbedding": {"label": "AI/Automation Embedding", "description": "Integration of modern technology into the system"},
    "internationalExpansion": {"label": "International Expansion", "description": "Global spread and harmonization of the system"},
    "slaughterInertia": {"label": "Slaughter/Processing Inertia", "description": "Sunk costs in processing infrastructure"},
    "breedingLockIn": {"label": "Breeding/Genetics Lock-in", "description": "Dependence on specialized genetic lines"},
}


# =============================================================================
# Historical Trajectories
# =============================================================================


class TrajectoryPoint(BaseModel):
    """One dated observation on a historical trajectory."""
    year: int
    score: int = Field(ge=0, le=100)
    stage: str
    milestone: Optional[str] = None
    uncertainty: Optional[TrajectoryUncertainty] = None

    model_config = ConfigDict(frozen=True)


class Trajectory(BaseModel):
    """A reference technology's score over time, ordered by year."""
    technology: Optional[str] = None
    description: Optional[str] = None
    trajectory: tuple[TrajectoryPoint, ...] = Field(default_factory=tuple)

    model_config = ConfigDict(frozen=True)

    @field_validator("trajectory")
    @classmethod
    def order_by_year(cls, points: tuple[TrajectoryPoint, ...]) -> tuple[TrajectoryPoint, ...]:
        return tuple(sorted(points, key=lambda p: p.year))

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class SpeciesTrajectories(BaseModel):
    """All reference trajectories recorded for one species."""
    name: Optional[str] = None
    trajectories: dict[str, Trajectory] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


# =============================================================================
# Assessment Output
# =============================================================================


class HistoricalMatch(BaseModel):
    """Closest historical trajectory point, or an all-null match."""
    year: Optional[int] = None
    score: Optional[int] = None
    stage: Optional[str] = None
    milestone: Optional[str] = None
    uncertainty: Optional[TrajectoryUncertainty] = None

    @classmethod
    def empty(cls) -> "HistoricalMatch":
        return cls()

    @classmethod
    def from_point(cls, point: TrajectoryPoint) -> "HistoricalMatch":
        return cls.model_validate(point.model_dump())

    @property
    def found(self) -> bool:
        return self.year is not None

    def to_payload(self) -> dict[str, Any]:
        payload = self.model_dump(mode="json", exclude_none=True)
        for key in ("year", "score", "stage"):
            payload.setdefault(key, None)
        return payload


class ScoreRange(BaseModel):
    """Uncertainty band around a score, clamped into [0, 100]."""
    lower: int
    upper: int


class KeyMetrics(BaseModel):
    """Illustrative presentation metrics derived from the weighted-7 inputs."""
    animals_affected: str = Field(alias="animalsAffected")
    suffering_hours: str = Field(alias="sufferingHours")
    advocacy_orgs: int = Field(alias="advocacyOrgs")
    expected_lock_in: str = Field(alias="expectedLockIn")

    model_config = ConfigDict(populate_by_name=True)


class AssessmentResult(BaseModel):
    """Complete output of one assessment. Never stored."""
    score: int
    range: Optional[ScoreRange] = None
    stage: Stage
    intervention_window: InterventionWindow = Field(alias="interventionWindow")
    time_until_lockin: Optional[str] = Field(None, alias="timeUntilLockin")
    historical_match: HistoricalMatch = Field(
        default_factory=HistoricalMatch,
        alias="historicalMatch",
    )
    key_metrics: Optional[KeyMetrics] = Field(None, alias="keyMetrics")
    message: str
    dimensions: dict[str, int] = Field(default_factory=dict)
    strategy: ScoringStrategy

    model_config = ConfigDict(populate_by_name=True)

    @field_serializer("range")
    def serialize_range(self, value: Optional[ScoreRange]) -> Optional[list[int]]:
        if value is None:
            return None
        return [value.lower, value.upper]

    def to_response(self) -> dict[str, Any]:
        """Build the JSON payload returned by the calculate endpoint."""
        payload = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        payload["historicalMatch"] = self.historical_match.to_payload()
        return payload


class Preset(BaseModel):
    """A named reference dimension set."""
    name: str
    description: Optional[str] = None
    strategy: ScoringStrategy
    values: dict[str, int]

    model_config = ConfigDict(frozen=True)
