"""Centralized configuration management for the lock-in scorer."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


class ScoringWeightsConfig(BaseModel):
    """Weights for the weighted-7 scoring strategy.

    These weights control how much each dimension contributes to the
    lock-in risk score. They should sum to 1.0. The uncertainty dimension
    carries no weight; it only widens the score range.
    """
    animals: float = Field(
        0.30,
        description="Weight for the number of animals affected (population scale)"
    )
    suffering: float = Field(
        0.20,
        description="Weight for the intensity of suffering"
    )
    can_they_feel: float = Field(
        0.15,
        description="Weight for the sentience of the animals involved"
    )
    growth: float = Field(
        0.20,
        description="Weight for the growth momentum of the technology"
    )
    support: float = Field(
        0.10,
        description="Weight for the advocacy gap (100 - support for oversight)"
    )
    path_dependence: float = Field(
        0.05,
        description="Weight for path dependence"
    )


class StageThresholdsConfig(BaseModel):
    """Upper bounds (inclusive) of each development stage band."""
    early_research_max: int = Field(25, description="Highest score labelled Early Research")
    early_commercialization_max: int = Field(45, description="Highest score labelled Early Commercialization")
    scaling_max: int = Field(70, description="Highest score labelled Scaling")
    infrastructure_building_max: int = Field(
        85,
        description="Highest score labelled Infrastructure Building; anything above is Lock-in/Regulatory Capture"
    )


class InterventionThresholdsConfig(BaseModel):
    """Upper bounds (inclusive) of each intervention window band."""
    monitor_max: int = Field(45, description="Highest score labelled Monitor")
    act_soon_max: int = Field(65, description="Highest score labelled Act Soon; anything above is Act Now")


class UncertaintyConfig(BaseModel):
    """Uncertainty band configuration."""
    max_band_fraction: float = Field(
        0.5,
        ge=0,
        le=1,
        description="Half-width of the score range as a fraction of the score at uncertainty=100"
    )


class LockInTimeConfig(BaseModel):
    """Lock-in time estimate configuration."""
    year_offset: int = Field(
        5,
        description="Years added when below the matched historical score, subtracted when at or above it"
    )


class KeyMetricsConfig(BaseModel):
    """Scale factors for the illustrative key metrics."""
    animals_scale: int = Field(1000, description="Billions of animals per year at animals=100")
    suffering_scale: int = Field(10000, description="Tenths of trillions of suffering hours at suffering=animals=100")


class NormalizerConfig(BaseModel):
    """Input normalization configuration."""
    clamp_inputs: bool = Field(
        True,
        description="Clamp dimension values into [0, 100] before scoring"
    )


class TrajectoryConfig(BaseModel):
    """Trajectory store configuration."""
    data_path: Optional[str] = Field(
        None,
        description="Path to a trajectories JSON file (default: bundled dataset)"
    )
    baseline_species: str = Field("chickens", description="Species of the reference trajectory")
    baseline_technology: str = Field("factoryFarming", description="Technology of the reference trajectory")
    default_species: str = Field("chickens", description="Species used when a lookup names none")
    default_technology: str = Field("factoryFarming", description="Technology used when a lookup names none")


class ServerConfig(BaseModel):
    """HTTP server configuration."""
    host: str = Field("0.0.0.0", description="Interface to bind")
    port: int = Field(8000, description="Port to listen on")
    log_level: str = Field("INFO", description="Log level for the server process")


class ScorerConfig(BaseModel):
    """Complete configuration for the lock-in scorer."""
    scoring_weights: ScoringWeightsConfig = Field(default_factory=ScoringWeightsConfig)
    stage_thresholds: StageThresholdsConfig = Field(default_factory=StageThresholdsConfig)
    intervention_thresholds: InterventionThresholdsConfig = Field(default_factory=InterventionThresholdsConfig)
    uncertainty: UncertaintyConfig = Field(default_factory=UncertaintyConfig)
    lockin_time: LockInTimeConfig = Field(default_factory=LockInTimeConfig)
    key_metrics: KeyMetricsConfig = Field(default_factory=KeyMetricsConfig)
    normalizer: NormalizerConfig = Field(default_factory=NormalizerConfig)
    trajectories: TrajectoryConfig = Field(default_factory=TrajectoryConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)


# Global config instance
_config: Optional[ScorerConfig] = None


def get_config() -> ScorerConfig:
    """Get the current configuration.

    Returns the global config, initializing with defaults if not yet loaded.
    """
    global _config
    if _config is None:
        _config = ScorerConfig()
    return _config


def load_config(path: Path) -> ScorerConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        The loaded ScorerConfig.
    """
    global _config

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    _config = ScorerConfig.model_validate(data or {})
    return _config


def reset_config() -> None:
    """Reset configuration to defaults."""
    global _config
    _config = ScorerConfig()


def find_config_file() -> Optional[Path]:
    """Find a scorer configuration file.

    Looks in (order of priority):
    1. LOCKIN_SCORER_CONFIG environment variable
    2. ./lockin-config.yaml
    3. ./lockin-config.yml
    4. ~/.config/lockin-scorer/config.yaml
    """
    # Environment variable
    env_path = os.environ.get("LOCKIN_SCORER_CONFIG")
    if env_path:
        path = Path(env_path)
        if path.exists():
            return path

    # Current directory
    for name in ["lockin-config.yaml", "lockin-config.yml"]:
        path = Path(name)
        if path.exists():
            return path

    # User config directory
    user_config = Path.home() / ".config" / "lockin-scorer" / "config.yaml"
    if user_config.exists():
        return user_config

    return None


def save_default_config(path: Path) -> None:
    """Save the default configuration to a YAML file.

    Args:
        path: Path where to save the configuration.
    """
    config = ScorerConfig()

    data = config.model_dump()

    yaml_content = """# Lock-in Scorer Configuration
# ============================
#
# This file configures the scoring weights, stage and intervention
# thresholds, the uncertainty band, the lock-in time heuristic and the
# trajectory dataset.
#
# Copy this file to one of these locations:
#   - ./lockin-config.yaml (current directory)
#   - ~/.config/lockin-scorer/config.yaml (user config)
#
# Or set the LOCKIN_SCORER_CONFIG environment variable.

"""
    yaml_content += yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(yaml_content)
