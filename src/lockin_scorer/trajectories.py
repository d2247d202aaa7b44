"""Trajectory Store - read-only historical reference data.

Holds the historical trajectories used as comparison baselines, keyed by
species and then by technology. The store is loaded once and never
mutated, so a single instance can be shared across concurrent requests.

The store also owns the canonical chicken battery-cage trajectory that is
used whenever the configured baseline is missing from the dataset.
"""

import json
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Union

from pydantic import ValidationError

from .app_logging import get_logger
from .config import ScorerConfig, get_config
from .exceptions import SpeciesNotFoundError, TechnologyNotFoundError, TrajectoryLoadError
from .schema import SpeciesTrajectories, Trajectory, TrajectoryPoint

logger = get_logger("trajectories")

BUNDLED_DATA_PATH = Path(__file__).parent / "data" / "trajectories.json"

# Canonical industrial egg production baseline (US/Europe battery cages).
DEFAULT_BASELINE = Trajectory(
    trajectory=(
        TrajectoryPoint(year=1923, score=5, stage="Early Research"),
        TrajectoryPoint(year=1930, score=12, stage="Early Research"),
        TrajectoryPoint(year=1935, score=22, stage="Early Commercialization"),
        TrajectoryPoint(year=1940, score=32, stage="Early Commercialization"),
        TrajectoryPoint(year=1945, score=45, stage="Scaling"),
        TrajectoryPoint(year=1950, score=60, stage="Scaling"),
        TrajectoryPoint(year=1955, score=72, stage="Infrastructure Building"),
        TrajectoryPoint(year=1960, score=92, stage="Regulatory Capture"),
        TrajectoryPoint(year=1965, score=97, stage="Locked In"),
    ),
)


class TrajectoryStore:
    """Read-only lookup of historical trajectories by species and technology."""

    def __init__(
        self,
        species: Mapping[str, SpeciesTrajectories],
        baseline_species: str = "chickens",
        baseline_technology: str = "factoryFarming",
        default_baseline: Trajectory = DEFAULT_BASELINE,
    ):
        self._species = MappingProxyType(dict(species))
        self.baseline_species = baseline_species
        self.baseline_technology = baseline_technology
        self.default_baseline = default_baseline

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        baseline_species: str = "chickens",
        baseline_technology: str = "factoryFarming",
    ) -> "TrajectoryStore":
        """Load and validate a trajectories JSON file.

        Raises:
            TrajectoryLoadError: If the file is missing or malformed.
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            raise TrajectoryLoadError(f"Trajectory data file not found: {path}")
        except json.JSONDecodeError as e:
            raise TrajectoryLoadError(f"Trajectory data file is not valid JSON: {path} ({e})")

        species = cls._parse(data, path)
        logger.info(
            "Loaded %d species (%d trajectories) from %s",
            len(species),
            sum(len(s.trajectories) for s in species.values()),
            path,
        )
        return cls(species, baseline_species=baseline_species, baseline_technology=baseline_technology)

    @classmethod
    def from_config(cls, config: Optional[ScorerConfig] = None) -> "TrajectoryStore":
        """Load the dataset named in configuration, or the bundled one."""
        cfg = (config or get_config()).trajectories
        path = Path(cfg.data_path) if cfg.data_path else BUNDLED_DATA_PATH
        return cls.from_file(
            path,
            baseline_species=cfg.baseline_species,
            baseline_technology=cfg.baseline_technology,
        )

    @staticmethod
    def _parse(data: object, path: Path) -> dict[str, SpeciesTrajectories]:
        if not isinstance(data, dict):
            raise TrajectoryLoadError(f"Trajectory data must be a JSON object keyed by species: {path}")

        species = {}
        for key, value in data.items():
            try:
                species[key] = SpeciesTrajectories.model_validate(value)
            except ValidationError as e:
                raise TrajectoryLoadError(f"Invalid trajectory data for species '{key}' in {path}: {e}")
        return species

    @property
    def species(self) -> tuple[str, ...]:
        return tuple(self._species)

    def get_species(self, species: str) -> SpeciesTrajectories:
        """Return all trajectories for a species.

        Raises:
            SpeciesNotFoundError: If the species is unknown.
        """
        try:
            return self._species[species]
        except KeyError:
            raise SpeciesNotFoundError(species)

    def get_trajectory(self, technology: str, species: str) -> Trajectory:
        """Return one trajectory.

        Raises:
            SpeciesNotFoundError: If the species is unknown.
            TechnologyNotFoundError: If the species has no such technology.
        """
        species_data = self.get_species(species)
        try:
            return species_data.trajectories[technology]
        except KeyError:
            raise TechnologyNotFoundError(technology, species)

    def get_baseline(self) -> Trajectory:
        """Return the reference trajectory used for historical matching.

        Falls back to the canonical chicken battery-cage trajectory when the
        configured baseline is not in the dataset.
        """
        try:
            return self.get_trajectory(self.baseline_technology, self.baseline_species)
        except (SpeciesNotFoundError, TechnologyNotFoundError) as e:
            logger.warning("%s; using the default baseline trajectory", e)
            return self.default_baseline

    def index(self) -> dict[str, dict[str, Optional[str]]]:
        """List species -> technology id -> technology name."""
        return {
            key: {tech: trajectory.technology for tech, trajectory in data.trajectories.items()}
            for key, data in self._species.items()
        }
