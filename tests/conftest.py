"""Shared fixtures for the lock-in scorer tests."""

import pytest

from lockin_scorer.config import reset_config
from lockin_scorer.engine import AssessmentEngine
from lockin_scorer.trajectories import TrajectoryStore

# Lock-in times depend on the calendar; tests pin the year.
FIXED_YEAR = 2025


@pytest.fixture(autouse=True)
def default_config():
    """Every test starts from the default configuration."""
    reset_config()
    yield
    reset_config()


@pytest.fixture(scope="session")
def store() -> TrajectoryStore:
    return TrajectoryStore.from_config()


@pytest.fixture
def engine(store: TrajectoryStore) -> AssessmentEngine:
    return AssessmentEngine(store=store)


@pytest.fixture
def weighted_inputs() -> dict:
    """A mid-range weighted-7 rating set scoring 65."""
    return {
        "uncertainty": 40,
        "animals": 80,
        "canTheyFeel": 60,
        "suffering": 70,
        "growth": 50,
        "support": 40,
        "pathDependence": 40,
    }
