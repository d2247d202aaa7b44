"""Lock-in Early Warning Scorer.

Scores how close an emerging animal-use technology is to irreversible
lock-in and compares it with a historical reference trajectory.
"""

from .engine import AssessmentEngine
from .schema import AssessmentResult, ScoringStrategy
from .trajectories import TrajectoryStore

__version__ = "1.0.0"

__all__ = [
    "AssessmentEngine",
    "AssessmentResult",
    "ScoringStrategy",
    "TrajectoryStore",
]
