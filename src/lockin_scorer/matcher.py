"""Historical matching against a reference trajectory."""

from typing import Iterable, Union

from .schema import HistoricalMatch, Trajectory, TrajectoryPoint


class HistoricalMatcher:
    """Finds the trajectory point whose score is closest to a given score."""

    def match(
        self,
        trajectory: Union[Trajectory, Iterable[TrajectoryPoint]],
        score: int,
    ) -> HistoricalMatch:
        """Return the closest point by absolute score distance.

        Ties go to the earliest point in trajectory order. An empty
        trajectory yields an all-null match.
        """
        points = trajectory.trajectory if isinstance(trajectory, Trajectory) else trajectory

        closest = None
        min_diff = float("inf")
        for point in points:
            diff = abs(point.score - score)
            if diff < min_diff:
                min_diff = diff
                closest = point

        if closest is None:
            return HistoricalMatch.empty()
        return HistoricalMatch.from_point(closest)
