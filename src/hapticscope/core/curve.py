"""
Piecewise-linear curve evaluation.

A curve is a sequence of (time, value) control points. Between points the
value is linearly interpolated; outside the point range it is held flat at
the first or last value.
"""

from bisect import bisect_left
from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class ControlPoint:
    """Single (time, value) anchor of a parameter curve."""

    time: float
    value: float


class PiecewiseLinearCurve:
    """
    Evaluates a curve defined by control points.

    Points are stably sorted by time on construction, so callers may pass
    them in any order. When several points share a time, the one that comes
    first after sorting wins at that instant.
    """

    def __init__(self, points: Iterable[ControlPoint]):
        ordered = sorted(points, key=lambda p: p.time)
        self.points: tuple[ControlPoint, ...] = tuple(ordered)
        self._times = [p.time for p in ordered]
        self._values = [p.value for p in ordered]

    def __call__(self, t: float) -> float:
        """
        Evaluate the curve at time ``t``.

        Args:
            t: Time in seconds.

        Returns:
            Interpolated value; 0.0 for an empty curve.
        """
        times, values = self._times, self._values
        if not times:
            return 0.0
        if t <= times[0]:
            return values[0]
        if t >= times[-1]:
            return values[-1]

        i = bisect_left(times, t)
        # Exact hit on a control point
        if times[i] == t:
            return values[i]

        t0, t1 = times[i - 1], times[i]
        v0, v1 = values[i - 1], values[i]
        if t1 == t0:
            return v0
        return v0 + (v1 - v0) * (t - t0) / (t1 - t0)


def evaluate(points: Iterable[ControlPoint], t: float) -> float:
    """Evaluate an unsorted list of control points at time ``t``."""
    return PiecewiseLinearCurve(points)(t)
