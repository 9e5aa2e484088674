"""
Uniform time sampling of haptic curves and events.

Both the curve stream and every event-type stream are sampled on the same
grid of ``sample_count + 1`` equally spaced instants over ``[0, duration]``.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

import numpy as np

from hapticscope.config import DEFAULT_CONFIG, HapticConfig
from hapticscope.core.curve import ControlPoint, PiecewiseLinearCurve
from hapticscope.core.pattern import (
    INTENSITY_PARAMETER,
    SHARPNESS_PARAMETER,
    UNKNOWN_EVENT_TYPE,
    HapticEvent,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SampledPoint:
    """
    One instant of a sampled series.

    ``event_type`` is set only for event-stream samples; curve-stream
    samples leave it as None.
    """

    time: float
    intensity: float
    sharpness: float
    event_type: Optional[str] = None


Series = list[SampledPoint]


def time_grid(duration: float, sample_count: int) -> np.ndarray:
    """
    Raw (unrounded) sampling instants ``k / sample_count * duration``.

    Args:
        duration: Length of the timeline in seconds.
        sample_count: Number of intervals; the grid has one more point.

    Returns:
        Array of ``sample_count + 1`` times from 0 to ``duration`` inclusive.
    """
    if sample_count < 1:
        raise ValueError(f"sample_count must be >= 1, got {sample_count}")
    return np.arange(sample_count + 1, dtype=np.float64) / sample_count * duration


def build_samples(
    intensity_curve: Iterable[ControlPoint],
    sharpness_curve: Iterable[ControlPoint],
    duration: float,
    sample_count: Optional[int] = None,
    config: HapticConfig = DEFAULT_CONFIG,
) -> Series:
    """
    Sample the intensity and sharpness curves on a uniform grid.

    Curves are evaluated at the exact grid instants; only the reported
    time is rounded.
    """
    n = sample_count if sample_count is not None else config.sample_count
    intensity = PiecewiseLinearCurve(intensity_curve)
    sharpness = PiecewiseLinearCurve(sharpness_curve)

    series = []
    for t in time_grid(duration, n):
        t = float(t)
        series.append(
            SampledPoint(
                time=round(t, config.time_precision),
                intensity=intensity(t),
                sharpness=sharpness(t),
            )
        )
    return series


def _active_event(
    events: Sequence[HapticEvent],
    bounds: Sequence[tuple[float, float]],
    t: float,
) -> Optional[HapticEvent]:
    # First listed event wins when several overlap
    for event, (start, end) in zip(events, bounds):
        if start <= t <= end:
            return event
    return None


def build_event_samples(
    events: Sequence[HapticEvent],
    duration: float,
    sample_count: Optional[int] = None,
    config: HapticConfig = DEFAULT_CONFIG,
) -> Series:
    """
    Sample a list of same-type events on a uniform grid.

    At each instant the first event whose closed interval
    ``[time, time + duration]`` contains it supplies constant intensity and
    sharpness; instants outside every event read as zero.
    """
    n = sample_count if sample_count is not None else config.sample_count
    event_type = events[0].event_type if events else UNKNOWN_EVENT_TYPE
    bounds = [
        (e.time, e.time + config.event_duration(e.event_type, e.event_duration))
        for e in events
    ]

    series = []
    for t in time_grid(duration, n):
        t = float(t)
        event = _active_event(events, bounds, t)
        if event is None:
            intensity = sharpness = 0.0
        else:
            intensity = event.parameter(INTENSITY_PARAMETER)
            sharpness = event.parameter(SHARPNESS_PARAMETER)
        series.append(
            SampledPoint(
                time=round(t, config.time_precision),
                intensity=intensity,
                sharpness=sharpness,
                event_type=event_type,
            )
        )
    return series


@dataclass(frozen=True)
class EventTimeline:
    """Several event-type streams sampled on one shared grid."""

    duration: float
    times: tuple[float, ...]
    streams: dict[str, Series]

    @property
    def event_types(self) -> list[str]:
        return list(self.streams)


def build_event_streams(
    events_by_type: dict[str, list[HapticEvent]],
    duration: float,
    sample_count: Optional[int] = None,
    config: HapticConfig = DEFAULT_CONFIG,
) -> EventTimeline:
    """
    Sample every event type onto the same timeline.

    Each type is handled identically regardless of its name; stream order
    follows ``events_by_type``.
    """
    n = sample_count if sample_count is not None else config.sample_count
    streams = {
        event_type: build_event_samples(events, duration, n, config)
        for event_type, events in events_by_type.items()
    }
    times = tuple(round(float(t), config.time_precision) for t in time_grid(duration, n))
    logger.debug("Sampled %d event streams x %d points", len(streams), len(times))
    return EventTimeline(duration=duration, times=times, streams=streams)
