"""
Summary statistics for a sampled haptic series.

Reduces a series to its envelope shape: how long it takes to reach peak
intensity, how long it stays there, how long it takes to fall away, the
area under the intensity curve and the change in sharpness.
"""

from dataclasses import asdict, dataclass
from typing import Optional, Sequence

import numpy as np
from scipy.integrate import trapezoid

from hapticscope.config import DEFAULT_CONFIG, HapticConfig
from hapticscope.core.sampler import SampledPoint


@dataclass(frozen=True)
class Summary:
    """Derived envelope metrics of one sampled series."""

    duration: float
    peak_intensity: float
    ramp_up: float
    plateau: float
    ramp_down: float
    area: float
    sharpness_start: float
    sharpness_end: float
    sharpness_delta: float

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


def _plateau_bounds(intensity: np.ndarray, peak: float, tol: float) -> Optional[tuple[int, int]]:
    """First run of samples within ``tol`` of ``peak`` as (start, end) indices."""
    at_peak = np.abs(intensity - peak) < tol
    hits = np.flatnonzero(at_peak)
    if hits.size == 0:
        return None
    start = int(hits[0])
    end = start
    while end + 1 < len(intensity) and at_peak[end + 1]:
        end += 1
    return start, end


def summarize(
    series: Sequence[SampledPoint],
    config: HapticConfig = DEFAULT_CONFIG,
) -> Optional[Summary]:
    """
    Summarize a sampled series.

    Args:
        series: Samples in increasing time order.
        config: Supplies the near-zero tolerance.

    Returns:
        The summary, or None for an empty series.
    """
    if not series:
        return None

    tol = config.zero_threshold
    times = np.array([p.time for p in series], dtype=np.float64)
    intensity = np.array([p.intensity for p in series], dtype=np.float64)

    duration = float(times[-1])
    peak = float(np.max(intensity))

    nonzero = np.flatnonzero(intensity > tol)
    first_nonzero = float(times[nonzero[0]]) if nonzero.size else 0.0

    bounds = _plateau_bounds(intensity, peak, tol)
    if bounds is None:
        ramp_up = plateau = ramp_down = 0.0
    else:
        start, end = bounds
        ramp_up = float(times[start]) - first_nonzero
        plateau = float(times[end] - times[start])
        ramp_down = duration - float(times[end])

    area = float(trapezoid(intensity, times)) if len(series) > 1 else 0.0

    sharpness_start = series[0].sharpness
    sharpness_end = series[-1].sharpness
    return Summary(
        duration=duration,
        peak_intensity=peak,
        ramp_up=ramp_up,
        plateau=plateau,
        ramp_down=ramp_down,
        area=area,
        sharpness_start=sharpness_start,
        sharpness_end=sharpness_end,
        sharpness_delta=sharpness_end - sharpness_start,
    )
