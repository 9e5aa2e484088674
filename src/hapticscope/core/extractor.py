"""
Pattern extraction.

Splits a parsed document into the pieces the sampler works on: discrete
events grouped by type, the intensity and sharpness control curves, and the
overall effect duration.
"""

import logging
from dataclasses import dataclass

from hapticscope.config import DEFAULT_CONFIG, HapticConfig
from hapticscope.core.curve import ControlPoint
from hapticscope.core.pattern import (
    INTENSITY_CONTROL,
    SHARPNESS_CONTROL,
    HapticEvent,
    PatternDocument,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractedCurves:
    """Intensity/sharpness curves and the duration they span."""

    duration: float
    intensity_curve: tuple[ControlPoint, ...]
    sharpness_curve: tuple[ControlPoint, ...]


@dataclass(frozen=True)
class ExtractedPattern:
    """Everything needed to sample both curve and event streams."""

    curves: ExtractedCurves
    events_by_type: dict[str, list[HapticEvent]]
    max_event_end: float
    duration: float


def event_end(event: HapticEvent, config: HapticConfig = DEFAULT_CONFIG) -> float:
    """End time of an event, applying the default-duration rule."""
    return event.time + config.event_duration(event.event_type, event.event_duration)


def extract_events(doc: PatternDocument) -> dict[str, list[HapticEvent]]:
    """
    Group events by their EventType.

    Types appear in the order of their first event; each list keeps
    document order.
    """
    events_by_type: dict[str, list[HapticEvent]] = {}
    for event in doc.events:
        events_by_type.setdefault(event.event_type, []).append(event)
    return events_by_type


def _max_event_end(doc: PatternDocument, config: HapticConfig) -> float:
    return max((event_end(e, config) for e in doc.events), default=0.0)


def _first_curve(doc: PatternDocument, parameter_id: str) -> tuple[ControlPoint, ...]:
    for curve in doc.curves:
        if curve.parameter_id == parameter_id:
            return curve.control_points
    return ()


def extract_curves(
    doc: PatternDocument,
    config: HapticConfig = DEFAULT_CONFIG,
) -> ExtractedCurves:
    """
    Extract the intensity and sharpness curves.

    The duration is the latest of every event end and every control point
    time across all curves (0.0 when the document has neither). Only the
    first curve of each control ID is used; other IDs are ignored.
    """
    max_curve_time = max(
        (p.time for curve in doc.curves for p in curve.control_points),
        default=0.0,
    )
    duration = max(_max_event_end(doc, config), max_curve_time, 0.0)

    return ExtractedCurves(
        duration=duration,
        intensity_curve=_first_curve(doc, INTENSITY_CONTROL),
        sharpness_curve=_first_curve(doc, SHARPNESS_CONTROL),
    )


def extract_pattern(
    doc: PatternDocument,
    config: HapticConfig = DEFAULT_CONFIG,
) -> ExtractedPattern:
    """
    Combined extraction for visualizing curves and events together.

    The overall duration is floored at ``config.min_visual_duration`` so the
    shared grid is renderable even for very short or event-only patterns.
    """
    curves = extract_curves(doc, config)
    max_end = _max_event_end(doc, config)
    duration = max(curves.duration, max_end, config.min_visual_duration)
    events_by_type = extract_events(doc)

    logger.debug(
        "Extracted %d event types, %d intensity / %d sharpness points, duration %.4f",
        len(events_by_type),
        len(curves.intensity_curve),
        len(curves.sharpness_curve),
        duration,
    )
    return ExtractedPattern(
        curves=curves,
        events_by_type=events_by_type,
        max_event_end=max_end,
        duration=duration,
    )
