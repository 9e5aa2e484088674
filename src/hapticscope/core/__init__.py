"""Core pattern sampling and summarization modules."""

from hapticscope.core.curve import ControlPoint, PiecewiseLinearCurve, evaluate
from hapticscope.core.extractor import extract_curves, extract_events, extract_pattern
from hapticscope.core.pattern import PatternDocument, load_pattern, loads_pattern, parse_pattern
from hapticscope.core.sampler import (
    EventTimeline,
    SampledPoint,
    build_event_samples,
    build_event_streams,
    build_samples,
)
from hapticscope.core.summarizer import Summary, summarize

__all__ = [
    "ControlPoint",
    "PiecewiseLinearCurve",
    "evaluate",
    "extract_curves",
    "extract_events",
    "extract_pattern",
    "PatternDocument",
    "load_pattern",
    "loads_pattern",
    "parse_pattern",
    "EventTimeline",
    "SampledPoint",
    "build_event_samples",
    "build_event_streams",
    "build_samples",
    "Summary",
    "summarize",
]
