"""
Haptic pattern document model.

Parses AHAP-like JSON documents into typed values. A document holds an
ordered list of pattern items, each either a discrete event or a parameter
curve. Parsing is best-effort: missing optional fields are defaulted, but a
document that is not JSON or has the wrong overall shape is rejected with
:class:`PatternParseError`.
"""

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar, Optional, Union

from hapticscope.core.curve import ControlPoint
from hapticscope.errors import PatternParseError

logger = logging.getLogger(__name__)

INTENSITY_CONTROL = "HapticIntensityControl"
SHARPNESS_CONTROL = "HapticSharpnessControl"
INTENSITY_PARAMETER = "HapticIntensity"
SHARPNESS_PARAMETER = "HapticSharpness"
UNKNOWN_EVENT_TYPE = "Unknown"


@dataclass(frozen=True)
class HapticEvent:
    """A discrete haptic occurrence."""

    time: float
    event_type: str
    event_duration: Optional[float] = None
    parameters: dict[str, float] = field(default_factory=dict)

    def parameter(self, parameter_id: str, default: float = 0.0) -> float:
        """Value of ``parameter_id``, or ``default`` when absent."""
        return self.parameters.get(parameter_id, default)


@dataclass(frozen=True)
class ParameterCurve:
    """A named parameter curve."""

    parameter_id: str
    time: float = 0.0
    control_points: tuple[ControlPoint, ...] = ()


@dataclass(frozen=True)
class EventItem:
    """Pattern item wrapping a :class:`HapticEvent`."""

    kind: ClassVar[str] = "event"
    event: HapticEvent


@dataclass(frozen=True)
class CurveItem:
    """Pattern item wrapping a :class:`ParameterCurve`."""

    kind: ClassVar[str] = "curve"
    curve: ParameterCurve


PatternItem = Union[EventItem, CurveItem]


@dataclass(frozen=True)
class PatternDocument:
    """A parsed haptic pattern."""

    version: Any = None
    metadata: Optional[dict[str, Any]] = None
    items: tuple[PatternItem, ...] = ()

    @property
    def events(self) -> list[HapticEvent]:
        """All events in document order."""
        return [item.event for item in self.items if isinstance(item, EventItem)]

    @property
    def curves(self) -> list[ParameterCurve]:
        """All parameter curves in document order."""
        return [item.curve for item in self.items if isinstance(item, CurveItem)]


def _number(value: Any, where: str, default: Optional[float] = None) -> Optional[float]:
    if value is None:
        return default
    # bool is an int subclass but never a valid time or value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PatternParseError(f"{where} must be a number, got {value!r}")
    try:
        number = float(value)
    except OverflowError:
        number = math.inf
    if not math.isfinite(number):
        raise PatternParseError(f"{where} must be finite, got {value!r}")
    return number


def _mapping(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise PatternParseError(f"{where} must be an object")
    return value


def _parse_event(raw: Any, where: str) -> HapticEvent:
    raw = _mapping(raw, where)

    parameters: dict[str, float] = {}
    raw_params = raw.get("EventParameters")
    if raw_params is None:
        raw_params = []
    if not isinstance(raw_params, list):
        raise PatternParseError(f"{where}.EventParameters must be a list")
    for j, param in enumerate(raw_params):
        param = _mapping(param, f"{where}.EventParameters[{j}]")
        param_id = param.get("ParameterID")
        if not isinstance(param_id, str):
            continue
        value = _number(
            param.get("ParameterValue"), f"{where}.EventParameters[{j}].ParameterValue", 0.0
        )
        parameters.setdefault(param_id, value)

    event_type = raw.get("EventType")
    if not isinstance(event_type, str) or not event_type:
        event_type = UNKNOWN_EVENT_TYPE

    return HapticEvent(
        time=_number(raw.get("Time"), f"{where}.Time", 0.0),
        event_type=event_type,
        event_duration=_number(raw.get("EventDuration"), f"{where}.EventDuration"),
        parameters=parameters,
    )


def _parse_curve(raw: Any, where: str) -> ParameterCurve:
    raw = _mapping(raw, where)

    raw_points = raw.get("ParameterCurveControlPoints")
    if raw_points is None:
        raw_points = []
    if not isinstance(raw_points, list):
        raise PatternParseError(f"{where}.ParameterCurveControlPoints must be a list")

    points = []
    for j, point in enumerate(raw_points):
        point_where = f"{where}.ParameterCurveControlPoints[{j}]"
        point = _mapping(point, point_where)
        points.append(
            ControlPoint(
                time=_number(point.get("Time"), f"{point_where}.Time", 0.0),
                value=_number(point.get("ParameterValue"), f"{point_where}.ParameterValue", 0.0),
            )
        )

    parameter_id = raw.get("ParameterID")
    return ParameterCurve(
        parameter_id=parameter_id if isinstance(parameter_id, str) else "",
        time=_number(raw.get("Time"), f"{where}.Time", 0.0),
        control_points=tuple(points),
    )


def parse_pattern(data: Any) -> PatternDocument:
    """
    Build a :class:`PatternDocument` from decoded JSON.

    Args:
        data: Decoded JSON value (expected to be an object).

    Returns:
        The parsed document.

    Raises:
        PatternParseError: If the value does not have the document shape.
    """
    data = _mapping(data, "Pattern document")

    raw_items = data.get("Pattern")
    if raw_items is None:
        raw_items = []
    if not isinstance(raw_items, list):
        raise PatternParseError("Pattern must be a list")

    items: list[PatternItem] = []
    for i, raw in enumerate(raw_items):
        raw = _mapping(raw, f"Pattern[{i}]")
        if raw.get("Event") is not None:
            items.append(EventItem(_parse_event(raw["Event"], f"Pattern[{i}].Event")))
        if raw.get("ParameterCurve") is not None:
            items.append(
                CurveItem(_parse_curve(raw["ParameterCurve"], f"Pattern[{i}].ParameterCurve"))
            )

    metadata = data.get("Metadata")
    logger.debug("Parsed pattern with %d items", len(items))
    return PatternDocument(
        version=data.get("Version"),
        metadata=metadata if isinstance(metadata, dict) else None,
        items=tuple(items),
    )


def _reject_constant(name: str) -> Any:
    raise PatternParseError(f"Invalid JSON: {name} is not a JSON value")


def loads_pattern(text: str) -> PatternDocument:
    """Parse pattern JSON text. NaN and Infinity literals are rejected."""
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise PatternParseError(f"Invalid JSON: {exc}") from exc
    return parse_pattern(data)


def load_pattern(path: Union[str, Path]) -> PatternDocument:
    """Read and parse a pattern file (.ahap or .json)."""
    with open(path, "r", encoding="utf-8") as f:
        return loads_pattern(f.read())
