"""
Tunable constants for pattern sampling and audio summarization.

Every magic number used by the engine lives on :class:`HapticConfig` so
callers can override it without touching the algorithms.
"""

from dataclasses import dataclass, fields
from typing import Any, Mapping

from hapticscope.errors import ConfigError

TRANSIENT_EVENT_TYPE = "HapticTransient"


@dataclass(frozen=True)
class HapticConfig:
    """Sampling, summarization and export settings."""

    sample_count: int = 600

    # Visualization defaults for events without an EventDuration
    transient_duration: float = 0.01
    default_event_duration: float = 0.1

    # Floor applied to the combined timeline so the grid is never degenerate
    min_visual_duration: float = 0.5

    # Intensities at or below this are treated as zero
    zero_threshold: float = 1e-6

    max_audio_points: int = 2000
    time_precision: int = 4

    curve_filename: str = "haptic_curves.csv"
    audio_filename: str = "audio_waveform.csv"

    def __post_init__(self):
        if self.sample_count < 1:
            raise ConfigError(f"sample_count must be >= 1, got {self.sample_count}")
        if self.max_audio_points < 1:
            raise ConfigError(
                f"max_audio_points must be >= 1, got {self.max_audio_points}"
            )
        if self.transient_duration < 0 or self.default_event_duration < 0:
            raise ConfigError("Default event durations must be non-negative")

    def event_duration(self, event_type: str, explicit: float | None = None) -> float:
        """
        Resolve the duration of an event.

        Args:
            event_type: The event's EventType.
            explicit: The EventDuration from the document, if present.

        Returns:
            The explicit duration, or the type-dependent default.
        """
        if explicit is not None:
            return explicit
        if event_type == TRANSIENT_EVENT_TYPE:
            return self.transient_duration
        return self.default_event_duration

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "HapticConfig":
        """Build a config from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**dict(values))


DEFAULT_CONFIG = HapticConfig()
