"""
End-to-end processing pipelines.

:class:`HapticPipeline` turns pattern JSON text into sampled series and a
summary, memoized on the raw text. :class:`AudioPipeline` turns an uploaded
file into a downsampled waveform and amplitude summary. Both convert
recoverable errors into an ``error`` message on the result instead of
raising.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Optional

from hapticscope.config import DEFAULT_CONFIG, HapticConfig
from hapticscope.core.audio import (
    AudioDecoder,
    AudioSample,
    AudioSummary,
    LibrosaDecoder,
    process_audio,
    waveform_filename,
)
from hapticscope.core.extractor import extract_pattern
from hapticscope.core.pattern import loads_pattern
from hapticscope.core.sampler import EventTimeline, Series, build_event_streams, build_samples
from hapticscope.core.summarizer import Summary, summarize
from hapticscope.errors import HapticscopeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PatternResult:
    """Output of one haptic computation cycle."""

    samples: Series = field(default_factory=list)
    summary: Optional[Summary] = None
    events: Optional[EventTimeline] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def event_summaries(self) -> dict[str, Optional[Summary]]:
        """Summary per event-type stream."""
        if self.events is None:
            return {}
        return {name: summarize(series) for name, series in self.events.streams.items()}

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly representation."""
        def points(series):
            out = []
            for p in series:
                row = {"time": p.time, "intensity": p.intensity, "sharpness": p.sharpness}
                if p.event_type is not None:
                    row["eventType"] = p.event_type
                out.append(row)
            return out

        return {
            "samples": points(self.samples),
            "summary": self.summary.to_dict() if self.summary else None,
            "events": {
                "duration": self.events.duration,
                "streams": {k: points(v) for k, v in self.events.streams.items()},
            } if self.events else None,
            "error": self.error,
        }


@dataclass(frozen=True)
class AudioResult:
    """Output of one audio upload."""

    filename: str
    waveform: list[AudioSample] = field(default_factory=list)
    summary: Optional[AudioSummary] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def csv_filename(self) -> str:
        return waveform_filename(self.filename)

    def to_dict(self) -> dict[str, Any]:
        return {
            "filename": self.filename,
            "waveform": [{"time": s.time, "amplitude": s.amplitude} for s in self.waveform],
            "summary": self.summary.to_dict() if self.summary else None,
            "error": self.error,
        }


class HapticPipeline:
    """
    Pattern text -> sampled curves, event streams and summary.

    Results are cached per input text; repeated calls with unchanged text
    return the same result object without recomputing.
    """

    def __init__(self, config: HapticConfig = DEFAULT_CONFIG, cache_size: int = 32):
        """
        Initialize the pipeline.

        Args:
            config: Sampling configuration.
            cache_size: Number of distinct inputs to remember.
        """
        self.config = config
        self.cache_size = cache_size
        self._cache: "OrderedDict[str, PatternResult]" = OrderedDict()

    def compute(self, text: str) -> PatternResult:
        """Uncached computation of one input."""
        try:
            doc = loads_pattern(text)
        except HapticscopeError as exc:
            logger.warning("Pattern rejected: %s", exc)
            return PatternResult(error=str(exc))

        extracted = extract_pattern(doc, self.config)
        curves = extracted.curves
        # Nothing to chart: no curve data and a zero-length timeline
        if curves.duration == 0 and not curves.intensity_curve and not curves.sharpness_curve:
            samples = []
        else:
            samples = build_samples(
                curves.intensity_curve,
                curves.sharpness_curve,
                curves.duration,
                config=self.config,
            )
        events = build_event_streams(
            extracted.events_by_type,
            extracted.duration,
            config=self.config,
        )
        return PatternResult(
            samples=samples,
            summary=summarize(samples, self.config),
            events=events,
        )

    def process(self, text: str) -> PatternResult:
        """Memoized :meth:`compute`."""
        cached = self._cache.get(text)
        if cached is not None:
            self._cache.move_to_end(text)
            return cached

        result = self.compute(text)
        self._cache[text] = result
        while len(self._cache) > self.cache_size:
            self._cache.popitem(last=False)
        return result

    def clear_cache(self) -> None:
        self._cache.clear()


class AudioPipeline:
    """Uploaded file -> downsampled waveform and amplitude summary."""

    def __init__(
        self,
        decoder: Optional[AudioDecoder] = None,
        config: HapticConfig = DEFAULT_CONFIG,
    ):
        self.decoder = decoder if decoder is not None else LibrosaDecoder()
        self.config = config

    async def process_upload(self, filename: str, data: bytes) -> AudioResult:
        """
        Process one upload.

        Unsupported extensions are rejected before decoding. Any failure
        yields an empty waveform and no summary, with the message in
        ``error``.
        """
        try:
            waveform, summary = await process_audio(filename, data, self.decoder, self.config)
        except HapticscopeError as exc:
            logger.warning("Audio upload %s failed: %s", filename, exc)
            return AudioResult(filename=filename, error=str(exc))
        return AudioResult(filename=filename, waveform=waveform, summary=summary)
