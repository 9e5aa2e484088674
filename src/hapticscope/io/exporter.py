"""
CSV serialization module.

Writes sampled haptic series and downsampled audio waveforms as
row-oriented CSV text for charting tools and spreadsheets.
"""

from pathlib import Path
from typing import Optional, Sequence, Union

import numpy as np

from hapticscope.config import DEFAULT_CONFIG, HapticConfig
from hapticscope.core.audio import AudioSample
from hapticscope.core.sampler import SampledPoint

CURVE_HEADER = "time,intensity,sharpness"
EVENT_HEADER = "time,intensity,sharpness,eventType"
AUDIO_HEADER = "time,amplitude"


def _num(value: float) -> str:
    """
    Shortest round-trip decimal form.

    Integral values print without a trailing '.0', and magnitudes from 1e-6
    up to 1e21 are written positionally (0.00001, not 1e-05).
    """
    value = float(value)
    if value == 0:
        return "0"
    if 1e-6 <= abs(value) < 1e21:
        return np.format_float_positional(value, trim="-")
    return repr(value)


class CsvExporter:
    """
    Exports sampled series to CSV.

    The schema is picked from the data: samples tagged with an event type
    get an extra ``eventType`` column.
    """

    def __init__(self, config: HapticConfig = DEFAULT_CONFIG):
        """
        Initialize the exporter.

        Args:
            config: Supplies the default output filenames.
        """
        self.config = config

    @staticmethod
    def is_event_series(series: Sequence[SampledPoint]) -> bool:
        return bool(series) and series[0].event_type is not None

    def to_csv(self, series: Sequence[SampledPoint]) -> str:
        """
        Render a series as CSV text.

        Args:
            series: Curve-stream or event-stream samples.

        Returns:
            Header line followed by one line per sample.
        """
        if self.is_event_series(series):
            rows = [
                f"{_num(p.time)},{_num(p.intensity)},{_num(p.sharpness)},{p.event_type}"
                for p in series
            ]
            return "\n".join([EVENT_HEADER, *rows])

        rows = [f"{_num(p.time)},{_num(p.intensity)},{_num(p.sharpness)}" for p in series]
        return "\n".join([CURVE_HEADER, *rows])

    def audio_to_csv(self, waveform: Sequence[AudioSample]) -> str:
        """Render a downsampled waveform as CSV text."""
        rows = [f"{_num(s.time)},{_num(s.amplitude)}" for s in waveform]
        return "\n".join([AUDIO_HEADER, *rows])

    def export_csv(
        self,
        series: Sequence[SampledPoint],
        output_path: Optional[Union[str, Path]] = None,
    ) -> Path:
        """
        Write a series to a CSV file.

        Args:
            series: Samples to write.
            output_path: Destination; defaults to ``config.curve_filename``.

        Returns:
            Path to written file.
        """
        output_path = Path(output_path or self.config.curve_filename)
        output_path.write_text(self.to_csv(series), encoding="utf-8")
        return output_path

    def export_audio_csv(
        self,
        waveform: Sequence[AudioSample],
        output_path: Optional[Union[str, Path]] = None,
    ) -> Path:
        """Write a waveform to a CSV file (default ``config.audio_filename``)."""
        output_path = Path(output_path or self.config.audio_filename)
        output_path.write_text(self.audio_to_csv(waveform), encoding="utf-8")
        return output_path
