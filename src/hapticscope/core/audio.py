"""
Audio waveform summarization.

Decoding is delegated to an :class:`AudioDecoder`; the default
implementation uses librosa. The summarizer downsamples the first channel
for charting and computes peak and RMS amplitude over every sample.
"""

import asyncio
import io
import logging
import math
from dataclasses import asdict, dataclass
from pathlib import PurePath
from typing import Protocol

import librosa
import numpy as np

from hapticscope.config import DEFAULT_CONFIG, HapticConfig
from hapticscope.errors import AudioDecodeError, HapticscopeError, UnsupportedFileTypeError

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIX = ".wav"


@dataclass
class AudioBuffer:
    """Decoded first-channel samples."""

    channel_samples: np.ndarray
    sample_rate: int
    duration: float

    @property
    def n_samples(self) -> int:
        return len(self.channel_samples)


@dataclass(frozen=True)
class AudioSample:
    """One retained point of the downsampled waveform."""

    time: float
    amplitude: float


@dataclass(frozen=True)
class AudioSummary:
    """Amplitude statistics over the full (not downsampled) buffer."""

    duration: float
    sample_rate: int
    peak_amplitude: float
    rms_amplitude: float
    total_samples: int

    def to_dict(self) -> dict:
        return asdict(self)


class AudioDecoder(Protocol):
    """Turns raw file bytes into an :class:`AudioBuffer`."""

    def decode(self, data: bytes) -> AudioBuffer:
        ...


class LibrosaDecoder:
    """Decodes audio bytes with librosa at the file's native sample rate."""

    def decode(self, data: bytes) -> AudioBuffer:
        """
        Decode raw file bytes.

        Args:
            data: Complete contents of an audio file.

        Returns:
            AudioBuffer with the first channel.

        Raises:
            AudioDecodeError: If the bytes cannot be decoded.
        """
        try:
            y, sr = librosa.load(io.BytesIO(data), sr=None, mono=False)
        except Exception as exc:
            raise AudioDecodeError(str(exc)) from exc

        if y.ndim > 1:
            y = y[0]
        return AudioBuffer(
            channel_samples=y,
            sample_rate=int(sr),
            duration=float(librosa.get_duration(y=y, sr=sr)),
        )


def validate_upload(filename: str) -> None:
    """
    Reject anything that is not a ``.wav`` file (case-insensitive).

    Raises:
        UnsupportedFileTypeError: For any other extension.
    """
    if not filename.lower().endswith(SUPPORTED_SUFFIX):
        raise UnsupportedFileTypeError("Please upload a .wav file")


def waveform_filename(upload_name: str, config: HapticConfig = DEFAULT_CONFIG) -> str:
    """CSV name for an uploaded file, e.g. ``kick.wav`` -> ``kick_waveform.csv``."""
    stem = PurePath(upload_name).stem if upload_name else ""
    return f"{stem}_waveform.csv" if stem else config.audio_filename


def summarize_audio(
    buffer: AudioBuffer,
    config: HapticConfig = DEFAULT_CONFIG,
) -> tuple[list[AudioSample], AudioSummary]:
    """
    Downsample a buffer for charting and compute amplitude statistics.

    Args:
        buffer: Decoded audio.
        config: Supplies the maximum number of retained points.

    Returns:
        Tuple of (waveform, summary).
    """
    y = np.asarray(buffer.channel_samples, dtype=np.float64)
    total = len(y)
    sr = buffer.sample_rate

    step = max(1, math.ceil(total / config.max_audio_points))
    indices = np.arange(0, total, step)
    waveform = [
        AudioSample(time=int(i) / sr, amplitude=float(y[i]))
        for i in indices
    ]

    if total:
        peak = float(np.max(np.abs(y)))
        rms = math.sqrt(float(np.sum(y * y)) / total)
    else:
        peak = rms = 0.0

    logger.debug("Summarized %d samples into %d points (step %d)", total, len(waveform), step)
    summary = AudioSummary(
        duration=buffer.duration,
        sample_rate=sr,
        peak_amplitude=peak,
        rms_amplitude=rms,
        total_samples=total,
    )
    return waveform, summary


async def process_audio(
    filename: str,
    data: bytes,
    decoder: AudioDecoder,
    config: HapticConfig = DEFAULT_CONFIG,
) -> tuple[list[AudioSample], AudioSummary]:
    """
    Validate, decode and summarize one upload.

    The extension check runs before any awaiting; decoding runs in a worker
    thread so the event loop stays responsive. Any decoder failure surfaces
    as :class:`AudioDecodeError` carrying the decoder's message.
    """
    validate_upload(filename)
    try:
        buffer = await asyncio.to_thread(decoder.decode, data)
    except HapticscopeError:
        raise
    except Exception as exc:
        raise AudioDecodeError(str(exc)) from exc
    return summarize_audio(buffer, config)
