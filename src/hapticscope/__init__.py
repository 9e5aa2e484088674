"""Sampling and summarization engine for AHAP-like haptic patterns."""

from hapticscope.config import HapticConfig
from hapticscope.core.audio import LibrosaDecoder, summarize_audio
from hapticscope.core.summarizer import summarize
from hapticscope.io.exporter import CsvExporter
from hapticscope.pipeline import AudioPipeline, HapticPipeline

__version__ = "0.1.0"
__all__ = [
    "HapticConfig",
    "LibrosaDecoder",
    "summarize_audio",
    "summarize",
    "CsvExporter",
    "AudioPipeline",
    "HapticPipeline",
]
