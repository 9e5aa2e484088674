"""Serialization of sampled series."""

from hapticscope.io.exporter import CsvExporter

__all__ = ["CsvExporter"]
