"""Tests for CSV serialization."""

from hapticscope.config import HapticConfig
from hapticscope.core.audio import AudioSample
from hapticscope.core.sampler import SampledPoint, build_event_samples, build_samples
from hapticscope.io.exporter import CsvExporter


class TestCsvExporter:
    def test_curve_schema(self):
        series = [
            SampledPoint(0.0, 0.0, 0.05),
            SampledPoint(0.5, 0.47, -0.05),
        ]
        text = CsvExporter().to_csv(series)
        assert text.splitlines() == [
            "time,intensity,sharpness",
            "0,0,0.05",
            "0.5,0.47,-0.05",
        ]

    def test_event_schema(self, event_factory):
        event = event_factory(0.0, "HapticTransient", intensity=1.0, sharpness=0.25)
        series = build_event_samples([event], 0.02, 2)
        lines = CsvExporter().to_csv(series).splitlines()
        assert lines[0] == "time,intensity,sharpness,eventType"
        assert lines[1] == "0,1,0.25,HapticTransient"
        assert lines[3] == "0.02,0,0,HapticTransient"

    def test_unrounded_values_keep_full_precision(self):
        text = CsvExporter().to_csv([SampledPoint(0.3333, 1 / 3, 0.1)])
        assert text.splitlines()[1] == f"0.3333,{1 / 3!r},0.1"

    def test_small_values_written_positionally(self):
        text = CsvExporter().to_csv(
            [SampledPoint(0.0001, 1e-05, -3.3e-05), SampledPoint(1e-07, 0.5, 0.0)]
        )
        assert text.splitlines()[1:] == ["0.0001,0.00001,-0.000033", "1e-07,0.5,0"]

    def test_row_count_matches_samples(self, intensity_points, sharpness_points):
        series = build_samples(intensity_points, sharpness_points, 0.55, 600)
        rows = CsvExporter().to_csv(series).splitlines()
        assert len(rows) == len(series) + 1
        assert all(len(row.split(",")) == 3 for row in rows)

    def test_empty_series_is_header_only(self):
        assert CsvExporter().to_csv([]) == "time,intensity,sharpness"

    def test_audio_csv(self):
        text = CsvExporter().audio_to_csv(
            [AudioSample(0.0, 0.5), AudioSample(0.001, -0.25)]
        )
        assert text.splitlines() == ["time,amplitude", "0,0.5", "0.001,-0.25"]

    def test_export_files(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        exporter = CsvExporter()

        curve_path = exporter.export_csv([SampledPoint(0.0, 0.1, 0.2)])
        assert curve_path.name == "haptic_curves.csv"
        assert curve_path.read_text(encoding="utf-8").startswith("time,intensity,sharpness")

        audio_path = exporter.export_audio_csv([AudioSample(0.0, 0.1)])
        assert audio_path.name == "audio_waveform.csv"

        named = exporter.export_csv([SampledPoint(0.0, 0.1, 0.2)], tmp_path / "swipe.csv")
        assert named == tmp_path / "swipe.csv"

    def test_configured_filenames(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        exporter = CsvExporter(HapticConfig(curve_filename="curves.csv"))
        assert exporter.export_csv([]).name == "curves.csv"
