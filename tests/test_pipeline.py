"""Tests for the memoized haptic pipeline and the audio pipeline."""

import asyncio
import json

import pytest

from hapticscope.config import HapticConfig
from hapticscope.pipeline import AudioPipeline, HapticPipeline


class TestHapticPipeline:
    def test_swipe_document(self, swipe_text):
        result = HapticPipeline().process(swipe_text)

        assert result.ok
        assert len(result.samples) == 601
        assert result.summary.peak_intensity == pytest.approx(0.47)
        assert result.summary.duration == 0.55
        assert result.events.event_types == ["HapticContinuous"]
        assert result.events.duration == pytest.approx(0.55)

        continuous = result.event_summaries()["HapticContinuous"]
        assert continuous.peak_intensity == 0.47
        assert continuous.sharpness_start == 0.05

    def test_memoized_on_text(self, swipe_text):
        pipeline = HapticPipeline()
        first = pipeline.process(swipe_text)
        assert pipeline.process(swipe_text) is first
        assert pipeline.process(swipe_text + " ") is not first

    def test_cache_is_bounded(self):
        pipeline = HapticPipeline(cache_size=2)
        docs = [json.dumps({"Version": i, "Pattern": []}) for i in range(3)]
        first = pipeline.process(docs[0])
        pipeline.process(docs[1])
        pipeline.process(docs[2])
        assert pipeline.process(docs[0]) is not first

    def test_clear_cache(self, swipe_text):
        pipeline = HapticPipeline()
        first = pipeline.process(swipe_text)
        pipeline.clear_cache()
        assert pipeline.process(swipe_text) is not first

    def test_parse_error_gives_neutral_result(self):
        result = HapticPipeline().process("{ oops")
        assert not result.ok
        assert "Invalid JSON" in result.error
        assert result.samples == []
        assert result.summary is None
        assert result.events is None
        assert result.event_summaries() == {}

    def test_recovers_after_error(self, swipe_text):
        pipeline = HapticPipeline()
        assert not pipeline.process("[]").ok
        assert pipeline.process(swipe_text).ok

    def test_empty_pattern(self):
        result = HapticPipeline().process('{"Version": 1, "Pattern": []}')
        assert result.ok
        assert result.samples == []
        assert result.summary is None
        assert result.events.streams == {}

    def test_curve_only_pattern_is_sampled(self):
        text = json.dumps(
            {
                "Pattern": [
                    {
                        "ParameterCurve": {
                            "ParameterID": "HapticIntensityControl",
                            "ParameterCurveControlPoints": [
                                {"Time": 0.0, "ParameterValue": 0.2},
                                {"Time": 0.4, "ParameterValue": 0.8},
                            ],
                        }
                    }
                ]
            }
        )
        result = HapticPipeline(HapticConfig(sample_count=4)).process(text)
        assert [p.time for p in result.samples] == [0.0, 0.1, 0.2, 0.3, 0.4]
        assert result.summary.peak_intensity == 0.8

    def test_non_finite_literal_is_a_parse_error(self):
        result = HapticPipeline().process('{"Pattern": [{"Event": {"Time": NaN}}]}')
        assert not result.ok
        assert result.samples == []
        assert result.summary is None

    def test_event_only_pattern_uses_floor(self):
        text = json.dumps(
            {
                "Pattern": [
                    {
                        "Event": {
                            "Time": 0.0,
                            "EventType": "HapticTransient",
                            "EventParameters": [
                                {"ParameterID": "HapticIntensity", "ParameterValue": 1.0}
                            ],
                        }
                    }
                ]
            }
        )
        result = HapticPipeline(HapticConfig(sample_count=50)).process(text)
        assert result.events.duration == 0.5
        stream = result.events.streams["HapticTransient"]
        assert len(stream) == 51
        assert stream[0].intensity == 1.0
        assert stream[1].time == 0.01
        assert stream[2].intensity == 0.0

    def test_to_dict_is_json_serializable(self, swipe_text):
        data = HapticPipeline(HapticConfig(sample_count=4)).process(swipe_text).to_dict()
        encoded = json.loads(json.dumps(data))
        assert len(encoded["samples"]) == 5
        assert "eventType" not in encoded["samples"][0]
        assert encoded["events"]["streams"]["HapticContinuous"][0]["eventType"] == "HapticContinuous"
        assert encoded["error"] is None


class TestAudioPipeline:
    def test_successful_upload(self, stub_decoder_factory, constant_buffer):
        pipeline = AudioPipeline(decoder=stub_decoder_factory(buffer=constant_buffer))
        result = asyncio.run(pipeline.process_upload("tone.wav", b"bytes"))

        assert result.ok
        assert result.summary.peak_amplitude == 0.5
        assert result.csv_filename == "tone_waveform.csv"
        assert result.to_dict()["summary"]["total_samples"] == 44100

    def test_unsupported_type(self, stub_decoder_factory, constant_buffer):
        decoder = stub_decoder_factory(buffer=constant_buffer)
        result = asyncio.run(AudioPipeline(decoder=decoder).process_upload("tone.mp3", b""))

        assert result.error == "Please upload a .wav file"
        assert result.waveform == []
        assert result.summary is None
        assert decoder.calls == []

    def test_decode_failure_message_is_verbatim(self, stub_decoder_factory):
        decoder = stub_decoder_factory(error="Format not recognised.")
        result = asyncio.run(AudioPipeline(decoder=decoder).process_upload("x.wav", b"?"))

        assert result.error == "Format not recognised."
        assert result.waveform == []
        assert result.summary is None

    def test_unexpected_decoder_exception_is_contained(self):
        class FailingDecoder:
            def decode(self, data):
                raise ValueError("unsupported RIFF chunk")

        result = asyncio.run(AudioPipeline(decoder=FailingDecoder()).process_upload("a.wav", b"x"))

        assert result.error == "unsupported RIFF chunk"
        assert result.waveform == []
        assert result.summary is None

    def test_default_decoder_is_librosa(self):
        from hapticscope.core.audio import LibrosaDecoder

        assert isinstance(AudioPipeline().decoder, LibrosaDecoder)
