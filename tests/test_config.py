"""Tests for HapticConfig."""

import pytest

from hapticscope.config import HapticConfig
from hapticscope.errors import ConfigError


class TestHapticConfig:
    def test_defaults(self):
        config = HapticConfig()
        assert config.sample_count == 600
        assert config.min_visual_duration == 0.5
        assert config.curve_filename == "haptic_curves.csv"
        assert config.audio_filename == "audio_waveform.csv"

    def test_event_duration_rule(self):
        config = HapticConfig()
        assert config.event_duration("HapticTransient") == 0.01
        assert config.event_duration("HapticContinuous") == 0.1
        assert config.event_duration("Anything") == 0.1
        assert config.event_duration("HapticTransient", 0.3) == 0.3
        assert config.event_duration("HapticContinuous", 0.0) == 0.0

    def test_from_dict(self):
        config = HapticConfig.from_dict({"sample_count": 100, "default_event_duration": 0.2})
        assert config.sample_count == 100
        assert config.event_duration("HapticContinuous") == 0.2

    def test_from_dict_rejects_unknown(self):
        with pytest.raises(ConfigError, match="bogus"):
            HapticConfig.from_dict({"bogus": 1})

    @pytest.mark.parametrize(
        "kwargs",
        [{"sample_count": 0}, {"max_audio_points": 0}, {"transient_duration": -1.0}],
    )
    def test_validation(self, kwargs):
        with pytest.raises(ConfigError):
            HapticConfig(**kwargs)
