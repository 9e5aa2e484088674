"""Shared fixtures for hapticscope tests."""

import json

import numpy as np
import pytest

from hapticscope.core.audio import AudioBuffer
from hapticscope.core.curve import ControlPoint
from hapticscope.core.pattern import HapticEvent
from hapticscope.defaults import DEFAULT_HAPTIC_PATTERN
from hapticscope.errors import AudioDecodeError


@pytest.fixture
def swipe_text():
    return DEFAULT_HAPTIC_PATTERN


@pytest.fixture
def swipe_data(swipe_text):
    return json.loads(swipe_text)


@pytest.fixture
def intensity_points():
    """Ramp up to 0.47, hold, then fall away."""
    return [
        ControlPoint(0.0, 0.0),
        ControlPoint(0.05, 0.47),
        ControlPoint(0.28, 0.47),
        ControlPoint(0.55, 0.0),
    ]


@pytest.fixture
def sharpness_points():
    return [ControlPoint(0.0, 0.05), ControlPoint(0.55, -0.05)]


def make_event(time, event_type="HapticContinuous", duration=None, intensity=None, sharpness=None):
    params = {}
    if intensity is not None:
        params["HapticIntensity"] = intensity
    if sharpness is not None:
        params["HapticSharpness"] = sharpness
    return HapticEvent(time=time, event_type=event_type, event_duration=duration, parameters=params)


@pytest.fixture
def event_factory():
    return make_event


class StubDecoder:
    """AudioDecoder returning a fixed buffer, or failing with a message."""

    def __init__(self, buffer=None, error=None):
        self.buffer = buffer
        self.error = error
        self.calls = []

    def decode(self, data):
        self.calls.append(data)
        if self.error is not None:
            raise AudioDecodeError(self.error)
        return self.buffer


@pytest.fixture
def constant_buffer():
    """One second of constant 0.5 amplitude at 44.1 kHz."""
    sr = 44100
    return AudioBuffer(
        channel_samples=np.full(sr, 0.5, dtype=np.float32),
        sample_rate=sr,
        duration=1.0,
    )


@pytest.fixture
def stub_decoder_factory():
    return StubDecoder
