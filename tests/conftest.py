# Copyright (c) 2025-2026 Luc Vincent. All Rights Reserved.
"""
Pytest configuration and shared fixtures for DialFace tests.
"""

import itertools
import tempfile
from pathlib import Path

import pytest

from dialface.models import TimeSnapshot

MS_PER_DAY = 24 * 60 * 60 * 1000


class FakeClock:
    """Clock source driven by a settable millisecond counter."""

    def __init__(self, ms: int = 0):
        self.ms = ms
        self.zone_calls = []
        self.now_calls = 0

    def millis(self) -> int:
        return self.ms

    def set_time(self, hour: int, minute: int, second: int, millis: int = 0) -> None:
        self.ms = ((hour * 60 + minute) * 60 + second) * 1000 + millis

    def now(self) -> TimeSnapshot:
        self.now_calls += 1
        seconds = (self.ms % MS_PER_DAY) // 1000
        return TimeSnapshot(hour=seconds // 3600, minute=(seconds // 60) % 60, second=seconds % 60)

    def set_time_zone(self, zone_id):
        self.zone_calls.append(zone_id)


class FakeTimer:
    """One-shot timer facility that fires only when told to."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.scheduled = []  # delays in ms, in arm order
        self.cancelled = []  # handles, in cancel order
        self._pending = {}
        self._ids = itertools.count(1)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def schedule_once(self, delay_ms, callback):
        handle = next(self._ids)
        self._pending[handle] = (self.clock.ms + delay_ms, callback)
        self.scheduled.append(delay_ms)
        return handle

    def cancel(self, handle):
        self.cancelled.append(handle)
        self._pending.pop(handle, None)

    def handle_event(self, event) -> bool:
        """Host events never carry this timer's callbacks."""
        return False

    def fire_next(self, late_ms: int = 0) -> None:
        """Advance the clock to the earliest due timer (plus lateness) and fire it."""
        handle = min(self._pending, key=lambda h: self._pending[h][0])
        due, callback = self._pending.pop(handle)
        self.clock.ms = due + late_ms
        callback()


class FakeSurface:
    """Surface that records draw commands and measures text deterministically."""

    def __init__(self):
        self.commands = []

    def measure_text(self, text, size, typeface):
        return len(text) * size * 0.5

    def draw_background(self, color):
        self.commands.append(("background", color))

    def draw_text(self, text, x, y, color, size, typeface, anti_alias):
        self.commands.append(("text", text, x, y, color, size, typeface, anti_alias))

    @property
    def texts(self):
        return [c for c in self.commands if c[0] == "text"]

    @property
    def backgrounds(self):
        return [c for c in self.commands if c[0] == "background"]

    def clear(self):
        self.commands = []


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_clock():
    clock = FakeClock()
    clock.set_time(10, 15, 30, millis=250)
    return clock


@pytest.fixture
def fake_timer(fake_clock):
    return FakeTimer(fake_clock)


@pytest.fixture
def fake_surface():
    return FakeSurface()


@pytest.fixture
def face_config():
    """Default configuration with a fixed, round screen."""
    from dialface.config import DialFaceConfig
    return DialFaceConfig()


@pytest.fixture
def engine(fake_surface, fake_clock, fake_timer, face_config):
    """Hidden face engine with a 200x200 surface."""
    from dialface.engine import FaceEngine
    from dialface.events import SurfaceSizeChanged

    face = FaceEngine(fake_surface, fake_clock, fake_timer, face_config, clock_ms=fake_clock.millis)
    face.dispatch(SurfaceSizeChanged(200, 200))
    return face


@pytest.fixture
def sample_config_dict():
    """Return a minimal valid config dictionary."""
    return {
        "theme": {
            "background_color": [10, 10, 30],
            "hour_color": [245, 102, 0],
            "minute_color": [170, 140, 220],
            "second_color": [255, 255, 255],
            "ambient_hour_color": [200, 200, 200],
            "ambient_minute_color": [140, 140, 140]
        },
        "text": {
            "text_size": 40.0,
            "text_size_round": 45.0,
            "hour_font": "sans",
            "hour_bold": True,
            "minute_font": "sans",
            "minute_bold": False
        },
        "clock": {
            "show_seconds": True,
            "timezone": None,
            "interactive_update_rate_ms": 1000
        },
        "display": {
            "width": 400,
            "height": 400,
            "round": False,
            "low_bit_ambient": True,
            "fullscreen": False
        },
        "logging": {
            "level": "DEBUG",
            "directory": None
        }
    }


@pytest.fixture
def sample_config_yaml(temp_dir, sample_config_dict):
    """Create a temporary config.yaml file."""
    import yaml
    config_path = temp_dir / "config.yaml"
    with open(config_path, 'w') as f:
        yaml.dump(sample_config_dict, f)
    return config_path
