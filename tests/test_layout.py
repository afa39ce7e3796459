# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
Tests for the polar glyph layout.
"""

import math

import pytest

from dialface.layout import glyph_angle, glyph_texts, place
from dialface.models import DialGeometry, Glyph, TimeSnapshot


@pytest.fixture
def geometry():
    return DialGeometry(center_x=100, center_y=100, hour_radius=65, minute_radius=60, second_radius=50)


class TestGlyphAngle:
    """Test angle computation for each glyph."""

    def test_three_oclock_is_quarter_turn(self):
        assert glyph_angle(Glyph.HOUR, 3) == pytest.approx(math.pi / 2)

    def test_raw_hour_makes_two_turns_per_day(self):
        # 15:00 lands where 03:00 does
        assert math.sin(glyph_angle(Glyph.HOUR, 15)) == pytest.approx(1.0)
        assert math.cos(glyph_angle(Glyph.HOUR, 15)) == pytest.approx(0.0, abs=1e-12)

    def test_minutes_and_seconds_use_sixty(self):
        assert glyph_angle(Glyph.MINUTE, 30) == pytest.approx(math.pi)
        assert glyph_angle(Glyph.SECOND, 45) == pytest.approx(3 * math.pi / 2)


class TestGlyphTexts:
    """Test glyph string formatting."""

    def test_hour_has_no_leading_zero(self):
        texts = glyph_texts(TimeSnapshot(hour=9, minute=5, second=7), include_seconds=True)
        assert texts == {Glyph.HOUR: "9", Glyph.MINUTE: "05", Glyph.SECOND: "07"}

    def test_midnight_reads_twelve(self):
        texts = glyph_texts(TimeSnapshot(hour=0, minute=0, second=0), include_seconds=False)
        assert texts[Glyph.HOUR] == "12"

    def test_seconds_omitted(self):
        texts = glyph_texts(TimeSnapshot(hour=13, minute=45, second=0), include_seconds=False)
        assert Glyph.SECOND not in texts
        assert texts[Glyph.HOUR] == "1"


class TestPlace:
    """Test glyph placement on the dial."""

    def test_hour_at_three_oclock(self, geometry):
        snapshot = TimeSnapshot(hour=3, minute=0, second=0)
        widths = {Glyph.HOUR: 20.0, Glyph.MINUTE: 10.0}
        sizes = {Glyph.HOUR: 40.0, Glyph.MINUTE: 20.0}

        hour, minute = place(snapshot, geometry, widths, sizes)

        # x = 100 + sin(pi/2) * 65 - 0.5 * 20, y = 100 - cos(pi/2) * 65 + 0.4 * 40
        assert hour.glyph is Glyph.HOUR
        assert hour.text == "3"
        assert hour.x == pytest.approx(155.0, abs=1e-9)
        assert hour.y == pytest.approx(116.0, abs=1e-9)

        # Minute 0 points straight up: x = 100 - 5, y = 100 - 60 + 8
        assert minute.text == "00"
        assert minute.x == pytest.approx(95.0, abs=1e-9)
        assert minute.y == pytest.approx(48.0, abs=1e-9)

    def test_second_at_half_minute(self, geometry):
        snapshot = TimeSnapshot(hour=12, minute=15, second=30)
        widths = {Glyph.HOUR: 20.0, Glyph.MINUTE: 10.0, Glyph.SECOND: 6.0}
        sizes = {Glyph.HOUR: 40.0, Glyph.MINUTE: 20.0, Glyph.SECOND: 12.0}

        placements = place(snapshot, geometry, widths, sizes)

        assert [p.glyph for p in placements] == [Glyph.HOUR, Glyph.MINUTE, Glyph.SECOND]
        second = placements[2]
        assert second.text == "30"
        # Straight down: x = 100 - 3, y = 100 + 50 + 4.8
        assert second.x == pytest.approx(97.0, abs=1e-9)
        assert second.y == pytest.approx(154.8, abs=1e-9)
        # Minute 15 points right: x = 100 + 60 - 5
        assert placements[1].x == pytest.approx(155.0, abs=1e-9)

    def test_only_measured_glyphs_are_placed(self, geometry):
        snapshot = TimeSnapshot(hour=8, minute=20, second=40)
        placements = place(snapshot, geometry, {Glyph.HOUR: 10.0}, {Glyph.HOUR: 30.0})

        assert len(placements) == 1
        assert placements[0].text == "8"

    def test_layout_is_deterministic(self, geometry):
        snapshot = TimeSnapshot(hour=17, minute=42, second=9)
        widths = {Glyph.HOUR: 12.0, Glyph.MINUTE: 14.0}
        sizes = {Glyph.HOUR: 40.0, Glyph.MINUTE: 20.0}

        assert place(snapshot, geometry, widths, sizes) == place(snapshot, geometry, widths, sizes)
