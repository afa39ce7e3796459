# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""Value types shared by the layout, appearance and render components."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

Color = Tuple[int, int, int]


class RenderMode(Enum):
    """How much detail the face is allowed to draw."""
    INTERACTIVE = "interactive"
    AMBIENT = "ambient"


class VisibilityState(Enum):
    """Whether the face is currently on screen."""
    HIDDEN = "hidden"
    VISIBLE = "visible"


class FaceState(Enum):
    """Combined mode/visibility state driving the scheduler."""
    HIDDEN = "hidden"
    VISIBLE_INTERACTIVE = "visible_interactive"
    VISIBLE_AMBIENT = "visible_ambient"


class Glyph(Enum):
    """The three glyphs placed around the dial, in draw order."""
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"


@dataclass(frozen=True)
class CapabilityFlags:
    """Display capabilities reported by the host."""
    # Fewer bits per color in ambient mode; anti-aliasing must be off there
    low_bit_ambient: bool = False


@dataclass(frozen=True)
class DialGeometry:
    """Center and per-glyph radii of the dial, in surface pixels."""
    center_x: float
    center_y: float
    hour_radius: float
    minute_radius: float
    second_radius: float

    HOUR_RADIUS_SCALE = 0.65
    MINUTE_RADIUS_SCALE = 0.60
    SECOND_RADIUS_SCALE = 0.50

    @classmethod
    def from_surface(cls, width: float, height: float) -> "DialGeometry":
        """Derive the dial from a surface size.

        Radii scale with half the surface width, clamped to half the smaller
        dimension so every glyph circle fits on non-square surfaces.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Surface size must be positive, got {width}x{height}")

        center_x = width / 2.0
        center_y = height / 2.0
        half = min(center_x, center_y)
        return cls(
            center_x=center_x,
            center_y=center_y,
            hour_radius=half * cls.HOUR_RADIUS_SCALE,
            minute_radius=half * cls.MINUTE_RADIUS_SCALE,
            second_radius=half * cls.SECOND_RADIUS_SCALE,
        )

    def radius_for(self, glyph: Glyph) -> float:
        if glyph is Glyph.HOUR:
            return self.hour_radius
        if glyph is Glyph.MINUTE:
            return self.minute_radius
        if glyph is Glyph.SECOND:
            return self.second_radius
        raise ValueError(f"Unknown glyph: {glyph!r}")


@dataclass(frozen=True)
class TimeSnapshot:
    """A single clock reading; every glyph of one frame comes from it."""
    hour: int
    minute: int
    second: int

    @property
    def display_hour(self) -> int:
        """Hour on a 12-hour face (0 and 12 both read 12)."""
        hour = self.hour
        if hour > 12:
            hour -= 12
        if hour == 0:
            hour = 12
        return hour

    @classmethod
    def from_datetime(cls, now: datetime) -> "TimeSnapshot":
        return cls(hour=now.hour, minute=now.minute, second=now.second)


@dataclass(frozen=True)
class Typeface:
    """Font family (None for the default font) and weight."""
    family: Optional[str] = None
    bold: bool = False


@dataclass(frozen=True)
class StyleSet:
    """Everything the render pipeline needs to know about colors and fonts."""
    background_color: Color
    hour_color: Color
    minute_color: Color
    second_color: Color
    hour_text_size: float
    minute_text_size: float
    second_text_size: float
    anti_alias: bool
    show_seconds: bool
    hour_typeface: Typeface = Typeface(bold=True)
    minute_typeface: Typeface = Typeface()
    second_typeface: Typeface = Typeface()

    def color_for(self, glyph: Glyph) -> Color:
        return {
            Glyph.HOUR: self.hour_color,
            Glyph.MINUTE: self.minute_color,
            Glyph.SECOND: self.second_color,
        }[glyph]

    def text_size_for(self, glyph: Glyph) -> float:
        return {
            Glyph.HOUR: self.hour_text_size,
            Glyph.MINUTE: self.minute_text_size,
            Glyph.SECOND: self.second_text_size,
        }[glyph]

    def typeface_for(self, glyph: Glyph) -> Typeface:
        return {
            Glyph.HOUR: self.hour_typeface,
            Glyph.MINUTE: self.minute_typeface,
            Glyph.SECOND: self.second_typeface,
        }[glyph]


@dataclass(frozen=True)
class GlyphPlacement:
    """Text and baseline-left position of one glyph for one frame."""
    glyph: Glyph
    text: str
    x: float
    y: float
