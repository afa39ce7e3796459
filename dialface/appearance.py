# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""Style selection for ambient and interactive rendering."""

from typing import Sequence

from .config import TextConfig, ThemeConfig
from .models import CapabilityFlags, Color, RenderMode, StyleSet, Typeface

AMBIENT_BACKGROUND: Color = (0, 0, 0)

# Minute and second glyphs relative to the hour glyph
MINUTE_SIZE_SCALE = 0.5
SECOND_SIZE_SCALE = 0.3


def _color(value: Sequence[int]) -> Color:
    return (int(value[0]), int(value[1]), int(value[2]))


def select_style(
    mode: RenderMode,
    caps: CapabilityFlags,
    theme: ThemeConfig,
    text: TextConfig,
    base_text_size: float,
    show_seconds: bool = False,
) -> StyleSet:
    """Resolve the style for one frame.

    Ambient frames use a black background and the reduced-contrast palette,
    never show seconds, and turn anti-aliasing off on low-bit displays.
    Interactive frames use the themed palette with anti-aliasing on, and
    show seconds only when ``show_seconds`` is set.

    Args:
        mode: Current render mode.
        caps: Display capabilities.
        theme: Configured palettes.
        text: Configured fonts.
        base_text_size: Hour glyph size for the current screen shape.
        show_seconds: Whether interactive frames include the second glyph.

    Returns:
        Immutable StyleSet for the frame.
    """
    hour_typeface = Typeface(family=text.hour_font, bold=text.hour_bold)
    minute_typeface = Typeface(family=text.minute_font, bold=text.minute_bold)
    sizes = dict(
        hour_text_size=base_text_size,
        minute_text_size=base_text_size * MINUTE_SIZE_SCALE,
        second_text_size=base_text_size * SECOND_SIZE_SCALE,
    )

    if mode is RenderMode.AMBIENT:
        return StyleSet(
            background_color=AMBIENT_BACKGROUND,
            hour_color=_color(theme.ambient_hour_color),
            minute_color=_color(theme.ambient_minute_color),
            second_color=_color(theme.second_color),
            anti_alias=not caps.low_bit_ambient,
            show_seconds=False,
            hour_typeface=hour_typeface,
            minute_typeface=minute_typeface,
            second_typeface=minute_typeface,
            **sizes,
        )

    if mode is RenderMode.INTERACTIVE:
        return StyleSet(
            background_color=_color(theme.background_color),
            hour_color=_color(theme.hour_color),
            minute_color=_color(theme.minute_color),
            second_color=_color(theme.second_color),
            anti_alias=True,
            show_seconds=show_seconds,
            hour_typeface=hour_typeface,
            minute_typeface=minute_typeface,
            second_typeface=minute_typeface,
            **sizes,
        )

    raise ValueError(f"Unknown render mode: {mode!r}")
