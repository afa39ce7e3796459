# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""Polar layout of the hour, minute and second glyphs on the dial."""

import math
from typing import Dict, List, Mapping, Optional

from .models import DialGeometry, Glyph, GlyphPlacement, TimeSnapshot

# Glyph values per full turn of the dial. Hours use the raw 0-23 value, so the
# hour glyph goes round twice a day like an analog hour hand.
PERIODS = {
    Glyph.HOUR: 12,
    Glyph.MINUTE: 60,
    Glyph.SECOND: 60,
}

# Text is centered on its dial point horizontally, and its baseline is pushed
# down by this fraction of the font size to center it vertically.
BASELINE_OFFSET = 0.4


def glyph_value(snapshot: TimeSnapshot, glyph: Glyph) -> int:
    """Raw clock value that drives a glyph's angle."""
    if glyph is Glyph.HOUR:
        return snapshot.hour
    if glyph is Glyph.MINUTE:
        return snapshot.minute
    if glyph is Glyph.SECOND:
        return snapshot.second
    raise ValueError(f"Unknown glyph: {glyph!r}")


def glyph_angle(glyph: Glyph, value: float) -> float:
    """Angle in radians, 0 at twelve o'clock and increasing clockwise."""
    return value * 2 * math.pi / PERIODS[glyph]


def glyph_texts(snapshot: TimeSnapshot, include_seconds: bool) -> Dict[Glyph, str]:
    """Format the glyph strings for one frame.

    The hour uses the 12-hour value without a leading zero; minutes and
    seconds are zero-padded to two digits.
    """
    texts = {
        Glyph.HOUR: f"{snapshot.display_hour:d}",
        Glyph.MINUTE: f"{snapshot.minute:02d}",
    }
    if include_seconds:
        texts[Glyph.SECOND] = f"{snapshot.second:02d}"
    return texts


def place(
    snapshot: TimeSnapshot,
    geometry: DialGeometry,
    widths: Mapping[Glyph, float],
    sizes: Mapping[Glyph, float],
    texts: Optional[Mapping[Glyph, str]] = None,
) -> List[GlyphPlacement]:
    """Position every glyph that has a measured width.

    Args:
        snapshot: Time of the frame being laid out.
        geometry: Dial center and radii.
        widths: Measured text width of each glyph to place.
        sizes: Font size of each glyph to place.
        texts: Formatted glyph strings; derived from the snapshot if omitted.

    Returns:
        Placements in hour, minute, second order, for glyphs present in
        ``widths`` only.
    """
    if texts is None:
        texts = glyph_texts(snapshot, include_seconds=Glyph.SECOND in widths)

    placements = []
    for glyph in Glyph:
        if glyph not in widths:
            continue
        angle = glyph_angle(glyph, glyph_value(snapshot, glyph))
        radius = geometry.radius_for(glyph)
        x = geometry.center_x + math.sin(angle) * radius - 0.5 * widths[glyph]
        y = geometry.center_y - math.cos(angle) * radius + BASELINE_OFFSET * sizes[glyph]
        placements.append(GlyphPlacement(glyph=glyph, text=texts[glyph], x=x, y=y))
    return placements
