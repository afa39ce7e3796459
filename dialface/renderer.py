# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""Frame render pipeline."""

import logging
from typing import List

from .interfaces import Surface
from .layout import glyph_texts, place
from .models import DialGeometry, GlyphPlacement, StyleSet, TimeSnapshot

logger = logging.getLogger(__name__)


class FaceRenderer:
    """Draws one frame of the dial onto a surface.

    A frame is a pure function of the time snapshot, dial geometry, style and
    the surface's text measurements; nothing is cached between frames.
    """

    def __init__(self, surface: Surface):
        """Initialize the renderer.

        Args:
            surface: Drawing target that also measures text.
        """
        self._surface = surface

    @property
    def surface(self) -> Surface:
        return self._surface

    def compose(
        self,
        snapshot: TimeSnapshot,
        geometry: DialGeometry,
        style: StyleSet,
    ) -> List[GlyphPlacement]:
        """Measure and lay out the glyphs of a frame without drawing."""
        texts = glyph_texts(snapshot, include_seconds=style.show_seconds)

        widths = {}
        sizes = {}
        for glyph, text in texts.items():
            size = style.text_size_for(glyph)
            sizes[glyph] = size
            widths[glyph] = self._surface.measure_text(text, size, style.typeface_for(glyph))

        return place(snapshot, geometry, widths, sizes, texts)

    def draw(
        self,
        snapshot: TimeSnapshot,
        geometry: DialGeometry,
        style: StyleSet,
    ) -> List[GlyphPlacement]:
        """Render a frame: background, then hour, minute and second glyphs.

        Returns:
            The placements that were drawn.
        """
        placements = self.compose(snapshot, geometry, style)

        self._surface.draw_background(style.background_color)
        for placement in placements:
            glyph = placement.glyph
            self._surface.draw_text(
                placement.text,
                placement.x,
                placement.y,
                style.color_for(glyph),
                style.text_size_for(glyph),
                style.typeface_for(glyph),
                style.anti_alias,
            )

        logger.debug(
            f"Frame drawn at {snapshot.hour:02d}:{snapshot.minute:02d}:{snapshot.second:02d} "
            f"({len(placements)} glyphs)"
        )
        return placements
