# Copyright (c) 2025-2026 Luc Vincent. All Rights Reserved.
"""pygame drawing surface for the face renderer."""

import logging
from typing import Tuple

import pygame

from .models import Color, Typeface

logger = logging.getLogger(__name__)


class PygameSurface:
    """Draws face frames onto a pygame surface.

    Text positions are baseline-left, as produced by the layout engine; glyphs
    are blitted so their baseline lands on the requested y.
    """

    def __init__(self, target: pygame.Surface):
        """Initialize the surface.

        Args:
            target: Surface to draw on (usually the display surface).
        """
        self.target = target
        self._font_cache: dict = {}

    def get_font(self, size: float, typeface: Typeface) -> pygame.font.Font:
        """Get a cached pygame font.

        Args:
            size: Font size in pixels.
            typeface: Family (None for the default font) and weight.

        Returns:
            pygame.font.Font instance.
        """
        pixel_size = max(1, int(round(size)))
        cache_key = (pixel_size, typeface.family, typeface.bold)
        if cache_key not in self._font_cache:
            self._font_cache[cache_key] = pygame.font.SysFont(
                typeface.family, pixel_size, bold=typeface.bold
            )
            logger.debug(f"Loaded font {typeface.family or 'default'} {pixel_size}px bold={typeface.bold}")
        return self._font_cache[cache_key]

    def draw_background(self, color: Color) -> None:
        self.target.fill(color)

    def draw_text(self, text: str, x: float, y: float, color: Color,
                  size: float, typeface: Typeface, anti_alias: bool) -> None:
        font = self.get_font(size, typeface)
        text_surface = font.render(text, anti_alias, color)
        self.target.blit(text_surface, self._top_left(font, x, y))

    def measure_text(self, text: str, size: float, typeface: Typeface) -> float:
        return float(self.get_font(size, typeface).size(text)[0])

    def _top_left(self, font: pygame.font.Font, x: float, y: float) -> Tuple[int, int]:
        return int(round(x)), int(round(y - font.get_ascent()))
