"""HUD text drawn over the simulation."""

from typing import Dict, Sequence, Tuple

import pygame
from OpenGL.GL import *

from ..config import display as config


class HudRenderer:
    """Renders lines of text with pygame fonts, blitted through OpenGL."""

    def __init__(self, font_name: str = config.HUD["font"],
                 font_size: int = config.HUD["font_size"]):
        pygame.font.init()
        self.font = pygame.font.SysFont(font_name, font_size)
        self.color = config.COLORS["text"]
        self.line_height = config.HUD["line_height"]
        self.margin = config.HUD["margin"]
        # Text that did not change since last frame is not re-rendered
        self._cache: Dict[str, Tuple[bytes, int, int]] = {}

    def _render(self, text: str) -> Tuple[bytes, int, int]:
        cached = self._cache.get(text)
        if cached is None:
            surface = self.font.render(text, True, self.color)
            w, h = surface.get_size()
            cached = (pygame.image.tostring(surface, "RGBA", True), w, h)
            if len(self._cache) > 64:
                self._cache.clear()
            self._cache[text] = cached
        return cached

    def draw_lines(self, lines: Sequence[str], screen_size: Tuple[int, int]):
        """Draw ``lines`` top-down from the top-left corner."""
        width, height = screen_size

        glMatrixMode(GL_PROJECTION)
        glPushMatrix()
        glLoadIdentity()
        glOrtho(0, width, 0, height, -1, 1)
        glMatrixMode(GL_MODELVIEW)
        glPushMatrix()
        glLoadIdentity()

        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)
        for row, text in enumerate(lines):
            data, w, h = self._render(text)
            y = self.margin + row * self.line_height
            glRasterPos2f(self.margin, height - y - h)
            glDrawPixels(w, h, GL_RGBA, GL_UNSIGNED_BYTE, data)
        glDisable(GL_BLEND)

        glPopMatrix()
        glMatrixMode(GL_PROJECTION)
        glPopMatrix()
        glMatrixMode(GL_MODELVIEW)
