"""Render sink drawing bodies or particles as OpenGL points."""

from typing import Optional, Tuple

from OpenGL.GL import *

from ..config import display as config
from .projection import fit_scale, hex_to_rgb, project


class PointRenderer:
    """
    Draws one point per body, colored from its hex tag.

    The scale is fixed from the first snapshot (gravity) or taken from the
    display config (Lorenz), so orbits do not visibly breathe.
    """

    def __init__(self, screen_size: Tuple[int, int], projection: str = "xy",
                 scale: Optional[float] = None, z_offset: float = 0.0,
                 point_size: float = config.POINTS["size"]):
        self.screen_size = screen_size
        self.projection = projection
        self.scale = scale
        self.z_offset = z_offset
        self.point_size = point_size

    def draw(self, snapshot: tuple):
        points = project(snapshot, self.projection, self.z_offset)
        if self.scale is None:
            self.scale = fit_scale(points, self.screen_size)

        w, h = self.screen_size
        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        glOrtho(-w / 2, w / 2, -h / 2, h / 2, -1, 1)
        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()

        glEnable(GL_POINT_SMOOTH)
        glPointSize(self.point_size)
        glBegin(GL_POINTS)
        for item, (x, y) in zip(snapshot, points):
            glColor3f(*hex_to_rgb(item.tag))
            glVertex2f(x * self.scale, y * self.scale)
        glEnd()
        glDisable(GL_POINT_SMOOTH)
