"""
pygame/OpenGL adapters for the Frame Timer and Render Sink interfaces.

OpenGL-backed modules (``points``, ``text``) are imported directly by the
windowed app so that headless use never loads a GL library.
"""

from .frame_timer import PygameFrameTimer
from .projection import fit_scale, hex_to_rgb, project

__all__ = ["PygameFrameTimer", "fit_scale", "hex_to_rgb", "project"]
