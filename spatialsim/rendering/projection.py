"""Pure helpers mapping snapshots to screen space (no OpenGL needed)."""

from typing import Tuple

import numpy as np

from ..config import display as config

Color = Tuple[float, float, float]


def hex_to_rgb(tag, default: str = config.COLORS["default_body"]) -> Color:
    """'#RRGGBB' -> floats in 0-1. Anything else falls back to ``default``."""
    value = tag if isinstance(tag, str) else default
    value = value.lstrip("#")
    if len(value) != 6:
        value = default.lstrip("#")
    try:
        r, g, b = (int(value[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return hex_to_rgb(default)
    return (r / 255.0, g / 255.0, b / 255.0)


def project(snapshot: tuple, projection: str = "xy", z_offset: float = 0.0) -> np.ndarray:
    """
    Flatten a snapshot to (n, 2) plane coordinates.

    "xy" uses the body position; "xz" views Lorenz particles side on,
    shifted down by ``z_offset`` so the attractor is centred.
    """
    if projection == "xy":
        coords = [(item.x, item.y) for item in snapshot]
    elif projection == "xz":
        coords = [(item.x, item.z - z_offset) for item in snapshot]
    else:
        raise ValueError(f"Unknown projection: {projection!r}")
    return np.array(coords, dtype=np.float64).reshape(-1, 2)


def fit_scale(points: np.ndarray, screen_size: Tuple[int, int],
              padding: float = config.POINTS["padding"]) -> float:
    """Pixels per world unit so the furthest point sits just inside the window."""
    half = min(screen_size) / 2.0
    extent = float(np.abs(points).max()) if points.size else 0.0
    if extent == 0.0:
        return 1.0
    return half / (extent * padding)
