"""Configuration: explicit simulation config plus scenario and display presets."""

from .simulation import SimulationConfig, DEFAULT_G
from . import presets, display

__all__ = ["SimulationConfig", "DEFAULT_G", "presets", "display"]
