"""Chaotic ODE integration."""

from .lorenz import LorenzIntegrator, LorenzState

__all__ = ["LorenzIntegrator", "LorenzState"]
