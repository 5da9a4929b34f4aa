"""Gravitational many-body integration."""

from .gravity import GravityIntegrator, GravityState, total_momentum

__all__ = ["GravityIntegrator", "GravityState", "total_momentum"]
