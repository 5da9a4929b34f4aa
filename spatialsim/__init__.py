"""
spatialsim
==========

Fixed-step simulation engine: pairwise gravity and the Lorenz system,
stepped at a rate decoupled from the display refresh.
"""

from .bodies import ChaoticParticle, GravitationalBody
from .config import SimulationConfig
from .core import ClockState, StepScheduler, TickResult
from .errors import ConfigurationError, NumericalInstabilityWarning
from .simulation import Simulation

__all__ = [
    "ChaoticParticle", "GravitationalBody",
    "SimulationConfig",
    "ClockState", "StepScheduler", "TickResult",
    "ConfigurationError", "NumericalInstabilityWarning",
    "Simulation",
]

__version__ = "0.1.0"
