"""Core stepping components."""

from .integrator import ArrayState, Integrator
from .clock import ClockState, FrameTimer, RenderSink, StepScheduler, TickResult

__all__ = [
    "ArrayState", "Integrator",
    "ClockState", "FrameTimer", "RenderSink", "StepScheduler", "TickResult",
]
