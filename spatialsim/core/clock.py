"""
Fixed-step scheduler.

Turns irregular frame callbacks into a whole number of fixed-size physics
sub-steps, then renders exactly once per callback.

    Frame Timer -> tick(now_ms) -> integrator sub-steps x N -> render sink

A frame that arrives more than ``max_elapsed_ms`` after the previous one
(backgrounded window, paused loop, slow machine) runs no physics at all:
catching up would take even longer and fall further behind every frame.
The clock just re-baselines and the frame is still rendered.
"""

import math
import time
import warnings
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol

from ..config.simulation import SimulationConfig
from ..errors import NumericalInstabilityWarning
from .integrator import ArrayState, Integrator


class FrameTimer(Protocol):
    """Schedules a callback for the next display frame."""

    def request_next_tick(self, callback: Callable[[float], Any]) -> Any:
        ...

    def cancel(self, handle: Any) -> None:
        ...


class RenderSink(Protocol):
    """Consumes an immutable snapshot of the bodies or particles."""

    def draw(self, snapshot: tuple) -> None:
        ...


@dataclass
class ClockState:
    """Bookkeeping owned by the scheduler."""
    last_ms: Optional[float] = None
    lag_ms: float = 0.0           # Wall time dropped by the lag guard
    running: bool = False
    frame_count: int = 0
    step_count: int = 0
    skipped_frames: int = 0
    rejected_ticks: int = 0


@dataclass(frozen=True)
class TickResult:
    """What one tick did."""
    elapsed_ms: float
    steps: int
    skipped: bool = False         # Lag guard tripped, no physics this frame
    rejected: bool = False        # Integration rolled back (non-finite state)


def wall_clock_ms() -> float:
    return time.perf_counter() * 1000.0


class StepScheduler:
    """
    Drives one integrator over one state from frame callbacks.

    States: Stopped -> Running on ``start``, Running -> Stopped on ``stop``.
    """

    def __init__(self, config: SimulationConfig, integrator: Integrator, state: ArrayState,
                 frame_timer: FrameTimer, render_sink: RenderSink,
                 clock: Callable[[], float] = wall_clock_ms):
        self.config = config
        self.integrator = integrator
        self.state = state
        self.frame_timer = frame_timer
        self.render_sink = render_sink
        self.clock = clock
        self.clock_state = ClockState()
        self._handle = None

    @property
    def running(self) -> bool:
        return self.clock_state.running

    def start(self):
        """Take the current time as reference and request the first frame."""
        if self.clock_state.running:
            return
        self.clock_state.last_ms = self.clock()
        self.clock_state.running = True
        self._handle = self.frame_timer.request_next_tick(self.tick)

    def stop(self):
        """Stop ticking and cancel the pending frame. Safe to call repeatedly."""
        self.clock_state.running = False
        handle, self._handle = self._handle, None
        if handle is not None:
            self.frame_timer.cancel(handle)

    def steps_for(self, elapsed_ms: float) -> int:
        """Sub-steps owed for ``elapsed_ms`` of wall time (0 if over the lag guard)."""
        if elapsed_ms > self.config.max_elapsed_ms or elapsed_ms <= 0:
            return 0
        return int(math.floor(elapsed_ms * self.config.steps_per_ms))

    def tick(self, now_ms: float) -> Optional[TickResult]:
        """Frame callback: integrate, render once, schedule the next frame."""
        cs = self.clock_state
        if not cs.running:
            return None
        self._handle = None

        elapsed = now_ms - cs.last_ms
        cs.last_ms = now_ms
        cs.frame_count += 1

        skipped = elapsed > self.config.max_elapsed_ms
        rejected = False
        steps = 0
        if skipped:
            cs.lag_ms += elapsed
            cs.skipped_frames += 1
        else:
            steps = self.steps_for(elapsed)
            if steps:
                rejected = not self._integrate(steps)
                if rejected:
                    steps = 0
                else:
                    cs.step_count += steps

        self.render_sink.draw(self.state.snapshot())

        # The render sink may have stopped us
        if cs.running:
            self._handle = self.frame_timer.request_next_tick(self.tick)

        return TickResult(elapsed_ms=elapsed, steps=steps, skipped=skipped, rejected=rejected)

    def _integrate(self, steps: int) -> bool:
        saved = self.state.checkpoint()
        self.integrator.advance(self.state, self.config.step_size_seconds, steps)
        if self.state.is_finite():
            return True

        self.state.restore(saved)
        self.clock_state.rejected_ticks += 1
        warnings.warn(
            f"{self.integrator.name}: non-finite state after {steps} sub-steps; "
            f"tick rolled back to the last good state",
            NumericalInstabilityWarning,
            stacklevel=3,
        )
        return False
