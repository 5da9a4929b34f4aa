"""Simulation facade: bodies + integrator + scheduler behind start/stop."""

import dataclasses
from typing import Callable, Optional, Sequence

from .bodies import ChaoticParticle, GravitationalBody
from .chaos import LorenzIntegrator
from .config.simulation import SimulationConfig
from .core.clock import ClockState, FrameTimer, RenderSink, StepScheduler, wall_clock_ms
from .core.integrator import Integrator
from .errors import ConfigurationError
from .nbody import GravityIntegrator


def integrator_for(config: SimulationConfig, bodies: Sequence) -> Integrator:
    """Pick the integrator matching the kind of bodies given."""
    if not bodies:
        raise ConfigurationError("A simulation needs at least one body or particle")
    if all(isinstance(b, GravitationalBody) for b in bodies):
        return GravityIntegrator(config.gravitational_constant, config.softening_distance)
    if all(isinstance(b, ChaoticParticle) for b in bodies):
        return LorenzIntegrator(config.sigma, config.rho, config.beta)
    raise ConfigurationError(
        "Bodies must be all GravitationalBody or all ChaoticParticle, not a mix"
    )


class Simulation:
    """
    One running simulation.

    Bodies are rebuilt from the initial conditions on every ``start`` and
    discarded on ``stop``. Render sinks and callers only ever see
    snapshots of frozen values.
    """

    def __init__(self, config: SimulationConfig, bodies: Sequence,
                 frame_timer: FrameTimer, render_sink: RenderSink,
                 clock: Callable[[], float] = wall_clock_ms):
        config.validate()
        self.config = config
        self._initial = tuple(bodies)
        self.integrator = integrator_for(config, self._initial)
        # Fails fast on bad bodies before anything can start
        self.integrator.create_state(self._initial)

        self.frame_timer = frame_timer
        self.render_sink = render_sink
        self.clock = clock
        self._scheduler: Optional[StepScheduler] = None

    @classmethod
    def from_scenario(cls, name: str, frame_timer: FrameTimer, render_sink: RenderSink,
                      clock: Callable[[], float] = wall_clock_ms, **overrides) -> "Simulation":
        """Build a simulation from a named scenario preset."""
        from .scenarios import load_scenario

        config, bodies = load_scenario(name, **overrides)
        return cls(config, bodies, frame_timer, render_sink, clock=clock)

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    @property
    def scheduler(self) -> Optional[StepScheduler]:
        return self._scheduler

    @property
    def clock_state(self) -> ClockState:
        """A copy of the scheduler bookkeeping."""
        if self._scheduler is None:
            return ClockState()
        return dataclasses.replace(self._scheduler.clock_state)

    def __len__(self) -> int:
        return len(self._initial)

    def start(self):
        """Start a fresh run from the initial conditions."""
        if self.running:
            return
        state = self.integrator.create_state(self._initial)
        self._scheduler = StepScheduler(
            self.config, self.integrator, state,
            self.frame_timer, self.render_sink, clock=self.clock,
        )
        print(f"[Sim] Started {len(state)} bodies ({self.integrator.name})")
        self._scheduler.start()

    def stop(self):
        """Stop ticking. Safe to call more than once, or before start."""
        if not self.running:
            return
        cs = self._scheduler.clock_state
        self._scheduler.stop()
        print(f"[Sim] Stopped after {cs.frame_count:,} frames, {cs.step_count:,} steps "
              f"({cs.skipped_frames} skipped, {cs.rejected_ticks} rejected)")

    def snapshot(self) -> tuple:
        """Frozen copy of the current bodies (the initial ones before any run)."""
        if self._scheduler is None:
            return self._initial
        return self._scheduler.state.snapshot()

    def move_anchor(self, index: int, x: float, y: float):
        """Reposition an anchor body between ticks."""
        if self._scheduler is None:
            raise RuntimeError("Simulation has not been started")
        move = getattr(self._scheduler.state, "move_anchor", None)
        if move is None:
            raise ConfigurationError(f"{self.integrator.name} simulations have no anchors")
        move(index, x, y)
