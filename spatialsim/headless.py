"""Drive a simulation without a window, against a virtual frame clock."""

from typing import List

from .core.clock import ClockState
from .errors import ConfigurationError
from .rendering.frame_timer import PygameFrameTimer
from .simulation import Simulation


class HeadlessRunner:
    """
    Runs a scenario for a fixed number of frames as fast as possible.

    Time is virtual: each frame advances the clock by ``1000 / fps`` ms,
    so a run is reproducible and independent of machine speed. Individual
    frames can be stretched with ``stall`` to exercise the lag guard.
    """

    def __init__(self, scenario: str, fps: int = 60, **overrides):
        if not fps > 0:
            raise ConfigurationError(f"fps must be > 0, got {fps!r}")
        self.now_ms = 0.0
        self.frame_ms = 1000.0 / fps
        self.timer = PygameFrameTimer(fps=fps, time_source=lambda: self.now_ms)
        self.frames_drawn = 0
        self.last_snapshot: tuple = ()
        self.simulation = Simulation.from_scenario(
            scenario, self.timer, self, clock=self.timer.now_ms, **overrides
        )

    def draw(self, snapshot: tuple):
        self.frames_drawn += 1
        self.last_snapshot = snapshot

    def advance_frame(self, stall_ms: float = 0.0) -> int:
        """Move the virtual clock one frame (plus ``stall_ms``) and dispatch."""
        self.now_ms += self.frame_ms + stall_ms
        return self.timer.dispatch(self.now_ms)

    def run(self, frames: int) -> ClockState:
        self.simulation.start()
        for _ in range(frames):
            self.advance_frame()
        self.simulation.stop()
        return self.simulation.clock_state

    def summary(self) -> List[str]:
        cs = self.simulation.clock_state
        cfg = self.simulation.config
        lines = [
            f"Frames: {cs.frame_count:,}  Steps: {cs.step_count:,}  "
            f"Simulated: {cs.step_count * cfg.step_size_seconds:,.1f}s",
            f"Skipped frames: {cs.skipped_frames}  Lag dropped: {cs.lag_ms:.1f}ms  "
            f"Rejected ticks: {cs.rejected_ticks}",
        ]
        for i, item in enumerate(self.last_snapshot):
            coords = ", ".join(f"{v:.6g}" for v in item.position)
            lines.append(f"  [{i}] ({coords})")
        return lines
