"""Frame Timer driven from a pygame main loop."""

import itertools
from typing import Callable, Dict, Optional

import pygame


class PygameFrameTimer:
    """
    Holds frame callbacks until the main loop dispatches them.

    pygame has no "call me on the next frame" primitive, so the loop calls
    ``wait_and_dispatch`` once per iteration and every callback requested
    since the previous frame fires exactly once.
    """

    def __init__(self, fps: int = 60, time_source: Optional[Callable[[], float]] = None):
        self.fps = fps
        self._time_source = time_source or pygame.time.get_ticks
        self._clock = None
        self._pending: Dict[int, Callable[[float], object]] = {}
        self._ids = itertools.count(1)

    def request_next_tick(self, callback: Callable[[float], object]) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: int):
        self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def now_ms(self) -> float:
        return float(self._time_source())

    def dispatch(self, now_ms: float) -> int:
        """Fire every pending callback once. Returns how many fired."""
        callbacks = list(self._pending.values())
        self._pending.clear()
        for callback in callbacks:
            callback(now_ms)
        return len(callbacks)

    def wait_and_dispatch(self) -> int:
        """Sleep until the next frame is due, then dispatch."""
        if self._clock is None:
            self._clock = pygame.time.Clock()
        self._clock.tick(self.fps)
        return self.dispatch(self.now_ms())

    def get_fps(self) -> float:
        return self._clock.get_fps() if self._clock is not None else 0.0
