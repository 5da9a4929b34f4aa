"""Integrator interface and the array state integrators mutate."""

from abc import ABC, abstractmethod
from typing import Sequence, Tuple

import numpy as np


class ArrayState(ABC):
    """
    Simulation state stored as float64 numpy arrays.

    Subclasses list the arrays that integrators mutate in ``_dynamic``.
    Those are the arrays that get checkpointed, restored and checked for
    non-finite values.
    """

    _dynamic: Tuple[str, ...] = ()

    def __init__(self, tags: Sequence = ()):
        self.tags = list(tags)

    def __len__(self) -> int:
        return len(self.tags)

    def checkpoint(self) -> dict:
        """Copy the dynamic arrays so a bad tick can be undone."""
        return {name: getattr(self, name).copy() for name in self._dynamic}

    def restore(self, saved: dict):
        """Write a checkpoint back in place."""
        for name in self._dynamic:
            getattr(self, name)[...] = saved[name]

    def is_finite(self) -> bool:
        return all(bool(np.isfinite(getattr(self, name)).all()) for name in self._dynamic)

    @abstractmethod
    def snapshot(self) -> tuple:
        """Immutable view of the current state for a render sink."""


class Integrator(ABC):
    """
    Advances an ``ArrayState`` by fixed sub-steps.

    A step is a pure synchronous function of ``(state, dt)``: no clocks,
    no I/O, no retries.
    """

    name = "integrator"

    @abstractmethod
    def create_state(self, bodies: Sequence) -> ArrayState:
        """Build the array state from initial bodies or particles."""

    @abstractmethod
    def step(self, state: ArrayState, dt: float):
        """Advance ``state`` in place by one sub-step."""

    def advance(self, state: ArrayState, dt: float, num_steps: int):
        """Advance ``state`` by ``num_steps`` sub-steps."""
        for _ in range(num_steps):
            self.step(state, dt)
