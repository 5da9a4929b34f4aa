"""
Lorenz system integrated with explicit forward Euler.

    dx/dt = sigma * (y - x)
    dy/dt = x * (rho - z) - y
    dz/dt = x * y - beta * z

Every particle follows the same equations from its own starting point.
Particles never interact, so nearby starts drifting apart is the dynamics
at work, not an error.
"""

import math
from typing import Sequence

import numpy as np
from numba import njit

from ..bodies import ChaoticParticle
from ..core.integrator import ArrayState, Integrator
from ..errors import ConfigurationError


@njit(cache=True)
def lorenz_euler_step(positions: np.ndarray, sigma: float, rho: float, beta: float,
                      dt: float):
    """Advance every particle by one forward Euler sub-step."""
    for i in range(positions.shape[0]):
        x = positions[i, 0]
        y = positions[i, 1]
        z = positions[i, 2]
        positions[i, 0] = x + sigma * (y - x) * dt
        positions[i, 1] = y + (x * (rho - z) - y) * dt
        positions[i, 2] = z + (x * y - beta * z) * dt


@njit(cache=True)
def advance_particles(positions: np.ndarray, sigma: float, rho: float, beta: float,
                      dt: float, num_steps: int):
    """Run ``num_steps`` sub-steps in compiled code."""
    for _ in range(num_steps):
        lorenz_euler_step(positions, sigma, rho, beta, dt)


class LorenzState(ArrayState):
    """(x, y, z) of every particle."""

    _dynamic = ("positions",)

    def __init__(self, positions: np.ndarray, tags: Sequence = ()):
        positions = np.ascontiguousarray(positions, dtype=np.float64).reshape(-1, 3)
        super().__init__(tags if tags else [None] * positions.shape[0])
        self.positions = positions

    @classmethod
    def from_particles(cls, particles: Sequence[ChaoticParticle]) -> "LorenzState":
        for particle in particles:
            if not isinstance(particle, ChaoticParticle):
                raise ConfigurationError(
                    f"Lorenz simulations take ChaoticParticle values, got {type(particle).__name__}"
                )
        return cls([(p.x, p.y, p.z) for p in particles], [p.tag for p in particles])

    def snapshot(self) -> tuple:
        return tuple(
            ChaoticParticle(
                x=float(self.positions[i, 0]),
                y=float(self.positions[i, 1]),
                z=float(self.positions[i, 2]),
                tag=self.tags[i],
            )
            for i in range(len(self))
        )


class LorenzIntegrator(Integrator):
    """Forward Euler for the Lorenz system with shared (sigma, rho, beta)."""

    name = "lorenz"

    def __init__(self, sigma: float = 10.0, rho: float = 28.0, beta: float = 8.0 / 3.0):
        for label, value in (("sigma", sigma), ("rho", rho), ("beta", beta)):
            if not math.isfinite(value):
                raise ConfigurationError(f"{label} must be finite, got {value!r}")
        self.sigma = float(sigma)
        self.rho = float(rho)
        self.beta = float(beta)

    def create_state(self, particles: Sequence[ChaoticParticle]) -> LorenzState:
        return LorenzState.from_particles(particles)

    def derivative(self, x: float, y: float, z: float) -> tuple:
        """Right-hand side of the system at one point."""
        return (
            self.sigma * (y - x),
            x * (self.rho - z) - y,
            x * y - self.beta * z,
        )

    def step(self, state: LorenzState, dt: float):
        lorenz_euler_step(state.positions, self.sigma, self.rho, self.beta, float(dt))

    def advance(self, state: LorenzState, dt: float, num_steps: int):
        if num_steps <= 0:
            return
        advance_particles(state.positions, self.sigma, self.rho, self.beta,
                          float(dt), int(num_steps))
