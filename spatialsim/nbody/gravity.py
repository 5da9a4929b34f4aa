"""
Pairwise Newtonian gravity in the plane.

Key points:
- One force evaluation per unordered pair; the reaction is its exact negation
- Separation clamped to a softening distance (no singularity at r = 0)
- Semi-implicit Euler: velocity from the current force, then position from
  the new velocity
- Anchors pull on everything but never move
- Numba JIT kernels over float64 arrays
"""

import math
from typing import Sequence

import numpy as np
from numba import njit

from ..bodies import GravitationalBody
from ..config.simulation import DEFAULT_G
from ..core.integrator import ArrayState, Integrator
from ..errors import ConfigurationError


# ============================================================================
# KERNELS
# ============================================================================

# No fastmath in this module: pair forces must cancel exactly.

@njit(cache=True)
def softened_separation(dx: float, dy: float, min_distance: float) -> float:
    """Length of (dx, dy), never less than ``min_distance``."""
    r = math.sqrt(dx * dx + dy * dy)
    if r < min_distance:
        return min_distance
    return r


@njit(cache=True)
def pair_force(xi: float, yi: float, mi: float,
               xj: float, yj: float, mj: float,
               G: float, min_distance: float) -> tuple:
    """
    Force on body i from body j.

    F = G * m_i * m_j / r^2 along (dx / r, dy / r), with r the softened
    separation. Inside the softening distance the force therefore shrinks
    linearly to zero. Coincident bodies feel no force.
    """
    dx = xj - xi
    dy = yj - yi
    r = softened_separation(dx, dy, min_distance)
    if r == 0.0:
        return 0.0, 0.0
    f = G * (mi * mj) / (r * r)
    return f * dx / r, f * dy / r


@njit(cache=True)
def accumulate_forces(positions: np.ndarray, masses: np.ndarray, forces: np.ndarray,
                      G: float, min_distance: float):
    """Fill ``forces`` with the net gravitational force on every body."""
    n = positions.shape[0]
    for i in range(n):
        forces[i, 0] = 0.0
        forces[i, 1] = 0.0

    for i in range(n):
        for j in range(i + 1, n):
            fx, fy = pair_force(
                positions[i, 0], positions[i, 1], masses[i],
                positions[j, 0], positions[j, 1], masses[j],
                G, min_distance
            )
            forces[i, 0] += fx
            forces[i, 1] += fy
            forces[j, 0] -= fx
            forces[j, 1] -= fy


@njit(cache=True)
def symplectic_euler_step(positions: np.ndarray, velocities: np.ndarray,
                          masses: np.ndarray, mobile: np.ndarray, forces: np.ndarray,
                          dt: float, G: float, min_distance: float):
    """Advance all mobile bodies by one sub-step."""
    accumulate_forces(positions, masses, forces, G, min_distance)

    for i in range(positions.shape[0]):
        if not mobile[i]:
            continue
        velocities[i, 0] += forces[i, 0] / masses[i] * dt
        velocities[i, 1] += forces[i, 1] / masses[i] * dt
        positions[i, 0] += velocities[i, 0] * dt
        positions[i, 1] += velocities[i, 1] * dt


@njit(cache=True)
def advance_bodies(positions: np.ndarray, velocities: np.ndarray,
                   masses: np.ndarray, mobile: np.ndarray, forces: np.ndarray,
                   dt: float, G: float, min_distance: float, num_steps: int):
    """Run ``num_steps`` sub-steps without returning to Python in between."""
    for _ in range(num_steps):
        symplectic_euler_step(positions, velocities, masses, mobile, forces,
                              dt, G, min_distance)


@njit(cache=True)
def potential_energy(positions: np.ndarray, masses: np.ndarray,
                     G: float, min_distance: float) -> float:
    """Softened gravitational potential energy summed over all pairs."""
    pe = 0.0
    n = positions.shape[0]
    for i in range(n):
        for j in range(i + 1, n):
            r = softened_separation(positions[j, 0] - positions[i, 0],
                                    positions[j, 1] - positions[i, 1],
                                    min_distance)
            if r > 0.0:
                pe -= G * (masses[i] * masses[j]) / r
    return pe


# ============================================================================
# STATE AND INTEGRATOR
# ============================================================================

class GravityState(ArrayState):
    """Positions, velocities and masses of a set of gravitational bodies."""

    _dynamic = ("positions", "velocities")

    def __init__(self, positions: np.ndarray, velocities: np.ndarray,
                 masses: np.ndarray, mobile: np.ndarray, tags: Sequence = ()):
        n = len(masses)
        super().__init__(tags if tags else [None] * n)
        self.positions = np.ascontiguousarray(positions, dtype=np.float64).reshape(n, 2)
        self.velocities = np.ascontiguousarray(velocities, dtype=np.float64).reshape(n, 2)
        self.masses = np.ascontiguousarray(masses, dtype=np.float64)
        self.mobile = np.ascontiguousarray(mobile, dtype=np.bool_)
        # Scratch buffer reused by every sub-step
        self.forces = np.zeros((n, 2), dtype=np.float64)

    @classmethod
    def from_bodies(cls, bodies: Sequence[GravitationalBody]) -> "GravityState":
        for body in bodies:
            if not isinstance(body, GravitationalBody):
                raise ConfigurationError(
                    f"Gravity simulations take GravitationalBody values, got {type(body).__name__}"
                )
        return cls(
            positions=[(b.x, b.y) for b in bodies],
            velocities=[(b.vx, b.vy) for b in bodies],
            masses=[b.mass for b in bodies],
            mobile=[not b.anchor for b in bodies],
            tags=[b.tag for b in bodies],
        )

    def snapshot(self) -> tuple:
        return tuple(
            GravitationalBody(
                mass=float(self.masses[i]),
                x=float(self.positions[i, 0]),
                y=float(self.positions[i, 1]),
                vx=float(self.velocities[i, 0]),
                vy=float(self.velocities[i, 1]),
                anchor=not bool(self.mobile[i]),
                tag=self.tags[i],
            )
            for i in range(len(self))
        )

    def move_anchor(self, index: int, x: float, y: float):
        """Reposition an anchor body."""
        if not 0 <= index < len(self):
            raise IndexError(f"No body at index {index}")
        if self.mobile[index]:
            raise ConfigurationError(f"Body {index} is not an anchor")
        if not (math.isfinite(x) and math.isfinite(y)):
            raise ConfigurationError(f"Anchor position must be finite, got ({x!r}, {y!r})")
        self.positions[index, 0] = x
        self.positions[index, 1] = y


class GravityIntegrator(Integrator):
    """Semi-implicit Euler integrator for softened pairwise gravity."""

    name = "gravity"

    def __init__(self, gravitational_constant: float = DEFAULT_G,
                 softening_distance: float = 0.0):
        if not math.isfinite(softening_distance) or softening_distance < 0:
            raise ConfigurationError(
                f"softening_distance must be a finite value >= 0, got {softening_distance!r}"
            )
        if not math.isfinite(gravitational_constant) or gravitational_constant <= 0:
            raise ConfigurationError(
                f"gravitational_constant must be a finite value > 0, got {gravitational_constant!r}"
            )
        self.G = float(gravitational_constant)
        self.softening_distance = float(softening_distance)

    def create_state(self, bodies: Sequence[GravitationalBody]) -> GravityState:
        return GravityState.from_bodies(bodies)

    def step(self, state: GravityState, dt: float):
        symplectic_euler_step(
            state.positions, state.velocities, state.masses, state.mobile,
            state.forces, float(dt), self.G, self.softening_distance
        )

    def advance(self, state: GravityState, dt: float, num_steps: int):
        if num_steps <= 0:
            return
        advance_bodies(
            state.positions, state.velocities, state.masses, state.mobile,
            state.forces, float(dt), self.G, self.softening_distance, int(num_steps)
        )

    def forces(self, state: GravityState) -> np.ndarray:
        """Net force on every body at the current positions."""
        forces = np.zeros_like(state.positions)
        accumulate_forces(state.positions, state.masses, forces,
                          self.G, self.softening_distance)
        return forces

    def total_energy(self, state: GravityState) -> float:
        """Kinetic plus softened potential energy."""
        kinetic = 0.5 * float(np.sum(state.masses[:, np.newaxis] * state.velocities ** 2))
        return kinetic + potential_energy(state.positions, state.masses,
                                          self.G, self.softening_distance)


def total_momentum(state: GravityState) -> np.ndarray:
    """Sum of m * v over all bodies, as an (px, py) array."""
    return np.sum(state.masses[:, np.newaxis] * state.velocities, axis=0)
