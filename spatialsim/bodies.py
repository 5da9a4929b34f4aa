"""Bodies and particles handed to, and returned from, a simulation."""

import math
from dataclasses import dataclass, field
from typing import Any, Tuple

from .errors import ConfigurationError


@dataclass(frozen=True)
class GravitationalBody:
    """
    A point mass moving in the plane.

    Attributes:
        mass: Mass in kilograms (must be > 0)
        x, y: Position in meters
        vx, vy: Velocity in meters per second
        anchor: Anchors pull on other bodies but never move
        tag: Opaque display data (e.g. a color), ignored by the physics
    """
    mass: float
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    anchor: bool = False
    tag: Any = field(default=None, compare=False)

    def __post_init__(self):
        if not _finite(self.mass) or self.mass <= 0:
            raise ConfigurationError(f"Body mass must be a finite value > 0, got {self.mass!r}")
        for name in ("x", "y", "vx", "vy"):
            if not _finite(getattr(self, name)):
                raise ConfigurationError(f"Body {name} must be finite, got {getattr(self, name)!r}")

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def velocity(self) -> Tuple[float, float]:
        return (self.vx, self.vy)

    @property
    def momentum(self) -> Tuple[float, float]:
        return (self.mass * self.vx, self.mass * self.vy)


@dataclass(frozen=True)
class ChaoticParticle:
    """
    A point in the state space of the Lorenz system.

    Particles carry no mass and do not interact. Several of them started a
    hair apart show how fast the trajectories separate.
    """
    x: float
    y: float
    z: float
    tag: Any = field(default=None, compare=False)

    def __post_init__(self):
        for name in ("x", "y", "z"):
            if not _finite(getattr(self, name)):
                raise ConfigurationError(f"Particle {name} must be finite, got {getattr(self, name)!r}")

    @property
    def position(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)


def vis_viva_speed(central_mass: float, distance: float, semi_major_axis: float,
                   G: float) -> float:
    """Orbital speed at ``distance`` on an orbit with the given semi-major axis."""
    return math.sqrt(G * central_mass * (2.0 / distance - 1.0 / semi_major_axis))


def distance(a, b) -> float:
    """Euclidean distance between two bodies or particles."""
    return math.dist(a.position, b.position)


def _finite(value) -> bool:
    try:
        return math.isfinite(value)
    except TypeError:
        return False
