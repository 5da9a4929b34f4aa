"""
Initial conditions for the bundled scenarios.

Each scenario pairs a preset from ``config.presets`` with a builder that
turns it into a list of bodies or particles.
"""

import math
from typing import Callable, Dict, List, Mapping, Tuple

import numpy as np

from .bodies import ChaoticParticle, GravitationalBody, vis_viva_speed
from .config import presets
from .config.simulation import SimulationConfig
from .errors import ConfigurationError


def make_planet(mass: float, semi_major_axis: float, eccentricity: float,
                central_mass: float = presets.SOLAR_MASS, at: str = "apoapsis",
                G: float = presets.G, tag=None) -> GravitationalBody:
    """
    Place a body on the +y axis at apoapsis (or periapsis), moving along +x.

    The speed comes from the vis-viva relation for an orbit around
    ``central_mass`` at the origin.
    """
    if not 0 <= eccentricity < 1:
        raise ConfigurationError(f"Eccentricity must be in [0, 1), got {eccentricity!r}")
    if at == "apoapsis":
        r = semi_major_axis * (1 + eccentricity)
    elif at == "periapsis":
        r = semi_major_axis * (1 - eccentricity)
    else:
        raise ConfigurationError(f"'at' must be 'apoapsis' or 'periapsis', got {at!r}")
    v = vis_viva_speed(central_mass, r, semi_major_axis, G)
    return GravitationalBody(mass=mass, x=0.0, y=r, vx=v, vy=0.0, tag=tag)


def make_anchor(mass: float, x: float = 0.0, y: float = 0.0, tag=None) -> GravitationalBody:
    """A body that pulls on the others but never moves."""
    return GravitationalBody(mass=mass, x=x, y=y, anchor=True, tag=tag)


def solar_system(config: SimulationConfig, at: str = "apoapsis") -> List[GravitationalBody]:
    """The Sun as an anchor plus the nine planets of the planet table."""
    G = config.gravitational_constant
    bodies = [make_anchor(presets.SOLAR_MASS, tag=presets.SUN_COLOR)]
    for _name, mass, sma, ecc, color in presets.PLANETS:
        bodies.append(make_planet(mass, sma, ecc, at=at, G=G, tag=color))
    return bodies


def two_body(config: SimulationConfig) -> List[GravitationalBody]:
    """The Sun as an anchor and the Earth at apoapsis."""
    _name, mass, sma, ecc, color = presets.PLANETS[2]
    return [
        make_anchor(presets.SOLAR_MASS, tag=presets.SUN_COLOR),
        make_planet(mass, sma, ecc, G=config.gravitational_constant, tag=color),
    ]


def three_body(config: SimulationConfig, mass: float = presets.SOLAR_MASS,
               side: float = presets.AU) -> List[GravitationalBody]:
    """
    Three equal masses on an equilateral triangle, rotating rigidly.

    Each body sits side / sqrt(3) from the centroid and moves at
    omega * R with omega^2 = 3 G m / side^3. Net momentum is zero.
    """
    G = config.gravitational_constant
    radius = side / math.sqrt(3.0)
    omega = math.sqrt(3.0 * G * mass / side ** 3)
    speed = omega * radius

    angles = [math.pi / 2 + k * 2 * math.pi / 3 for k in range(3)]
    positions = [(radius * math.cos(a), radius * math.sin(a)) for a in angles]
    velocities = [(-speed * math.sin(a), speed * math.cos(a)) for a in angles]

    # Remove rounding residue so the centre of mass stays put
    mean_vx = sum(v[0] for v in velocities) / 3
    mean_vy = sum(v[1] for v in velocities) / 3
    colors = ("#FF00AA", "#84FF00", "#00B3FF")
    return [
        GravitationalBody(mass=mass, x=px, y=py, vx=vx - mean_vx, vy=vy - mean_vy, tag=color)
        for (px, py), (vx, vy), color in zip(positions, velocities, colors)
    ]


def cluster(config: SimulationConfig, radius: float = 2 * presets.AU,
            anchor_mass: float = presets.SOLAR_MASS, seed: int = 42) -> List[GravitationalBody]:
    """Planet masses scattered at rest in a square around a fixed attractor."""
    rng = np.random.default_rng(seed)
    coords = rng.uniform(-radius / 2, radius / 2, size=(len(presets.PLANETS), 2))
    bodies = [make_anchor(anchor_mass, tag=presets.SUN_COLOR)]
    for (x, y), (_name, mass, _sma, _ecc, color) in zip(coords, presets.PLANETS):
        bodies.append(GravitationalBody(mass=mass, x=float(x), y=float(y), tag=color))
    return bodies


def lorenz(config: SimulationConfig) -> List[ChaoticParticle]:
    """Particles at the same start point except for tiny z offsets."""
    x0, y0, z0 = presets.LORENZ_START
    return [ChaoticParticle(x0, y0, z0 + dz, tag=color) for dz, color in presets.LORENZ_PARTICLES]


Builder = Callable[..., list]

SCENARIOS: Dict[str, Tuple[Mapping, Builder]] = {
    "solar": (presets.SOLAR_SYSTEM, solar_system),
    "two-body": (presets.TWO_BODY, two_body),
    "three-body": (presets.THREE_BODY, three_body),
    "cluster": (presets.CLUSTER, cluster),
    "lorenz": (presets.LORENZ, lorenz),
}


def load_scenario(name: str, **overrides) -> Tuple[SimulationConfig, list]:
    """
    Build the config and initial bodies of a named scenario.

    ``overrides`` are SimulationConfig field names (e.g. ``steps_per_ms``)
    merged into the preset. Presets that set their speed with
    ``sim_seconds_per_ms`` keep that speed when only ``step_size_seconds``
    is overridden: the step rate is derived again from the new step size.
    ``None`` values are ignored.
    """
    try:
        preset, builder = SCENARIOS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown scenario {name!r}; choose from {', '.join(sorted(SCENARIOS))}"
        ) from None

    config_values = {k: v for k, v in preset.items() if k not in presets.SCENARIO_KEYS}
    params = {k: v for k, v in preset.items() if k in presets.SCENARIO_KEYS}

    overrides = {k: v for k, v in overrides.items() if v is not None}
    # An explicit rate replaces whichever rate the preset uses
    if "steps_per_ms" in overrides:
        config_values.pop("sim_seconds_per_ms", None)
    if "sim_seconds_per_ms" in overrides:
        config_values.pop("steps_per_ms", None)
    config_values.update(overrides)

    config = SimulationConfig.from_dict(config_values)
    return config, builder(config, **params)
