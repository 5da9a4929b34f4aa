"""Scenario presets for the stepping engine."""

from types import MappingProxyType

# =============================================================================
# PHYSICAL CONSTANTS
# =============================================================================

G = 6.674e-11                     # Universal gravitational constant
AU = 1.496e11                     # Earth-Sun distance in meters
SOLAR_MASS = 1.989e30             # Mass of the sun in kilograms
SECS_PER_YEAR = 60 * 60 * 24 * 365

# =============================================================================
# PLANET TABLE (mass kg, semi-major axis m, eccentricity, display color)
# =============================================================================

SUN_COLOR = "#FFF000"

PLANETS = (
    ("Mercury", 3.3011e23, 5.7909e10, 0.205630, "#FF00AA"),
    ("Venus", 4.8675e24, 1.0820e11, 0.006772, "#84FF00"),
    ("Earth", 5.972e24, 1.4960e11, 0.0167086, "#00B3FF"),
    ("Mars", 6.4171e23, 2.2793e11, 0.0934, "#FF0000"),
    ("Jupiter", 1.8986e27, 7.7829e11, 0.048498, "#F2B50C"),
    ("Saturn", 5.56836e26, 1.4294e12, 0.05555, "#BB00FF"),
    ("Uranus", 8.6810e25, 2.87504e12, 0.046381, "#6DF29E"),
    ("Neptune", 1.0243e26, 4.50445e12, 0.009456, "#0779B8"),
    ("Pluto", 1.303e22, 5.915e12, 0.24905, "#AAAAAA"),
)

# =============================================================================
# SCENARIOS
# step_size_seconds: accuracy. Raising it visibly bends orbits.
# sim_seconds_per_ms / steps_per_ms: speed. Too high and frames fall behind.
# max_elapsed_ms: frames longer than this skip physics and re-baseline.
# =============================================================================

SOLAR_SYSTEM = MappingProxyType({
    "step_size_seconds": 100.0,
    "sim_seconds_per_ms": 2e4,
    "max_elapsed_ms": 1000.0,
    "softening": 1e8,
    "G": G,
})

TWO_BODY = MappingProxyType({
    "step_size_seconds": 1000.0,
    "sim_seconds_per_ms": 1e4,
    "max_elapsed_ms": 1000.0,
    "softening": 1e8,
    "G": G,
})

THREE_BODY = MappingProxyType({
    "step_size_seconds": 1000.0,
    "sim_seconds_per_ms": 1e4,
    "max_elapsed_ms": 1000.0,
    "softening": 1e8,
    "G": G,
    "side": AU,                   # Triangle side length
    "mass": SOLAR_MASS,           # Mass of each body
})

CLUSTER = MappingProxyType({
    "step_size_seconds": 1000.0,
    "sim_seconds_per_ms": 1e4,
    "max_elapsed_ms": 1000.0,
    "softening": 1e8,
    "G": G,
    "radius": 2 * AU,             # Side of the square bodies are scattered in
    "anchor_mass": SOLAR_MASS,    # Fixed attractor at the origin
    "seed": 42,
})

LORENZ = MappingProxyType({
    "step_size_seconds": 0.001 / 10,
    "steps_per_ms": 10,
    "max_elapsed_ms": 1000.0,
    "sigma": 10.0,
    "rho": 28.0,
    "beta": 8.0 / 3.0,
})

# Particles start together; only z differs, by the listed offsets
LORENZ_START = (10.0, 10.0, 10.0)
LORENZ_PARTICLES = (
    (0.0, "#FFFF00"),
    (1e-9, "#00B3FF"),
    (1e-6, "#FF0000"),
    (1e-4, "#84FF00"),
)

# Keys consumed by scenario builders rather than SimulationConfig
SCENARIO_KEYS = frozenset({"side", "mass", "radius", "anchor_mass", "seed"})
