"""
Simulation configuration.

Presets in ``config.presets`` are plain dictionaries in the same shape as
the display settings. ``SimulationConfig.from_dict`` turns one of them into
an explicit, validated value that is handed to the scheduler and integrator.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields, replace as dc_replace
from typing import Any, Mapping

from ..errors import ConfigurationError

# Universal gravitational constant (m^3 kg^-1 s^-2)
DEFAULT_G = 6.674e-11

# Short preset keys accepted by from_dict
_KEY_ALIASES = {
    "softening": "softening_distance",
    "G": "gravitational_constant",
}


@dataclass(frozen=True)
class SimulationConfig:
    """
    Fixed-step timing and physics parameters for one simulation.

    Attributes:
        step_size_seconds: Simulated seconds advanced by one sub-step
        steps_per_ms: Sub-steps attempted per millisecond of wall time
        max_elapsed_ms: Lag guard; longer frames skip physics entirely
        softening_distance: Minimum separation used by the gravity law
        gravitational_constant: G used by the gravity law
        sigma, rho, beta: Lorenz system parameters
    """
    step_size_seconds: float
    steps_per_ms: float
    max_elapsed_ms: float = 1000.0
    softening_distance: float = 0.0
    gravitational_constant: float = DEFAULT_G
    sigma: float = 10.0
    rho: float = 28.0
    beta: float = 8.0 / 3.0

    def __post_init__(self):
        self.validate()

    def validate(self):
        """Raise ConfigurationError if any field is out of range."""
        _require_positive("step_size_seconds", self.step_size_seconds)
        _require_positive("steps_per_ms", self.steps_per_ms)
        _require_positive("max_elapsed_ms", self.max_elapsed_ms)
        _require_positive("gravitational_constant", self.gravitational_constant)
        if not _is_finite(self.softening_distance) or self.softening_distance < 0:
            raise ConfigurationError(
                f"softening_distance must be a finite value >= 0, got {self.softening_distance!r}"
            )
        for name in ("sigma", "rho", "beta"):
            if not _is_finite(getattr(self, name)):
                raise ConfigurationError(f"{name} must be finite, got {getattr(self, name)!r}")

    @property
    def sim_seconds_per_ms(self) -> float:
        """Simulated seconds covered per millisecond of wall time."""
        return self.step_size_seconds * self.steps_per_ms

    def replace(self, **overrides) -> "SimulationConfig":
        """Return a copy with some fields changed (validated again)."""
        return dc_replace(self, **overrides)

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "SimulationConfig":
        """
        Build a config from a preset dictionary.

        Accepts the field names plus the short preset keys ``softening`` and
        ``G``. ``sim_seconds_per_ms`` may be given instead of
        ``steps_per_ms``; the step rate is then derived from it.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        sim_seconds_per_ms = None
        for key, value in values.items():
            if key == "sim_seconds_per_ms":
                sim_seconds_per_ms = value
                continue
            name = _KEY_ALIASES.get(key, key)
            if name not in known:
                raise ConfigurationError(f"Unknown configuration key: {key!r}")
            kwargs[name] = value

        if sim_seconds_per_ms is not None:
            if "steps_per_ms" in kwargs:
                raise ConfigurationError(
                    "Give either steps_per_ms or sim_seconds_per_ms, not both"
                )
            step = kwargs.get("step_size_seconds")
            if step is None:
                raise ConfigurationError("sim_seconds_per_ms requires step_size_seconds")
            _require_positive("step_size_seconds", step)
            kwargs["steps_per_ms"] = sim_seconds_per_ms / step

        for required in ("step_size_seconds", "steps_per_ms"):
            if required not in kwargs:
                raise ConfigurationError(f"Missing configuration key: {required!r}")

        return cls(**kwargs)


def _is_finite(value) -> bool:
    try:
        return math.isfinite(value)
    except TypeError:
        return False


def _require_positive(name: str, value):
    if not _is_finite(value) or value <= 0:
        raise ConfigurationError(f"{name} must be a finite value > 0, got {value!r}")
