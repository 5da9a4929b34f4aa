"""Tests for SimulationConfig validation and preset loading."""

import dataclasses
import math
import unittest

from spatialsim.config import DEFAULT_G, SimulationConfig, display, presets
from spatialsim.errors import ConfigurationError


class TestValidation(unittest.TestCase):
    """Out-of-range values are rejected at construction."""

    def test_defaults(self):
        config = SimulationConfig(step_size_seconds=100.0, steps_per_ms=200.0)
        self.assertEqual(config.max_elapsed_ms, 1000.0)
        self.assertEqual(config.softening_distance, 0.0)
        self.assertEqual(config.gravitational_constant, DEFAULT_G)
        self.assertEqual((config.sigma, config.rho), (10.0, 28.0))
        self.assertAlmostEqual(config.beta, 8.0 / 3.0)

    def test_non_positive_rates(self):
        bad = [
            {"step_size_seconds": 0.0, "steps_per_ms": 1.0},
            {"step_size_seconds": -1.0, "steps_per_ms": 1.0},
            {"step_size_seconds": 1.0, "steps_per_ms": 0.0},
            {"step_size_seconds": 1.0, "steps_per_ms": math.inf},
            {"step_size_seconds": math.nan, "steps_per_ms": 1.0},
            {"step_size_seconds": 1.0, "steps_per_ms": 1.0, "max_elapsed_ms": 0.0},
            {"step_size_seconds": 1.0, "steps_per_ms": 1.0, "gravitational_constant": -1.0},
        ]
        for kwargs in bad:
            with self.subTest(**{k: repr(v) for k, v in kwargs.items()}):
                with self.assertRaises(ConfigurationError):
                    SimulationConfig(**kwargs)

    def test_negative_softening(self):
        with self.assertRaises(ConfigurationError):
            SimulationConfig(step_size_seconds=1.0, steps_per_ms=1.0, softening_distance=-1.0)

    def test_non_finite_lorenz_parameters(self):
        with self.assertRaises(ConfigurationError):
            SimulationConfig(step_size_seconds=1.0, steps_per_ms=1.0, rho=math.inf)

    def test_non_numeric(self):
        with self.assertRaises(ConfigurationError):
            SimulationConfig(step_size_seconds="fast", steps_per_ms=1.0)

    def test_configuration_error_is_value_error(self):
        with self.assertRaises(ValueError):
            SimulationConfig(step_size_seconds=0.0, steps_per_ms=1.0)

    def test_frozen(self):
        config = SimulationConfig(step_size_seconds=1.0, steps_per_ms=1.0)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            config.steps_per_ms = 2.0

    def test_replace_revalidates(self):
        config = SimulationConfig(step_size_seconds=1.0, steps_per_ms=1.0)
        self.assertEqual(config.replace(steps_per_ms=4.0).steps_per_ms, 4.0)
        with self.assertRaises(ConfigurationError):
            config.replace(step_size_seconds=-5.0)

    def test_sim_seconds_per_ms(self):
        config = SimulationConfig(step_size_seconds=100.0, steps_per_ms=200.0)
        self.assertEqual(config.sim_seconds_per_ms, 2e4)


class TestFromDict(unittest.TestCase):
    """Building configs from preset dictionaries."""

    def test_short_keys(self):
        config = SimulationConfig.from_dict({
            "step_size_seconds": 10.0, "steps_per_ms": 1.0, "softening": 5.0, "G": 1.0,
        })
        self.assertEqual(config.softening_distance, 5.0)
        self.assertEqual(config.gravitational_constant, 1.0)

    def test_derives_step_rate(self):
        config = SimulationConfig.from_dict({"step_size_seconds": 100.0, "sim_seconds_per_ms": 2e4})
        self.assertEqual(config.steps_per_ms, 200.0)

    def test_both_rates(self):
        with self.assertRaises(ConfigurationError):
            SimulationConfig.from_dict({
                "step_size_seconds": 1.0, "steps_per_ms": 1.0, "sim_seconds_per_ms": 1.0,
            })

    def test_rate_without_step_size(self):
        with self.assertRaises(ConfigurationError):
            SimulationConfig.from_dict({"sim_seconds_per_ms": 1.0})

    def test_zero_step_size_with_rate(self):
        with self.assertRaises(ConfigurationError):
            SimulationConfig.from_dict({"step_size_seconds": 0.0, "sim_seconds_per_ms": 1.0})

    def test_missing_key(self):
        with self.assertRaises(ConfigurationError):
            SimulationConfig.from_dict({"step_size_seconds": 1.0})

    def test_unknown_key(self):
        with self.assertRaises(ConfigurationError):
            SimulationConfig.from_dict({"step_size_seconds": 1.0, "steps_per_ms": 1.0, "warp": 9})

    def test_presets_load(self):
        for preset in (presets.SOLAR_SYSTEM, presets.TWO_BODY, presets.LORENZ):
            config = SimulationConfig.from_dict(preset)
            self.assertGreater(config.steps_per_ms, 0)

    def test_presets_are_read_only(self):
        with self.assertRaises(TypeError):
            presets.SOLAR_SYSTEM["step_size_seconds"] = 1.0


class TestDisplaySettings(unittest.TestCase):

    def test_window(self):
        self.assertEqual((display.WINDOW["width"], display.WINDOW["height"]), (1280, 720))
        self.assertGreater(display.WINDOW["fps"], 0)

    def test_default_body_color_is_hex(self):
        self.assertRegex(display.COLORS["default_body"], r"^#[0-9A-Fa-f]{6}$")


if __name__ == "__main__":
    unittest.main()
