"""
Tests for the Simulation facade.

Frame timer, render sink and clock are the hand-driven fakes from
``fakes.py``; nothing here opens a window.
"""

import dataclasses
import unittest
from contextlib import redirect_stdout
from io import StringIO

from spatialsim import (
    ChaoticParticle,
    ConfigurationError,
    GravitationalBody,
    Simulation,
    SimulationConfig,
)
from spatialsim.chaos import LorenzIntegrator
from spatialsim.nbody import GravityIntegrator
from spatialsim.simulation import integrator_for

from fakes import FakeClock, FakeFrameTimer, RecordingSink


def orbit_bodies():
    return [
        GravitationalBody(mass=1.989e30, x=0.0, y=0.0, anchor=True, tag="#FFF000"),
        GravitationalBody(mass=5.972e24, x=0.0, y=1.52e11, vx=2.93e4, tag="#00B3FF"),
    ]


class SimulationTestCase(unittest.TestCase):

    def setUp(self):
        self.config = SimulationConfig(step_size_seconds=1000.0, steps_per_ms=10.0,
                                       softening_distance=1e8)
        self.timer = FakeFrameTimer()
        self.sink = RecordingSink()
        self.clock = FakeClock(0.0)
        # Keep the [Sim] start/stop lines out of the test output
        self._quiet = redirect_stdout(StringIO())
        self._quiet.__enter__()

    def tearDown(self):
        self._quiet.__exit__(None, None, None)

    def make(self, bodies=None, config=None):
        return Simulation(config or self.config, orbit_bodies() if bodies is None else bodies,
                          self.timer, self.sink, clock=self.clock)


class TestConstruction(SimulationTestCase):
    """Setup errors are raised before anything runs."""

    def test_no_bodies(self):
        with self.assertRaises(ConfigurationError):
            self.make(bodies=[])

    def test_mixed_body_kinds(self):
        with self.assertRaises(ConfigurationError):
            self.make(bodies=[GravitationalBody(mass=1.0, x=0.0, y=0.0),
                              ChaoticParticle(1.0, 1.0, 1.0)])

    def test_picks_integrator_by_body_kind(self):
        self.assertIsInstance(integrator_for(self.config, orbit_bodies()), GravityIntegrator)
        lorenz = integrator_for(self.config, [ChaoticParticle(1.0, 1.0, 1.0)])
        self.assertIsInstance(lorenz, LorenzIntegrator)
        self.assertEqual((lorenz.sigma, lorenz.rho), (10.0, 28.0))

    def test_integrator_uses_config_physics(self):
        integrator = integrator_for(self.config, orbit_bodies())
        self.assertEqual(integrator.softening_distance, 1e8)
        self.assertEqual(integrator.G, self.config.gravitational_constant)

    def test_not_running_until_started(self):
        sim = self.make()
        self.assertFalse(sim.running)
        self.assertIsNone(sim.scheduler)
        self.assertEqual(self.timer.requests, 0)
        self.assertEqual(len(sim), 2)


class TestLifecycle(SimulationTestCase):
    """Start, stop and restart."""

    def test_start_and_tick(self):
        sim = self.make()
        sim.start()
        self.assertTrue(sim.running)
        self.timer.fire(16.0)
        self.assertEqual(len(self.sink.snapshots), 1)
        self.assertEqual(sim.clock_state.step_count, 160)

    def test_stop_is_idempotent(self):
        sim = self.make()
        sim.stop()
        sim.start()
        sim.stop()
        sim.stop()
        self.assertFalse(sim.running)
        self.assertEqual(len(self.timer.cancelled), 1)
        self.assertEqual(self.timer.pending, {})

    def test_start_while_running_is_noop(self):
        sim = self.make()
        sim.start()
        scheduler = sim.scheduler
        sim.start()
        self.assertIs(sim.scheduler, scheduler)
        self.assertEqual(self.timer.requests, 1)

    def test_restart_rebuilds_from_initial_conditions(self):
        sim = self.make()
        sim.start()
        self.timer.fire(16.0)
        moved = sim.snapshot()
        sim.stop()
        self.assertEqual(sim.snapshot(), moved)

        self.clock.now = 500.0
        sim.start()
        self.assertEqual(sim.snapshot(), tuple(orbit_bodies()))
        self.assertEqual(sim.clock_state.step_count, 0)
        self.assertEqual(sim.clock_state.last_ms, 500.0)

    def test_clock_state_is_a_copy(self):
        sim = self.make()
        self.assertEqual(sim.clock_state.frame_count, 0)
        sim.start()
        cs = sim.clock_state
        cs.frame_count = 99
        self.assertEqual(sim.clock_state.frame_count, 0)

    def test_logs_start_and_stop(self):
        sim = self.make()
        out = StringIO()
        with redirect_stdout(out):
            sim.start()
            self.timer.fire(16.0)
            sim.stop()
        text = out.getvalue()
        self.assertIn("[Sim] Started 2 bodies (gravity)", text)
        self.assertIn("[Sim] Stopped after 1 frames, 160 steps", text)


class TestSnapshots(SimulationTestCase):
    """Snapshots are frozen values detached from the running state."""

    def test_snapshot_before_start_is_initial_bodies(self):
        sim = self.make()
        self.assertEqual(sim.snapshot(), tuple(orbit_bodies()))

    def test_snapshot_values_are_frozen(self):
        sim = self.make()
        sim.start()
        self.timer.fire(16.0)
        body = self.sink.snapshots[0][1]
        with self.assertRaises(dataclasses.FrozenInstanceError):
            body.x = 0.0

    def test_rendered_snapshot_does_not_change_later(self):
        sim = self.make()
        sim.start()
        self.timer.fire(16.0)
        first = self.sink.snapshots[0]
        x_before = first[1].x
        self.timer.fire(32.0)
        self.assertEqual(first[1].x, x_before)
        self.assertNotEqual(self.sink.snapshots[1][1].x, x_before)

    def test_tags_survive_stepping(self):
        sim = self.make()
        sim.start()
        self.timer.fire(16.0)
        self.assertEqual([b.tag for b in self.sink.snapshots[0]], ["#FFF000", "#00B3FF"])


class TestAnchors(SimulationTestCase):

    def test_move_anchor_between_ticks(self):
        sim = self.make()
        sim.start()
        sim.move_anchor(0, 1.0e10, 0.0)
        self.timer.fire(16.0)
        sun = self.sink.snapshots[0][0]
        self.assertEqual((sun.x, sun.y), (1.0e10, 0.0))

    def test_move_anchor_before_start(self):
        with self.assertRaises(RuntimeError):
            self.make().move_anchor(0, 0.0, 0.0)

    def test_move_anchor_rejects_lorenz(self):
        sim = self.make(bodies=[ChaoticParticle(1.0, 1.0, 1.0)])
        sim.start()
        with self.assertRaises(ConfigurationError):
            sim.move_anchor(0, 0.0, 0.0)


class TestFromScenario(SimulationTestCase):

    def test_lorenz_scenario(self):
        sim = Simulation.from_scenario("lorenz", self.timer, self.sink, clock=self.clock)
        self.assertIsInstance(sim.integrator, LorenzIntegrator)
        self.assertEqual(len(sim), 4)
        sim.start()
        self.timer.fire(16.0)
        self.assertEqual(sim.clock_state.step_count, 160)
        self.assertTrue(all(isinstance(p, ChaoticParticle) for p in self.sink.snapshots[0]))

    def test_overrides_reach_config(self):
        sim = Simulation.from_scenario("two-body", self.timer, self.sink, clock=self.clock,
                                       steps_per_ms=3.0)
        self.assertEqual(sim.config.steps_per_ms, 3.0)

    def test_unknown_scenario(self):
        with self.assertRaises(ConfigurationError):
            Simulation.from_scenario("four-body", self.timer, self.sink)


if __name__ == "__main__":
    unittest.main()
