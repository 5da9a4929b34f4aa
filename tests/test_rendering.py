"""Tests for the window-free parts of the rendering package."""

import unittest

import numpy as np

from spatialsim.bodies import ChaoticParticle, GravitationalBody
from spatialsim.rendering import PygameFrameTimer, fit_scale, hex_to_rgb, project


class TestHexToRgb(unittest.TestCase):

    def test_parses_tag(self):
        self.assertEqual(hex_to_rgb("#FF0000"), (1.0, 0.0, 0.0))
        self.assertEqual(hex_to_rgb("00FF00"), (0.0, 1.0, 0.0))

    def test_falls_back_to_default(self):
        white = (1.0, 1.0, 1.0)
        for tag in (None, 42, "#FFF", "#GGGGGG"):
            with self.subTest(tag=tag):
                self.assertEqual(hex_to_rgb(tag), white)
        self.assertEqual(hex_to_rgb(None, default="#0000FF"), (0.0, 0.0, 1.0))


class TestProject(unittest.TestCase):

    def test_xy(self):
        snapshot = (
            GravitationalBody(mass=1.0, x=1.0, y=2.0),
            GravitationalBody(mass=1.0, x=-3.0, y=4.0),
        )
        np.testing.assert_array_equal(project(snapshot), [[1.0, 2.0], [-3.0, 4.0]])

    def test_xz_with_offset(self):
        snapshot = (ChaoticParticle(1.0, 2.0, 30.0),)
        np.testing.assert_array_equal(project(snapshot, "xz", z_offset=25.0), [[1.0, 5.0]])

    def test_empty(self):
        self.assertEqual(project(()).shape, (0, 2))

    def test_unknown_projection(self):
        with self.assertRaises(ValueError):
            project((), "yz")


class TestFitScale(unittest.TestCase):

    def test_furthest_point_inside_window(self):
        points = np.array([[100.0, 0.0], [0.0, -50.0]])
        scale = fit_scale(points, (800, 600), padding=1.0)
        self.assertEqual(scale, 3.0)
        scale = fit_scale(points, (800, 600), padding=1.5)
        self.assertLess(100.0 * scale, 300.0)

    def test_degenerate(self):
        self.assertEqual(fit_scale(np.zeros((0, 2)), (800, 600)), 1.0)
        self.assertEqual(fit_scale(np.zeros((3, 2)), (800, 600)), 1.0)


class TestPygameFrameTimer(unittest.TestCase):
    """Dispatch bookkeeping, driven by an injected time source."""

    def setUp(self):
        self.now = 0.0
        self.timer = PygameFrameTimer(fps=60, time_source=lambda: self.now)
        self.calls = []

    def test_dispatch_fires_once(self):
        self.timer.request_next_tick(self.calls.append)
        self.assertEqual(self.timer.pending, 1)
        self.assertEqual(self.timer.dispatch(16.0), 1)
        self.assertEqual(self.timer.dispatch(32.0), 0)
        self.assertEqual(self.calls, [16.0])

    def test_cancel(self):
        handle = self.timer.request_next_tick(self.calls.append)
        self.timer.cancel(handle)
        self.timer.cancel(handle)
        self.assertEqual(self.timer.dispatch(16.0), 0)
        self.assertEqual(self.calls, [])

    def test_handles_are_unique(self):
        a = self.timer.request_next_tick(self.calls.append)
        b = self.timer.request_next_tick(self.calls.append)
        self.assertNotEqual(a, b)
        self.timer.cancel(a)
        self.timer.dispatch(5.0)
        self.assertEqual(self.calls, [5.0])

    def test_callback_requested_during_dispatch_waits(self):
        """A callback that re-requests runs on the next dispatch, not this one."""
        def callback(now):
            self.calls.append(now)
            self.timer.request_next_tick(callback)

        self.timer.request_next_tick(callback)
        self.timer.dispatch(1.0)
        self.timer.dispatch(2.0)
        self.assertEqual(self.calls, [1.0, 2.0])
        self.assertEqual(self.timer.pending, 1)

    def test_now_ms(self):
        self.now = 1234
        self.assertEqual(self.timer.now_ms(), 1234.0)
        self.assertEqual(self.timer.get_fps(), 0.0)


if __name__ == "__main__":
    unittest.main()
