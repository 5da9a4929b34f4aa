"""
Fixed-Step Simulation Viewer
============================

Watches one scenario in a pygame/OpenGL window. The window is both the
Frame Timer (via ``PygameFrameTimer``) and the Render Sink.

Controls:
    - SPACE: Pause/Resume (a pause longer than max_elapsed_ms trips the lag
      guard on resume; a shorter one is caught up in the next frame)
    - R: Restart the scenario from its initial conditions
    - H: Toggle help text
    - ESC: Quit
"""

import pygame
from pygame.locals import *
from OpenGL.GL import *

from .config import display as config
from .rendering.frame_timer import PygameFrameTimer
from .rendering.points import PointRenderer
from .rendering.text import HudRenderer
from .simulation import Simulation


class SimulationApp:
    """Main application: event handling, frame pacing and drawing."""

    def __init__(self, scenario: str = "solar", fps: int = config.WINDOW["fps"], **overrides):
        pygame.init()
        self.screen_size = (config.WINDOW["width"], config.WINDOW["height"])
        pygame.display.set_mode(self.screen_size, DOUBLEBUF | OPENGL)
        pygame.display.set_caption(f"{config.WINDOW['title']} - {scenario}")

        self.timer = PygameFrameTimer(fps=fps)
        self.hud = HudRenderer()

        print(f"[App] Loading scenario '{scenario}'...")
        self.scenario = scenario
        self.simulation = Simulation.from_scenario(
            scenario, self.timer, self, clock=self.timer.now_ms, **overrides
        )
        self.points = self._make_point_renderer()

        # State
        self.running = True
        self.paused = False
        self.show_help = True

        glClearColor(*config.COLORS["background"])
        print("[App] Ready!")

    def _make_point_renderer(self) -> PointRenderer:
        if self.simulation.integrator.name == "lorenz":
            return PointRenderer(
                self.screen_size, projection="xz",
                scale=config.POINTS["lorenz_scale"],
                z_offset=config.POINTS["lorenz_z_offset"],
            )
        return PointRenderer(self.screen_size, projection="xy")

    def draw(self, snapshot: tuple):
        """Render sink entry point, called once per frame by the scheduler."""
        glClear(GL_COLOR_BUFFER_BIT)
        self.points.draw(snapshot)

        cs = self.simulation.clock_state
        cfg = self.simulation.config
        lines = [
            f"Bodies: {len(snapshot)}  |  FPS: {self.timer.get_fps():.0f}  |  {self.scenario}",
            f"Steps: {cs.step_count:,}  |  dt={cfg.step_size_seconds:g}s  |  "
            f"Skipped frames: {cs.skipped_frames}  |  Rejected: {cs.rejected_ticks}",
        ]
        if self.show_help:
            lines.append("SPACE: Pause | R: Restart | H: Toggle help | ESC: Quit")
        self.hud.draw_lines(lines, self.screen_size)

        pygame.display.flip()

    def _restart(self):
        print("[App] Restarting simulation...")
        self.simulation.stop()
        self.points = self._make_point_renderer()
        self.simulation.start()

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if event.type == QUIT:
                self.running = False
            elif event.type == KEYDOWN:
                if event.key == K_ESCAPE:
                    self.running = False
                elif event.key == K_SPACE:
                    self.paused = not self.paused
                    print(f"[App] {'Paused' if self.paused else 'Running'}")
                elif event.key == K_r:
                    self._restart()
                elif event.key == K_h:
                    self.show_help = not self.show_help

    def run(self):
        """Main application loop."""
        print("[App] Starting main loop...")
        self.simulation.start()

        while self.running:
            self._handle_events()
            if self.paused:
                # Frames are withheld. The first one after resuming covers the
                # whole pause, so only pauses over max_elapsed_ms skip physics.
                pygame.time.wait(1000 // self.timer.fps)
            else:
                self.timer.wait_and_dispatch()

        self.simulation.stop()
        pygame.quit()
        print("[App] Shutdown complete")
