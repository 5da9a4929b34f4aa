"""
Fixed-Step Simulation
=====================

Gravity and Lorenz simulations stepped independently of the frame rate.

Usage:
    python main.py [scenario] [--headless] [--frames N]

Scenarios: solar, two-body, three-body, cluster, lorenz

Controls:
    - SPACE: Pause/Resume
    - R: Restart
    - H: Toggle help text
    - ESC: Quit
"""

import sys

from spatialsim.cli import main


if __name__ == "__main__":
    sys.exit(main())
