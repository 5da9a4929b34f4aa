"""Display settings for the pygame/OpenGL viewer."""

WINDOW = {
    "width": 1280,
    "height": 720,
    "title": "Fixed-Step Simulation",
    "fps": 60,
}

COLORS = {
    "background": (0.0, 0.0, 0.02, 1.0),  # Deep space black
    "text": (230, 230, 230),
    "default_body": "#FFFFFF",
}

POINTS = {
    "size": 4.0,                  # Point size in pixels
    "padding": 1.05,              # 5% margin around the furthest body
    "lorenz_scale": 15.0,         # Pixels per state-space unit
    "lorenz_z_offset": 25.0,      # Lorenz attractor sits around z = 25
}

HUD = {
    "font": "monospace",
    "font_size": 18,
    "line_height": 25,
    "margin": 10,
}
