"""Rendering defaults shared by the integrator, renderer and configuration.

Kept free of Taichi fields so it can be imported before ti.init().
"""

# Anti-aliasing samples per pixel
DEFAULT_SAMPLES = 100

# Bounce budget per camera ray
DEFAULT_MAX_DEPTH = 50

# Intersection range. T_MIN suppresses self-intersection ("shadow acne").
T_MIN = 0.001
T_MAX = 1.0e30

# Sky gradient
SKY_BOTTOM = (1.0, 1.0, 1.0)
SKY_TOP = (0.5, 0.7, 1.0)
