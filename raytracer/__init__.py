"""Ray tracer foundations: tuples, matrices, colors and a PPM canvas.

A Python project that builds the linear algebra and raster layer of a
ray tracer from first principles, keeping every step (cofactor expansion,
homogeneous coordinates, PPM line wrapping) visible in plain code.
"""

from __future__ import annotations

__version__ = "0.1.0"
