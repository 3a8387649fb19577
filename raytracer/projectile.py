"""Projectile simulation used to exercise tuples and the canvas.

A projectile moves through an environment with constant gravity and wind.
Each tick advances the position by the velocity and bends the velocity by
the environment; ``trace`` plots the path onto a canvas until it leaves it.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple as PyTuple

from tqdm import tqdm

from .canvas import Canvas
from .color import Color
from .tuples import Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Environment:
    gravity: Tuple
    wind: Tuple


@dataclass(frozen=True)
class Projectile:
    position: Tuple
    velocity: Tuple


def tick(env: Environment, proj: Projectile) -> Projectile:
    """Advance the projectile by one time step."""
    position = proj.position + proj.velocity
    velocity = proj.velocity + env.gravity + env.wind
    return Projectile(position, velocity)


def to_pixel(position: Tuple, canvas: Canvas) -> Optional[PyTuple[int, int]]:
    """Map a world position onto canvas coordinates.

    World y grows upwards while canvas rows grow downwards, so the row is
    flipped. Fractional coordinates are truncated.

    Args:
        position: Point in world space
        canvas: Target canvas

    Returns:
        (x, y) pixel coordinates, or None if the position is off the canvas
    """
    if not (math.isfinite(position.x) and math.isfinite(position.y)):
        return None
    if position.x < 0 or position.y < 0:
        return None

    x = int(position.x)
    row = int(position.y)
    if x >= canvas.width or row >= canvas.height:
        return None
    return x, canvas.height - 1 - row


def trace(
    canvas: Canvas,
    env: Environment,
    proj: Projectile,
    color: Color,
    max_steps: Optional[int] = None,
    progress: bool = False,
) -> int:
    """Plot a projectile's path until it leaves the canvas.

    Args:
        canvas: Canvas to draw on
        env: Environment applied at every tick
        proj: Initial projectile state
        color: Color of the plotted path
        max_steps: Optional cap on the number of ticks
        progress: Show a progress bar while simulating

    Returns:
        Number of positions plotted
    """
    steps = 0
    with tqdm(total=max_steps, desc="Simulating", disable=not progress, leave=False) as bar:
        while max_steps is None or steps < max_steps:
            pixel = to_pixel(proj.position, canvas)
            if pixel is None:
                break
            canvas.write_pixel(pixel[0], pixel[1], color)
            proj = tick(env, proj)
            steps += 1
            bar.update(1)

    logger.debug(f"Projectile plotted {steps} positions; final position {proj.position}")
    return steps
