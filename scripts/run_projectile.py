#!/usr/bin/env python3
"""
Projectile Render

This script fires a projectile through a gravity/wind environment, plots
its trajectory onto a canvas and writes the result as a PPM image.
"""

from __future__ import annotations

import argparse
import copy
import logging
import os
import sys
from pathlib import Path
from typing import Dict, Optional

import yaml

# Add parent directory to path
sys.path.append(str(Path(__file__).resolve().parent.parent))

from raytracer.canvas import Canvas
from raytracer.color import Color
from raytracer.projectile import Environment, Projectile, trace
from raytracer.timing import StageTimings, Timer
from raytracer.tuples import point, vector


# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
    handlers=[
        logging.StreamHandler(),
    ],
)
logger = logging.getLogger("projectile")


def load_config(config_path: Optional[str] = None) -> Dict:
    """Load configuration from YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary
    """
    # Default config path
    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"

    with open(config_path, "r") as f:
        config = yaml.safe_load(f)

    return config


def build_scene(config: Dict) -> tuple[Canvas, Environment, Projectile, Color]:
    """Create the canvas, environment and initial projectile from config.

    Args:
        config: Configuration dictionary

    Returns:
        Tuple of (canvas, environment, projectile, color)
    """
    canvas = Canvas(config["canvas"]["width"], config["canvas"]["height"])

    start = point(*config["projectile"]["start"])
    direction = vector(*config["projectile"]["direction"])
    velocity = direction.normalize() * config["projectile"]["speed"]

    env = Environment(
        gravity=vector(*config["environment"]["gravity"]),
        wind=vector(*config["environment"]["wind"]),
    )
    color = Color(*config["render"]["color"])

    logger.info(
        f"Canvas {canvas.width}x{canvas.height}, start {start}, velocity {velocity}"
    )
    return canvas, env, Projectile(start, velocity), color


def render_trajectory(
    canvas: Canvas,
    env: Environment,
    proj: Projectile,
    color: Color,
    max_steps: int,
) -> int:
    """Plot the trajectory with a progress bar.

    Args:
        canvas: Canvas to draw on
        env: Simulation environment
        proj: Initial projectile
        color: Path color
        max_steps: Upper bound on simulation ticks

    Returns:
        Number of plotted positions
    """
    plotted = trace(canvas, env, proj, color, max_steps=max_steps, progress=True)
    if plotted == max_steps:
        logger.warning(f"Projectile still on canvas after {max_steps} steps")

    logger.info(f"Plotted {plotted} positions")
    return plotted


def run_projectile(
    output_path: Optional[str] = None,
    config_path: Optional[str] = None,
    overrides: Optional[Dict] = None,
) -> Dict:
    """Run the projectile render end to end.

    Args:
        output_path: Destination PPM file (defaults to the configured path)
        config_path: Path to configuration file
        overrides: Nested values replacing entries of the loaded config

    Returns:
        Dictionary with the output path, plotted count and stage timings
    """
    config = copy.deepcopy(load_config(config_path))
    for section, values in (overrides or {}).items():
        config.setdefault(section, {}).update(values)

    if output_path is None:
        output_path = config["io"]["output"]

    output_dir = os.path.dirname(os.path.abspath(output_path))
    os.makedirs(output_dir, exist_ok=True)

    # Set up file logging
    file_handler = logging.FileHandler(os.path.join(output_dir, "log.txt"))
    file_handler.setFormatter(logging.Formatter("[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"))
    logging.getLogger().addHandler(file_handler)

    timings = StageTimings()
    try:
        with Timer("Build Scene") as timer:
            canvas, env, proj, color = build_scene(config)
        timings.record("build_scene", timer.elapsed)

        with Timer("Simulate") as timer:
            plotted = render_trajectory(
                canvas, env, proj, color, config["render"]["max_steps"]
            )
        timings.record("simulate", timer.elapsed)

        with Timer("Save PPM") as timer:
            canvas.save_ppm(output_path)
        timings.record("save_ppm", timer.elapsed)
    finally:
        logging.getLogger().removeHandler(file_handler)
        file_handler.close()

    logger.info("\n" + timings.summary())

    return {
        "output": output_path,
        "plotted": plotted,
        "stage_timings": dict(timings.stages),
    }


def main():
    """Main function to parse arguments and run the render."""
    parser = argparse.ArgumentParser(description="Projectile trajectory render")
    parser.add_argument(
        "--output", "-o", dest="output_path", default=None,
        help="Path to output PPM file"
    )
    parser.add_argument(
        "--config", "-c", dest="config_path", default=None,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--width", dest="width", type=int, default=None,
        help="Canvas width in pixels"
    )
    parser.add_argument(
        "--height", dest="height", type=int, default=None,
        help="Canvas height in pixels"
    )
    parser.add_argument(
        "--speed", "-s", dest="speed", type=float, default=None,
        help="Initial projectile speed"
    )

    args = parser.parse_args()

    overrides: Dict = {}
    if args.width is not None:
        overrides.setdefault("canvas", {})["width"] = args.width
    if args.height is not None:
        overrides.setdefault("canvas", {})["height"] = args.height
    if args.speed is not None:
        overrides.setdefault("projectile", {})["speed"] = args.speed

    try:
        run_projectile(args.output_path, args.config_path, overrides)
    except Exception as e:
        logger.exception(f"Error rendering projectile: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
