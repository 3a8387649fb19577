"""Pixel canvas and PPM serialization.

The canvas is a dense grid of linear RGB colors stored as an (H, W, 3)
numpy array. It serializes to the plain-text PPM "P3" format, wrapping
body lines so that none exceeds 70 characters.
"""

from __future__ import annotations

import logging
import os
from typing import List, Union

import numpy as np

from .color import Color, channels_to_rgb255

logger = logging.getLogger(__name__)

PPM_MAGIC = "P3"
PPM_MAX_VALUE = 255
PPM_LINE_WIDTH = 70


class Canvas:
    """Grid of colors addressed by 0-based (x, y), origin at the top left."""

    def __init__(self, width: int, height: int):
        """Create a canvas with every pixel black.

        Args:
            width: Number of columns
            height: Number of rows
        """
        if width < 1 or height < 1:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._pixels = np.zeros((height, width, 3), dtype=np.float64)

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) is outside the canvas; valid coordinates are "
                f"(0, 0) to ({self.width - 1}, {self.height - 1})"
            )

    def write_pixel(self, x: int, y: int, color: Color) -> None:
        """Set the pixel at column x, row y.

        Raises:
            IndexError: If (x, y) lies outside the canvas
        """
        self._check_bounds(x, y)
        self._pixels[y, x] = color.to_array()

    def pixel_at(self, x: int, y: int) -> Color:
        """Return the color at column x, row y.

        Raises:
            IndexError: If (x, y) lies outside the canvas
        """
        self._check_bounds(x, y)
        r, g, b = self._pixels[y, x]
        return Color(r, g, b)

    def to_ppm(self) -> str:
        """Serialize the canvas as PPM P3 text.

        The header is followed by one or more lines per canvas row. Tokens
        are appended to the current line while it stays within 70
        characters; a row always ends its last line.

        Returns:
            The complete PPM document, ending with a newline
        """
        header = f"{PPM_MAGIC}\n{self.width} {self.height}\n{PPM_MAX_VALUE}\n"
        channels = channels_to_rgb255(self._pixels)

        lines: List[str] = []
        for row in channels:
            line = ""
            for token in (str(v) for v in row.flat):
                if not line:
                    line = token
                elif len(line) + 1 + len(token) <= PPM_LINE_WIDTH:
                    line = f"{line} {token}"
                else:
                    lines.append(line)
                    line = token
            lines.append(line)

        body = "".join(f"{line}\n" for line in lines)
        logger.debug(
            f"Serialized {self.width}x{self.height} canvas to {len(lines)} PPM body lines"
        )
        return header + body

    def serialize(self) -> bytes:
        """PPM document as ASCII bytes, ready to be written to a file."""
        return self.to_ppm().encode("ascii")

    def save_ppm(self, path: Union[str, os.PathLike]) -> None:
        """Write the PPM document to ``path``.

        Raises:
            OSError: If the file cannot be written
        """
        data = self.serialize()
        with open(path, "wb") as f:
            f.write(data)
        logger.info(f"Wrote {len(data)} bytes to {path}")
