"""RGBA8 pixel buffer that border and vertex passes paint into."""

import numpy as np
import structlog
from pathlib import Path
from typing import Iterable, Tuple, Union

from matplotlib import image as mpimg

from .palette import VERTEX_COLOR, Palette

logger = structlog.get_logger()

SEED_MARKER_SIZE = 10
VERTEX_MARKER_SIZE = 5
BACKGROUND = (0, 0, 0, 0)


class PixelBuffer:
    """
    Row-major RGBA8 image of exactly width * height * 4 bytes.

    Byte offset of pixel (x, y) is (x + y * width) * 4. Writes outside the
    buffer are clipped without error.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Buffer dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, 4), dtype=np.uint8)
        self.reset()

    def reset(self) -> None:
        self.pixels[...] = BACKGROUND

    def row(self, y: int) -> np.ndarray:
        """Writable (width, 4) view of row y."""
        return self.pixels[y]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        return tuple(int(c) for c in self.pixels[y, x])

    def set_pixel(self, x: int, y: int, color) -> bool:
        """Write one pixel; returns False when clipped."""
        if not self.in_bounds(x, y):
            return False
        self.pixels[y, x] = color
        return True

    def fill_square(self, x: int, y: int, size: int, color) -> None:
        """Fill the size x size square whose top-left corner is (x, y)."""
        x0, y0 = max(x, 0), max(y, 0)
        x1, y1 = min(x + size, self.width), min(y + size, self.height)
        if x0 >= x1 or y0 >= y1:
            return
        self.pixels[y0:y1, x0:x1] = color

    def paint_seeds(self, seeds, palette: Palette, size: int = SEED_MARKER_SIZE) -> None:
        """Draw each seed as a square of its group colour."""
        for i in range(len(seeds)):
            x, y = seeds.positions[i]
            self.fill_square(int(x), int(y), size, palette.color(seeds.groups[i]))

    def paint_vertices(self, vertices: Iterable[Tuple[int, int]],
                       size: int = VERTEX_MARKER_SIZE, color=VERTEX_COLOR) -> int:
        count = 0
        for vx, vy in vertices:
            self.fill_square(vx, vy, size, color)
            count += 1
        return count

    def to_bytes(self) -> bytes:
        return self.pixels.tobytes()

    def save_png(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        mpimg.imsave(path, self.pixels)
        logger.info("Saved pixel buffer", path=str(path), width=self.width, height=self.height)
        return path
