"""
Border field computation.

Every raster cell is classified as interior or boundary by comparing its
distance to every seed. A cell is a boundary cell when the seeds within the
smoothing band of its closest distance belong to more than one group. Rows
are independent, so the pass fans out over a thread pool with each task
owning one row of the mask store and pixel buffer.
"""

import threading
import time
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple

import numpy as np
import structlog
from scipy.spatial.distance import cdist

from .canvas import PixelBuffer
from .contending import SMOOTHING_RADIUS, ContendingSet
from .exceptions import PassCancelledError
from .mask_store import BorderMaskStore
from .palette import Palette
from .seeds import SeedSet

logger = structlog.get_logger()

KERNELS = ("vectorized", "reference")


class GridConfig(NamedTuple):
    """Raster configuration for the border pass."""
    width: int = 1000
    height: int = 800
    smoothing_radius: float = SMOOTHING_RADIUS


@dataclass
class BorderFieldResult:
    """Summary of one border pass."""
    rows: int
    border_cells: int
    elapsed_seconds: float


class BorderField:
    """Classifies every cell of the raster against a seed set."""

    def __init__(self, seeds: SeedSet, config: GridConfig = GridConfig(),
                 palette: Optional[Palette] = None, workers: Optional[int] = None,
                 kernel: str = "vectorized"):
        """
        Args:
            seeds: Seed set, shared read-only by all workers
            config: Raster dimensions and smoothing radius
            palette: Group colour table (reference colours if omitted)
            workers: Thread count, None for the executor default
            kernel: "vectorized" evaluates a row with NumPy,
                "reference" runs a ContendingSet per cell
        """
        if kernel not in KERNELS:
            raise ValueError(f"Unknown kernel {kernel!r}, expected one of {KERNELS}")
        if config.smoothing_radius < 0:
            raise ValueError("smoothing_radius must be non-negative")

        self.seeds = seeds
        self.config = config
        self.palette = palette or Palette()
        self.workers = workers
        self.kernel = kernel

        self._xs = np.arange(config.width, dtype=np.float64)
        self._seed_colors = self.palette.lookup(seeds.groups)

    def compute(self, store: BorderMaskStore, canvas: PixelBuffer,
                cancel: Optional[threading.Event] = None) -> BorderFieldResult:
        """
        Run one full pass over the raster.

        Boundary cells get their seed pair written to the store and the
        blended group colour written to the canvas. Interior cells are left
        untouched. On failure or cancellation the remaining rows are dropped
        and the store keeps whatever rows were already written.

        Raises:
            PassCancelledError: if `cancel` is set while rows remain
        """
        self._check_dimensions(store, canvas)
        start = time.perf_counter()

        logger.info("Starting border pass",
                    width=self.config.width, height=self.config.height,
                    seeds=len(self.seeds), kernel=self.kernel,
                    smoothing_radius=self.config.smoothing_radius)

        if len(self.seeds) < 2:
            logger.info("Fewer than two seeds, no boundary possible", seeds=len(self.seeds))
            return BorderFieldResult(rows=self.config.height, border_cells=0,
                                     elapsed_seconds=time.perf_counter() - start)

        row_kernel = self._classify_row if self.kernel == "vectorized" else self._classify_row_reference

        def run_row(y: int) -> int:
            if cancel is not None and cancel.is_set():
                raise PassCancelledError(f"Border pass cancelled before row {y}")
            return row_kernel(y, store.row(y), canvas.row(y))

        border_cells = 0
        with ThreadPoolExecutor(max_workers=self.workers,
                                thread_name_prefix="border-row") as executor:
            futures = [executor.submit(run_row, y) for y in range(self.config.height)]
            _, pending = wait(futures, return_when=FIRST_EXCEPTION)
            for future in pending:
                future.cancel()
            for future in futures:
                if future.cancelled():
                    continue
                exc = future.exception()
                if exc is not None:
                    logger.error("Border pass aborted", error=str(exc))
                    raise exc
                border_cells += future.result()

        elapsed = time.perf_counter() - start
        logger.info("Border pass complete", border_cells=border_cells,
                    elapsed_seconds=round(elapsed, 3))
        return BorderFieldResult(rows=self.config.height, border_cells=border_cells,
                                 elapsed_seconds=elapsed)

    def classify_cell(self, x: int, y: int) -> Optional[Tuple[int, int]]:
        """Seed pair contending at one cell, or None for an interior cell."""
        point = np.array([[float(x), float(y)]])
        distances = cdist(point, self.seeds.positions)[0]
        contending = ContendingSet(self.config.smoothing_radius)
        for index, distance in enumerate(distances):
            contending.add(index, float(distance))
        return contending.border_pair(self.seeds)

    def _row_distances(self, y: int) -> np.ndarray:
        cells = np.column_stack([self._xs, np.full(self.config.width, float(y))])
        return cdist(cells, self.seeds.positions)

    def _classify_row(self, y: int, pairs_row: np.ndarray, pixels_row: np.ndarray) -> int:
        """
        Evaluate one row with array operations.

        Equivalent to feeding every distance through a ContendingSet: the
        final set is all seeds within the band of the true minimum, and
        argmin returns the lowest index among equal distances just as the
        stable insertion order does.
        """
        distances = self._row_distances(y)
        columns = np.arange(self.config.width)
        groups = self.seeds.groups

        closest = np.argmin(distances, axis=1)
        limit = distances[columns, closest] + self.config.smoothing_radius
        in_band = distances <= limit[:, None]
        rivals = in_band & (groups[None, :] != groups[closest][:, None])

        border = rivals.any(axis=1)
        if not border.any():
            return 0

        second = np.argmin(np.where(rivals, distances, np.inf), axis=1)

        xs = columns[border]
        first_idx = closest[border]
        second_idx = second[border]
        pairs_row[xs, 0] = first_idx
        pairs_row[xs, 1] = second_idx
        pixels_row[xs] = self._blend(first_idx, second_idx)
        return int(xs.size)

    def _classify_row_reference(self, y: int, pairs_row: np.ndarray,
                                pixels_row: np.ndarray) -> int:
        distances = self._row_distances(y)
        groups = self.seeds.groups
        count = 0
        for x in range(self.config.width):
            contending = ContendingSet(self.config.smoothing_radius)
            for index, distance in enumerate(distances[x]):
                contending.add(index, float(distance))

            pair = contending.border_pair(self.seeds)
            if pair is None:
                continue
            pairs_row[x] = pair
            pixels_row[x] = self.palette.blend(groups[pair[0]], groups[pair[1]])
            count += 1
        return count

    def _blend(self, first_idx: np.ndarray, second_idx: np.ndarray) -> np.ndarray:
        a = self._seed_colors[first_idx].astype(np.uint16)
        b = self._seed_colors[second_idx].astype(np.uint16)
        merged = ((a + b) // 2).astype(np.uint8)
        merged[:, 3] = 255
        return merged

    def _check_dimensions(self, store: BorderMaskStore, canvas: PixelBuffer) -> None:
        expected = (self.config.width, self.config.height)
        if (store.width, store.height) != expected:
            raise ValueError(f"Store is {store.width}x{store.height}, expected {expected[0]}x{expected[1]}")
        if (canvas.width, canvas.height) != expected:
            raise ValueError(f"Canvas is {canvas.width}x{canvas.height}, expected {expected[0]}x{expected[1]}")
