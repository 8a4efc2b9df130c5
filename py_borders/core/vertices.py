"""
Boundary vertex extraction.

Walks the boundary mask breadth-first from its first set cell and records
the cells where the contending seed pair changes. Those cells are the
junctions of the boundary graph, where three or more regions meet nearby.
"""

import threading
from collections import deque
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np
import structlog

from .exceptions import PassCancelledError, PassInProgressError
from .mask_store import BorderMaskStore

logger = structlog.get_logger()

NEIGHBOR_OFFSETS = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass
class ExtractionResult:
    """Outcome of a vertex extraction pass."""
    boundary_present: bool
    vertices: List[Tuple[int, int]] = field(default_factory=list)
    start: Optional[Tuple[int, int]] = None
    visited: int = 0


class VertexExtractor:
    """Breadth-first flood fill over a BorderMaskStore."""

    def __init__(self, store: BorderMaskStore):
        self.store = store
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._lock.locked()

    def extract(self, cancel: Optional[threading.Event] = None) -> ExtractionResult:
        """
        Find junction vertices in the boundary component of the first set cell.

        A neighbour becomes a vertex when its unordered seed pair differs
        from the pair of the cell it was reached from. Every set cell is
        visited at most once.

        Raises:
            PassInProgressError: if another extraction is still running
            PassCancelledError: if `cancel` is set during the walk
        """
        if not self._lock.acquire(blocking=False):
            raise PassInProgressError("Vertex extraction already in progress")
        try:
            return self._extract(cancel)
        finally:
            self._lock.release()

    def _extract(self, cancel: Optional[threading.Event]) -> ExtractionResult:
        store = self.store
        start = store.first_set_cell()
        if start is None:
            logger.info("No boundary present, skipping vertex extraction")
            return ExtractionResult(boundary_present=False)

        logger.info("Starting vertex extraction", start_x=start[0], start_y=start[1],
                    pair=store.get(*start))

        width, height = store.width, store.height
        border = store.border_mask()
        visited = np.zeros((height, width), dtype=bool)
        vertices: List[Tuple[int, int]] = []

        sx, sy = start
        visited[sy, sx] = True
        queue = deque([(sx, sy)])
        visited_count = 1

        while queue:
            if cancel is not None and cancel.is_set():
                raise PassCancelledError("Vertex extraction cancelled")

            px, py = queue.popleft()

            for dx, dy in NEIGHBOR_OFFSETS:
                nx, ny = px + dx, py + dy
                if nx < 0 or nx >= width or ny < 0 or ny >= height:
                    continue
                if visited[ny, nx] or not border[ny, nx]:
                    continue

                visited[ny, nx] = True
                visited_count += 1

                if not store.same_pair(px, py, nx, ny):
                    vertices.append((nx, ny))

                queue.append((nx, ny))

        logger.info("Vertex extraction complete", vertices=len(vertices),
                    visited=visited_count)
        return ExtractionResult(boundary_present=True, vertices=vertices,
                                start=start, visited=visited_count)
