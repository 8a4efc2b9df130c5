"""
Border engine.

Owns the seed set, border mask store and pixel buffer for one run and
exposes the two externally triggered passes: computing the border field and
extracting boundary vertices. Callers deliver triggers either by calling the
entry points directly or by handing a `Command` to `handle`.
"""

import threading
from enum import Enum
from typing import Optional, Union

import structlog

from .core.border_field import BorderField, BorderFieldResult, GridConfig
from .core.canvas import PixelBuffer
from .core.exceptions import PassInProgressError
from .core.mask_store import BorderMaskStore
from .core.palette import Palette
from .core.seeds import SeedSet
from .core.vertices import ExtractionResult, VertexExtractor

logger = structlog.get_logger()


class Command(str, Enum):
    """Trigger messages understood by BorderEngine.handle."""
    COMPUTE_BORDERS = "compute_borders"
    EXTRACT_VERTICES = "extract_vertices"


class BorderEngine:
    """Runs border and vertex passes over explicitly owned buffers."""

    def __init__(self, seeds: SeedSet, config: GridConfig = GridConfig(),
                 palette: Optional[Palette] = None, workers: Optional[int] = None,
                 kernel: str = "vectorized", clear_before_pass: bool = True):
        self.seeds = seeds
        self.config = config
        self.palette = palette or Palette()
        self.clear_before_pass = clear_before_pass

        self.store = BorderMaskStore(config.width, config.height)
        self.canvas = PixelBuffer(config.width, config.height)
        self.field = BorderField(seeds, config, self.palette, workers=workers, kernel=kernel)
        self.extractor = VertexExtractor(self.store)

        self._pass_lock = threading.Lock()
        self._draw_base_layer()

    @classmethod
    def from_settings(cls, seeds: SeedSet, settings) -> "BorderEngine":
        return cls(
            seeds,
            config=settings.grid_config(),
            palette=settings.palette(),
            workers=settings.workers,
            kernel=settings.kernel,
            clear_before_pass=settings.clear_before_pass,
        )

    def _draw_base_layer(self) -> None:
        self.canvas.reset()
        self.canvas.paint_seeds(self.seeds, self.palette)

    def compute_borders(self, cancel: Optional[threading.Event] = None) -> BorderFieldResult:
        """
        Run one full border field pass.

        With `clear_before_pass` the store is emptied and the base layer
        redrawn first, so cells that stopped being boundaries do not linger.

        Raises:
            PassInProgressError: if a border or vertex pass is already running
        """
        if not self._pass_lock.acquire(blocking=False):
            raise PassInProgressError("Another pass is in progress")
        try:
            if self.clear_before_pass:
                self.store.clear()
                self._draw_base_layer()
            return self.field.compute(self.store, self.canvas, cancel=cancel)
        finally:
            self._pass_lock.release()

    def extract_vertices(self, cancel: Optional[threading.Event] = None) -> ExtractionResult:
        """
        Extract junction vertices from the current store and mark them.

        An empty store yields `boundary_present=False` and leaves the pixel
        buffer untouched.

        Raises:
            PassInProgressError: if a border or vertex pass is already running
        """
        if not self._pass_lock.acquire(blocking=False):
            raise PassInProgressError("Another pass is in progress")
        try:
            result = self.extractor.extract(cancel=cancel)
            if result.vertices:
                painted = self.canvas.paint_vertices(result.vertices)
                logger.info("Painted vertex markers", markers=painted)
            return result
        finally:
            self._pass_lock.release()

    def handle(self, command: Union[Command, str],
               cancel: Optional[threading.Event] = None):
        """Dispatch a trigger message to its entry point."""
        command = Command(command)
        logger.info("Handling command", command=command.value)
        if command is Command.COMPUTE_BORDERS:
            return self.compute_borders(cancel=cancel)
        return self.extract_vertices(cancel=cancel)

    def pixel_bytes(self) -> bytes:
        return self.canvas.to_bytes()
