"""Per-pixel record of the contending seed pair on boundary cells."""

import numpy as np
from typing import Optional, Tuple

UNSET = -1


class BorderMaskStore:
    """
    Dense WIDTH x HEIGHT grid of seed index pairs.

    Cells are addressed as store[x, y]. Internally the pairs live in an
    (height, width, 2) int32 array so that one row is one contiguous slice;
    each border worker receives the slice for its own row only.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Store dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.pairs = np.full((height, width, 2), UNSET, dtype=np.int32)

    def row(self, y: int) -> np.ndarray:
        """Writable (width, 2) view of row y."""
        return self.pairs[y]

    def get(self, x: int, y: int) -> Optional[Tuple[int, int]]:
        a, b = self.pairs[y, x]
        if a == UNSET:
            return None
        return int(a), int(b)

    def set(self, x: int, y: int, pair: Tuple[int, int]) -> None:
        self.pairs[y, x] = pair

    def __getitem__(self, xy: Tuple[int, int]) -> Optional[Tuple[int, int]]:
        x, y = xy
        return self.get(x, y)

    def __setitem__(self, xy: Tuple[int, int], pair: Tuple[int, int]) -> None:
        x, y = xy
        self.set(x, y, pair)

    def clear(self) -> None:
        self.pairs.fill(UNSET)

    def border_mask(self) -> np.ndarray:
        """Boolean (height, width) array of set cells."""
        return self.pairs[..., 0] != UNSET

    def count(self) -> int:
        return int(np.count_nonzero(self.border_mask()))

    def is_empty(self) -> bool:
        return not self.border_mask().any()

    def first_set_cell(self) -> Optional[Tuple[int, int]]:
        """
        First set cell scanning x in the outer loop and y in the inner loop.

        Returns:
            (x, y) of the cell, or None when the store holds no boundary
        """
        by_column = self.border_mask().T.ravel()
        flat = int(np.argmax(by_column))
        if not by_column[flat]:
            return None
        x, y = divmod(flat, self.height)
        return x, y

    def same_pair(self, x1: int, y1: int, x2: int, y2: int) -> bool:
        """Compare two cells' pairs as unordered pairs."""
        a1, b1 = self.pairs[y1, x1]
        a2, b2 = self.pairs[y2, x2]
        return (a1 == a2 and b1 == b2) or (a1 == b2 and b1 == a2)
