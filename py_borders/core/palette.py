"""Group colour table and colour blending for border pixels."""

import numpy as np
from typing import Dict, Iterable, Mapping, Optional, Tuple

RGBA = Tuple[int, int, int, int]

DEFAULT_COLOR: RGBA = (255, 255, 255, 255)  # ungrouped

GROUP_COLORS: Dict[int, RGBA] = {
    1: (255, 0, 0, 255),
    2: (0, 255, 0, 255),
    3: (0, 0, 255, 255),
    4: (175, 75, 25, 255),
}

VERTEX_COLOR: RGBA = (255, 0, 0, 255)


def _validate_color(color: Iterable[int]) -> RGBA:
    channels = tuple(int(c) for c in color)
    if len(channels) != 4 or any(c < 0 or c > 255 for c in channels):
        raise ValueError(f"Colour must be four channels in 0..255, got {channels}")
    return channels


class Palette:
    """Maps group labels to RGBA colours, falling back to a default."""

    def __init__(self, colors: Optional[Mapping[int, Iterable[int]]] = None,
                 default: Iterable[int] = DEFAULT_COLOR):
        source = GROUP_COLORS if colors is None else colors
        self.colors: Dict[int, RGBA] = {
            int(group): _validate_color(color) for group, color in source.items()
        }
        self.default: RGBA = _validate_color(default)

    def color(self, group: int) -> RGBA:
        return self.colors.get(int(group), self.default)

    def blend(self, group_a: int, group_b: int) -> RGBA:
        """
        Average the colours of two groups channel by channel.

        Integer division rounds down; alpha is always opaque.
        """
        a = self.color(group_a)
        b = self.color(group_b)
        return ((a[0] + b[0]) // 2, (a[1] + b[1]) // 2, (a[2] + b[2]) // 2, 255)

    def lookup(self, groups: np.ndarray) -> np.ndarray:
        """
        Colour every entry of a group array.

        Args:
            groups: Integer array of group labels

        Returns:
            uint8 array of shape groups.shape + (4,)
        """
        groups = np.asarray(groups)
        table = np.empty(groups.shape + (4,), dtype=np.uint8)
        table[...] = self.default
        for group, color in self.colors.items():
            table[groups == group] = color
        return table
