"""
Random scenario generation.

Scatters seeds uniformly over the raster and labels each one from a list of
circular (or x-stretched elliptical) regions. Rules apply in order, so a
later region overrides an earlier one; seeds matching no rule keep group 0.
"""

import numpy as np
import structlog
from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple

from .seeds import SeedSet

logger = structlog.get_logger()


@dataclass(frozen=True)
class CircleRegion:
    """Labels the seeds inside (or outside) a circle."""
    cx: float
    cy: float
    radius: float
    group: int
    x_scale: float = 1.0  # >1 stretches the circle along x
    outside: bool = False

    def contains(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        dist_sq = ((x - self.cx) / self.x_scale) ** 2 + (y - self.cy) ** 2
        if self.outside:
            return dist_sq > self.radius ** 2
        return dist_sq < self.radius ** 2


DEFAULT_REGIONS = (
    CircleRegion(cx=50.0, cy=50.0, radius=200.0, group=1, outside=True),
    CircleRegion(cx=400.0, cy=400.0, radius=350.0, group=2),
    CircleRegion(cx=750.0, cy=0.0, radius=200.0, group=3),
    CircleRegion(cx=750.0, cy=300.0, radius=200.0, group=4, x_scale=2.0),
)

# Plane size DEFAULT_REGIONS is laid out for
LAYOUT_SIZE = (1000.0, 800.0)


def scale_regions(regions: Sequence[CircleRegion], width: float, height: float,
                  layout_size=LAYOUT_SIZE) -> Tuple[CircleRegion, ...]:
    """
    Stretch a region layout from `layout_size` onto a width x height plane.

    Centres scale per axis. The radius follows the y factor and x_scale
    absorbs the ratio of the two factors, so a point keeps its label when
    both it and the layout are stretched together.
    """
    sx = width / layout_size[0]
    sy = height / layout_size[1]
    if sx <= 0 or sy <= 0:
        raise ValueError(f"Plane must have positive size, got {width}x{height}")
    return tuple(
        replace(region, cx=region.cx * sx, cy=region.cy * sy,
                radius=region.radius * sy, x_scale=region.x_scale * sx / sy)
        for region in regions
    )


def assign_groups(positions: np.ndarray,
                  regions: Sequence[CircleRegion] = DEFAULT_REGIONS) -> np.ndarray:
    """Group label for every position, last matching region wins."""
    positions = np.asarray(positions, dtype=np.float64).reshape(-1, 2)
    groups = np.zeros(len(positions), dtype=np.int64)
    x, y = positions[:, 0], positions[:, 1]
    for region in regions:
        groups[region.contains(x, y)] = region.group
    return groups


def generate_scenario(count: int = 750, width: float = 1000, height: float = 800,
                      regions: Optional[Sequence[CircleRegion]] = None,
                      seed: Optional[int] = None) -> SeedSet:
    """
    Scatter `count` labeled seeds over a width x height plane.

    Args:
        count: Number of seeds
        width: Plane width, x drawn from [0, width)
        height: Plane height, y drawn from [0, height)
        regions: Ordered labeling rules in plane coordinates. When omitted,
            DEFAULT_REGIONS is stretched onto the plane.
        seed: Random seed for reproducibility

    Returns:
        Immutable SeedSet
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    if regions is None:
        regions = scale_regions(DEFAULT_REGIONS, width, height)

    rng = np.random.default_rng(seed)
    positions = np.column_stack([
        rng.uniform(0.0, width, count),
        rng.uniform(0.0, height, count),
    ])
    groups = assign_groups(positions, regions)

    seeds = SeedSet(positions, groups)
    logger.info("Generated scenario", seeds=count, groups=seeds.distinct_groups(), seed=seed)
    return seeds
