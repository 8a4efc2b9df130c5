"""Labeled seed points that define the group regions."""

import numpy as np
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple


@dataclass(frozen=True)
class Seed:
    """A labeled point in the plane."""
    position: Tuple[float, float]
    group: int


class SeedSet:
    """
    Immutable collection of seeds.

    Positions and groups are stored as read-only NumPy arrays so they can be
    shared across border workers without synchronisation.
    """

    def __init__(self, positions, groups):
        positions = np.array(positions, dtype=np.float64).reshape(-1, 2)
        groups = np.array(groups, dtype=np.int64).reshape(-1)

        if len(positions) != len(groups):
            raise ValueError(
                f"Got {len(positions)} positions but {len(groups)} groups"
            )
        if np.any(groups < 0):
            raise ValueError("Group labels must be non-negative")

        positions.setflags(write=False)
        groups.setflags(write=False)
        self.positions = positions
        self.groups = groups

    @classmethod
    def from_seeds(cls, seeds: Iterable[Seed]) -> "SeedSet":
        seeds = list(seeds)
        positions = [s.position for s in seeds]
        groups = [s.group for s in seeds]
        return cls(positions, groups)

    def __len__(self) -> int:
        return len(self.groups)

    def __getitem__(self, index: int) -> Seed:
        x, y = self.positions[index]
        return Seed(position=(float(x), float(y)), group=int(self.groups[index]))

    def __iter__(self) -> Iterator[Seed]:
        for i in range(len(self)):
            yield self[i]

    def distinct_groups(self) -> List[int]:
        return sorted(int(g) for g in np.unique(self.groups))

    def __repr__(self) -> str:
        return f"SeedSet(seeds={len(self)}, groups={self.distinct_groups()})"
