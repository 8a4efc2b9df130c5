"""
Contending-neighbour collection for a single query point.

A ContendingSet keeps every seed whose distance lies within the smoothing
radius of the closest distance seen so far. Boundaries come from a set of
near-equidistant seeds rather than from a strict first/second nearest rule,
which keeps border lines stable where a third or fourth seed is almost as
close as the top two.
"""

from operator import itemgetter
from typing import Iterator, List, Optional, Tuple

from .exceptions import BorderPairError

SMOOTHING_RADIUS = 2.0


class ContendingSet:
    """Sorted (seed_index, distance) members within the smoothing band."""

    def __init__(self, smoothing_radius: float = SMOOTHING_RADIUS):
        self.smoothing_radius = smoothing_radius
        self._members: List[Tuple[int, float]] = []

    def add(self, seed_index: int, distance: float) -> None:
        """
        Insert a candidate and evict everything outside the band.

        The sort is stable, so at equal distance earlier insertions stay
        first. Members beyond `closest + smoothing_radius` are dropped.
        """
        if not self._members:
            self._members.append((seed_index, distance))
            return

        self._members.append((seed_index, distance))
        self._members.sort(key=itemgetter(1))

        limit = self._members[0][1] + self.smoothing_radius
        for i in range(1, len(self._members)):
            if self._members[i][1] > limit:
                del self._members[i:]
                break

    def is_border(self, seeds) -> bool:
        """True when at least two members belong to different groups."""
        if len(self._members) < 2:
            return False
        groups = seeds.groups
        closest_group = groups[self._members[0][0]]
        return any(groups[index] != closest_group for index, _ in self._members[1:])

    def get_pair(self, seeds) -> Optional[Tuple[int, int]]:
        """
        Closest member and the first later member of a different group.

        Returns None when there is no such pair. Check `is_border` first.
        """
        if len(self._members) < 2:
            return None
        groups = seeds.groups
        first = self._members[0][0]
        for index, _ in self._members[1:]:
            if groups[index] != groups[first]:
                return first, index
        return None

    def border_pair(self, seeds) -> Optional[Tuple[int, int]]:
        """
        Pair for a border cell, or None for an interior one.

        Raises:
            BorderPairError: if `is_border` and `get_pair` disagree
        """
        border = self.is_border(seeds)
        pair = self.get_pair(seeds)
        if border != (pair is not None):
            raise BorderPairError(
                f"is_border={border} but get_pair={pair} for members {self._members}"
            )
        return pair

    @property
    def members(self) -> List[Tuple[int, float]]:
        return list(self._members)

    @property
    def min_distance(self) -> Optional[float]:
        return self._members[0][1] if self._members else None

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[Tuple[int, float]]:
        return iter(self._members)
