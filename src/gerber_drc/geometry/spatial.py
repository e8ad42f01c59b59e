"""R-tree spatial index over shapely geometries.

The index is an envelope filter: queries return every geometry whose
bounding box intersects the query box expanded by the search distance.
That is a superset of the geometries truly within the distance; callers
filter by exact distance.

Example:
    >>> index = SpatialIndex()
    >>> index.insert_all(geometries)
    >>> for i, j in index.pairs_within(0.127):
    ...     d = geometries[i].distance(geometries[j])
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from rtree import index as rtree_index
from shapely.geometry.base import BaseGeometry

logger = logging.getLogger(__name__)

__all__ = ["SpatialIndex", "expand_bounds"]


def expand_bounds(
    bounds: tuple[float, float, float, float], margin: float
) -> tuple[float, float, float, float]:
    """Grow (min_x, min_y, max_x, max_y) by margin on all sides."""
    min_x, min_y, max_x, max_y = bounds
    return (min_x - margin, min_y - margin, max_x + margin, max_y + margin)


class SpatialIndex:
    """Envelope-keyed index of geometries, built once and then queried.

    Geometries are identified by their insertion position, so results can
    be mapped back to a parallel list of source objects.
    """

    def __init__(self) -> None:
        self._geometries: list[BaseGeometry] = []
        self._index: rtree_index.Index | None = None

    def insert(self, geometry: BaseGeometry) -> int:
        """Add a geometry; returns its position.

        Inserting after the first query adds the entry to the live tree.
        """
        idx = len(self._geometries)
        self._geometries.append(geometry)
        if self._index is not None and not geometry.is_empty:
            self._index.insert(idx, geometry.bounds)
        return idx

    def insert_all(self, geometries: Iterable[BaseGeometry]) -> None:
        """Add several geometries in order."""
        for geometry in geometries:
            self.insert(geometry)

    def build(self) -> None:
        """Bulk-load the tree. Idempotent; queries call it implicitly."""
        if self._index is not None:
            return

        p = rtree_index.Property()
        p.dimension = 2

        entries = [
            (idx, geom.bounds, None)
            for idx, geom in enumerate(self._geometries)
            if not geom.is_empty
        ]
        if entries:
            self._index = rtree_index.Index(iter(entries), properties=p)
        else:
            self._index = rtree_index.Index(properties=p)
        logger.debug(f"Built spatial index over {len(entries)} geometries")

    def query_indices(self, geometry: BaseGeometry, distance: float) -> list[int]:
        """Positions of geometries whose envelope is within distance of geometry's.

        The result may include the query geometry itself. Positions are
        returned in ascending order.
        """
        self.build()
        if geometry.is_empty:
            return []
        hits = self._index.intersection(expand_bounds(geometry.bounds, distance))
        return sorted(hits)

    def query_neighbors(self, geometry: BaseGeometry, distance: float) -> list[BaseGeometry]:
        """Geometries whose envelope is within distance of geometry's envelope."""
        return [self._geometries[i] for i in self.query_indices(geometry, distance)]

    def pairs_within(self, distance: float) -> Iterator[tuple[int, int]]:
        """Yield candidate pairs ``(i, j)`` with ``i < j``.

        Each unordered pair of indexed geometries whose envelopes come
        within distance is produced exactly once, ordered by i then j.
        """
        self.build()
        for i, geom in enumerate(self._geometries):
            for j in self.query_indices(geom, distance):
                if j > i:
                    yield i, j

    @property
    def geometries(self) -> list[BaseGeometry]:
        return list(self._geometries)

    def __getitem__(self, idx: int) -> BaseGeometry:
        return self._geometries[idx]

    def __len__(self) -> int:
        return len(self._geometries)
