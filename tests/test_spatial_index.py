"""Tests for the R-tree spatial index."""

from shapely.geometry import Point, box

from gerber_drc.geometry import SpatialIndex, expand_bounds


def disks(*centers, radius=0.5):
    return [Point(x, y).buffer(radius) for x, y in centers]


class TestExpandBounds:
    def test_margin(self):
        assert expand_bounds((0, 0, 1, 2), 0.5) == (-0.5, -0.5, 1.5, 2.5)


class TestSpatialIndex:
    """Tests for SpatialIndex queries."""

    def test_insert_returns_positions(self):
        index = SpatialIndex()
        assert index.insert(box(0, 0, 1, 1)) == 0
        assert index.insert(box(5, 5, 6, 6)) == 1
        assert len(index) == 2

    def test_query_includes_self_and_neighbors(self):
        geometries = disks((0, 0), (1.2, 0), (10, 0))
        index = SpatialIndex()
        index.insert_all(geometries)

        assert index.query_indices(geometries[0], 0.5) == [0, 1]

    def test_query_is_a_superset_of_true_neighbors(self):
        """Everything truly within distance is returned."""
        geometries = disks((0, 0), (0.9, 0.9), (2, 0), (0, 2.05), (5, 5))
        index = SpatialIndex()
        index.insert_all(geometries)

        distance = 1.0
        for i, geom in enumerate(geometries):
            found = set(index.query_indices(geom, distance))
            for j, other in enumerate(geometries):
                if geom.distance(other) <= distance:
                    assert j in found

    def test_envelope_filter_may_overreport(self):
        """Diagonal disks with overlapping envelopes are candidates but not neighbors."""
        geometries = disks((0, 0), (0.95, 0.95))
        index = SpatialIndex()
        index.insert_all(geometries)

        assert 1 in index.query_indices(geometries[0], 0.0)
        assert geometries[0].distance(geometries[1]) > 0

    def test_query_neighbors(self):
        geometries = disks((0, 0), (10, 0))
        index = SpatialIndex()
        index.insert_all(geometries)
        assert index.query_neighbors(geometries[1], 0.1) == [geometries[1]]

    def test_insert_after_query(self):
        index = SpatialIndex()
        index.insert(box(0, 0, 1, 1))
        assert index.query_indices(box(0, 0, 1, 1), 0) == [0]

        index.insert(box(1.5, 0, 2, 1))
        assert index.query_indices(box(0, 0, 1, 1), 1.0) == [0, 1]


class TestPairsWithin:
    """Tests for unordered candidate pairs."""

    def test_each_pair_once_in_order(self):
        geometries = disks((0, 0), (1, 0), (2, 0))
        index = SpatialIndex()
        index.insert_all(geometries)

        assert list(index.pairs_within(0.5)) == [(0, 1), (1, 2)]

    def test_far_geometries_are_not_paired(self):
        index = SpatialIndex()
        index.insert_all(disks((0, 0), (100, 100)))
        assert list(index.pairs_within(1.0)) == []

    def test_empty_index(self):
        index = SpatialIndex()
        assert list(index.pairs_within(1.0)) == []
        assert index.query_indices(box(0, 0, 1, 1), 1.0) == []

    def test_empty_geometries_are_skipped(self):
        index = SpatialIndex()
        index.insert_all([Point(0, 0).buffer(0), box(0, 0, 1, 1), box(0.5, 0, 2, 1)])
        assert list(index.pairs_within(0.0)) == [(1, 2)]
