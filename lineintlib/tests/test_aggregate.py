"""Tests for lineintlib._aggregate (composite trajectories)."""

import numpy as np
import numpy.testing as npt
import pint
import pytest

from lineintlib import (
    DegenerateGeometry,
    EmptyTrajectory,
    GaussKronrod,
    Quantity,
    Ring,
    Rope,
    Segment,
    SurfacePathSegment,
    SurfaceTrajectory,
    integral,
    tangential_integral,
)
from lineintlib._aggregate import Partial, aggregate, decompose

ureg = pint.UnitRegistry()

SQUARE = [[0.0, 0.0], [2.0, 0.0], [2.0, 2.0], [0.0, 2.0]]


def circulation_field(p):
    return np.array([-p[1], p[0]])


class TestDecompose:
    def test_ring_includes_closing_segment(self):
        pieces = decompose(Ring(SQUARE))
        assert len(pieces) == 4
        npt.assert_array_equal(pieces[-1].a, SQUARE[-1])
        npt.assert_array_equal(pieces[-1].b, SQUARE[0])

    def test_single_geometry_passes_through(self):
        seg = Segment([0.0], [1.0])
        assert decompose(seg) == [seg]

    def test_nested_collections_flatten(self):
        pieces = decompose([Ring(SQUARE), [Segment([0.0, 0.0], [1.0, 0.0])]])
        assert len(pieces) == 5

    def test_trajectory(self):
        traj = SurfaceTrajectory.from_points(SQUARE, closed=True)
        pieces = decompose(traj)
        assert len(pieces) == 4
        assert all(isinstance(p, SurfacePathSegment) for p in pieces)

    def test_repeated_point_skipped(self):
        rope = Rope([0.0, 0.0], [1.0, 0.0], [1.0, 0.0], [1.0, 1.0])
        assert len(decompose(rope)) == 2

    def test_ring_with_repeated_start_skips_closure(self):
        ring = Ring(SQUARE + [SQUARE[0]])
        assert len(decompose(ring)) == 4

    @pytest.mark.parametrize("geometry", [
        Rope([1.0, 1.0]),
        Ring([1.0, 1.0]),
        Ring(),
        SurfaceTrajectory([]),
        [],
    ])
    def test_empty(self, geometry):
        with pytest.raises(EmptyTrajectory):
            decompose(geometry)

    def test_all_points_equal(self):
        with pytest.raises(DegenerateGeometry, match="zero length"):
            decompose(Ring([1.0, 1.0], [1.0, 1.0], [1.0, 1.0]))

    def test_empty_is_degenerate(self):
        assert issubclass(EmptyTrajectory, DegenerateGeometry)


class TestAggregate:
    def test_sums_estimates(self):
        total = aggregate([Partial(Quantity(1.0)), Partial(Quantity(2.5))])
        assert total.estimate.to_value() == 3.5
        assert total.error is None

    def test_sums_errors(self):
        total = aggregate([Partial(Quantity([1.0, 1.0]), Quantity(1e-9)),
                           Partial(Quantity([2.0, 0.0]), Quantity(2e-9))])
        npt.assert_allclose(total.estimate.to_value(), [3.0, 1.0])
        assert total.error.to_value() == pytest.approx(3e-9)

    def test_adds_like_units(self):
        total = aggregate([Partial(Quantity(1.0, ureg.m)), Partial(Quantity(20.0, ureg.cm))])
        assert total.estimate.to_value().to(ureg.m).magnitude == pytest.approx(1.2)


class TestCompositeIntegrals:
    def test_sum_of_sub_segments(self):
        ring = Ring(SQUARE)
        f = lambda p: p[0] ** 2 + p[1]
        total = integral(f, ring)
        parts = sum(integral(f, s) for s in ring.segments())
        assert total == pytest.approx(parts)

    def test_ring_equals_closed_rope(self):
        f = lambda p: np.sin(p[0]) + p[1]
        assert integral(f, Ring(SQUARE)) == pytest.approx(integral(f, Rope(SQUARE + [SQUARE[0]])))

    def test_ring_equals_closed_trajectory(self):
        f = lambda p: np.exp(-p[0]) * p[1]
        traj = SurfaceTrajectory.from_points(SQUARE, closed=True)
        assert integral(f, traj) == pytest.approx(integral(f, Ring(SQUARE)))

    def test_cyclic_rotation_invariant(self):
        f = lambda p: np.cos(p[0]) + p[1] ** 2
        reference = integral(f, Ring(SQUARE))
        circulation = tangential_integral(circulation_field, Ring(SQUARE))
        for k in range(1, 4):
            rotated = Ring(SQUARE[k:] + SQUARE[:k])
            assert integral(f, rotated) == pytest.approx(reference)
            assert tangential_integral(circulation_field, rotated) == pytest.approx(circulation)

    def test_reversal_keeps_scalar_and_flips_tangential(self):
        ring = Ring(SQUARE)
        f = lambda p: 1.0 + p[0]
        assert integral(f, ring.reverse()) == pytest.approx(integral(f, ring))
        assert tangential_integral(circulation_field, ring) == pytest.approx(8.0)
        assert tangential_integral(circulation_field, ring.reverse()) == pytest.approx(-8.0)

    def test_trajectory_reversal(self):
        traj = SurfaceTrajectory.from_points(SQUARE, closed=True)
        assert tangential_integral(circulation_field, traj.reverse()) == pytest.approx(-8.0)

    def test_repeated_interior_point_is_plain_sum(self):
        # figure-eight through the origin: the crossing is not special-cased
        pts = [[0.0, 0.0], [1.0, 1.0], [1.0, -1.0], [0.0, 0.0],
               [-1.0, 1.0], [-1.0, -1.0], [0.0, 0.0]]
        rope = Rope(pts)
        assert integral(lambda p: 1.0, rope) == pytest.approx(rope.measure())
        assert integral(lambda p: 1.0, rope) == pytest.approx(4 * np.sqrt(2) + 4.0)

    def test_repeated_consecutive_point_contributes_nothing(self):
        with_repeat = Rope([0.0, 0.0], [1.0, 0.0], [1.0, 0.0], [1.0, 1.0])
        without = Rope([0.0, 0.0], [1.0, 0.0], [1.0, 1.0])
        assert integral(lambda p: 1.0, with_repeat) == pytest.approx(integral(lambda p: 1.0, without))

    def test_two_point_ring_goes_there_and_back(self):
        ring = Ring([0.0, 0.0], [3.0, 4.0])
        assert integral(lambda p: 1.0, ring) == pytest.approx(10.0)
        assert tangential_integral(lambda p: np.array([1.0, 1.0]), ring) == pytest.approx(0.0)

    def test_adaptive_error_bound_summed(self):
        value, error = integral(lambda p: np.exp(p[0]), Ring(SQUARE), GaussKronrod())
        assert value == pytest.approx(2 * (np.exp(2.0) - 1.0) + 2.0 + 2.0 * np.exp(2.0))
        assert 0.0 <= error < 1e-6

    def test_collection_without_continuity(self):
        pieces = [Segment([0.0, 0.0], [1.0, 0.0]), Segment([5.0, 5.0], [5.0, 7.0])]
        assert integral(lambda p: 1.0, pieces) == pytest.approx(3.0)
