"""Tests for lineintlib._differentiation."""

import numpy as np
import numpy.testing as npt
import pytest

from lineintlib._differentiation import DEFAULT_RELATIVE_STEP, derivative


def unit_circle(s):
    return np.array([np.cos(s), np.sin(s)])


class TestDerivative:
    def test_interior_matches_analytic(self):
        for t in np.linspace(0.1, 6.0, 7):
            d = derivative(unit_circle, t, domain=(0.0, 2 * np.pi))
            npt.assert_allclose(d, [-np.sin(t), np.cos(t)], rtol=1e-6, atol=1e-8)

    def test_lower_boundary(self):
        d = derivative(unit_circle, 0.0, domain=(0.0, 2 * np.pi))
        npt.assert_allclose(d, [0.0, 1.0], atol=1e-8)

    def test_upper_boundary(self):
        d = derivative(unit_circle, 2 * np.pi, domain=(0.0, 2 * np.pi))
        npt.assert_allclose(d, [0.0, 1.0], atol=1e-8)

    def test_quadratic_is_exact_at_ends(self):
        """Three-point one-sided stencils are exact for quadratics."""
        g = lambda s: np.array([s ** 2])
        npt.assert_allclose(derivative(g, 0.0), [0.0], atol=1e-9)
        npt.assert_allclose(derivative(g, 1.0), [2.0], rtol=1e-7)

    def test_never_leaves_domain(self):
        calls = []

        def g(s):
            calls.append(s)
            return np.array([s ** 3])

        for t in (0.0, 1e-9, 0.5, 1.0 - 1e-9, 1.0):
            derivative(g, t, domain=(0.0, 1.0))
        assert min(calls) >= 0.0
        assert max(calls) <= 1.0

    def test_narrow_domain_stays_inside(self):
        calls = []

        def g(s):
            calls.append(s)
            return np.array([2.0 * s])

        lo, hi = 0.3, 0.3 + 1e-7
        npt.assert_allclose(derivative(g, lo, domain=(lo, hi), step=1.0), [2.0], rtol=1e-6)
        assert all(lo <= s <= hi for s in calls)

    def test_unbounded_domain(self):
        g = lambda s: np.array([np.exp(-s)])
        npt.assert_allclose(derivative(g, 0.0, domain=(0.0, np.inf)), [-1.0], rtol=1e-6)
        npt.assert_allclose(derivative(g, 3.0, domain=(-np.inf, np.inf)),
                            [-np.exp(-3.0)], rtol=1e-6)

    def test_custom_step(self):
        g = lambda s: np.array([s ** 3])
        # central difference error for a cubic is h**2 exactly
        npt.assert_allclose(derivative(g, 0.5, step=1e-3), [0.75 + 1e-6], rtol=1e-9)

    def test_default_step_is_cube_root_eps(self):
        assert DEFAULT_RELATIVE_STEP == pytest.approx(np.finfo(float).eps ** (1 / 3))

    def test_outside_domain_raises(self):
        with pytest.raises(ValueError, match="outside"):
            derivative(unit_circle, 1.5, domain=(0.0, 1.0))

    def test_empty_domain_raises(self):
        with pytest.raises(ValueError, match="Empty"):
            derivative(unit_circle, 0.0, domain=(0.0, 0.0))

    def test_nonpositive_step_raises(self):
        with pytest.raises(ValueError, match="step"):
            derivative(unit_circle, 0.5, step=0.0)
