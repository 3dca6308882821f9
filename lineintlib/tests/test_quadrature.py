"""Tests for lineintlib.quadrature and lineintlib._registry."""

import numpy as np
import numpy.testing as npt
import pytest

from lineintlib._errors import UnsupportedCombination, UnsupportedGeometry
from lineintlib._registry import MethodRegistry
from lineintlib.quadrature import (
    DEFAULT_ALGORITHM,
    DEFAULT_ORDER,
    SUPPORT,
    GaussKronrod,
    GaussLegendre,
    HAdaptiveCubature,
    check_support,
    resolve_algorithm,
    rules,
    run,
    supported_algorithms,
)
from lineintlib.quadrature._rules import gauss_kronrod, gauss_legendre, h_adaptive_cubature


# Registry tests

class TestMethodRegistry:
    def test_register_and_retrieve(self):
        reg = MethodRegistry("test")
        reg.register("foo", lambda x: x + 1)
        assert reg["foo"](5) == 6

    def test_register_as_decorator(self):
        reg = MethodRegistry("test")

        @reg.register("bar")
        def bar(x):
            return 2 * x

        assert reg["bar"] is bar

    def test_unknown_key_raises(self):
        reg = MethodRegistry("test")
        with pytest.raises(KeyError, match="Unknown test"):
            reg["nonexistent"]

    def test_custom_missing_error(self):
        reg = MethodRegistry("geometry adapter", missing=UnsupportedGeometry)
        with pytest.raises(UnsupportedGeometry, match="Unknown geometry adapter"):
            reg["torus"]

    def test_available_and_contains(self):
        reg = MethodRegistry("test")
        reg.register("a", lambda: None)
        reg.register("b", lambda: None)
        assert set(reg.available()) == {"a", "b"}
        assert "a" in reg
        assert "c" not in reg


# Algorithm selectors

class TestAlgorithms:
    def test_defaults(self):
        assert DEFAULT_ALGORITHM == GaussLegendre(DEFAULT_ORDER)
        assert DEFAULT_ORDER == 100
        assert not GaussLegendre.adaptive
        assert GaussKronrod.adaptive and HAdaptiveCubature.adaptive

    def test_resolve(self):
        assert resolve_algorithm(None) is DEFAULT_ALGORITHM
        assert resolve_algorithm(GaussKronrod) == GaussKronrod()
        algorithm = HAdaptiveCubature(rtol=1e-4)
        assert resolve_algorithm(algorithm) is algorithm

    @pytest.mark.parametrize("factory", [
        lambda: GaussLegendre(0),
        lambda: GaussLegendre(2.5),
        lambda: GaussLegendre(True),
        lambda: GaussKronrod(rtol=0.0),
        lambda: GaussKronrod(atol=-1.0),
        lambda: HAdaptiveCubature(max_subdivisions=0),
    ])
    def test_invalid_configuration(self, factory):
        with pytest.raises(ValueError):
            factory()

    def test_frozen(self):
        with pytest.raises(AttributeError):
            GaussLegendre().order = 3


# Support table

class TestSupport:
    def test_bounded_curves_accept_everything(self):
        for kind in ("segment", "ring", "rope", "bezier_curve", "circle"):
            assert supported_algorithms(kind, "scalar") == {
                "gauss_legendre", "gauss_kronrod", "h_adaptive_cubature"}

    def test_unbounded_reject_fixed_order(self):
        for kind in ("ray", "line"):
            assert "gauss_legendre" not in supported_algorithms(kind, "scalar")
            with pytest.raises(UnsupportedCombination, match=kind):
                check_support(kind, "scalar", GaussLegendre())
            check_support(kind, "scalar", GaussKronrod())

    def test_plane_only_cubature(self):
        check_support("plane", "surface", HAdaptiveCubature())
        for algorithm in (GaussLegendre(), GaussKronrod()):
            with pytest.raises(UnsupportedCombination):
                check_support("plane", "surface", algorithm)
        with pytest.raises(UnsupportedCombination):
            check_support("plane", "scalar", HAdaptiveCubature())

    def test_surface_kind_only_for_planes(self):
        surface_rows = [key for key in SUPPORT if key[1] == "surface"]
        assert surface_rows == [("plane", "surface")]

    def test_unknown_algorithm(self):
        with pytest.raises(UnsupportedCombination):
            check_support("segment", "scalar", object())


# Rules

class TestGaussLegendre:
    def test_polynomial_exact(self):
        h = lambda t: np.array([t ** 5 - t])
        result = gauss_legendre(h, ((0.0, 2.0),), GaussLegendre(3))
        npt.assert_allclose(result.estimate, [64.0 / 6.0 - 2.0])
        assert result.error is None

    def test_vector_output(self):
        h = lambda t: np.array([1.0, t, np.cos(t)])
        result = gauss_legendre(h, ((0.0, np.pi),), GaussLegendre(20))
        npt.assert_allclose(result.estimate, [np.pi, np.pi ** 2 / 2, 0.0], atol=1e-12)

    def test_evaluation_count_equals_order(self):
        calls = []
        gauss_legendre(lambda t: calls.append(t) or np.array([1.0]), ((0.0, 1.0),),
                       GaussLegendre(7))
        assert len(calls) == 7
        assert all(0.0 < t < 1.0 for t in calls)

    def test_unbounded_rejected(self):
        with pytest.raises(UnsupportedCombination, match="bounded"):
            gauss_legendre(lambda t: np.array([1.0]), ((0.0, np.inf),), GaussLegendre())

    def test_two_parameters_rejected(self):
        with pytest.raises(UnsupportedCombination, match="one parameter"):
            gauss_legendre(lambda t: np.array([1.0]), ((0.0, 1.0), (0.0, 1.0)),
                           GaussLegendre())


class TestGaussKronrod:
    def test_half_gaussian(self):
        h = lambda t: np.array([np.exp(-t ** 2)])
        result = gauss_kronrod(h, ((0.0, np.inf),), GaussKronrod())
        npt.assert_allclose(result.estimate, [np.sqrt(np.pi) / 2], rtol=1e-8)
        assert 0.0 <= result.error < 1e-6

    def test_vector_output(self):
        h = lambda t: np.array([np.sin(t), np.cos(t)])
        result = gauss_kronrod(h, ((0.0, np.pi / 2),), GaussKronrod())
        npt.assert_allclose(result.estimate, [1.0, 1.0], rtol=1e-8)


class TestHAdaptiveCubature:
    def test_one_parameter(self):
        h = lambda t: np.array([3 * t ** 2])
        result = h_adaptive_cubature(h, ((0.0, 1.0),), HAdaptiveCubature())
        npt.assert_allclose(result.estimate, [1.0], rtol=1e-8)
        assert result.error >= 0.0

    def test_gaussian_over_the_plane(self):
        h = lambda st: np.array([np.exp(-(st[0] ** 2 + st[1] ** 2))])
        domain = ((-np.inf, np.inf), (-np.inf, np.inf))
        result = h_adaptive_cubature(h, domain, HAdaptiveCubature(rtol=1e-6))
        npt.assert_allclose(result.estimate, [np.pi], rtol=1e-5)


class TestRun:
    def test_dispatches_by_name(self):
        result = run(lambda t: np.array([2.0]), ((0.0, 3.0),), GaussLegendre(2))
        npt.assert_allclose(result.estimate, [6.0])

    def test_unknown_algorithm(self):
        class Simpson:
            name = "simpson"

        with pytest.raises(UnsupportedCombination, match="simpson"):
            run(lambda t: np.array([1.0]), ((0.0, 1.0),), Simpson())

    def test_registered_rules(self):
        assert set(rules.available()) == {
            "gauss_legendre", "gauss_kronrod", "h_adaptive_cubature"}
