"""
Public integration entry points.

Usage
-----
    from lineintlib import integral, Segment, GaussKronrod

    seg = Segment([1.0, 0.0, 0.0], [0.0, 1.0, 0.0])
    integral(lambda p: 1.0, seg)                      # sqrt(2)
    value, err = integral(lambda p: 1.0, seg, GaussKronrod())

Every call validates, in order, the geometry kind, the support table, the
integrand signature and the geometry's degeneracy before the integrand is
evaluated for the first time. Nothing is cached between calls.
"""

import logging

from lineintlib._adapters import geometry_kind, parametrize
from lineintlib._aggregate import decompose, integrate_pieces
from lineintlib._errors import UnsupportedCombination
from lineintlib._wrappers import INTEGRAL_KINDS, check_signature
from lineintlib.quadrature._algorithms import resolve_algorithm
from lineintlib.quadrature._support import check_support

logger = logging.getLogger(__name__)


def integral(f, geometry, algorithm=None, kind: str = "scalar"):
    """Integrate ``f`` over ``geometry``.

    Parameters
    ----------
    f : callable
        ``f(point)`` returning a real or complex scalar or vector, or a
        ``pint`` quantity of either. For ``kind="tangential"`` it must return
        a vector of the ambient dimension.
    geometry : Geometry or list of Geometry
        Integration domain. Lists and tuples are integrated member by member.
    algorithm : GaussLegendre, GaussKronrod, HAdaptiveCubature or None
        Quadrature selector (or selector class). Defaults to
        ``GaussLegendre(100)``.
    kind : str
        ``"scalar"`` (with respect to arc length), ``"tangential"``
        (F . dr, sign follows orientation) or ``"surface"`` (planes).

    Returns
    -------
    value
        For fixed-order algorithms.
    (value, error_bound)
        For adaptive algorithms. The error bound is the max-norm bound,
        summed over the pieces of composite geometries.

    Raises
    ------
    UnsupportedGeometry, UnsupportedCombination, SignatureMismatch,
    DegenerateGeometry, EmptyTrajectory
    """
    if kind not in INTEGRAL_KINDS:
        raise ValueError(f"Unknown integral kind {kind!r}; expected one of {INTEGRAL_KINDS}")
    algorithm = resolve_algorithm(algorithm)

    top_kind = geometry_kind(geometry)
    if top_kind != "collection":
        check_support(top_kind, kind, algorithm)
    pieces = decompose(geometry)
    for piece in pieces:
        check_support(geometry_kind(piece), kind, algorithm)

    check_signature(f)

    parametrizations = [parametrize(piece) for piece in pieces]
    logger.debug("Computing %s integral over %s (%d piece(s)) with %s",
                 kind, top_kind, len(pieces), algorithm)
    result = integrate_pieces(f, parametrizations, algorithm, kind)

    if algorithm.adaptive:
        return result.estimate.to_value(), result.error.to_value()
    return result.estimate.to_value()


def line_integral(f, geometry, algorithm=None):
    """Scalar line integral of ``f`` with respect to arc length.

    Only one-parameter geometries are accepted.
    """
    if getattr(geometry, "paramdim", 1) != 1:
        raise UnsupportedCombination(
            f"line_integral needs a curve, got {type(geometry).__name__}"
        )
    return integral(f, geometry, algorithm, kind="scalar")


def tangential_integral(F, geometry, algorithm=None):
    """Directional line integral of the vector field ``F`` along ``geometry``.

    Reversing the orientation of the geometry flips the sign of the result.
    """
    return integral(F, geometry, algorithm, kind="tangential")


def surface_integral(f, geometry, algorithm=None):
    """Integral of ``f`` with respect to area over a plane."""
    return integral(f, geometry, algorithm, kind="surface")
