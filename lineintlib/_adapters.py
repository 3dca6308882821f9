"""
Geometry adapters: map a geometry to its parametrization.

Each adapter returns a ``Parametrization`` bundling ``position(t)``, the
derivative ``tangent(t)``, the canonical parameter ``domain`` and the length
unit. ``scale(t)`` is derived from the tangent: the norm of ``r'(t)`` for
curves and the square root of the Gram determinant for planes, so that

    integral over domain of f(position(t)) * scale(t) dt

is the integral of ``f`` over the geometry.

Adding a geometry means registering one adapter here and one row in
``lineintlib.quadrature._support.SUPPORT``.

Usage
-----
    param = parametrize(Segment([0, 0], [3, 4]))
    param.domain      # ((0.0, 1.0),)
    param.scale(0.3)  # 5.0
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

import numpy as np

from lineintlib._differentiation import derivative
from lineintlib._errors import DegenerateGeometry, UnsupportedGeometry
from lineintlib._registry import MethodRegistry

adapters = MethodRegistry("geometry adapter", missing=UnsupportedGeometry)

# Geometries integrated by summing sub-geometries (see _aggregate.py)
COMPOSITE_KINDS = frozenset({"ring", "rope", "trajectory", "collection"})

# Parameter values at which a parametric curve is sampled to detect collapse.
COLLAPSE_SAMPLES = 9

_UNIT_INTERVAL = ((0.0, 1.0),)


@dataclass(frozen=True)
class Parametrization:
    """Canonical parametrization of a geometry.

    Attributes
    ----------
    position : callable
        ``t -> coordinates`` (plain array, no units).
    tangent : callable
        ``t -> dr/dt`` for curves, ``t -> (n, 2) Jacobian`` for planes.
    domain : tuple of (float, float)
        One interval per parameter; bounds may be infinite.
    units : pint.Unit or None
        Length unit of the coordinates.
    """
    position: Callable
    tangent: Callable
    domain: tuple
    units: Optional[Any] = None

    @property
    def paramdim(self) -> int:
        return len(self.domain)

    @property
    def bounded(self) -> bool:
        return all(np.isfinite(lo) and np.isfinite(hi) for lo, hi in self.domain)

    def scale(self, t) -> float:
        """Differential length (or area) element at ``t``; never negative."""
        d = np.asarray(self.tangent(t), dtype=float)
        if self.paramdim == 1:
            return float(np.linalg.norm(d))
        return float(np.sqrt(abs(np.linalg.det(d.T @ d))))


def geometry_kind(geometry) -> str:
    """Registry key of ``geometry``; lists and tuples are collections."""
    if isinstance(geometry, (list, tuple)):
        return "collection"
    kind = getattr(geometry, "kind", None)
    if kind is None or (kind not in adapters and kind not in COMPOSITE_KINDS):
        raise UnsupportedGeometry(
            f"No integration adapter for {type(geometry).__name__}. "
            f"Available: {adapters.available() + sorted(COMPOSITE_KINDS)}"
        )
    return kind


def parametrize(geometry) -> Parametrization:
    """Return the ``Parametrization`` of a single (non-composite) geometry."""
    kind = geometry_kind(geometry)
    if kind in COMPOSITE_KINDS:
        raise UnsupportedGeometry(
            f"{type(geometry).__name__} is composite; integrate its sub-segments"
        )
    return adapters[kind](geometry)


# ---------------------------------------------------------------------------
# Adapters
# ---------------------------------------------------------------------------

def _straight(a, b, units, domain):
    delta = b - a
    if not np.any(delta):
        raise DegenerateGeometry(f"Geometry collapses to the point {a.tolist()}")
    return Parametrization(
        position=lambda t: a + t * delta,
        tangent=lambda t: delta,
        domain=domain,
        units=units,
    )


@adapters.register("segment")
def _segment(segment) -> Parametrization:
    return _straight(segment.a, segment.b, segment.units, _UNIT_INTERVAL)


adapters.register("path_segment", _segment)


@adapters.register("line")
def _line(line) -> Parametrization:
    return _straight(line.a, line.b, line.units, ((-np.inf, np.inf),))


@adapters.register("ray")
def _ray(ray) -> Parametrization:
    if not np.any(ray.direction):
        raise DegenerateGeometry("Ray direction is the zero vector")
    origin, direction = ray.origin, ray.direction
    return Parametrization(
        position=lambda t: origin + t * direction,
        tangent=lambda t: direction,
        domain=((0.0, np.inf),),
        units=ray.units,
    )


@adapters.register("plane")
def _plane(plane) -> Parametrization:
    jacobian = np.column_stack([plane.u, plane.v])
    if np.linalg.matrix_rank(jacobian) < 2:
        raise DegenerateGeometry("Plane direction vectors are linearly dependent")
    origin = plane.origin
    return Parametrization(
        position=lambda st: origin + jacobian @ np.asarray(st, dtype=float),
        tangent=lambda st: jacobian,
        domain=((-np.inf, np.inf), (-np.inf, np.inf)),
        units=plane.units,
    )


@adapters.register("circle")
def _circle(circle) -> Parametrization:
    if circle.radius == 0:
        raise DegenerateGeometry("Circle has zero radius")
    return Parametrization(
        position=circle.evaluate,
        tangent=circle.evaluate_derivative,
        domain=_UNIT_INTERVAL,
        units=circle.units,
    )


@adapters.register("bezier_curve")
def _bezier_curve(curve) -> Parametrization:
    if np.ptp(curve.vertices, axis=0).max() == 0:
        raise DegenerateGeometry("All Bezier control points coincide")
    domain = (0.0, 1.0)
    return Parametrization(
        position=curve.evaluate,
        tangent=lambda t: derivative(curve.evaluate, t, domain=domain),
        domain=(domain,),
        units=curve.units,
    )


@adapters.register("parametric_curve")
def _parametric_curve(curve) -> Parametrization:
    ts = np.linspace(*curve.domain, COLLAPSE_SAMPLES)
    samples = np.array([curve.evaluate(t) for t in ts])
    if np.ptp(samples, axis=0).max() == 0:
        raise DegenerateGeometry(
            f"Parametric curve collapses to a point over {curve.domain}"
        )
    if curve.derivative is not None:
        tangent = curve.evaluate_derivative
    else:
        def tangent(t):
            return derivative(curve.evaluate, t, domain=curve.domain)
    return Parametrization(
        position=curve.evaluate,
        tangent=tangent,
        domain=(curve.domain,),
        units=curve.units,
    )
