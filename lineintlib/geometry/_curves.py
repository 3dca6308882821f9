"""
Curved one-parameter geometries.

``BezierCurve`` has no closed-form derivative in this package and is
differentiated numerically; ``Circle`` and ``ParametricCurve`` (when given a
``derivative``) supply theirs.
"""

import numpy as np
from scipy.stats import binom

from lineintlib.geometry._primitives import (
    Geometry,
    _unpack_points,
    as_coordinates,
    as_point_array,
)
from lineintlib._quantity import strip_units


class BezierCurve(Geometry):
    """Bezier curve of degree ``len(control_points) - 1`` on ``t in [0, 1]``.

    Points are evaluated in the Bernstein basis, using the binomial
    probability mass function for the basis weights so that high degrees
    (hundreds of control points) stay numerically stable.

    Parameters
    ----------
    control_points : sequence of array_like or pint.Quantity
        At least two control points of equal dimension.
    """
    kind = "bezier_curve"

    def __init__(self, *control_points):
        self.vertices, self.units = as_point_array(_unpack_points(control_points))
        if len(self.vertices) < 2:
            raise ValueError("A Bezier curve needs at least two control points")

    @property
    def degree(self) -> int:
        return len(self.vertices) - 1

    @property
    def embedding_dim(self) -> int:
        return self.vertices.shape[1]

    def evaluate(self, t) -> np.ndarray:
        """Coordinates (without units) at parameter ``t``."""
        n = self.degree
        weights = binom.pmf(np.arange(n + 1), n, t)
        return weights @ self.vertices

    def __call__(self, t):
        if not 0.0 <= t <= 1.0:
            raise ValueError(f"t={t} lies outside [0, 1]")
        return self._with_units(self.evaluate(t))

    def __repr__(self):
        return f"BezierCurve(degree={self.degree}, dim={self.embedding_dim})"


class ParametricCurve(Geometry):
    """Curve given by a user function ``func(t)`` on a finite interval.

    Parameters
    ----------
    func : callable
        ``func(t) -> point``; may return ``pint`` quantities.
    domain : tuple of float
        Finite parameter interval ``(lo, hi)``.
    derivative : callable or None
        Closed-form ``d func / dt``. When None the derivative is estimated
        numerically.
    units : pint.Unit or None
        Length unit of the curve. Inferred from ``func(lo)`` when None.

    Examples
    --------
    >>> helix = ParametricCurve(
    ...     lambda t: np.array([np.cos(t), np.sin(t), t]),
    ...     domain=(0.0, 4 * np.pi),
    ...     derivative=lambda t: np.array([-np.sin(t), np.cos(t), 1.0]))
    """
    kind = "parametric_curve"

    def __init__(self, func, domain=(0.0, 1.0), derivative=None, units=None):
        lo, hi = float(domain[0]), float(domain[1])
        if not (np.isfinite(lo) and np.isfinite(hi)):
            raise ValueError(f"ParametricCurve needs a finite domain, got {domain}")
        if not hi > lo:
            raise ValueError(f"ParametricCurve domain must satisfy lo < hi, got {domain}")
        self.func = func
        self.domain = (lo, hi)
        self.derivative = derivative
        start, self.units = as_coordinates(func(lo), units)
        self._dim = start.size

    @property
    def embedding_dim(self) -> int:
        return self._dim

    def evaluate(self, t) -> np.ndarray:
        """Coordinates (without units) at parameter ``t``."""
        coords, _ = strip_units(self.func(t), self.units)
        return np.asarray(coords, dtype=float)

    def evaluate_derivative(self, t) -> np.ndarray:
        coords, _ = strip_units(self.derivative(t), self.units)
        return np.asarray(coords, dtype=float)

    def __call__(self, t):
        return self._with_units(self.evaluate(t))


class Circle(Geometry):
    """Circle of ``radius`` around ``center`` in the plane spanned by ``u, v``.

    The circle is traversed once, counter-clockwise from ``u`` towards ``v``,
    as ``t`` runs over ``[0, 1]``. ``u`` and ``v`` default to the first two
    coordinate axes and are orthonormalised.
    """
    kind = "circle"

    def __init__(self, center, radius, u=None, v=None):
        self.center, self.units = as_coordinates(center)
        dim = self.center.size
        if dim < 2:
            raise ValueError("A circle needs an ambient dimension of at least 2")
        radius, radius_units = strip_units(radius, self.units)
        if self.units is None and radius_units is not None:
            raise ValueError("radius carries units but center does not")
        self.radius = float(radius)
        if self.radius < 0 or not np.isfinite(self.radius):
            raise ValueError(f"radius must be finite and non-negative, got {self.radius}")

        u = np.eye(dim)[0] if u is None else np.asarray(u, dtype=float)
        v = np.eye(dim)[1] if v is None else np.asarray(v, dtype=float)
        if u.shape != self.center.shape or v.shape != self.center.shape:
            raise ValueError("u and v must match the dimension of center")
        u = u / np.linalg.norm(u)
        v = v - (v @ u) * u
        norm_v = np.linalg.norm(v)
        if norm_v < 1e-12:
            raise ValueError("u and v must be linearly independent")
        self.u = u
        self.v = v / norm_v

    @property
    def embedding_dim(self) -> int:
        return self.center.size

    def evaluate(self, t) -> np.ndarray:
        angle = 2 * np.pi * t
        return self.center + self.radius * (np.cos(angle) * self.u + np.sin(angle) * self.v)

    def evaluate_derivative(self, t) -> np.ndarray:
        angle = 2 * np.pi * t
        return 2 * np.pi * self.radius * (-np.sin(angle) * self.u + np.cos(angle) * self.v)

    def measure(self):
        return self._measure_with_units(2 * np.pi * self.radius)

    def __call__(self, t):
        if not 0.0 <= t <= 1.0:
            raise ValueError(f"t={t} lies outside [0, 1]")
        return self._with_units(self.evaluate(t))
