"""
Straight geometries: segments, polygonal chains, rays, lines and planes.

Coordinates are stored as read-only float arrays. Points given as ``pint``
quantities are converted to the unit of the first point, and that unit is
kept in ``Geometry.units``; calling a geometry reattaches it.

Usage
-----
    seg = Segment([1.0, 0.0, 0.0], [0.0, 1.0, 0.0])
    seg.measure()          # sqrt(2)
    seg(0.5)               # array([0.5, 0.5, 0. ])

    ring = Ring([1, 0], [0, 1], [-1, 0], [0, -1])
    [s.measure() for s in ring.segments()]
"""

import numpy as np

from lineintlib._quantity import strip_units


# ---------------------------------------------------------------------------
# Coordinate helpers
# ---------------------------------------------------------------------------

def as_coordinates(point, units=None):
    """Return ``(coords, units)`` for a single point or vector.

    Parameters
    ----------
    point : array_like or pint.Quantity
        One point (1-D).
    units : pint.Unit or None
        Unit the point must be expressed in. A plain point is rejected when
        ``units`` is given.
    """
    coords, units = strip_units(point, units)
    coords = np.array(coords, dtype=float)
    if coords.ndim != 1 or coords.size == 0:
        raise ValueError(f"A point must be a non-empty 1-D sequence, got shape {coords.shape}")
    if not np.all(np.isfinite(coords)):
        raise ValueError(f"Point coordinates must be finite, got {coords}")
    coords.setflags(write=False)
    return coords, units


def as_point_array(points):
    """Return ``(array of shape (k, n), units)`` for a sequence of points.

    Every point is converted to the unit of the first one; mixing plain and
    unit-carrying points raises ValueError.
    """
    if len(points) == 0:
        return np.empty((0, 0)), None
    first, units = as_coordinates(points[0])
    rows = [first]
    for p in points[1:]:
        coords, _ = as_coordinates(p, units)
        if coords.shape != first.shape:
            raise ValueError(
                f"All points must share one dimension, got {first.size} and {coords.size}"
            )
        rows.append(coords)
    array = np.vstack(rows)
    array.setflags(write=False)
    return array, units


def _unpack_points(points):
    """Accept ``Ring(p1, p2, ...)`` as well as ``Ring([p1, p2, ...])``."""
    if len(points) == 1:
        magnitude = strip_units(points[0])[0]
        if magnitude.ndim == 2:
            return list(points[0])
    return list(points)


# ---------------------------------------------------------------------------
# Base class
# ---------------------------------------------------------------------------

class Geometry:
    """Base class for integration domains.

    Subclasses set ``kind``, the key under which their adapter and their
    support-table rows are registered, and ``paramdim``.
    """
    kind = None
    paramdim = 1

    units = None

    @property
    def embedding_dim(self) -> int:
        raise NotImplementedError

    def measure(self):
        """Closed-form reference measure, or None when there is none."""
        return None

    def _with_units(self, value):
        if self.units is None:
            return value
        return value * self.units

    def _measure_with_units(self, value):
        if self.units is None:
            return value
        return value * self.units ** self.paramdim


# ---------------------------------------------------------------------------
# Segments and chains
# ---------------------------------------------------------------------------

class Segment(Geometry):
    """Oriented straight segment from ``a`` to ``b``.

    Parameters
    ----------
    a, b : array_like or pint.Quantity
        End points of equal dimension.
    """
    kind = "segment"

    def __init__(self, a, b):
        self.vertices, self.units = as_point_array([a, b])

    @property
    def a(self):
        return self.vertices[0]

    @property
    def b(self):
        return self.vertices[1]

    @property
    def embedding_dim(self) -> int:
        return self.vertices.shape[1]

    @property
    def length(self) -> float:
        """Euclidean length in the geometry's unit (plain float)."""
        return float(np.linalg.norm(self.b - self.a))

    def reverse(self):
        """Same segment with opposite orientation."""
        return type(self)(self._with_units(self.b), self._with_units(self.a))

    def measure(self):
        return self._measure_with_units(self.length)

    def __call__(self, t):
        if not 0.0 <= t <= 1.0:
            raise ValueError(f"t={t} lies outside [0, 1]")
        return self._with_units(self.a + t * (self.b - self.a))

    def __repr__(self):
        return f"{type(self).__name__}({self.a.tolist()}, {self.b.tolist()})"


class _Chain(Geometry):
    """Polygonal chain through an ordered point sequence."""
    closed = False

    def __init__(self, *points):
        self.vertices, self.units = as_point_array(_unpack_points(points))

    @property
    def embedding_dim(self) -> int:
        return self.vertices.shape[1]

    def __len__(self):
        return len(self.vertices)

    def segments(self) -> list:
        """Consecutive sub-segments following point order.

        A closed chain also returns the segment from the last point back
        to the first.
        """
        points = [self._with_units(p) for p in self.vertices]
        if self.closed and len(points) > 1:
            points.append(points[0])
        return [Segment(p, q) for p, q in zip(points[:-1], points[1:])]

    def reverse(self):
        return type(self)([self._with_units(p) for p in self.vertices[::-1]])

    def measure(self):
        total = sum(s.length for s in self.segments())
        return self._measure_with_units(float(total))

    def __repr__(self):
        return f"{type(self).__name__}({self.vertices.tolist()})"


class Ring(_Chain):
    """Closed polygonal chain; the last point is joined back to the first."""
    kind = "ring"
    closed = True


class Rope(_Chain):
    """Open polygonal chain."""
    kind = "rope"
    closed = False


# ---------------------------------------------------------------------------
# Unbounded geometries
# ---------------------------------------------------------------------------

class Ray(Geometry):
    """Half-line ``origin + t * direction`` for ``t >= 0``."""
    kind = "ray"

    def __init__(self, origin, direction):
        self.origin, self.units = as_coordinates(origin)
        self.direction, _ = as_coordinates(direction, self.units)
        if self.direction.shape != self.origin.shape:
            raise ValueError("origin and direction must share one dimension")

    @property
    def embedding_dim(self) -> int:
        return self.origin.size

    def measure(self):
        return self._measure_with_units(np.inf)

    def __call__(self, t):
        if t < 0:
            raise ValueError(f"t={t} lies outside [0, inf)")
        return self._with_units(self.origin + t * self.direction)


class Line(Geometry):
    """Infinite line through ``a`` and ``b``, oriented from ``a`` to ``b``."""
    kind = "line"

    def __init__(self, a, b):
        self.vertices, self.units = as_point_array([a, b])

    @property
    def a(self):
        return self.vertices[0]

    @property
    def b(self):
        return self.vertices[1]

    @property
    def embedding_dim(self) -> int:
        return self.vertices.shape[1]

    def measure(self):
        return self._measure_with_units(np.inf)

    def __call__(self, t):
        return self._with_units(self.a + t * (self.b - self.a))


class Plane(Geometry):
    """Plane ``origin + s * u + t * v`` spanned by two direction vectors."""
    kind = "plane"
    paramdim = 2

    def __init__(self, origin, u, v):
        self.origin, self.units = as_coordinates(origin)
        self.u, _ = as_coordinates(u, self.units)
        self.v, _ = as_coordinates(v, self.units)
        if not self.origin.shape == self.u.shape == self.v.shape:
            raise ValueError("origin, u and v must share one dimension")
        if self.origin.size < 2:
            raise ValueError("A plane needs an ambient dimension of at least 2")

    @property
    def embedding_dim(self) -> int:
        return self.origin.size

    def measure(self):
        return self._measure_with_units(np.inf)

    def __call__(self, s, t):
        return self._with_units(self.origin + s * self.u + t * self.v)
