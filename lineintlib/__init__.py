"""
lineintlib: numerical integration over curves, paths, rays, lines and planes.

Submodules
----------
geometry          : integration domains (Segment, Ring, Rope, BezierCurve, ...)
quadrature        : algorithm selectors, support table and quadrature rules
_adapters         : geometry -> Parametrization
_wrappers         : integrand -> parameter-space integrand
_aggregate        : composite path summation
_differentiation  : finite-difference derivative
_quantity         : unit-aware numeric values (pint)
_errors           : exception taxonomy
"""

from lineintlib._errors import (
    LineIntegralError,
    UnsupportedGeometry,
    UnsupportedCombination,
    SignatureMismatch,
    DegenerateGeometry,
    EmptyTrajectory,
)
from lineintlib._quantity import Quantity
from lineintlib._differentiation import derivative
from lineintlib.geometry import (
    Segment,
    Ring,
    Rope,
    BezierCurve,
    ParametricCurve,
    Circle,
    Ray,
    Line,
    Plane,
    SurfacePathSegment,
    SurfaceTrajectory,
)
from lineintlib.quadrature import (
    GaussLegendre,
    GaussKronrod,
    HAdaptiveCubature,
    DEFAULT_ALGORITHM,
)
from lineintlib._integrate import (
    integral,
    line_integral,
    tangential_integral,
    surface_integral,
)

__all__ = [
    'integral', 'line_integral', 'tangential_integral', 'surface_integral',
    'derivative', 'Quantity',
    'Segment', 'Ring', 'Rope', 'BezierCurve', 'ParametricCurve', 'Circle',
    'Ray', 'Line', 'Plane', 'SurfacePathSegment', 'SurfaceTrajectory',
    'GaussLegendre', 'GaussKronrod', 'HAdaptiveCubature', 'DEFAULT_ALGORITHM',
    'LineIntegralError', 'UnsupportedGeometry', 'UnsupportedCombination',
    'SignatureMismatch', 'DegenerateGeometry', 'EmptyTrajectory',
]
