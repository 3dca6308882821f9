"""
Integration domains.

Submodules
----------
_primitives : Segment, Ring, Rope, Ray, Line, Plane and coordinate helpers
_curves     : BezierCurve, ParametricCurve, Circle
_trajectory : SurfacePathSegment, SurfaceTrajectory
"""

from lineintlib.geometry._primitives import (
    Geometry,
    Segment,
    Ring,
    Rope,
    Ray,
    Line,
    Plane,
    as_coordinates,
    as_point_array,
)
from lineintlib.geometry._curves import BezierCurve, ParametricCurve, Circle
from lineintlib.geometry._trajectory import SurfacePathSegment, SurfaceTrajectory

__all__ = [
    'Geometry',
    'Segment', 'Ring', 'Rope',
    'Ray', 'Line', 'Plane',
    'BezierCurve', 'ParametricCurve', 'Circle',
    'SurfacePathSegment', 'SurfaceTrajectory',
    'as_coordinates', 'as_point_array',
]
