"""
Composite paths made of oriented segments.

A ``SurfaceTrajectory`` is an ordered list of ``SurfacePathSegment`` objects
in which each segment starts where the previous one stopped. Point order
defines orientation and therefore the sign of tangential (vector-field)
line integrals.

Usage
-----
    traj = SurfaceTrajectory.from_points(
        [[1, 0, 0], [0, 1, 0], [-1, 0, 0], [0, -1, 0]], closed=True)
    len(traj.segments())    # 4, including the closing segment
"""

import numpy as np

from lineintlib.geometry._primitives import Geometry, Segment, as_point_array

# Relative tolerance for shared endpoints between consecutive segments
JOIN_RTOL = 1e-9


def _joined(prev, seg) -> bool:
    """Whether ``seg`` starts where ``prev`` stops, up to ``JOIN_RTOL``."""
    scale = max(prev.length, seg.length, 1.0)
    return np.linalg.norm(seg.start - prev.stop) <= JOIN_RTOL * scale


class SurfacePathSegment(Segment):
    """One oriented sub-segment of a trajectory, from ``start`` to ``stop``."""
    kind = "path_segment"

    @property
    def start(self):
        return self.a

    @property
    def stop(self):
        return self.b


class SurfaceTrajectory(Geometry):
    """Ordered, possibly closed sequence of path segments.

    Parameters
    ----------
    segments : sequence of Segment
        Consecutive segments sharing endpoints. Plain ``Segment`` objects
        are converted to ``SurfacePathSegment``.
    closed : bool
        If True and the last segment does not end at the first start, the
        closing segment is added implicitly.
    """
    kind = "trajectory"

    def __init__(self, segments, closed: bool = False):
        segments = [
            s if isinstance(s, SurfacePathSegment)
            else SurfacePathSegment(s._with_units(s.a), s._with_units(s.b))
            for s in segments
        ]
        self.closed = bool(closed)
        self.units = segments[0].units if segments else None
        for prev, seg in zip(segments[:-1], segments[1:]):
            if seg.units != self.units:
                raise ValueError("All trajectory segments must share one unit")
            if seg.embedding_dim != prev.embedding_dim:
                raise ValueError("All trajectory segments must share one dimension")
            if not _joined(prev, seg):
                raise ValueError(
                    f"Discontinuous trajectory: segment ends at {prev.stop.tolist()} "
                    f"but the next starts at {seg.start.tolist()}"
                )
        self._segments = tuple(segments)

    @classmethod
    def from_points(cls, points, closed: bool = False) -> "SurfaceTrajectory":
        """Build a trajectory through consecutive points."""
        array, units = as_point_array(list(points))
        pts = [p if units is None else p * units for p in array]
        segments = [SurfacePathSegment(p, q) for p, q in zip(pts[:-1], pts[1:])]
        return cls(segments, closed=closed)

    @property
    def embedding_dim(self) -> int:
        return self._segments[0].embedding_dim

    @property
    def points(self) -> np.ndarray:
        """Start of every segment followed by the stop of the last one."""
        if not self._segments:
            return np.empty((0, 0))
        return np.vstack([s.start for s in self._segments] + [self._segments[-1].stop])

    def __len__(self):
        return len(self._segments)

    def segments(self) -> list:
        """Member segments in order, plus the closing segment when closed."""
        segments = list(self._segments)
        if self.closed and segments:
            first, last = segments[0], segments[-1]
            if not _joined(last, first):
                segments.append(SurfacePathSegment(
                    last._with_units(last.stop), first._with_units(first.start)))
        return segments

    def reverse(self) -> "SurfaceTrajectory":
        """Same path traversed in the opposite direction."""
        return type(self)([s.reverse() for s in reversed(self._segments)],
                          closed=self.closed)

    def measure(self):
        total = float(sum(s.length for s in self.segments()))
        return self._measure_with_units(total)
