"""
Composite trajectory aggregation.

Rings, ropes, surface trajectories and plain lists of geometries are split
into independent pieces, every piece is integrated on its own through the
adapter, wrapper and dispatcher, and the results are summed. Orientation
follows point order; a ring contributes its closing segment.

Zero-length sub-segments (a point repeated consecutively) contribute
nothing and are dropped. Self-intersecting paths are summed piece by piece
without special treatment.
"""

import logging
from functools import reduce
from operator import add
from typing import NamedTuple, Optional

from lineintlib._adapters import COMPOSITE_KINDS, geometry_kind
from lineintlib._errors import DegenerateGeometry, EmptyTrajectory
from lineintlib._quantity import Quantity
from lineintlib._wrappers import EffectiveIntegrand
from lineintlib.geometry._primitives import Segment
from lineintlib.quadrature._rules import run

logger = logging.getLogger(__name__)


class Partial(NamedTuple):
    """Integral over one piece, with the adaptive error bound if any."""
    estimate: Quantity
    error: Optional[Quantity] = None


def _members(geometry, kind):
    if kind in ("ring", "rope"):
        if len(geometry.vertices) < 2:
            raise EmptyTrajectory(
                f"{type(geometry).__name__} needs at least two points, "
                f"got {len(geometry.vertices)}"
            )
        return geometry.segments()
    if kind == "trajectory":
        if len(geometry) == 0:
            raise EmptyTrajectory("SurfaceTrajectory has no segments")
        return geometry.segments()
    if len(geometry) == 0:
        raise EmptyTrajectory("Cannot integrate over an empty collection")
    return list(geometry)


def decompose(geometry) -> list:
    """Flatten ``geometry`` into non-composite pieces in traversal order.

    Raises
    ------
    EmptyTrajectory
        Fewer than two points, or an empty collection or trajectory.
    DegenerateGeometry
        Every piece has zero length.
    """
    kind = geometry_kind(geometry)
    if kind not in COMPOSITE_KINDS:
        return [geometry]

    pieces = []
    for i, member in enumerate(_members(geometry, kind)):
        if isinstance(member, Segment) and member.length == 0:
            logger.debug("Skipping zero-length sub-segment %d of %s", i, kind)
            continue
        pieces.extend(decompose(member))
    if not pieces:
        raise DegenerateGeometry(f"Every sub-segment of the {kind} has zero length")
    return pieces


def integrate_piece(f, parametrization, algorithm, kind: str) -> Partial:
    """Integrate ``f`` over one parametrized piece."""
    h = EffectiveIntegrand(f, parametrization, kind)
    result = run(h, parametrization.domain, algorithm)
    estimate = h.restore(result.estimate)
    if result.error is None:
        return Partial(estimate)
    return Partial(estimate, Quantity(result.error, h.result_units))


def aggregate(partials) -> Partial:
    """Sum piece integrals; error bounds add as well."""
    partials = list(partials)
    estimate = reduce(add, (p.estimate for p in partials))
    if partials[0].error is None:
        return Partial(estimate)
    return Partial(estimate, reduce(add, (p.error for p in partials)))


def integrate_pieces(f, parametrizations, algorithm, kind: str) -> Partial:
    """Integrate every piece independently and return the sum."""
    logger.debug("Integrating %d piece(s) with %s", len(parametrizations), algorithm)
    return aggregate(integrate_piece(f, p, algorithm, kind) for p in parametrizations)
