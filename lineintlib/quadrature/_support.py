"""
Support table: which algorithms may integrate which geometry and integral kind.

Bounded one-parameter domains accept every algorithm. Rays and lines have
unbounded parameter domains, which a fixed-order Gauss-Legendre rule cannot
cover, so only the adaptive rules apply. Planes have two parameters and are
integrated by h-adaptive cubature only. Any combination missing from the
table is rejected, never approximated.
"""

from lineintlib._errors import UnsupportedCombination

_ALL = frozenset({"gauss_legendre", "gauss_kronrod", "h_adaptive_cubature"})
_ADAPTIVE = frozenset({"gauss_kronrod", "h_adaptive_cubature"})
_CUBATURE = frozenset({"h_adaptive_cubature"})

# (geometry kind, integral kind) -> algorithm names
SUPPORT = {
    ("segment", "scalar"): _ALL,
    ("segment", "tangential"): _ALL,
    ("path_segment", "scalar"): _ALL,
    ("path_segment", "tangential"): _ALL,
    ("ring", "scalar"): _ALL,
    ("ring", "tangential"): _ALL,
    ("rope", "scalar"): _ALL,
    ("rope", "tangential"): _ALL,
    ("trajectory", "scalar"): _ALL,
    ("trajectory", "tangential"): _ALL,
    ("bezier_curve", "scalar"): _ALL,
    ("bezier_curve", "tangential"): _ALL,
    ("parametric_curve", "scalar"): _ALL,
    ("parametric_curve", "tangential"): _ALL,
    ("circle", "scalar"): _ALL,
    ("circle", "tangential"): _ALL,
    ("ray", "scalar"): _ADAPTIVE,
    ("ray", "tangential"): _ADAPTIVE,
    ("line", "scalar"): _ADAPTIVE,
    ("line", "tangential"): _ADAPTIVE,
    ("plane", "surface"): _CUBATURE,
}


def supported_algorithms(geometry_kind: str, integral_kind: str) -> frozenset:
    """Algorithm names valid for the pair (empty if none)."""
    return SUPPORT.get((geometry_kind, integral_kind), frozenset())


def check_support(geometry_kind: str, integral_kind: str, algorithm) -> None:
    """Raise ``UnsupportedCombination`` unless the triple is in the table."""
    name = getattr(algorithm, "name", None)
    allowed = supported_algorithms(geometry_kind, integral_kind)
    if name not in allowed:
        raise UnsupportedCombination(
            f"Cannot compute a {integral_kind} integral over a {geometry_kind} "
            f"with {algorithm!r}. Supported: {sorted(allowed) or 'none'}"
        )
