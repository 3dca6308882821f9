"""
Quadrature algorithm selectors.

Each selector is a frozen dataclass carrying its own configuration, in the
manner of ``SimulationParams``. ``name`` is the key of the rule in
``lineintlib.quadrature._rules.rules`` and of the support table.
"""

from dataclasses import dataclass
from typing import ClassVar

DEFAULT_ORDER = 100


def _require_positive(name, value):
    if not value > 0:
        raise ValueError(f"{name} must be positive, got {value!r}")


@dataclass(frozen=True)
class GaussLegendre:
    """Fixed-order Gauss-Legendre rule; returns an estimate without error bound.

    Attributes
    ----------
    order : int
        Number of nodes.
    """
    order: int = DEFAULT_ORDER

    name: ClassVar[str] = "gauss_legendre"
    adaptive: ClassVar[bool] = False

    def __post_init__(self):
        if isinstance(self.order, bool) or int(self.order) != self.order:
            raise ValueError(f"order must be an integer, got {self.order!r}")
        _require_positive("order", self.order)


@dataclass(frozen=True)
class GaussKronrod:
    """Adaptive Gauss-Kronrod rule on one parameter; returns (estimate, error).

    Attributes
    ----------
    rtol : float
        Relative tolerance.
    atol : float
        Absolute tolerance.
    limit : int
        Maximum number of subintervals.
    """
    rtol: float = 1e-8
    atol: float = 1e-12
    limit: int = 10000

    name: ClassVar[str] = "gauss_kronrod"
    adaptive: ClassVar[bool] = True

    def __post_init__(self):
        _require_positive("rtol", self.rtol)
        _require_positive("atol", self.atol)
        _require_positive("limit", self.limit)


@dataclass(frozen=True)
class HAdaptiveCubature:
    """Adaptive h-cubature over one or two parameters; returns (estimate, error).

    Attributes
    ----------
    rtol : float
        Relative tolerance.
    atol : float
        Absolute tolerance.
    max_subdivisions : int
        Maximum number of region subdivisions.
    """
    rtol: float = 1e-8
    atol: float = 1e-12
    max_subdivisions: int = 10000

    name: ClassVar[str] = "h_adaptive_cubature"
    adaptive: ClassVar[bool] = True

    def __post_init__(self):
        _require_positive("rtol", self.rtol)
        _require_positive("atol", self.atol)
        _require_positive("max_subdivisions", self.max_subdivisions)


ALGORITHMS = (GaussLegendre, GaussKronrod, HAdaptiveCubature)

DEFAULT_ALGORITHM = GaussLegendre(DEFAULT_ORDER)


def resolve_algorithm(algorithm=None):
    """Return a selector instance.

    ``None`` selects ``DEFAULT_ALGORITHM``; a selector class is instantiated
    with its defaults.
    """
    if algorithm is None:
        return DEFAULT_ALGORITHM
    if isinstance(algorithm, type) and algorithm in ALGORITHMS:
        return algorithm()
    return algorithm
