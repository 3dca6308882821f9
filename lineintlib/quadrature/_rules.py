"""
Quadrature rules backed by numpy and scipy.

Every rule takes a parameter-space integrand ``h`` returning a flat real
array, the parameter ``domain`` (one ``(lo, hi)`` pair per parameter) and
its algorithm selector, and returns a ``QuadratureResult``. Fixed-order
rules leave ``error`` as None.

    gauss_legendre       numpy.polynomial.legendre.leggauss nodes
    gauss_kronrod        scipy.integrate.quad_vec (adaptive GK21)
    h_adaptive_cubature  scipy.integrate.cubature (adaptive, n-D, infinite limits)
"""

import logging
import warnings
from functools import lru_cache
from typing import NamedTuple, Optional

import numpy as np
from numpy.polynomial.legendre import leggauss
from scipy.integrate import IntegrationWarning, cubature, quad_vec

from lineintlib._errors import UnsupportedCombination
from lineintlib._registry import MethodRegistry

logger = logging.getLogger(__name__)

rules = MethodRegistry("quadrature algorithm", missing=UnsupportedCombination)


class QuadratureResult(NamedTuple):
    estimate: np.ndarray
    error: Optional[float] = None


@lru_cache(maxsize=None)
def _legendre(order: int):
    nodes, weights = leggauss(order)
    nodes.setflags(write=False)
    weights.setflags(write=False)
    return nodes, weights


def _single_interval(domain, rule_name):
    if len(domain) != 1:
        raise UnsupportedCombination(
            f"{rule_name} integrates over one parameter, got {len(domain)}"
        )
    return domain[0]


@rules.register("gauss_legendre")
def gauss_legendre(h, domain, algorithm) -> QuadratureResult:
    """Weighted sum over ``order`` Gauss-Legendre nodes mapped to ``[lo, hi]``."""
    lo, hi = _single_interval(domain, "Gauss-Legendre")
    if not (np.isfinite(lo) and np.isfinite(hi)):
        raise UnsupportedCombination("Gauss-Legendre needs a bounded parameter domain")
    nodes, weights = _legendre(int(algorithm.order))
    half, mid = 0.5 * (hi - lo), 0.5 * (hi + lo)
    values = np.stack([h(mid + half * x) for x in nodes])
    return QuadratureResult(half * (weights @ values))


@rules.register("gauss_kronrod")
def gauss_kronrod(h, domain, algorithm) -> QuadratureResult:
    """Adaptive Gauss-Kronrod subdivision; infinite bounds are transformed by scipy."""
    lo, hi = _single_interval(domain, "Gauss-Kronrod")
    estimate, error = quad_vec(
        h, lo, hi,
        epsabs=algorithm.atol,
        epsrel=algorithm.rtol,
        limit=algorithm.limit,
        norm="max",
    )
    return QuadratureResult(np.atleast_1d(np.asarray(estimate, dtype=float)), float(error))


@rules.register("h_adaptive_cubature")
def h_adaptive_cubature(h, domain, algorithm) -> QuadratureResult:
    """Adaptive cubature over the parameter box; supports infinite bounds."""
    ndim = len(domain)
    a = [lo for lo, _ in domain]
    b = [hi for _, hi in domain]

    def vectorized(x):
        # cubature samples many points at once, shape (npoints, ndim)
        return np.stack([h(row[0] if ndim == 1 else row) for row in x])

    res = cubature(
        vectorized, a, b,
        rtol=algorithm.rtol,
        atol=algorithm.atol,
        max_subdivisions=algorithm.max_subdivisions,
    )
    if res.status != "converged":
        warnings.warn(
            f"Cubature did not converge after {res.subdivisions} subdivisions; "
            f"the error bound may exceed the requested tolerance",
            IntegrationWarning,
            stacklevel=2,
        )
    estimate = np.atleast_1d(np.asarray(res.estimate, dtype=float))
    return QuadratureResult(estimate, float(np.max(np.abs(res.error))))


def run(h, domain, algorithm) -> QuadratureResult:
    """Dispatch ``h`` to the rule registered for ``algorithm.name``."""
    name = getattr(algorithm, "name", None)
    rule = rules[name]
    logger.debug("Running %s over %s", algorithm, domain)
    return rule(h, domain, algorithm)
