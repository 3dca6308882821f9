"""
Quadrature dispatch.

Submodules
----------
_algorithms : GaussLegendre, GaussKronrod, HAdaptiveCubature selectors
_support    : support table keyed by (geometry kind, integral kind)
_rules      : numpy/scipy rule implementations and the ``run`` dispatcher
"""

from lineintlib.quadrature._algorithms import (
    GaussLegendre,
    GaussKronrod,
    HAdaptiveCubature,
    DEFAULT_ALGORITHM,
    DEFAULT_ORDER,
    resolve_algorithm,
)
from lineintlib.quadrature._support import (
    SUPPORT,
    check_support,
    supported_algorithms,
)
from lineintlib.quadrature._rules import QuadratureResult, rules, run

__all__ = [
    'GaussLegendre', 'GaussKronrod', 'HAdaptiveCubature',
    'DEFAULT_ALGORITHM', 'DEFAULT_ORDER', 'resolve_algorithm',
    'SUPPORT', 'check_support', 'supported_algorithms',
    'QuadratureResult', 'rules', 'run',
]
