"""
Exception taxonomy for line integrals.

Validation failures are raised before any integrand evaluation. Errors
raised while evaluating the integrand or a quadrature rule are never
caught here and reach the caller unchanged.
"""


class LineIntegralError(Exception):
    """Base class for all lineintlib errors."""


class UnsupportedGeometry(LineIntegralError, TypeError):
    """No adapter is registered for the geometry's kind."""


class UnsupportedCombination(LineIntegralError, ValueError):
    """The (geometry kind, integral kind, algorithm) triple has no valid path."""


class SignatureMismatch(LineIntegralError, TypeError):
    """The integrand does not accept a single point argument."""


class DegenerateGeometry(LineIntegralError, ValueError):
    """The geometry collapses to a point or another measure-zero set."""


class EmptyTrajectory(DegenerateGeometry):
    """A composite path has fewer than two points or no members."""
