"""
Integrand wrapping: turn ``f(point)`` into a parameter-space function.

``EffectiveIntegrand`` composes the user's integrand with a
``Parametrization``:

    scalar / surface kinds:  h(t) = f(position(t)) * scale(t)
    tangential kind:         h(t) = f(position(t)) . tangent(t)

and returns flat real arrays, which is what every quadrature rule
consumes. ``restore`` turns a flat result back into the integrand's value
type with unit ``integrand unit * length unit ** paramdim``.
"""

import inspect

import numpy as np

from lineintlib._errors import SignatureMismatch
from lineintlib._quantity import Quantity, ValueLayout, combine_units

INTEGRAL_KINDS = ("scalar", "tangential", "surface")


def check_signature(f) -> None:
    """Raise ``SignatureMismatch`` unless ``f`` takes one positional point.

    The check only inspects the signature; ``f`` is never called. Callables
    whose signature cannot be introspected (some builtins and extension
    functions) are accepted.
    """
    if not callable(f):
        raise SignatureMismatch(f"Integrand must be callable, got {type(f).__name__}")
    try:
        sig = inspect.signature(f)
    except (ValueError, TypeError):
        return
    try:
        sig.bind(None)
    except TypeError as err:
        name = getattr(f, "__name__", repr(f))
        raise SignatureMismatch(
            f"Integrand {name}{sig} must accept exactly one point argument ({err})"
        ) from None


class EffectiveIntegrand:
    """Parameter-space integrand for one parametrized geometry.

    Parameters
    ----------
    f : callable
        User integrand ``f(point)``.
    parametrization : Parametrization
        Output of ``lineintlib._adapters.parametrize``.
    kind : str
        One of ``INTEGRAL_KINDS``.

    Attributes
    ----------
    layout : ValueLayout or None
        Fixed by the first evaluation; promoted to complex by the first
        complex sample.
    n_evaluations : int
        Number of calls to ``f`` so far.
    """

    def __init__(self, f, parametrization, kind: str = "scalar"):
        if kind not in INTEGRAL_KINDS:
            raise ValueError(f"Unknown integral kind {kind!r}; expected one of {INTEGRAL_KINDS}")
        self.f = f
        self.parametrization = parametrization
        self.kind = kind
        self.layout = None
        self.n_evaluations = 0

    def point(self, t):
        """Ambient point at parameter ``t``, with units when the geometry has them."""
        coords = np.array(self.parametrization.position(t), dtype=float)
        units = self.parametrization.units
        return coords if units is None else coords * units

    def __call__(self, t) -> np.ndarray:
        self.n_evaluations += 1
        value = Quantity.from_value(self.f(self.point(t)))
        if self.kind == "tangential":
            value = value.dot(self.parametrization.tangent(t))
        else:
            value = value.scale(self.parametrization.scale(t))
        if self.layout is None:
            self.layout = ValueLayout.of(value)
        elif value.is_complex:
            self.layout = self.layout.promote()
        return self.layout.flatten(value)

    @property
    def result_units(self):
        if self.layout is None:
            raise RuntimeError("Integrand has not been evaluated yet")
        return combine_units(self.layout.units, self.parametrization.units,
                             self.parametrization.paramdim)

    def restore(self, flat) -> Quantity:
        """Rebuild an integrated flat array as a ``Quantity``."""
        return self.layout.unflatten(flat, self.result_units)
