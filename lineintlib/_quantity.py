"""
Tagged numeric values: real or complex, scalar or fixed-shape array, with an
optional ``pint`` unit.

Integrands may return plain floats, complex numbers, numpy arrays, lists, or
``pint`` quantities of any of these. ``Quantity`` normalises all of them so
that the integrand wrapper needs a single scale operation and the composite
aggregator a single add operation. ``ValueLayout`` records the shape, numeric
kind and unit of the first sample, is promoted to complex when a later
sample is complex, and converts every sample into a flat real array of real
and imaginary parts, which is what the quadrature rules consume.

Usage
-----
    q = Quantity.from_value(2.0 * ureg.ohm / ureg.m)
    q.scale(0.5).to_value()          # 1.0 ohm / meter
    layout = ValueLayout.of(q)
    flat = layout.flatten(q)          # array([2., 0.])
    layout.unflatten(flat, ureg.ohm).to_value()
"""

from dataclasses import dataclass, replace
from typing import Any, Optional

import numpy as np
import pint


def is_quantity(value) -> bool:
    """Return True if ``value`` is a ``pint`` quantity."""
    return isinstance(value, pint.Quantity)


def strip_units(value, units=None):
    """Split ``value`` into a numpy magnitude and its unit.

    Parameters
    ----------
    value : number, array_like or pint.Quantity
        A plain numeric value, a quantity, or a sequence mixing quantities
        of compatible dimensions.
    units : pint.Unit or None
        Target unit. Quantities are converted to it; plain values are only
        accepted when ``units`` is None.

    Returns
    -------
    magnitude : ndarray
    units : pint.Unit or None
    """
    if is_quantity(value):
        if units is not None:
            value = value.to(units)
        return np.asarray(value.magnitude), value.units
    if isinstance(value, (list, tuple)) and any(is_quantity(v) for v in value):
        if units is None:
            units = next(v.units for v in value if is_quantity(v))
        parts = [strip_units(v, units)[0] for v in value]
        return np.asarray(parts), units
    if units is not None:
        raise ValueError(
            f"Expected a value in units of {units}, got plain value {value!r}"
        )
    return np.asarray(value), None


def combine_units(value_units, length_units, paramdim: int = 1):
    """Unit of ``value * length ** paramdim`` where either side may be None."""
    if length_units is None:
        return value_units
    measure_units = length_units ** paramdim
    if value_units is None:
        return measure_units
    return value_units * measure_units


class Quantity:
    """Numeric value tagged with shape, real/complex kind and optional unit.

    Parameters
    ----------
    magnitude : array_like
        Real or complex numeric data of any fixed shape.
    units : pint.Unit or None
        Unit of the magnitude, or None for plain numbers.
    """

    __slots__ = ("magnitude", "units")

    def __init__(self, magnitude, units=None):
        magnitude = np.asarray(magnitude)
        if magnitude.dtype.kind not in "biufc":
            raise TypeError(
                f"Integrand values must be numeric, got dtype {magnitude.dtype}"
            )
        if magnitude.dtype.kind != "c":
            magnitude = magnitude.astype(float)
        self.magnitude = magnitude
        self.units = units

    @classmethod
    def from_value(cls, value) -> "Quantity":
        """Wrap a plain number, array, list or ``pint`` quantity."""
        if isinstance(value, Quantity):
            return value
        magnitude, units = strip_units(value)
        return cls(magnitude, units)

    @property
    def shape(self) -> tuple:
        return self.magnitude.shape

    @property
    def is_complex(self) -> bool:
        return self.magnitude.dtype.kind == "c"

    def scale(self, factor: float) -> "Quantity":
        """Multiply by a plain number, keeping the unit."""
        return Quantity(self.magnitude * factor, self.units)

    def dot(self, vector) -> "Quantity":
        """Contract a vector-valued quantity with a plain vector."""
        vector = np.asarray(vector)
        if self.magnitude.shape != vector.shape:
            raise ValueError(
                f"Vector field value of shape {self.magnitude.shape} does not "
                f"match tangent of shape {vector.shape}"
            )
        return Quantity(self.magnitude @ vector, self.units)

    def with_units(self, units) -> "Quantity":
        """Return the same magnitude tagged with ``units``."""
        return Quantity(self.magnitude, units)

    def __add__(self, other: "Quantity") -> "Quantity":
        if self.shape != other.shape:
            raise ValueError(
                f"Cannot add values of shape {self.shape} and {other.shape}"
            )
        if self.units == other.units:
            magnitude = other.magnitude
        elif self.units is None or other.units is None:
            raise ValueError("Cannot add unit-carrying and unitless values")
        else:
            magnitude = (other.magnitude * other.units).to(self.units).magnitude
        return Quantity(self.magnitude + magnitude, self.units)

    def to_value(self):
        """Return a float, complex, ndarray or ``pint`` quantity."""
        if self.magnitude.ndim == 0:
            value = self.magnitude.item()
        else:
            value = self.magnitude.copy()
        if self.units is None:
            return value
        return value * self.units

    def __repr__(self):
        return f"Quantity({self.magnitude!r}, units={self.units!r})"


@dataclass(frozen=True)
class ValueLayout:
    """Shape, numeric kind and unit shared by every sample of an integrand.

    Samples are always flattened as real parts followed by imaginary parts,
    so a complex sample arriving after real ones keeps the flat size fixed;
    ``promote`` only switches how ``unflatten`` rebuilds the value.

    Attributes
    ----------
    shape : tuple
        Shape of one value (``()`` for scalars).
    is_complex : bool
        Whether ``unflatten`` returns complex values.
    units : pint.Unit or None
        Unit every sample is converted to before flattening.
    """
    shape: tuple
    is_complex: bool
    units: Optional[Any] = None

    @classmethod
    def of(cls, quantity: Quantity) -> "ValueLayout":
        return cls(quantity.shape, quantity.is_complex, quantity.units)

    @property
    def size(self) -> int:
        """Length of the flat real array produced by ``flatten``."""
        return 2 * int(np.prod(self.shape, dtype=int))

    def promote(self) -> "ValueLayout":
        """The complex counterpart of this layout."""
        return self if self.is_complex else replace(self, is_complex=True)

    def flatten(self, quantity: Quantity) -> np.ndarray:
        """Convert a sample to a flat real array in this layout's unit."""
        if quantity.shape != self.shape:
            raise ValueError(
                f"Integrand changed shape from {self.shape} to {quantity.shape}"
            )
        if quantity.units != self.units:
            if quantity.units is None or self.units is None:
                raise ValueError("Integrand mixes unit-carrying and unitless values")
            magnitude = (quantity.magnitude * quantity.units).to(self.units).magnitude
        else:
            magnitude = quantity.magnitude
        magnitude = np.asarray(magnitude).ravel()
        return np.concatenate([magnitude.real, magnitude.imag]).astype(float)

    def unflatten(self, flat, units=None) -> Quantity:
        """Inverse of ``flatten``, tagging the result with ``units``."""
        flat = np.asarray(flat, dtype=float).ravel()
        if flat.size != self.size:
            raise ValueError(f"Expected {self.size} components, got {flat.size}")
        half = self.size // 2
        if self.is_complex:
            magnitude = flat[:half] + 1j * flat[half:]
        else:
            magnitude = flat[:half]
        return Quantity(magnitude.reshape(self.shape), units)
