"""
Shared method registry for pluggable computational methods.

Usage
-----
    rules = MethodRegistry("quadrature rule")
    rules.register("gauss_legendre", gauss_legendre)
    fn = rules["gauss_legendre"]
    rules.available()  # ["gauss_legendre"]

A registry can be given the exception type raised for unknown keys, so
that lookups fail with a domain error instead of a bare KeyError.
"""

from typing import Callable


class MethodRegistry:
    """Registry for pluggable computational methods.

    Parameters
    ----------
    name : str
        Human-readable name for error messages (e.g., "geometry adapter").
    missing : type
        Exception class raised on unknown keys (default KeyError).
    """

    def __init__(self, name: str, missing: type = KeyError):
        self.name = name
        self.missing = missing
        self._methods: dict[str, Callable] = {}

    def register(self, key: str, fn: Callable = None):
        """Register a method under the given key.

        Can be used as a decorator when ``fn`` is omitted::

            @adapters.register("segment")
            def _segment(geometry): ...
        """
        if fn is None:
            def decorator(func):
                self._methods[key] = func
                return func
            return decorator
        self._methods[key] = fn
        return fn

    def __getitem__(self, key: str) -> Callable:
        if key not in self._methods:
            raise self.missing(
                f"Unknown {self.name}: {key!r}. "
                f"Available: {list(self._methods.keys())}"
            )
        return self._methods[key]

    def __contains__(self, key: str) -> bool:
        return key in self._methods

    def available(self) -> list[str]:
        """Return list of registered method names."""
        return list(self._methods.keys())
