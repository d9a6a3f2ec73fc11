"""Markers identifying generated wrappers.

Every wrapper built by the factory carries a WrapperBinding describing what
it was generated for. The binding lives in the wrapper function's own
``__dict__`` so it is collected together with the wrapper.
"""

import inspect
from dataclasses import dataclass
from typing import Any, Optional

from .reflector import unwrap


_MARKER = '__promisified__'


@dataclass(frozen=True, eq=False)
class WrapperBinding:
    """Record of one installed wrapper."""

    origin_name: str
    wrapper_name: str
    owner: Any      # Object the wrapper was installed on
    origin: Any     # Origin callable as resolved when the wrapper was built

    def is_for(self, origin_name: str, origin: Any) -> bool:
        """True if this wrapper was generated for exactly this origin."""
        return self.origin_name == origin_name and self.origin is origin


def mark(func: Any, binding: WrapperBinding) -> Any:
    """Attach ``binding`` to a freshly generated wrapper function."""
    func.__dict__[_MARKER] = binding
    return func


def binding_of(value: Any) -> Optional[WrapperBinding]:
    """Return the binding of a generated wrapper, or None.

    Only plain functions are inspected, through their ``__dict__``, so
    objects that fabricate attributes on demand (mocks, proxies) are never
    mistaken for wrappers.
    """
    func = unwrap(value)
    if not inspect.isfunction(func):
        return None
    binding = func.__dict__.get(_MARKER)
    if isinstance(binding, WrapperBinding):
        return binding
    return None


def is_generated(value: Any) -> bool:
    return binding_of(value) is not None
