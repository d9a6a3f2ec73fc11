"""Wrapper name resolution and conflict detection."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from ..errors import ConflictRecord, SUFFIXED_ORIGIN, OCCUPIED_NAME
from .markers import binding_of
from .reflector import Member, resolve_static


class ResolutionStatus(Enum):
    FREE = "free"                         # Nothing at the wrapper name yet
    ALREADY_WRAPPED = "already_wrapped"   # Up-to-date wrapper present; skip
    STALE = "stale"                       # Wrapper present, origin changed since
    CONFLICT = "conflict"                 # Name unusable


@dataclass(frozen=True)
class Resolution:
    status: ResolutionStatus
    wrapper_name: str
    existing: Optional[Member] = None
    conflict: Optional[ConflictRecord] = None


class NameResolver:
    """Derives wrapper names and checks them against the target.

    Rules, in order:
      1. An origin name that already ends with the suffix is a conflict.
      2. If something is visible at the wrapper name, it must be a wrapper
         generated for the same origin name; anything else is a conflict.
         A matching wrapper is either current or stale, depending on
         whether the origin still resolves to the function it was built for
         and, for wrappers bound to an object, whether that object is the
         target.
      3. Otherwise the name is free.
    """

    def __init__(self, suffix: str):
        self.suffix = suffix

    def wrapper_name(self, origin_name: str) -> str:
        return origin_name + self.suffix

    def resolve(self, target: Any, member: Member) -> Resolution:
        wrapper_name = self.wrapper_name(member.name)

        if member.name.endswith(self.suffix):
            return self._conflict(target, member, wrapper_name, SUFFIXED_ORIGIN)

        existing = resolve_static(target, wrapper_name)
        if existing is None:
            return Resolution(ResolutionStatus.FREE, wrapper_name)

        binding = binding_of(existing.raw)
        if binding is None or binding.origin_name != member.name:
            return self._conflict(target, member, wrapper_name, OCCUPIED_NAME, existing)

        if binding.origin is not member.function:
            return Resolution(ResolutionStatus.STALE, wrapper_name, existing)
        if not isinstance(binding.owner, type) and binding.owner is not target:
            # Closure over another object, e.g. carried over by copy.copy
            return Resolution(ResolutionStatus.STALE, wrapper_name, existing)
        return Resolution(ResolutionStatus.ALREADY_WRAPPED, wrapper_name, existing)

    def _conflict(self, target, member, wrapper_name, reason, existing=None) -> Resolution:
        record = ConflictRecord(
            origin_name=member.name,
            wrapper_name=wrapper_name,
            owner=target,
            reason=reason,
        )
        return Resolution(ResolutionStatus.CONFLICT, wrapper_name, existing, record)
