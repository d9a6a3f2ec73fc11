"""Accessor-safe member enumeration.

Everything here works on raw ``__dict__`` entries. Nothing calls
``getattr`` on a target, so properties, ``__getattr__`` hooks and other
descriptors never run while a target is being inspected.
"""

import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Mapping, Optional


_HEAPTYPE = 1 << 9      # Py_TPFLAGS_HEAPTYPE: set for classes created by class statements


class MemberKind(Enum):
    """How a raw member value is treated during promisification."""
    DATA_FUNCTION = "data_function"   # Wrap target
    DATA_OTHER = "data_other"         # Plain value, ignored
    CLASS = "class"                   # Possible recursion target
    ACCESSOR = "accessor"             # Descriptor; never read


@dataclass(frozen=True)
class Member:
    """One named member as found in a single ``__dict__``."""

    name: str
    kind: MemberKind
    raw: Any        # Value exactly as stored in source.__dict__
    source: Any     # Object whose __dict__ holds the value

    @property
    def in_class(self) -> bool:
        return isinstance(self.source, type)

    @property
    def function(self) -> Any:
        """The callable behind the member, with static/class wrappers removed."""
        return unwrap(self.raw)


def unwrap(raw: Any) -> Any:
    """Strip a staticmethod/classmethod wrapper, if any."""
    if isinstance(raw, (staticmethod, classmethod)):
        return raw.__func__
    return raw


def own_dict(target: Any) -> Mapping[str, Any]:
    """Return the target's own namespace without running custom lookups.

    Objects without a ``__dict__`` (pure ``__slots__`` instances, most
    builtins) have no own members.
    """
    getter = type.__getattribute__ if isinstance(target, type) else object.__getattribute__
    try:
        namespace = getter(target, '__dict__')
    except AttributeError:
        return {}
    return namespace


def classify(raw: Any, in_class: bool) -> MemberKind:
    """Classify a raw value by its type alone.

    Inside a class namespace any value whose type defines ``__get__`` is a
    descriptor and counts as an accessor, except the three kinds that
    produce callables. Outside classes descriptors are inert, so only
    callability matters.
    """
    if isinstance(raw, type):
        return MemberKind.CLASS
    if in_class:
        if inspect.isfunction(raw) or isinstance(raw, (staticmethod, classmethod)):
            return MemberKind.DATA_FUNCTION
        if hasattr(type(raw), '__get__'):
            return MemberKind.ACCESSOR
    if callable(raw):
        return MemberKind.DATA_FUNCTION
    return MemberKind.DATA_OTHER


def own_members(source: Any) -> List[Member]:
    """Enumerate the members stored directly on ``source``."""
    in_class = isinstance(source, type)
    members = []
    # Copy first: the namespace may be a live dict we are about to extend
    for name, raw in list(own_dict(source).items()):
        if not isinstance(name, str):
            continue
        members.append(Member(name, classify(raw, in_class), raw, source))
    return members


def is_builtin_type(cls: type) -> bool:
    """True for types implemented in C (object, dict, SimpleNamespace, ...)."""
    return not cls.__flags__ & _HEAPTYPE


def lookup_chain(target: Any) -> List[Any]:
    """Objects consulted, in order, when an attribute is looked up on target.

    For a class that is its MRO; for anything else the object itself
    followed by its type's MRO. Builtin types, ``object`` included, are
    always left out.
    """
    if isinstance(target, type):
        chain = list(type.__getattribute__(target, '__mro__'))
    else:
        chain = [target] + list(type(target).__mro__)
    return [
        entry for entry in chain
        if not (isinstance(entry, type) and is_builtin_type(entry))
    ]


def member_sources(target: Any) -> List[Any]:
    """Objects whose own members are candidates when promisifying target.

    A class contributes only its own namespace; inherited class members are
    reached by visiting the base class itself. Any other object also takes
    the members it inherits from its class, because wrappers for those are
    installed on the object rather than on the shared class.
    """
    if isinstance(target, type):
        return [target]
    return lookup_chain(target)


def enumerate_members(target: Any) -> List[Member]:
    """Members visible on target, closest definition first, no duplicates."""
    seen = set()
    members = []
    for source in member_sources(target):
        for member in own_members(source):
            if member.name in seen:
                continue
            seen.add(member.name)
            members.append(member)
    return members


def resolve_static(target: Any, name: str) -> Optional[Member]:
    """Find the member attribute lookup would use, without invoking it."""
    for source in lookup_chain(target):
        namespace = own_dict(source)
        if name in namespace:
            raw = namespace[name]
            return Member(name, classify(raw, isinstance(source, type)), raw, source)
    return None


def accepts_new_members(target: Any) -> bool:
    """True if plain attribute assignment can add members to target.

    Checked statically: builtin types, objects without a ``__dict__`` and
    frozen dataclass instances are refused. A custom ``__setattr__`` that
    rejects writes is only found out at installation time.
    """
    if isinstance(target, type):
        return not is_builtin_type(target)
    try:
        object.__getattribute__(target, '__dict__')
    except AttributeError:
        return False
    params = resolve_static(type(target), '__dataclass_params__')
    if params is not None and getattr(params.raw, 'frozen', False):
        return False
    return True


def looks_like_constructor(value: Any) -> bool:
    """True for classes that define at least one public-ish callable member.

    Classes whose namespace holds nothing but dunder members (or only
    C-level method descriptors, like builtin types) are not worth visiting.
    """
    if not isinstance(value, type):
        return False
    for member in own_members(value):
        if member.kind is MemberKind.DATA_FUNCTION and not _is_dunder(member.name):
            return True
    return False


def _is_dunder(name: str) -> bool:
    return name.startswith('__') and name.endswith('__')
