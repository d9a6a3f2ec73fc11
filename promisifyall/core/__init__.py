"""Core machinery for promisification.

Reflection, naming, wrapper construction and traversal. Everything here is
synchronous and free of global state; the only thing that outlives a call
is the marker carried by each generated wrapper.
"""

from .reflector import (
    Member,
    MemberKind,
    accepts_new_members,
    classify,
    enumerate_members,
    looks_like_constructor,
    own_dict,
    own_members,
    resolve_static,
)
from .markers import WrapperBinding, binding_of, is_generated
from .naming import NameResolver, Resolution, ResolutionStatus
from .factory import CallStyle, WrapperFactory, make_callback, promisify
from .recursion import RecursionController, TargetNode, TargetShape

__all__ = [
    # Reflection
    'Member',
    'MemberKind',
    'accepts_new_members',
    'classify',
    'enumerate_members',
    'looks_like_constructor',
    'own_dict',
    'own_members',
    'resolve_static',
    # Markers
    'WrapperBinding',
    'binding_of',
    'is_generated',
    # Naming
    'NameResolver',
    'Resolution',
    'ResolutionStatus',
    # Wrappers
    'CallStyle',
    'WrapperFactory',
    'make_callback',
    'promisify',
    # Traversal
    'RecursionController',
    'TargetNode',
    'TargetShape',
]
