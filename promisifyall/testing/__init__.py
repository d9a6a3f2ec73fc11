"""Testing utilities for promisifyall consumers."""

from .fixtures import (
    AccessorProbe,
    CallbackRecorder,
    make_accessor_class,
    make_callback_class,
)

__all__ = [
    'AccessorProbe',
    'CallbackRecorder',
    'make_accessor_class',
    'make_callback_class',
]
