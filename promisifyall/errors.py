"""Exception types raised by promisifyall.

Only two things can go wrong: a wrapper name collides with something that
is already there, or a callback reports a failure that Python cannot use
to reject a future directly.
"""

from dataclasses import dataclass
from typing import Any


# Reasons attached to ConflictRecord by the name resolver
SUFFIXED_ORIGIN = "origin name already ends with the suffix"
OCCUPIED_NAME = "an unrelated member already uses the wrapper name"


class PromisifyError(Exception):
    """Base class for all promisifyall errors."""
    pass


@dataclass(frozen=True)
class ConflictRecord:
    """Why a wrapper could not be installed under its canonical name."""

    origin_name: str
    wrapper_name: str
    owner: Any
    reason: str

    def describe(self) -> str:
        owner_name = getattr(type(self.owner), '__name__', '?')
        if isinstance(self.owner, type):
            owner_name = self.owner.__name__
        return (
            f"cannot promisify '{self.origin_name}' on {owner_name}: "
            f"{self.reason} (wrapper name '{self.wrapper_name}')"
        )


class NamingConflict(PromisifyError, TypeError):
    """Raised when a wrapper name is unusable.

    Either the origin name already carries the suffix, or an unrelated
    member occupies the wrapper name. Subclasses TypeError so callers that
    treat a malformed API surface as a type problem keep working.
    """

    def __init__(self, record: ConflictRecord):
        super().__init__(record.describe())
        self.record = record


class ReadOnlyTargetError(PromisifyError, AttributeError):
    """Raised when wrappers are due on an object that cannot store them.

    Instances without a ``__dict__`` (``__slots__`` classes), frozen
    dataclasses and builtin types fall in this group. Promisifying their
    class instead puts the wrappers where every instance can reach them.
    """

    def __init__(self, owner: Any, wrapper_names: Any, reason: str = "cannot store new attributes"):
        self.owner = owner
        self.wrapper_names = list(wrapper_names)
        owner_name = owner.__name__ if isinstance(owner, type) else type(owner).__name__
        super().__init__(
            f"cannot install {', '.join(self.wrapper_names)} on {owner_name}: {reason}"
        )


class CallbackError(PromisifyError):
    """Rejection reason for callbacks whose error slot is not an exception.

    Exceptions are always propagated verbatim; this wrapper exists only
    because a future cannot be rejected with, say, a string.
    """

    def __init__(self, value: Any):
        super().__init__(f"callback reported an error: {value!r}")
        self.value = value
