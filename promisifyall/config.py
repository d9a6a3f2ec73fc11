"""Configuration for promisifyall.

This module defines how callers specify a promisification pass: the wrapper
suffix, which members qualify, which future type wrappers return, and how
naming conflicts are handled.
"""

import inspect
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from .conflict_policies import (
    ConflictPolicy,
    FailFastPolicy,
    ContinueOnConflictsPolicy,
    CollectConflictsPolicy,
)


DEFAULT_SUFFIX = "Async"


def default_filter(name: str, value: Any, target: Any) -> bool:
    """Decide whether a member should be promisified by default.

    Excludes names that are not identifiers (only reachable through
    ``setattr``), private and dunder names, and callables that are already
    asynchronous.

    Args:
        name: Member name
        value: Underlying callable (staticmethod/classmethod unwrapped) or class
        target: Object being promisified

    Returns:
        True if the member qualifies
    """
    if not name.isidentifier() or name.startswith('_'):
        return False
    if inspect.iscoroutinefunction(value) or inspect.isasyncgenfunction(value):
        return False
    return True


@dataclass
class PromisifyConfig:
    """Complete configuration for one promisify_all call.

    The PromisificationPlan validates this before touching the target.
    """

    # Appended to origin names to form wrapper names
    suffix: str = DEFAULT_SUFFIX

    # Member predicate: (name, value, target, passes_default) -> bool, where
    # passes_default is default_filter's verdict. Its answer is final.
    filter: Optional[Callable[[str, Any, Any, bool], bool]] = None

    # Deferred-result constructor; None means a future on the running loop
    future_factory: Optional[Callable[[], Any]] = None

    # Naming conflict handling (FailFastPolicy when None)
    conflict_policy: Optional[ConflictPolicy] = None

    # Visit constructor-like classes found on the target, one level deep
    recurse_classes: bool = True

    def accepts(self, name: str, value: Any, target: Any) -> bool:
        """Apply the configured filter, or the default one."""
        passes_default = default_filter(name, value, target)
        if self.filter is None:
            return passes_default
        return bool(self.filter(name, value, target, passes_default))

    def get_conflict_policy(self) -> ConflictPolicy:
        """Return the configured conflict policy, creating the default lazily."""
        if self.conflict_policy is None:
            self.conflict_policy = FailFastPolicy()
        return self.conflict_policy

    # Convenience constructors for common configurations

    @classmethod
    def strict(cls, suffix: str = DEFAULT_SUFFIX) -> 'PromisifyConfig':
        """Fail on the first naming conflict (the default behaviour)."""
        return cls(suffix=suffix, conflict_policy=FailFastPolicy())

    @classmethod
    def lenient(cls, suffix: str = DEFAULT_SUFFIX, verbose: bool = False) -> 'PromisifyConfig':
        """Skip conflicting members and wrap everything else.

        Args:
            suffix: Wrapper suffix
            verbose: Warn on stderr for every skipped member
        """
        policy = ContinueOnConflictsPolicy(verbose=True) if verbose else CollectConflictsPolicy()
        return cls(suffix=suffix, conflict_policy=policy)

    @classmethod
    def shallow(cls, suffix: str = DEFAULT_SUFFIX) -> 'PromisifyConfig':
        """Only wrap the target's own members; never visit nested classes."""
        return cls(suffix=suffix, recurse_classes=False)

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.suffix, str) or not self.suffix:
            errors.append("suffix must be a non-empty string")
        elif not ('x' + self.suffix).isidentifier():
            errors.append(f"suffix {self.suffix!r} cannot form an identifier")

        if self.filter is not None and not callable(self.filter):
            errors.append("filter must be callable")

        if self.future_factory is not None and not callable(self.future_factory):
            errors.append("future_factory must be callable")

        if self.conflict_policy is not None and not isinstance(self.conflict_policy, ConflictPolicy):
            errors.append("conflict_policy must be a ConflictPolicy instance")

        return errors
