"""
Naming conflict policies for promisifyall.

This module provides a flexible conflict handling system through the Policy
pattern, allowing callers to decide what happens when a wrapper name cannot
be used during promisification.
"""

from abc import ABC, abstractmethod
from typing import List
import sys

from .errors import ConflictRecord, NamingConflict, SUFFIXED_ORIGIN, OCCUPIED_NAME


class ConflictPolicy(ABC):
    """
    Base class for conflict handling policies.

    A policy is consulted while the promisification plan is being built,
    before any wrapper is installed. Returning normally means "skip this
    member and keep going"; raising aborts the whole call.
    """

    @abstractmethod
    def handle(self, record: ConflictRecord) -> None:
        """
        Handle a naming conflict.

        Args:
            record: Details of the origin member and the rejected wrapper name

        Raises:
            NamingConflict: To abort promisification
        """
        pass


class FailFastPolicy(ConflictPolicy):
    """
    Policy that raises on the first conflict.

    This is the default. Because planning completes before installation,
    failing fast leaves the target exactly as it was.
    """

    def handle(self, record: ConflictRecord) -> None:
        """Raise immediately."""
        raise NamingConflict(record)


class CollectConflictsPolicy(ConflictPolicy):
    """
    Policy that silently collects conflicts and skips the affected members.

    Useful when promisifying third-party surfaces where a few members are
    known to clash and the rest should still be wrapped.
    """

    def __init__(self):
        self.conflicts: List[ConflictRecord] = []

    def handle(self, record: ConflictRecord) -> None:
        self._handle_common(record)

    def _handle_common(self, record: ConflictRecord) -> None:
        self.conflicts.append(record)

    def get_statistics(self) -> dict:
        """
        Get statistics about conflicts encountered.

        Returns:
            Dictionary with conflict counts and details
        """
        return {
            'total_conflicts': len(self.conflicts),
            'suffixed_origins': sum(1 for c in self.conflicts if c.reason == SUFFIXED_ORIGIN),
            'occupied_names': sum(1 for c in self.conflicts if c.reason == OCCUPIED_NAME),
            'conflicts': [c.describe() for c in self.conflicts],
        }


class ContinueOnConflictsPolicy(CollectConflictsPolicy):
    """
    Policy that warns about conflicts and continues.

    Same bookkeeping as CollectConflictsPolicy, but each conflict is
    reported on stderr as it is found.
    """

    def __init__(self, verbose: bool = True):
        """
        Initialize the policy.

        Args:
            verbose: If True, print warnings to stderr when conflicts occur
        """
        super().__init__()
        self.verbose = verbose

    def handle(self, record: ConflictRecord) -> None:
        self._handle_common(record)
        if self.verbose:
            print(f"\nWARNING: Skipping {record.describe()}", file=sys.stderr)
