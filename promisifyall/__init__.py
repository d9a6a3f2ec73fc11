"""promisifyall - callback to future conversion for whole APIs.

promisifyall walks an object, class or module and gives every
callback-accepting method a sibling that returns a future instead:

    from promisifyall import promisify_all

    promisify_all(legacy_client)
    result = await legacy_client.queryAsync("select 1")

The transformation is in place, idempotent, never reads properties or
other descriptors, and never mutates a class when an instance of it is
promisified.
"""

__version__ = "0.1.0"

from .api import promisify_all, plan_promisify_all, promisify
from .config import PromisifyConfig, DEFAULT_SUFFIX, default_filter
from .conflict_policies import (
    ConflictPolicy,
    FailFastPolicy,
    CollectConflictsPolicy,
    ContinueOnConflictsPolicy,
)
from .errors import (
    PromisifyError,
    NamingConflict,
    CallbackError,
    ReadOnlyTargetError,
    ConflictRecord,
)
from .planning import PromisificationPlan, PlannedWrapper
from .core import WrapperBinding, binding_of, is_generated

__all__ = [
    "__version__",
    # Entry points
    "promisify_all",
    "plan_promisify_all",
    "promisify",
    # Configuration
    "PromisifyConfig",
    "DEFAULT_SUFFIX",
    "default_filter",
    # Conflict policies
    "ConflictPolicy",
    "FailFastPolicy",
    "CollectConflictsPolicy",
    "ContinueOnConflictsPolicy",
    # Errors
    "PromisifyError",
    "NamingConflict",
    "CallbackError",
    "ReadOnlyTargetError",
    "ConflictRecord",
    # Planning
    "PromisificationPlan",
    "PlannedWrapper",
    # Markers
    "WrapperBinding",
    "binding_of",
    "is_generated",
]
