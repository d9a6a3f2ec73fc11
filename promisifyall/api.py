"""High-level API for promisifyall.

Example:
    class Client:
        def fetch(self, key, callback):
            callback(None, key.upper())

    promisify_all(Client)

    async def main():
        return await Client().fetchAsync('a')   # 'A'
"""

from typing import Any, Callable, Optional

from .config import PromisifyConfig
from .core.factory import promisify
from .planning import PromisificationPlan


def promisify_all(target: Any, config: Optional[PromisifyConfig] = None, **options) -> Any:
    """Add a future-returning sibling for every callback method on target.

    Every qualifying member ``name`` gains ``name + suffix``, which calls the
    current ``name`` on its receiver with a trailing ``callback(error,
    *results)`` and returns a future for the outcome. Classes found on an
    object or module are processed one level deep. Repeated calls are
    no-ops unless an origin member has been replaced since.

    Args:
        target: Object, class, module or namespace to transform in place
        config: Full configuration; mutually exclusive with ``options``
        **options: Shortcut for PromisifyConfig fields (suffix, filter,
            future_factory, conflict_policy, recurse_classes). A custom
            ``filter`` is called as ``filter(name, value, target,
            passes_default)``: ``value`` is the member's callable (or class),
            ``target`` the object being scanned and ``passes_default`` the
            verdict of default_filter. Return ``passes_default and ...`` to
            narrow the default rather than replace it.

    Returns:
        ``target`` itself

    Raises:
        NamingConflict: If a wrapper name is unusable and the conflict
            policy fails fast. The target is left untouched in that case.
        ValueError: If the configuration is invalid
    """
    if config is not None and options:
        raise TypeError("pass either config or keyword options, not both")
    if config is None:
        config = PromisifyConfig(**options)
    return PromisificationPlan(target, config).execute()


def plan_promisify_all(target: Any, config: Optional[PromisifyConfig] = None, **options) -> PromisificationPlan:
    """Build and run the planning phase without installing anything.

    Useful to preview which wrappers promisify_all would create.
    """
    if config is not None and options:
        raise TypeError("pass either config or keyword options, not both")
    if config is None:
        config = PromisifyConfig(**options)
    plan = PromisificationPlan(target, config)
    plan.plan()
    return plan


__all__ = [
    'promisify_all',
    'plan_promisify_all',
    'promisify',
]
