"""Promisification planning.

The PromisificationPlan validates a PromisifyConfig, walks the target graph
and decides, member by member, what to install. Nothing is written to the
target until planning has finished, so a conflict that aborts the call
leaves every object exactly as it was.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from .config import PromisifyConfig
from .core import (
    Member,
    MemberKind,
    NameResolver,
    RecursionController,
    ResolutionStatus,
    TargetNode,
    WrapperFactory,
    accepts_new_members,
    is_generated,
    own_dict,
)
from .errors import ReadOnlyTargetError

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass
class PlannedWrapper:
    """A wrapper that will be installed when the plan executes."""

    node: TargetNode
    member: Member
    wrapper_name: str
    regenerate: bool = False    # Replaces or shadows a stale wrapper

    @property
    def owner(self) -> Any:
        return self.node.target


class PromisificationPlan:
    """Validated plan for one promisify_all call.

    Usage:
        plan = PromisificationPlan(target, config)
        plan.plan()       # Inspect only; may raise NamingConflict
        plan.execute()    # Installs wrappers, returns target
    """

    def __init__(self, target: Any, config: Optional[PromisifyConfig] = None):
        """Create and validate a plan.

        Args:
            target: Object, class or module to promisify
            config: Options (defaults to PromisifyConfig())

        Raises:
            ValueError: If the configuration is invalid
        """
        self.target = target
        self.config = config or PromisifyConfig()

        errors = self.config.validate()
        if errors:
            raise ValueError(f"Invalid configuration: {', '.join(errors)}")

        self.resolver = NameResolver(self.config.suffix)
        self.factory = WrapperFactory(self.config.future_factory)
        self.controller = RecursionController(
            recurse_classes=self.config.recurse_classes,
            accepts=self.config.accepts,
        )
        self.policy = self.config.get_conflict_policy()

        self.wrappers: List[PlannedWrapper] = []
        self._planned = False

        self.stats = {
            'nodes_visited': 0,
            'wrappers_planned': 0,
            'wrappers_installed': 0,
            'wrappers_regenerated': 0,
            'already_wrapped': 0,
            'skipped': 0,
            'conflicts': 0,
        }

    def plan(self) -> List[PlannedWrapper]:
        """Walk the target graph and decide what to install.

        Returns:
            Planned wrappers in traversal order

        Raises:
            NamingConflict: From the conflict policy (FailFastPolicy by default)
            ReadOnlyTargetError: If wrappers are due on an object that
                cannot store attributes
        """
        if self._planned:
            return self.wrappers

        for node in self.controller.walk(self.target):
            self.stats['nodes_visited'] += 1
            logger.debug("Planning %s (%s)", node.path(), node.shape.value)
            first = len(self.wrappers)
            for member in node.members():
                self._plan_member(node, member)
            self._check_writable(node, self.wrappers[first:])

        self._planned = True
        self.stats['wrappers_planned'] = len(self.wrappers)
        return self.wrappers

    def _plan_member(self, node: TargetNode, member: Member) -> None:
        if member.kind is not MemberKind.DATA_FUNCTION:
            return
        if is_generated(member.raw):
            return
        if not self.config.accepts(member.name, member.function, node.target):
            self.stats['skipped'] += 1
            return

        resolution = self.resolver.resolve(node.target, member)

        if resolution.status is ResolutionStatus.CONFLICT:
            self.stats['conflicts'] += 1
            self.policy.handle(resolution.conflict)
            return

        if resolution.status is ResolutionStatus.ALREADY_WRAPPED:
            self.stats['already_wrapped'] += 1
            return

        self.wrappers.append(PlannedWrapper(
            node=node,
            member=member,
            wrapper_name=resolution.wrapper_name,
            regenerate=resolution.status is ResolutionStatus.STALE,
        ))

    def _check_writable(self, node: TargetNode, planned: List[PlannedWrapper]) -> None:
        if planned and not accepts_new_members(node.target):
            raise ReadOnlyTargetError(node.target, [p.wrapper_name for p in planned])

    def execute(self) -> Any:
        """Install every planned wrapper.

        Returns:
            The target, mutated in place

        Raises:
            ReadOnlyTargetError: If an owner refuses a wrapper. Wrappers
                installed earlier in the same call are removed again.
        """
        self.plan()

        installed = []
        for planned in self.wrappers:
            wrapper = self.factory.build(planned.owner, planned.member, planned.wrapper_name)
            previous = own_dict(planned.owner).get(planned.wrapper_name, _MISSING)
            try:
                setattr(planned.owner, planned.wrapper_name, wrapper)
            except (AttributeError, TypeError) as e:
                self._rollback(installed)
                raise ReadOnlyTargetError(planned.owner, [planned.wrapper_name], str(e)) from e
            installed.append((planned, previous))
            self.stats['wrappers_installed'] += 1
            if planned.regenerate:
                self.stats['wrappers_regenerated'] += 1
                logger.debug("Regenerated %s on %s", planned.wrapper_name, planned.node.path())
            else:
                logger.debug("Installed %s on %s", planned.wrapper_name, planned.node.path())

        return self.target

    def _rollback(self, installed) -> None:
        for planned, previous in reversed(installed):
            if previous is _MISSING:
                delattr(planned.owner, planned.wrapper_name)
            else:
                setattr(planned.owner, planned.wrapper_name, previous)
        self.stats['wrappers_installed'] = 0
        self.stats['wrappers_regenerated'] = 0
        logger.debug("Rolled back %d wrappers", len(installed))

    def describe(self) -> str:
        """Human-readable summary of the plan, for debugging."""
        self.plan()
        lines = [f"PromisificationPlan(suffix={self.config.suffix!r})"]
        for planned in self.wrappers:
            action = "regenerate" if planned.regenerate else "install"
            lines.append(f"  {action} {planned.node.path()}.{planned.wrapper_name}")
        return '\n'.join(lines)
