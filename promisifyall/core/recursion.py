"""Bounded traversal of the target graph.

The graph is explicit: each TargetNode is an object whose own members get
wrappers, and edges lead from an object-shaped node to the classes it
exposes. Traversal is breadth-first and stops one level below the root.
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterator, List, Optional

from .reflector import (
    Member,
    MemberKind,
    enumerate_members,
    looks_like_constructor,
    lookup_chain,
    own_members,
)


class TargetShape(Enum):
    OBJECT = "object"   # Own members plus members inherited from its class
    CLASS = "class"     # Own namespace only: methods, statics, class methods


@dataclass
class TargetNode:
    """One object visited during a promisify_all call."""

    target: Any
    shape: TargetShape
    depth: int = 0
    parent: Optional['TargetNode'] = None
    via: Optional[str] = None   # Member name this node was reached through

    def members(self) -> List[Member]:
        if self.shape is TargetShape.CLASS:
            return own_members(self.target)
        return enumerate_members(self.target)

    def path(self) -> str:
        """Dotted path from the root, for log messages."""
        parts = []
        node = self
        while node is not None and node.via is not None:
            parts.append(node.via)
            node = node.parent
        return '.'.join(reversed(parts)) or '<root>'


class RecursionController:
    """Decides which nested targets are revisited.

    Only object-shaped nodes discover classes; a class node (including a
    root class) is a single unit of work. Classes the root itself inherits
    from are never visited, so promisifying an instance cannot mutate the
    class it shares with its siblings.

    Args:
        recurse_classes: Visit constructor-like classes found on the root
        accepts: Member predicate, called as accepts(name, value, target)
    """

    MAX_DEPTH = 1

    def __init__(self, recurse_classes: bool = True,
                 accepts: Optional[Callable[[str, Any, Any], bool]] = None):
        self.recurse_classes = recurse_classes
        self.accepts = accepts

    @staticmethod
    def root_node(target: Any) -> TargetNode:
        shape = TargetShape.CLASS if isinstance(target, type) else TargetShape.OBJECT
        return TargetNode(target, shape)

    def walk(self, target: Any) -> Iterator[TargetNode]:
        """Yield nodes breadth-first, root first."""
        root = self.root_node(target)
        excluded = {id(entry) for entry in lookup_chain(target)}
        visited = {id(target)}
        queue = deque([root])

        while queue:
            node = queue.popleft()
            yield node
            for child in self.children(node):
                if id(child.target) in visited or id(child.target) in excluded:
                    continue
                visited.add(id(child.target))
                queue.append(child)

    def children(self, node: TargetNode) -> Iterator[TargetNode]:
        """Nested classes to visit below ``node``."""
        if not self.should_explore(node):
            return
        for member in node.members():
            if member.kind is not MemberKind.CLASS:
                continue
            if not looks_like_constructor(member.raw):
                continue
            if self.accepts is not None and not self.accepts(member.name, member.raw, node.target):
                continue
            yield TargetNode(
                member.raw,
                TargetShape.CLASS,
                depth=node.depth + 1,
                parent=node,
                via=member.name,
            )

    def should_explore(self, node: TargetNode) -> bool:
        return (
            self.recurse_classes
            and node.shape is TargetShape.OBJECT
            and node.depth < self.MAX_DEPTH
        )
