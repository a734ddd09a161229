"""Node types backing :class:`search_tree.tree.Tree`.

``Node`` is the mutable vertex owned by a tree. Callers never receive one
directly; lookups hand out a ``NodeView`` instead, which exposes the value and
the shape below it without any way to rewire the structure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")

__all__ = ["Node", "NodeView"]


@dataclass(slots=True, eq=False)
class Node(Generic[T]):
    """Single tree vertex owning at most two children."""

    value: T
    left: Optional["Node[T]"] = None
    right: Optional["Node[T]"] = None


class NodeView(Generic[T]):
    """Read-only handle onto a node inside a tree.

    Two views are equal when they wrap the same node. A view taken before a
    ``remove`` may describe a detached node afterwards; it stays readable but
    no longer reflects the tree.
    """

    __slots__ = ("_node",)

    def __init__(self, node: Node[T]) -> None:
        self._node = node

    @classmethod
    def wrap(cls, node: Optional[Node[T]]) -> Optional["NodeView[T]"]:
        """Return a view of *node*, or ``None`` when there is no node."""

        return None if node is None else cls(node)

    @property
    def value(self) -> T:
        return self._node.value

    @property
    def left(self) -> Optional["NodeView[T]"]:
        return NodeView.wrap(self._node.left)

    @property
    def right(self) -> Optional["NodeView[T]"]:
        return NodeView.wrap(self._node.right)

    @property
    def is_leaf(self) -> bool:
        return self._node.left is None and self._node.right is None

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, NodeView):
            return NotImplemented
        return self._node is other._node

    def __hash__(self) -> int:
        return id(self._node)

    def __repr__(self) -> str:
        left = None if self._node.left is None else self._node.left.value
        right = None if self._node.right is None else self._node.right.value
        return f"NodeView(value={self.value!r}, left={left!r}, right={right!r})"


def unwrap(view: Optional[NodeView[T]]) -> Optional[Node[T]]:
    """Return the node behind *view* for use inside the package."""

    return None if view is None else view._node
