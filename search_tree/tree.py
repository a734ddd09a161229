"""Binary search tree with balanced construction and on-demand rebalancing.

The tree is built from an arbitrary collection of orderable values by sorting,
dropping duplicates and repeatedly promoting the median of each range to a
subtree root, which yields a height of ``floor(log2(n))``. After construction
the structure is mutated one value at a time:

* ``insert`` attaches a new leaf and rejects values that are already present
  with :class:`DuplicateValueError`.
* ``remove`` unlinks a node, replacing a two-child node's value with its
  in-order successor. Removing an absent value is a no-op.
* ``rebalance`` rebuilds the whole structure from the in-order sequence.

Neither mutation keeps the tree balanced; ``is_balanced`` reports the current
state. Lookups return :class:`~search_tree.node.NodeView` handles so callers
can inspect the structure without being able to rewire it.

Every walk below the root uses an explicit stack or loop, so skewed trees built
from long sorted insert sequences never hit the interpreter's recursion limit.
Only the balanced build recurses, and its depth is logarithmic.
"""

from __future__ import annotations

from collections import deque
import logging
from typing import Any, Deque, Generic, Iterable, List, Optional, Tuple, TypeVar

from .node import Node, NodeView, unwrap

logger = logging.getLogger(__name__)

T = TypeVar("T")

__all__ = [
    "DuplicateValueError",
    "ExistingValueError",
    "IncomparableValueError",
    "SearchTreeError",
    "Tree",
    "build_balanced",
]


class SearchTreeError(Exception):
    """Base class for errors raised by :class:`Tree`."""


class DuplicateValueError(SearchTreeError, ValueError):
    """Raised when inserting a value the tree already holds."""


ExistingValueError = DuplicateValueError


class IncomparableValueError(SearchTreeError, TypeError):
    """Raised when a value cannot be ordered against the tree's values."""


BalanceResult = Tuple[bool, int]


def _require_orderable(value: Any) -> None:
    # NaN is unequal to itself and has no place in a total order.
    if value != value:
        raise IncomparableValueError(f"{value!r} is not equal to itself")


def _compare(value: Any, other: Any) -> int:
    """Return -1, 0 or 1 as *value* sorts before, equal to or after *other*."""

    _require_orderable(value)
    try:
        if value == other:
            return 0
        return -1 if value < other else 1
    except TypeError as exc:
        raise IncomparableValueError(
            f"Cannot order {value!r} against {other!r}"
        ) from exc


def _sorted_unique(values: Iterable[T]) -> List[T]:
    try:
        ordered = sorted(values)
    except TypeError as exc:
        raise IncomparableValueError("Tree values must be mutually orderable") from exc

    unique: List[T] = []
    for value in ordered:
        _require_orderable(value)
        if not unique or _compare(unique[-1], value) != 0:
            unique.append(value)
    return unique


def _build_sorted(values: List[T], start: int, stop: int) -> Optional[Node[T]]:
    """Build a subtree from the sorted, duplicate-free ``values[start:stop]``."""

    if start >= stop:
        return None
    middle = start + (stop - start) // 2
    return Node(
        values[middle],
        left=_build_sorted(values, start, middle),
        right=_build_sorted(values, middle + 1, stop),
    )


def build_balanced(values: Iterable[T]) -> Optional[Node[T]]:
    """Return the root of a balanced tree holding the distinct *values*.

    ``None`` is returned for an empty collection. Mixed values that cannot be
    ordered against each other raise :class:`IncomparableValueError`.
    """

    ordered = _sorted_unique(values)
    return _build_sorted(ordered, 0, len(ordered))


def _leftmost(node: Node[T]) -> Node[T]:
    while node.left is not None:
        node = node.left
    return node


def _detach(subtree: Optional[Node[T]], value: T) -> Tuple[Optional[Node[T]], bool]:
    """Remove *value* from *subtree*.

    Returns the subtree's new root, which the caller links back into its own
    child slot, and whether a node was removed.
    """

    parent: Optional[Node[T]] = None
    went_left = False
    node = subtree
    while node is not None:
        order = _compare(value, node.value)
        if order == 0:
            break
        parent, went_left = node, order < 0
        node = node.left if went_left else node.right

    if node is None:
        return subtree, False

    replacement = _splice(node)
    if parent is None:
        return replacement, True
    if went_left:
        parent.left = replacement
    else:
        parent.right = replacement
    return subtree, True


def _splice(node: Node[T]) -> Optional[Node[T]]:
    """Return whatever takes *node*'s place once its value is dropped."""

    if node.left is None:
        return node.right
    if node.right is None:
        return node.left

    # The successor has no left child, so detaching it splices immediately.
    successor = _leftmost(node.right)
    node.value = successor.value
    node.right, _ = _detach(node.right, successor.value)
    return node


def _post_order_nodes(node: Optional[Node[T]]) -> List[Node[T]]:
    if node is None:
        return []
    ordered: List[Node[T]] = []
    stack: List[Node[T]] = [node]
    while stack:
        current = stack.pop()
        ordered.append(current)
        if current.left is not None:
            stack.append(current.left)
        if current.right is not None:
            stack.append(current.right)
    ordered.reverse()
    return ordered


def _check_height(node: Optional[Node[T]]) -> BalanceResult:
    """Return whether *node*'s subtree is height-balanced, and its height.

    Heights are gathered in one post-order pass instead of being recomputed
    for every ancestor.
    """

    heights: dict[int, int] = {}
    balanced = True
    for current in _post_order_nodes(node):
        left = -1 if current.left is None else heights[id(current.left)]
        right = -1 if current.right is None else heights[id(current.right)]
        if abs(left - right) > 1:
            balanced = False
        heights[id(current)] = 1 + max(left, right)
    return balanced, -1 if node is None else heights[id(node)]


class Tree(Generic[T]):
    """Binary search tree over a single orderable value type."""

    __slots__ = ("_root", "_size")

    def __init__(self, values: Optional[Iterable[T]] = None) -> None:
        self._root: Optional[Node[T]] = None
        self._size = 0
        if values is not None:
            self.build(values)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    def build(self, values: Iterable[T]) -> None:
        """Replace the tree's contents with a balanced tree of *values*."""

        ordered = _sorted_unique(values)
        self._root = _build_sorted(ordered, 0, len(ordered))
        self._size = len(ordered)
        logger.debug(
            "Built tree from %d distinct values (height %d)",
            self._size,
            self.height(),
        )

    def rebalance(self) -> None:
        """Rebuild the tree so that it is balanced again.

        The in-order sequence is already sorted and duplicate-free, so it feeds
        the build step directly.
        """

        values = self.traverse_in_order()
        before = self.height()
        self._root = _build_sorted(values, 0, len(values))
        logger.debug(
            "Rebalanced %d values: height %d -> %d", len(values), before, self.height()
        )

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def insert(self, value: T) -> None:
        """Attach *value* as a new leaf.

        Raises :class:`DuplicateValueError` when *value* is already stored; the
        tree is left untouched in that case so callers can catch and carry on.
        """

        _require_orderable(value)
        if self._root is None:
            self._root = Node(value)
            self._size = 1
            return

        node = self._root
        while True:
            order = _compare(value, node.value)
            if order == 0:
                logger.debug("Rejected duplicate value %r", value)
                raise DuplicateValueError(f"Value {value!r} already exists in the tree")
            if order < 0:
                if node.left is None:
                    node.left = Node(value)
                    break
                node = node.left
            else:
                if node.right is None:
                    node.right = Node(value)
                    break
                node = node.right
        self._size += 1

    def remove(self, value: T) -> Optional[NodeView[T]]:
        """Remove *value* if present and return the tree's root afterwards.

        Absent values are ignored and the returned root is unchanged.
        """

        self._root, removed = _detach(self._root, value)
        if removed:
            self._size -= 1
        else:
            logger.debug("Value %r not present; nothing removed", value)
        return self.root

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def root(self) -> Optional[NodeView[T]]:
        return NodeView.wrap(self._root)

    def find(self, value: T) -> Optional[NodeView[T]]:
        """Return a read-only view of the node holding *value*, or ``None``."""

        return NodeView.wrap(self._locate(value))

    def depth(self, value: T) -> int:
        """Return the number of edges from the root to *value*, or -1."""

        depth = 0
        node = self._root
        while node is not None:
            order = _compare(value, node.value)
            if order == 0:
                return depth
            node = node.left if order < 0 else node.right
            depth += 1
        return -1

    def height(self, start: Optional[NodeView[T]] = None) -> int:
        """Return the height of the tree, or of the subtree at *start*.

        An empty subtree has height -1 and a single leaf height 0.
        """

        _, height = _check_height(self._resolve(start))
        return height

    def is_balanced(self) -> bool:
        """Return ``True`` when no node's subtrees differ in height by more than one."""

        balanced, _ = _check_height(self._root)
        return balanced

    # ------------------------------------------------------------------
    # Traversals
    # ------------------------------------------------------------------
    def traverse_level_order(self) -> List[T]:
        if self._root is None:
            return []
        result: List[T] = []
        queue: Deque[Node[T]] = deque([self._root])
        while queue:
            node = queue.popleft()
            result.append(node.value)
            if node.left is not None:
                queue.append(node.left)
            if node.right is not None:
                queue.append(node.right)
        return result

    def traverse_in_order(self, start: Optional[NodeView[T]] = None) -> List[T]:
        result: List[T] = []
        stack: List[Node[T]] = []
        node = self._resolve(start)
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            result.append(node.value)
            node = node.right
        return result

    def traverse_pre_order(self, start: Optional[NodeView[T]] = None) -> List[T]:
        node = self._resolve(start)
        if node is None:
            return []
        result: List[T] = []
        stack: List[Node[T]] = [node]
        while stack:
            current = stack.pop()
            result.append(current.value)
            if current.right is not None:
                stack.append(current.right)
            if current.left is not None:
                stack.append(current.left)
        return result

    def traverse_post_order(self, start: Optional[NodeView[T]] = None) -> List[T]:
        return [node.value for node in _post_order_nodes(self._resolve(start))]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _resolve(self, start: Optional[NodeView[T]]) -> Optional[Node[T]]:
        return self._root if start is None else unwrap(start)

    def _locate(self, value: T) -> Optional[Node[T]]:
        node = self._root
        while node is not None:
            order = _compare(value, node.value)
            if order == 0:
                return node
            node = node.left if order < 0 else node.right
        return None

    def __len__(self) -> int:
        return self._size

    def __contains__(self, value: object) -> bool:
        try:
            return self._locate(value) is not None  # type: ignore[arg-type]
        except IncomparableValueError:
            return False

    def __repr__(self) -> str:
        return f"Tree({self.traverse_in_order()!r})"
