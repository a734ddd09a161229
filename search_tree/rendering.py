"""Text renderings of a :class:`~search_tree.tree.Tree`.

``render_branches`` draws the tree sideways with connector glyphs. The right
subtree is printed above its parent and the left subtree below, so reading the
output with the head tilted left shows the usual top-down shape.

The output is meant for people; tests of tree behaviour should use the
traversal methods instead.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple, Union

from .node import Node, NodeView, unwrap
from .tree import Tree

__all__ = ["EMPTY", "render_branches"]

EMPTY = "<empty>"

_RIGHT_CONNECTOR = "┌── "
_LEFT_CONNECTOR = "└── "
_CONTINUES = "│   "
_BLANK = "    "

Renderable = Union[Tree[Any], NodeView[Any], None]


def _root_of(source: Renderable) -> Optional[Node[Any]]:
    if isinstance(source, Tree):
        return unwrap(source.root)
    return unwrap(source)


def render_branches(source: Renderable) -> str:
    """Render *source* as indented branches, right subtree first.

    The root line uses the left-branch connector, matching the layout every
    left child receives.
    """

    root = _root_of(source)
    if root is None:
        return EMPTY

    lines: List[str] = []
    # (node, prefix, is_left, emit): emit entries print the node's own line.
    stack: List[Tuple[Node[Any], str, bool, bool]] = [(root, "", True, False)]
    while stack:
        node, prefix, is_left, emit = stack.pop()
        if emit:
            connector = _LEFT_CONNECTOR if is_left else _RIGHT_CONNECTOR
            lines.append(f"{prefix}{connector}{node.value}")
            continue

        if node.left is not None:
            stack.append(
                (node.left, prefix + (_BLANK if is_left else _CONTINUES), True, False)
            )
        stack.append((node, prefix, is_left, True))
        if node.right is not None:
            stack.append(
                (node.right, prefix + (_CONTINUES if is_left else _BLANK), False, False)
            )

    return "\n".join(lines)

