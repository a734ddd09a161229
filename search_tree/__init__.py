"""Binary search tree with balanced construction, traversals and rebalancing."""

from .node import Node, NodeView
from .rendering import render_branches
from .tree import (
    DuplicateValueError,
    ExistingValueError,
    IncomparableValueError,
    SearchTreeError,
    Tree,
    build_balanced,
)

__all__ = [
    "DuplicateValueError",
    "ExistingValueError",
    "IncomparableValueError",
    "Node",
    "NodeView",
    "SearchTreeError",
    "Tree",
    "build_balanced",
    "render_branches",
]
