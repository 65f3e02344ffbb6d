"""Height-balanced tree construction from arbitrary integer sequences.

``build_balanced`` sorts its input and recursively promotes the midpoint of
each slice to a subtree root. Every input value, duplicates included, becomes
exactly one node and the in-order traversal reproduces the sorted input. The
result is statically balanced; no rotations or balance factors are tracked.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .tree_node import TreeNode

__all__ = ["build_balanced", "is_balanced"]

logger = logging.getLogger(__name__)


def _build_from_sorted(values: Sequence[int]) -> Optional[TreeNode]:
    if not values:
        return None
    mid = len(values) // 2
    return TreeNode(
        values[mid],
        left=_build_from_sorted(values[:mid]),
        right=_build_from_sorted(values[mid + 1 :]),
    )


def build_balanced(values: Iterable[int]) -> Optional[TreeNode]:
    """Return a height-balanced tree holding every value in *values*."""

    ordered = sorted(values)
    logger.debug("Building balanced tree from %d values", len(ordered))
    return _build_from_sorted(ordered)


def is_balanced(root: Optional[TreeNode]) -> bool:
    """Return ``True`` when subtree heights differ by at most one at every node.

    Heights are computed bottom-up with an explicit stack and the walk stops
    at the first imbalanced node.
    """

    heights: Dict[int, int] = {}
    stack: List[Tuple[Optional[TreeNode], bool]] = [(root, False)]
    while stack:
        node, children_done = stack.pop()
        if node is None:
            continue
        if not children_done:
            stack.append((node, True))
            stack.append((node.right, False))
            stack.append((node.left, False))
            continue
        left = heights.pop(id(node.left), 0) if node.left is not None else 0
        right = heights.pop(id(node.right), 0) if node.right is not None else 0
        if abs(left - right) > 1:
            logger.debug("Imbalance at node %s (%d vs %d)", node.value, left, right)
            return False
        heights[id(node)] = max(left, right) + 1
    return True
