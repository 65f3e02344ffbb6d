"""Binary search tree construction and deletion.

``build_bst`` inserts values strictly in input order and silently drops
duplicates, so the resulting tree holds each distinct value exactly once.
``delete_value`` removes a single value and promotes the in-order successor
when the target has two children; the promoted-into node keeps its ``id``.

Both operations mutate the tree in place and return the authoritative root.
Callers must adopt the returned root because deleting the root of a tree with
fewer than two children hands ownership to one of its subtrees. Descent is
iterative so degenerate trees built from sorted input are handled at any depth.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .tree_node import TreeNode

__all__ = ["build_bst", "delete_value", "delete_values", "insert"]

logger = logging.getLogger(__name__)


def insert(node: Optional[TreeNode], value: int) -> TreeNode:
    """Insert *value* below *node* and return the subtree root.

    An absent *node* yields a new leaf. Values equal to an existing node are a
    no-op: no node is created and the tree shape does not change.
    """

    if node is None:
        return TreeNode(value)

    cursor = node
    while True:
        if value < cursor.value:
            if cursor.left is None:
                cursor.left = TreeNode(value)
                return node
            cursor = cursor.left
        elif value > cursor.value:
            if cursor.right is None:
                cursor.right = TreeNode(value)
                return node
            cursor = cursor.right
        else:
            logger.debug("Dropping duplicate value %d", value)
            return node


def build_bst(values: Iterable[int]) -> Optional[TreeNode]:
    """Build a binary search tree by inserting *values* in order."""

    root: Optional[TreeNode] = None
    for value in values:
        root = insert(root, value)
    return root


def delete_value(root: Optional[TreeNode], value: int) -> Optional[TreeNode]:
    """Remove *value* from the tree rooted at *root* and return the new root.

    Deleting from an empty tree or deleting a value that is not present leaves
    the structure untouched. No rebalancing is performed.
    """

    parent: Optional[TreeNode] = None
    node = root
    while node is not None and node.value != value:
        parent = node
        node = node.left if value < node.value else node.right

    if node is None:
        logger.debug("Value %d not present; tree unchanged", value)
        return root

    if node.left is not None and node.right is not None:
        # Successor is the leftmost node of the right subtree; it has no left child.
        successor_parent = node
        successor = node.right
        while successor.left is not None:
            successor_parent = successor
            successor = successor.left
        logger.debug("Promoting successor %d into node %s", successor.value, node.id)
        node.value = successor.value
        if successor_parent is node:
            successor_parent.right = successor.right
        else:
            successor_parent.left = successor.right
        return root

    replacement = node.right if node.left is None else node.left
    if parent is None:
        return replacement
    if parent.left is node:
        parent.left = replacement
    else:
        parent.right = replacement
    return root


def delete_values(root: Optional[TreeNode], values: Iterable[int]) -> Optional[TreeNode]:
    """Apply :func:`delete_value` for each of *values* in order."""

    for value in values:
        root = delete_value(root, value)
    return root
