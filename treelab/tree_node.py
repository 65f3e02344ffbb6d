"""Binary tree node model shared by every builder in the lab.

The module owns the recursive ``TreeNode`` entity together with the read-only
helpers consumers rely on:

* ``in_order`` / ``count_nodes`` / ``tree_height`` – traversal metrics used by
  tests and the CLI harness.
* ``TreeNode.to_dict`` / ``TreeNode.from_dict`` – the serialisable snapshot
  handed to renderers and to the explanation service.
* ``render_tree`` – a deterministic level-order ASCII view in which missing
  children are shown as centred dots.

Node identifiers are opaque: they key external rendering state and never take
part in ordering decisions.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
import json
from typing import Any, Deque, Dict, List, Mapping, Optional
import uuid

__all__ = [
    "TreeNode",
    "count_nodes",
    "in_order",
    "new_node_id",
    "render_tree",
    "snapshot",
    "snapshot_json",
    "tree_height",
]


def new_node_id() -> str:
    """Return a fresh opaque node identifier."""

    return uuid.uuid4().hex


@dataclass(slots=True)
class TreeNode:
    """Node representation used by the BST and balanced builders."""

    value: int
    left: Optional["TreeNode"] = None
    right: Optional["TreeNode"] = None
    id: str = field(default_factory=new_node_id)

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise TypeError("TreeNode value must be an integer")

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-compatible snapshot rooted at this node.

        Absent children are omitted rather than serialised as ``null`` so the
        payload mirrors the shape renderers walk recursively.
        """

        payload: Dict[str, Any] = {"id": self.id, "value": self.value}
        if self.left is not None:
            payload["left"] = self.left.to_dict()
        if self.right is not None:
            payload["right"] = self.right.to_dict()
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "TreeNode":
        """Materialise a tree from a snapshot produced by :meth:`to_dict`."""

        if not isinstance(payload, Mapping):
            raise TypeError("tree payload must be a mapping")
        value = payload.get("value")
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("tree payload values must be integers")
        node_id = payload.get("id")
        if node_id is None:
            node_id = new_node_id()
        elif not isinstance(node_id, str):
            raise TypeError("tree payload ids must be strings")

        left_payload = payload.get("left")
        right_payload = payload.get("right")
        return cls(
            value,
            left=cls.from_dict(left_payload) if left_payload is not None else None,
            right=cls.from_dict(right_payload) if right_payload is not None else None,
            id=node_id,
        )


def in_order(root: Optional[TreeNode]) -> List[int]:
    """Return the values of *root* visited left, node, right."""

    result: List[int] = []
    stack: List[TreeNode] = []
    node = root
    while stack or node is not None:
        while node is not None:
            stack.append(node)
            node = node.left
        node = stack.pop()
        result.append(node.value)
        node = node.right
    return result


def count_nodes(root: Optional[TreeNode]) -> int:
    """Return the number of nodes reachable from *root*."""

    return len(in_order(root))


def tree_height(root: Optional[TreeNode]) -> int:
    """Return the number of levels in *root*; an empty tree has height ``0``."""

    if root is None:
        return 0
    height = 0
    queue: Deque[TreeNode] = deque([root])
    while queue:
        height += 1
        for _ in range(len(queue)):
            node = queue.popleft()
            if node.left is not None:
                queue.append(node.left)
            if node.right is not None:
                queue.append(node.right)
    return height


def snapshot(root: Optional[TreeNode]) -> Optional[Dict[str, Any]]:
    """Return the serialisable snapshot of *root*, ``None`` for an empty tree."""

    return root.to_dict() if root is not None else None


def snapshot_json(root: Optional[TreeNode]) -> str:
    """Return a deterministic JSON document describing *root*."""

    return json.dumps(snapshot(root), separators=(",", ":"), sort_keys=True)


def render_tree(root: Optional[TreeNode]) -> str:
    """Render *root* one level per line.

    Each row lists the children of the previous row's nodes from left to
    right, with ``·`` standing in for a missing child. Placeholders are never
    expanded further, so output grows with the node count rather than with
    ``2 ** depth`` and degenerate trees stay printable.
    """

    if root is None:
        return "<empty>"

    lines: List[str] = []
    row: List[Optional[TreeNode]] = [root]
    while any(node is not None for node in row):
        lines.append(" ".join("·" if node is None else str(node.value) for node in row))
        row = [
            child
            for node in row
            if node is not None
            for child in (node.left, node.right)
        ]
    return "\n".join(lines)
