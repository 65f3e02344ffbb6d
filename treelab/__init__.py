"""Binary tree construction and mutation for the Tree Lab exercises."""

from .balanced import build_balanced, is_balanced
from .bst import build_bst, delete_value, delete_values, insert
from .problems import (
    DECISION_TREE,
    PROBLEMS,
    TreeProblem,
    TreeStep,
    TreeType,
    UnknownProblemError,
    build_decision_tree,
    compute_steps,
    get_problem,
)
from .tree_node import (
    TreeNode,
    count_nodes,
    in_order,
    render_tree,
    snapshot,
    snapshot_json,
    tree_height,
)

__all__ = [
    "DECISION_TREE",
    "PROBLEMS",
    "TreeNode",
    "TreeProblem",
    "TreeStep",
    "TreeType",
    "UnknownProblemError",
    "build_balanced",
    "build_bst",
    "build_decision_tree",
    "compute_steps",
    "count_nodes",
    "delete_value",
    "delete_values",
    "get_problem",
    "in_order",
    "insert",
    "is_balanced",
    "render_tree",
    "snapshot",
    "snapshot_json",
    "tree_height",
]
