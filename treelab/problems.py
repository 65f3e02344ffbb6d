"""Laboratory problem catalogue and the static decision-tree fixture.

Each :class:`TreeProblem` describes one exercise; :func:`compute_steps` turns
it into labelled tree snapshots. Steps are recomputed from scratch on every
call so callers are free to mutate the trees they receive.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .balanced import build_balanced
from .bst import build_bst, delete_values
from .tree_node import TreeNode

__all__ = [
    "DECISION_TREE",
    "PROBLEMS",
    "TreeProblem",
    "TreeStep",
    "TreeType",
    "UnknownProblemError",
    "build_decision_tree",
    "compute_steps",
    "get_problem",
]

logger = logging.getLogger(__name__)


class TreeType(str, Enum):
    DECISION = "DECISION"
    BST = "BST"
    AVL = "AVL"


class UnknownProblemError(KeyError):
    """Raised when a problem identifier is not part of the catalogue."""


# Binary-search decision tree over the sorted data of problem 1, midpoint (L+H)//2.
DECISION_TREE: Mapping[str, Any] = {
    "value": 59,
    "id": "1",
    "left": {
        "value": 25,
        "id": "2",
        "left": {"value": 11, "id": "3", "right": {"value": 13, "id": "4"}},
        "right": {
            "value": 44,
            "id": "5",
            "left": {"value": 37, "id": "6"},
            "right": {"value": 51, "id": "7"},
        },
    },
    "right": {
        "value": 71,
        "id": "8",
        "left": {"value": 63, "id": "9", "right": {"value": 67, "id": "10"}},
        "right": {
            "value": 83,
            "id": "11",
            "left": {"value": 79, "id": "12"},
            "right": {"value": 101, "id": "13"},
        },
    },
}


def build_decision_tree() -> TreeNode:
    """Return a fresh copy of the decision-tree fixture."""

    return TreeNode.from_dict(DECISION_TREE)


@dataclass(frozen=True)
class TreeStep:
    """A labelled tree snapshot shown as one stage of a problem."""

    label: str
    root: Optional[TreeNode]

    def as_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "root": self.root.to_dict() if self.root is not None else None,
        }


@dataclass(frozen=True)
class TreeProblem:
    """Description of a single laboratory exercise."""

    id: str
    title: str
    description: str
    type: TreeType
    initial_data: Tuple[int, ...]
    deletions: Tuple[int, ...] = ()

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "type": self.type.value,
            "initial_data": list(self.initial_data),
            "deletions": list(self.deletions),
        }


PROBLEMS: Tuple[TreeProblem, ...] = (
    TreeProblem(
        id="q1",
        title="Problem 1: Decision Tree",
        description=(
            "A binary search decision tree based on the data: 11, 13, 25, 37, 44, "
            "51, 59, 63, 67, 71, 79, 83, 101. The midpoint logic (L+H)//2 "
            "determines nodes."
        ),
        type=TreeType.DECISION,
        initial_data=(11, 13, 25, 37, 44, 51, 59, 63, 67, 71, 79, 83, 101),
    ),
    TreeProblem(
        id="q2",
        title="Problem 2: BST Operations",
        description=(
            "Initial sequence: 21, 33, 10, 5, 9, 37, 35, 29, 17, 55, 20. Explore "
            "the tree before and after deleting root 21, then 37 and 55."
        ),
        type=TreeType.BST,
        initial_data=(21, 33, 10, 5, 9, 37, 35, 29, 17, 55, 20),
        deletions=(21, 37, 55),
    ),
    TreeProblem(
        id="q3",
        title="Problem 3: Final AVL Tree",
        description=(
            "Visualizing the final state of an AVL tree built from a decreasing "
            "sequence: 23, 21, 19, ..., 1. Shows a perfectly balanced structure."
        ),
        type=TreeType.AVL,
        initial_data=tuple(23 - i * 2 for i in range(12)),
    ),
)


def get_problem(problem_id: str) -> TreeProblem:
    """Return the catalogue entry for *problem_id*."""

    for problem in PROBLEMS:
        if problem.id == problem_id:
            return problem
    raise UnknownProblemError(problem_id)


def _deletion_label(deletions: Tuple[int, ...]) -> str:
    return "After Deletions (" + ", ".join(str(value) for value in deletions) + ")"


def compute_steps(problem: TreeProblem) -> List[TreeStep]:
    """Return the ordered tree snapshots for *problem*."""

    logger.debug("Computing steps for %s", problem.id)
    if problem.type is TreeType.DECISION:
        return [TreeStep("Full Tree", build_decision_tree())]
    if problem.type is TreeType.BST:
        steps = [TreeStep("Initial BST", build_bst(problem.initial_data))]
        if problem.deletions:
            after = delete_values(build_bst(problem.initial_data), problem.deletions)
            steps.append(TreeStep(_deletion_label(problem.deletions), after))
        return steps
    return [TreeStep("Final AVL State", build_balanced(problem.initial_data))]
