"""FastAPI service exposing laboratory problems and tree snapshots.

Renderers consume the ``root`` snapshots verbatim: every node carries an
integer ``value`` and a unique ``id`` and the structure is always a strict
tree. Explanation endpoints proxy to :class:`~treelab.explainer.TreeExplainer`
and always answer with text, falling back to a canned message when the model
is unavailable.
"""

from __future__ import annotations

from http import HTTPStatus
import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, Field, field_validator

from .balanced import build_balanced
from .bst import build_bst, delete_value
from .explainer import TreeExplainer
from .problems import PROBLEMS, UnknownProblemError, compute_steps, get_problem
from .tree_node import in_order

__all__ = [
    "BalancedRequest",
    "BstRequest",
    "ExplainRequest",
    "ExplanationResponse",
    "SequenceRequest",
    "create_app",
]

logger = logging.getLogger(__name__)


class BstRequest(BaseModel):
    """Payload describing a BST build followed by optional deletions."""

    values: List[int]
    deletions: List[int] = Field(default_factory=list)


class BalancedRequest(BaseModel):
    values: List[int]


class ExplainRequest(BaseModel):
    question: str
    step: int = Field(default=0, ge=0)

    @field_validator("question")
    @classmethod
    def _question_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("question must not be blank")
        return value


class SequenceRequest(BaseModel):
    sequence: str
    tree_type: str = "BST"


class ExplanationResponse(BaseModel):
    explanation: str


def _step_payload(label: str, root: Any) -> Dict[str, Any]:
    return {
        "label": label,
        "root": root.to_dict() if root is not None else None,
        "in_order": in_order(root),
    }


def create_app(explainer: Optional[TreeExplainer] = None) -> FastAPI:
    """Create a configured FastAPI application instance.

    When *explainer* is omitted one is built from ``ExplainerSettings.from_env``
    so invalid configuration fails at startup rather than per request.
    """

    app = FastAPI(title="Tree Lab")
    app.state.explainer = explainer if explainer is not None else TreeExplainer()

    def _explainer(request: Request) -> TreeExplainer:
        return request.app.state.explainer

    def _problem_or_404(problem_id: str):
        try:
            return get_problem(problem_id)
        except UnknownProblemError:
            logger.info("Requested unknown problem", extra={"problem_id": problem_id})
            raise HTTPException(HTTPStatus.NOT_FOUND, detail="Problem not found") from None

    @app.get("/health/live")
    async def live() -> dict[str, str]:
        return {"status": "alive"}

    @app.get("/problems")
    async def list_problems() -> List[Dict[str, Any]]:
        return [problem.as_dict() for problem in PROBLEMS]

    @app.get("/problems/{problem_id}")
    async def read_problem(problem_id: str) -> Dict[str, Any]:
        problem = _problem_or_404(problem_id)
        payload = problem.as_dict()
        payload["steps"] = [
            _step_payload(step.label, step.root) for step in compute_steps(problem)
        ]
        return payload

    @app.post("/trees/bst")
    async def build_bst_steps(body: BstRequest) -> Dict[str, Any]:
        root = build_bst(body.values)
        steps = [_step_payload("Initial BST", root)]
        for value in body.deletions:
            root = delete_value(root, value)
            steps.append(_step_payload(f"After deleting {value}", root))
        return {"steps": steps}

    @app.post("/trees/balanced")
    async def build_balanced_tree(body: BalancedRequest) -> Dict[str, Any]:
        return _step_payload("Balanced Tree", build_balanced(body.values))

    @app.post("/problems/{problem_id}/explain")
    async def explain_problem(
        problem_id: str, body: ExplainRequest, request: Request
    ) -> ExplanationResponse:
        problem = _problem_or_404(problem_id)
        steps = compute_steps(problem)
        if body.step >= len(steps):
            raise HTTPException(HTTPStatus.NOT_FOUND, detail="Step not found")
        text = await _explainer(request).explain_structure(
            problem.title, steps[body.step].root, body.question
        )
        return ExplanationResponse(explanation=text)

    @app.post("/sequences/explain")
    async def explain_sequence(body: SequenceRequest, request: Request) -> ExplanationResponse:
        text = await _explainer(request).solve_sequence(body.sequence, body.tree_type)
        return ExplanationResponse(explanation=text)

    return app
