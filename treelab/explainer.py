"""Natural-language tree explanations backed by a generative language model.

The explainer is a thin boundary around the Gemini ``generate_content`` API,
reached through the ``google-genai`` SDK. It serialises the current tree
snapshot into the prompt and hands back whatever text the model returns.
Failures of any kind (missing credentials, API errors, transport errors)
surface internally as :class:`ExplanationUnavailableError`; the public helpers
catch it, log it and return a user-facing fallback message so callers never
crash because the service is unreachable.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from google import genai
from google.genai import errors, types
import httpx

from .settings import ExplainerSettings
from .tree_node import TreeNode, snapshot_json

__all__ = [
    "EXPLAIN_EMPTY_MESSAGE",
    "EXPLAIN_FAILURE_MESSAGE",
    "SEQUENCE_EMPTY_MESSAGE",
    "SEQUENCE_FAILURE_MESSAGE",
    "ExplanationUnavailableError",
    "TreeExplainer",
]

logger = logging.getLogger(__name__)

EXPLAIN_EMPTY_MESSAGE = "No explanation available."
EXPLAIN_FAILURE_MESSAGE = "Sorry, I couldn't generate an explanation right now."
SEQUENCE_EMPTY_MESSAGE = "Calculation failed."
SEQUENCE_FAILURE_MESSAGE = "Error processing sequence."


class ExplanationUnavailableError(RuntimeError):
    """Raised when the explanation service cannot produce a response."""


class TreeExplainer:
    """Client producing student-friendly explanations of tree states.

    *client* accepts any object exposing ``aio.models.generate_content``; a
    :class:`google.genai.Client` is created from *settings* on first use when
    it is omitted.
    """

    def __init__(
        self,
        settings: Optional[ExplainerSettings] = None,
        *,
        client: Optional[Any] = None,
    ) -> None:
        self.settings = settings or ExplainerSettings.from_env()
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            http_options = types.HttpOptions(
                base_url=self.settings.api_base or None,
                timeout=int(self.settings.timeout * 1000),
            )
            self._client = genai.Client(api_key=self.settings.api_key, http_options=http_options)
        return self._client

    async def generate(self, prompt: str) -> str:
        """Send *prompt* to the model and return its raw text."""

        if not self.settings.api_key:
            raise ExplanationUnavailableError("No API key configured for the explanation service")

        logger.debug("Requesting explanation from %s", self.settings.model)
        try:
            response = await self._get_client().aio.models.generate_content(
                model=self.settings.model,
                contents=prompt,
            )
        except (errors.APIError, httpx.HTTPError) as exc:
            raise ExplanationUnavailableError(f"Explanation request failed: {exc}") from exc
        return response.text or ""

    async def explain_structure(
        self, problem_title: str, tree: Optional[TreeNode], question: str
    ) -> str:
        """Explain *tree* in the context of *problem_title* and *question*."""

        prompt = "\n".join(
            [
                "Context: We are studying data structures (Binary Trees).",
                f"Problem: {problem_title}",
                f"Tree Structure JSON: {snapshot_json(tree)}",
                f"User Question: {question}",
                "",
                "Task: Explain the tree logic, deletions, or balancing in a concise,"
                " student-friendly way.",
                "Limit response to 2 paragraphs. Use markdown formatting.",
            ]
        )
        try:
            text = await self.generate(prompt)
        except ExplanationUnavailableError:
            logger.exception("Tree explanation failed for %s", problem_title)
            return EXPLAIN_FAILURE_MESSAGE
        return text or EXPLAIN_EMPTY_MESSAGE

    async def solve_sequence(self, sequence: str, tree_type: str) -> str:
        """Describe step by step how a *tree_type* is built from *sequence*."""

        prompt = "\n".join(
            [
                f"Given this sequence of numbers: [{sequence}]",
                f"Task: Describe step-by-step how a {tree_type} would be built.",
                "For BST: Explain where each number goes.",
                "For AVL: Note where rotations occur.",
                "Format the output clearly as a list of steps.",
            ]
        )
        try:
            text = await self.generate(prompt)
        except ExplanationUnavailableError:
            logger.exception("Sequence walkthrough failed for %s", tree_type)
            return SEQUENCE_FAILURE_MESSAGE
        return text or SEQUENCE_EMPTY_MESSAGE
