from __future__ import annotations

from collections import deque
from types import SimpleNamespace
from typing import Any

from google import genai
from google.genai import errors
import httpx
import pytest

from treelab.bst import build_bst
from treelab.explainer import (
    EXPLAIN_EMPTY_MESSAGE,
    EXPLAIN_FAILURE_MESSAGE,
    SEQUENCE_EMPTY_MESSAGE,
    SEQUENCE_FAILURE_MESSAGE,
    ExplanationUnavailableError,
    TreeExplainer,
)
from treelab.settings import ExplainerSettings

SETTINGS = ExplainerSettings(api_key="test-key", model="demo")


class _StubModels:
    def __init__(self, responses: deque[Any]) -> None:
        self._responses = responses
        self.calls: list[dict[str, Any]] = []

    async def generate_content(self, *, model: str, contents: str) -> Any:
        self.calls.append({"model": model, "contents": contents})
        result = self._responses.popleft()
        if isinstance(result, Exception):
            raise result
        return SimpleNamespace(text=result)


def _explainer(*responses: Any) -> tuple[TreeExplainer, _StubModels]:
    models = _StubModels(deque(responses))
    client = SimpleNamespace(aio=SimpleNamespace(models=models))
    return TreeExplainer(SETTINGS, client=client), models


@pytest.mark.asyncio
async def test_explain_structure_sends_tree_snapshot() -> None:
    explainer, models = _explainer("The root is 21.")
    root = build_bst([21, 10, 33])

    text = await explainer.explain_structure("Problem 2", root, "Why 21?")

    assert text == "The root is 21."
    call = models.calls[0]
    assert call["model"] == "demo"
    assert "Problem: Problem 2" in call["contents"]
    assert "User Question: Why 21?" in call["contents"]
    assert root is not None and root.id in call["contents"]


@pytest.mark.asyncio
async def test_explain_structure_falls_back_on_api_error(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level("ERROR", logger="treelab.explainer")
    failure = errors.ServerError(
        503, {"error": {"code": 503, "message": "unavailable", "status": "UNAVAILABLE"}}
    )
    explainer, _ = _explainer(failure)

    text = await explainer.explain_structure("P", None, "q")

    assert text == EXPLAIN_FAILURE_MESSAGE
    assert any("Tree explanation failed" in rec.message for rec in caplog.records)


@pytest.mark.asyncio
async def test_explain_structure_falls_back_on_transport_error() -> None:
    request = httpx.Request("POST", "http://llm.test")
    explainer, _ = _explainer(httpx.ConnectError("boom", request=request))

    assert await explainer.explain_structure("P", None, "q") == EXPLAIN_FAILURE_MESSAGE


@pytest.mark.asyncio
async def test_empty_model_text_uses_placeholder() -> None:
    explainer, _ = _explainer(None, "")

    assert await explainer.explain_structure("P", None, "q") == EXPLAIN_EMPTY_MESSAGE
    assert await explainer.solve_sequence("1, 2", "BST") == SEQUENCE_EMPTY_MESSAGE


@pytest.mark.asyncio
async def test_solve_sequence_prompt_and_failure() -> None:
    request = httpx.Request("POST", "http://llm.test")
    explainer, models = _explainer(httpx.ReadTimeout("slow", request=request))

    text = await explainer.solve_sequence("3, 1, 2", "AVL")

    assert text == SEQUENCE_FAILURE_MESSAGE
    prompt = models.calls[0]["contents"]
    assert "[3, 1, 2]" in prompt
    assert "how a AVL would be built" in prompt


@pytest.mark.asyncio
async def test_generate_requires_api_key() -> None:
    explainer = TreeExplainer(ExplainerSettings(api_key=""))
    with pytest.raises(ExplanationUnavailableError):
        await explainer.generate("hello")
    assert await explainer.explain_structure("P", None, "q") == EXPLAIN_FAILURE_MESSAGE


@pytest.mark.asyncio
async def test_generate_returns_model_text() -> None:
    explainer, _ = _explainer("ab")
    assert await explainer.generate("hello") == "ab"


def test_sdk_client_is_created_lazily_from_settings() -> None:
    settings = ExplainerSettings(api_key="k", api_base="http://llm.test/", timeout=2.5)
    explainer = TreeExplainer(settings)

    client = explainer._get_client()

    assert isinstance(client, genai.Client)
    assert explainer._get_client() is client
