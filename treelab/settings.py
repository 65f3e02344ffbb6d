"""Configuration for the tree explanation service."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Mapping, Optional

__all__ = [
    "DEFAULT_MODEL",
    "DEFAULT_TIMEOUT",
    "ExplainerSettings",
]

DEFAULT_MODEL = "gemini-3-flash-preview"
DEFAULT_TIMEOUT = 30.0

_API_KEY_VARIABLES = ("TREELAB_API_KEY", "GEMINI_API_KEY", "API_KEY")


@dataclass(frozen=True, slots=True)
class ExplainerSettings:
    """Connection settings for the language-model endpoint.

    An empty *api_base* keeps the SDK's default Gemini endpoint.
    """

    api_key: str = ""
    model: str = DEFAULT_MODEL
    api_base: str = ""
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError("timeout must be a positive number of seconds")
        if not self.model.strip():
            raise ValueError("model must be a non-empty string")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ExplainerSettings":
        """Load settings from ``TREELAB_*`` environment variables."""

        env = os.environ if environ is None else environ
        api_key = next((env[name] for name in _API_KEY_VARIABLES if env.get(name)), "")
        raw_timeout = env.get("TREELAB_TIMEOUT")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError as exc:
            raise ValueError(f"TREELAB_TIMEOUT must be a number, got {raw_timeout!r}") from exc
        return cls(
            api_key=api_key,
            model=env.get("TREELAB_MODEL") or DEFAULT_MODEL,
            api_base=env.get("TREELAB_API_BASE", ""),
            timeout=timeout,
        )
