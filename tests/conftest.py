"""Shared pytest fixtures for the polyembed test suite."""

from __future__ import annotations

import sys
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import structlog

# Every variable Settings reads; cleared so the developer's shell never leaks in.
_ENV_KEYS = [
    "MOCK_EMBEDDINGS",
    "EMBEDDING_PROVIDER",
    "OLLAMA_BASE_URL",
    "OLLAMA_EMBEDDING_MODEL",
    "OPENROUTER_API_KEY",
    "OPENROUTER_EMBEDDING_MODEL",
    "OPENROUTER_SITE_URL",
    "OPENROUTER_SITE_NAME",
    "OPENAI_API_KEY",
    "OPENAI_EMBEDDING_MODEL",
    "OPENAI_BASE_URL",
    "APP_ENV",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Clear provider variables and run from an empty directory (no stray .env)."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def logs_to_stderr():
    """Send structlog output to stderr so stdout carries only CLI JSON."""
    structlog.configure(logger_factory=structlog.PrintLoggerFactory(file=sys.stderr))
    yield
    structlog.reset_defaults()


@pytest.fixture
def make_response() -> Callable[..., httpx.Response]:
    """Build real ``httpx.Response`` objects bound to a POST request."""

    def _make(
        status_code: int = 200,
        payload: Any = None,
        url: str = "http://testserver/embeddings",
        text: str | None = None,
    ) -> httpx.Response:
        request = httpx.Request("POST", url)
        if text is not None:
            return httpx.Response(status_code, text=text, request=request)
        if payload is None:
            return httpx.Response(status_code, request=request)
        return httpx.Response(status_code, json=payload, request=request)

    return _make


@pytest.fixture
def http_client() -> MagicMock:
    """An injectable stand-in for ``httpx.AsyncClient`` with an async ``post``."""
    client = MagicMock(spec=httpx.AsyncClient)
    client.post = AsyncMock()
    client.aclose = AsyncMock()
    return client
