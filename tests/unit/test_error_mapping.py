"""Unit tests for the shared transport-error classification."""

from __future__ import annotations

import httpx
import openai
import pytest

from polyembed.utils.error_mapping import classify_provider_error
from polyembed.utils.errors import (
    AuthenticationError,
    BackendUnreachableError,
    InvalidResponseError,
    ModelNotFoundError,
    PolyEmbedError,
    ProviderError,
    QuotaExceededError,
    RateLimitError,
)

_URL = "https://openrouter.ai/api/v1/embeddings"


def _status_error(status_code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("POST", _URL)
    response = httpx.Response(status_code, request=request, json={"error": "boom"})
    return httpx.HTTPStatusError(f"HTTP {status_code}", request=request, response=response)


def _classify(exc: Exception, **overrides) -> PolyEmbedError:
    kwargs = {
        "provider_name": "openrouter",
        "label": "OpenRouter",
        "model": "openai/text-embedding-3-small",
        "endpoint": _URL,
    }
    kwargs.update(overrides)
    return classify_provider_error(exc, **kwargs)


class TestHttpxStatusMapping:
    @pytest.mark.parametrize(
        ("status_code", "expected"),
        [
            (401, AuthenticationError),
            (402, QuotaExceededError),
            (404, ModelNotFoundError),
            (429, RateLimitError),
            (500, ProviderError),
            (503, ProviderError),
        ],
    )
    def test_status_to_error_type(self, status_code: int, expected: type) -> None:
        error = _classify(_status_error(status_code))
        assert type(error) is expected
        assert error.status_code == status_code
        assert error.provider_name == "openrouter"

    def test_message_names_provider_model_and_endpoint(self) -> None:
        error = _classify(_status_error(500))
        text = str(error)
        assert text.startswith("[openrouter] ")
        assert "OpenRouter" in text
        assert "openai/text-embedding-3-small" in text
        assert _URL in text
        assert "500" in text

    def test_rate_limit_message(self) -> None:
        error = _classify(_status_error(429))
        assert "rate limit" in str(error)

    def test_not_found_hint_appended(self) -> None:
        error = _classify(_status_error(404), not_found_hint="try 'ollama pull nomic-embed-text'")
        assert "ollama pull nomic-embed-text" in str(error)


class TestHttpxConnectionMapping:
    def test_connect_error_is_unreachable(self) -> None:
        exc = httpx.ConnectError("[Errno 111] Connection refused")
        error = _classify(exc, endpoint="http://localhost:11434/api/embeddings")
        assert isinstance(error, BackendUnreachableError)
        assert "not reachable" in str(error)
        assert "localhost:11434" in str(error)
        assert "Connection refused" in str(error)

    def test_connect_timeout_is_unreachable(self) -> None:
        assert isinstance(_classify(httpx.ConnectTimeout("timed out")), BackendUnreachableError)

    def test_read_timeout_is_provider_error(self) -> None:
        error = _classify(httpx.ReadTimeout("read timed out"))
        assert type(error) is ProviderError
        assert "timed out" in str(error)

    def test_other_transport_error(self) -> None:
        error = _classify(httpx.RemoteProtocolError("peer closed connection"))
        assert type(error) is ProviderError
        assert "peer closed connection" in str(error)


class TestOpenAISdkMapping:
    def _response(self, status_code: int) -> httpx.Response:
        return httpx.Response(
            status_code, request=httpx.Request("POST", "https://api.openai.com/v1/embeddings")
        )

    def test_rate_limit(self) -> None:
        exc = openai.RateLimitError("Too many requests", response=self._response(429), body=None)
        error = _classify(exc, provider_name="openai", label="OpenAI")
        assert isinstance(error, RateLimitError)
        assert error.status_code == 429

    def test_authentication(self) -> None:
        exc = openai.AuthenticationError("bad key", response=self._response(401), body=None)
        assert isinstance(_classify(exc), AuthenticationError)

    def test_connection_error(self) -> None:
        exc = openai.APIConnectionError(request=httpx.Request("POST", "https://api.openai.com"))
        assert isinstance(_classify(exc), BackendUnreachableError)

    def test_timeout_error(self) -> None:
        exc = openai.APITimeoutError(request=httpx.Request("POST", "https://api.openai.com"))
        error = _classify(exc)
        assert type(error) is ProviderError
        assert "timed out" in str(error)


class TestNonTransportErrors:
    def test_existing_polyembed_error_passes_through(self) -> None:
        original = InvalidResponseError("bad payload", provider_name="ollama")
        assert _classify(original) is original

    def test_value_error_is_invalid_response(self) -> None:
        error = _classify(ValueError("Expecting value: line 1 column 1"))
        assert isinstance(error, InvalidResponseError)
        assert "Expecting value" in str(error)

    def test_unexpected_error_is_provider_error(self) -> None:
        error = _classify(RuntimeError("something odd"))
        assert type(error) is ProviderError
        assert "something odd" in str(error)
        assert error.status_code is None
