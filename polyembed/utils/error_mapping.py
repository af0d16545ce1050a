"""Translate transport and payload failures into the polyembed error taxonomy.

Every network-backed provider funnels its exceptions through
:func:`classify_provider_error` so that callers see the same error types
regardless of whether the request went through ``httpx`` directly or through
the ``openai`` SDK.

Status mapping::

    401                 -> AuthenticationError
    402                 -> QuotaExceededError
    404                 -> ModelNotFoundError
    429                 -> RateLimitError
    connection refused  -> BackendUnreachableError
    anything else       -> ProviderError (status code preserved)
"""

from __future__ import annotations

import httpx
import openai

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


def _status_from_transport(exc: Exception) -> int | None:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code
    if isinstance(exc, openai.APIStatusError):
        return exc.status_code
    return None


def _is_connect_failure(exc: Exception) -> bool:
    # APITimeoutError subclasses APIConnectionError in the SDK.
    if isinstance(exc, openai.APITimeoutError):
        return False
    return isinstance(exc, (httpx.ConnectError, httpx.ConnectTimeout, openai.APIConnectionError))


def _is_timeout(exc: Exception) -> bool:
    return isinstance(exc, (httpx.TimeoutException, openai.APITimeoutError))


def classify_provider_error(
    exc: Exception,
    *,
    provider_name: str,
    label: str,
    model: str,
    endpoint: str,
    not_found_hint: str | None = None,
) -> PolyEmbedError:
    """Map *exc* to the matching :class:`PolyEmbedError` subclass.

    Parameters
    ----------
    exc:
        The exception raised while requesting or parsing an embedding.
    provider_name:
        Short provider identifier stored on the error (e.g. ``"ollama"``).
    label:
        Human-readable backend name used in the message (e.g. ``"Ollama"``).
    model:
        Model the request was made for.
    endpoint:
        URL (or base URL) the request was sent to.
    not_found_hint:
        Optional suffix appended to the 404 message, e.g. a pull command.

    Returns
    -------
    PolyEmbedError
        The classified error.  Callers raise it ``from exc``.
    """
    if isinstance(exc, PolyEmbedError):
        return exc

    target = f"model '{model}' at {endpoint}"
    status = _status_from_transport(exc)

    if status is not None:
        if status == 401:
            return AuthenticationError(
                message=f"{label} authentication failed for {target} (HTTP 401) - invalid API key",
                provider_name=provider_name,
                status_code=status,
            )
        if status == 402:
            return QuotaExceededError(
                message=f"{label} quota exceeded for {target} (HTTP 402) - insufficient credits",
                provider_name=provider_name,
                status_code=status,
            )
        if status == 404:
            message = f"{label} model '{model}' not found at {endpoint} (HTTP 404)"
            if not_found_hint:
                message = f"{message} - {not_found_hint}"
            return ModelNotFoundError(
                message=message,
                provider_name=provider_name,
                status_code=status,
            )
        if status == 429:
            return RateLimitError(
                message=f"{label} rate limit exceeded for {target} (HTTP 429) - try again later",
                provider_name=provider_name,
                status_code=status,
            )
        return ProviderError(
            message=f"{label} API error for {target} (HTTP {status}): {exc}",
            provider_name=provider_name,
            status_code=status,
        )

    if _is_connect_failure(exc):
        return BackendUnreachableError(
            message=f"{label} server not reachable at {endpoint} while requesting model '{model}': {exc}",
            provider_name=provider_name,
        )

    if _is_timeout(exc):
        return ProviderError(
            message=f"{label} request timed out for {target}: {exc}",
            provider_name=provider_name,
        )

    if isinstance(exc, (httpx.HTTPError, openai.APIError)):
        return ProviderError(
            message=f"{label} transport error for {target}: {exc}",
            provider_name=provider_name,
        )

    # Not from the transport layer: malformed JSON or an unexpected payload shape.
    if isinstance(exc, (ValueError, TypeError, KeyError)):
        return InvalidResponseError(
            message=f"Invalid response from {label} for {target}: {exc}",
            provider_name=provider_name,
        )

    return ProviderError(
        message=f"Error generating {label} embedding for {target}: {exc}",
        provider_name=provider_name,
    )
