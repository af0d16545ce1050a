"""Custom exception hierarchy for polyembed.

All library exceptions inherit from :class:`PolyEmbedError`, which carries an
optional ``provider_name`` so callers can identify which embedding backend
(e.g. "ollama", "openrouter", "openai") caused the failure, and an optional
``status_code`` holding the HTTP status returned by that backend.

The hierarchy is organized by failure cause:

    PolyEmbedError  (base -- catch-all for any polyembed error)
    +-- ConfigurationError         (construction-time: missing credential, bad option)
    +-- UnregisteredProviderError  (registry lookup for an unknown provider name)
    +-- BackendUnreachableError    (connection refused / host not reachable)
    +-- AuthenticationError        (HTTP 401: credentials rejected)
    +-- QuotaExceededError         (HTTP 402: billing / insufficient credits)
    +-- ModelNotFoundError         (HTTP 404: model unknown to the backend)
    +-- RateLimitError             (HTTP 429: throttled)
    +-- InvalidResponseError       (payload missing, empty, or not a list of numbers)
    +-- ProviderError              (any other transport or protocol failure)

Callers can handle errors at exactly the right level -- e.g. fall back to
another provider on BackendUnreachableError, or abort on ConfigurationError.
"""

from __future__ import annotations


class PolyEmbedError(Exception):
    """Base exception for all polyembed errors.

    Every subclass carries a human-readable ``message``, an optional
    ``provider_name`` and an optional ``status_code``.  The ``__str__``
    method prefixes the provider name in brackets for log scanning,
    e.g. ``[openrouter] OpenRouter rate limit exceeded``.
    """

    default_message = "An unexpected embedding error occurred"

    def __init__(
        self,
        message: str | None = None,
        provider_name: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self._message = message or self.default_message
        self._provider_name = provider_name
        self._status_code = status_code
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    @property
    def status_code(self) -> int | None:
        return self._status_code

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Construction / lookup errors
# ---------------------------------------------------------------------------


class ConfigurationError(PolyEmbedError):
    """Raised when a provider is built with invalid or missing configuration."""

    default_message = "Invalid or missing embedding provider configuration"


class UnregisteredProviderError(PolyEmbedError):
    """Raised when the registry has no builder for the requested provider name."""

    default_message = "Embedding provider is not registered"


# ---------------------------------------------------------------------------
# Per-call backend errors
# ---------------------------------------------------------------------------


class BackendUnreachableError(PolyEmbedError):
    """Raised when the backend cannot be contacted (e.g. connection refused)."""

    default_message = "Embedding backend is unreachable"


class AuthenticationError(PolyEmbedError):
    """Raised when the backend rejects the configured credentials."""

    default_message = "Embedding backend authentication failed"


class QuotaExceededError(PolyEmbedError):
    """Raised when the account has run out of credits or quota."""

    default_message = "Embedding backend quota exceeded"


class ModelNotFoundError(PolyEmbedError):
    """Raised when the requested model is unknown to the backend."""

    default_message = "Embedding model not found"


class RateLimitError(PolyEmbedError):
    """Raised when the backend throttles the request.

    No retry is attempted; callers decide whether to back off.
    """

    default_message = "Embedding backend rate limit exceeded"


class InvalidResponseError(PolyEmbedError):
    """Raised when the backend payload is malformed or lacks a usable vector."""

    default_message = "Invalid response from embedding backend"


class ProviderError(PolyEmbedError):
    """Catch-all for transport or protocol failures not covered above."""

    default_message = "Embedding backend request failed"
