"""Utility modules for polyembed.

- **errors** -- exception hierarchy rooted at PolyEmbedError; one subclass
  per failure cause so callers can react without string matching.
- **error_mapping** -- translation of httpx / openai SDK failures into that
  hierarchy, shared by every network-backed provider.
- **vectors** -- in-place L2 normalization and embedding payload validation.
- **logging** -- structlog setup with console/JSON dual rendering.
"""

from polyembed.utils.errors import (
    AuthenticationError,
    BackendUnreachableError,
    ConfigurationError,
    InvalidResponseError,
    ModelNotFoundError,
    PolyEmbedError,
    ProviderError,
    QuotaExceededError,
    RateLimitError,
    UnregisteredProviderError,
)
from polyembed.utils.vectors import normalize_vector

__all__ = [
    "AuthenticationError",
    "BackendUnreachableError",
    "ConfigurationError",
    "InvalidResponseError",
    "ModelNotFoundError",
    "PolyEmbedError",
    "ProviderError",
    "QuotaExceededError",
    "RateLimitError",
    "UnregisteredProviderError",
    "normalize_vector",
]
