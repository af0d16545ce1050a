"""OpenAI embedding provider adapter.

Wraps the ``openai`` async client to implement :class:`IEmbeddingProvider`.
Supports real OpenAI and OpenAI-compatible hosts via ``base_url`` /
``OPENAI_BASE_URL``.  Single and batch requests each map to one
``embeddings.create`` call.  SDK retries are disabled: every call is a
single best-effort request.
"""

from __future__ import annotations

from typing import Any

import openai
import structlog

from polyembed.config.settings import Settings
from polyembed.interfaces.embedding_provider import IEmbeddingProvider
from polyembed.models.embedding import EmbeddingVector, ModelInfo
from polyembed.utils.error_mapping import classify_provider_error
from polyembed.utils.errors import ConfigurationError, InvalidResponseError
from polyembed.utils.vectors import coerce_embedding, normalize_vector

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_MODEL = "text-embedding-3-small"
_DEFAULT_DIMENSIONS = 1536
_DEFAULT_TIMEOUT_MS = 30000
_DEFAULT_ENDPOINT = "https://api.openai.com/v1"
_VERSION = "1.0.0"
_LABEL = "OpenAI"

# Known embedding model dimensions.
_MODEL_DIMENSIONS: dict[str, int] = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
}


class OpenAIEmbeddingProvider(IEmbeddingProvider):
    """Embedding provider backed by an OpenAI-compatible embeddings API.

    Uses ``text-embedding-3-small`` (1536 dims) by default.  The API key is
    mandatory.  Dimensions are seeded from the known-model table and
    overwritten whenever a response reports a different length.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        dimensions: int | None = None,
        timeout: int | None = None,
        base_url: str | None = None,
        *,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or Settings()

        self._api_key = api_key or settings.openai_api_key
        if not self._api_key:
            raise ConfigurationError(
                message="OpenAI API key is required. Set OPENAI_API_KEY environment variable.",
                provider_name=self.get_provider_name(),
            )
        if dimensions is not None and dimensions <= 0:
            raise ConfigurationError(
                message=f"OpenAI embedding dimensions must be positive, got {dimensions}",
                provider_name=self.get_provider_name(),
            )
        if timeout is not None and timeout <= 0:
            raise ConfigurationError(
                message=f"OpenAI request timeout must be positive, got {timeout}ms",
                provider_name=self.get_provider_name(),
            )

        self._model = model or settings.openai_embedding_model or _DEFAULT_MODEL
        self._dimensions = dimensions or _MODEL_DIMENSIONS.get(self._model, _DEFAULT_DIMENSIONS)
        self._timeout_ms = timeout or _DEFAULT_TIMEOUT_MS
        self._base_url = base_url or settings.openai_base_url

        # Build client kwargs - add base_url only when configured.
        client_kwargs: dict[str, Any] = {
            "api_key": self._api_key,
            "timeout": self._timeout_ms / 1000.0,
            "max_retries": 0,
        }
        if self._base_url:
            client_kwargs["base_url"] = self._base_url

        self._client = openai.AsyncOpenAI(**client_kwargs)

        logger.debug(
            "openai_embedding_provider_initialized",
            model=self._model,
            dimensions=self._dimensions,
            base_url=self._base_url or _DEFAULT_ENDPOINT,
        )

    @property
    def endpoint(self) -> str:
        return f"{(self._base_url or _DEFAULT_ENDPOINT).rstrip('/')}/embeddings"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _request(self, model_input: str | list[str]) -> Any:
        try:
            return await self._client.embeddings.create(
                input=model_input,
                model=self._model,
                encoding_format="float",
            )
        except Exception as exc:
            error = classify_provider_error(
                exc,
                provider_name=self.get_provider_name(),
                label=_LABEL,
                model=self._model,
                endpoint=self.endpoint,
            )
            logger.error(
                "openai_embedding_request_failed",
                model=self._model,
                status=error.status_code,
                error=str(exc),
            )
            raise error from exc

    def _extract(self, response: Any, expected: int) -> list[EmbeddingVector]:
        items = list(getattr(response, "data", None) or [])
        if not items:
            raise InvalidResponseError(
                message=f"Invalid response from {_LABEL} API - missing embedding data for model '{self._model}'",
                provider_name=self.get_provider_name(),
            )
        if len(items) != expected:
            raise InvalidResponseError(
                message=(
                    f"Invalid response from {_LABEL} API - expected {expected} embeddings "
                    f"for model '{self._model}', got {len(items)}"
                ),
                provider_name=self.get_provider_name(),
            )

        indices = [getattr(item, "index", None) for item in items]
        if all(isinstance(index, int) for index in indices):
            items = [item for _, item in sorted(zip(indices, items), key=lambda pair: pair[0])]

        return [
            coerce_embedding(
                getattr(item, "embedding", None),
                label=f"{_LABEL} API",
                provider_name=self.get_provider_name(),
            )
            for item in items
        ]

    def _reconcile_dimensions(self, observed: int) -> None:
        if observed != self._dimensions:
            logger.info(
                "openai_dimensions_updated",
                model=self._model,
                previous=self._dimensions,
                actual=observed,
            )
            self._dimensions = observed

    # ------------------------------------------------------------------
    # IEmbeddingProvider implementation
    # ------------------------------------------------------------------

    async def generate_embedding(self, text: str) -> EmbeddingVector:
        """Generate a normalized embedding for a single text."""
        logger.debug("openai_embedding_request", model=self._model, text=text[:50])

        response = await self._request(text)
        embedding = self._extract(response, expected=1)[0]
        self._reconcile_dimensions(len(embedding))
        normalize_vector(embedding)
        return embedding

    async def generate_embeddings(self, texts: list[str]) -> list[EmbeddingVector]:
        """Generate normalized embeddings for *texts* in a single request."""
        if not texts:
            return []

        response = await self._request(list(texts))
        embeddings = self._extract(response, expected=len(texts))
        for embedding in embeddings:
            self._reconcile_dimensions(len(embedding))
            normalize_vector(embedding)

        usage = getattr(response, "usage", None)
        logger.info(
            "openai_embedding_batch",
            model=self._model,
            batch_size=len(texts),
            tokens=getattr(usage, "total_tokens", None) if usage else None,
        )
        return embeddings

    def get_model_info(self) -> ModelInfo:
        return ModelInfo(name=self._model, dimensions=self._dimensions, version=_VERSION)

    def get_provider_name(self) -> str:
        return "openai"

    async def aclose(self) -> None:
        await self._client.close()
