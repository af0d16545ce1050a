"""OpenRouter embedding provider adapter.

OpenRouter proxies embedding models from several vendors (OpenAI, Cohere,
Voyage) behind one OpenAI-shaped endpoint.  Requests carry a bearer token
plus the optional ``HTTP-Referer`` / ``X-Title`` attribution headers used
for OpenRouter's app rankings.

Dimensions start from a table of known models and are overwritten whenever
a response disagrees, so :meth:`get_model_info` always reports the most
recently observed vector length.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from polyembed.config.settings import Settings
from polyembed.interfaces.embedding_provider import IEmbeddingProvider
from polyembed.models.embedding import EmbeddingVector, ModelInfo
from polyembed.utils.error_mapping import classify_provider_error
from polyembed.utils.errors import ConfigurationError, InvalidResponseError
from polyembed.utils.vectors import coerce_embedding, normalize_vector

logger = structlog.get_logger(logger_name=__name__)

_API_ENDPOINT = "https://openrouter.ai/api/v1/embeddings"
_DEFAULT_MODEL = "openai/text-embedding-3-small"
_DEFAULT_DIMENSIONS = 1536
_DEFAULT_SITE_NAME = "polyembed"
_DEFAULT_TIMEOUT_MS = 30000
_VERSION = "1.0.0"
_LABEL = "OpenRouter"

# Known embedding model dimensions.
_MODEL_DIMENSIONS: dict[str, int] = {
    "openai/text-embedding-3-small": 1536,
    "openai/text-embedding-3-large": 3072,
    "openai/text-embedding-ada-002": 1536,
    "cohere/embed-english-v3.0": 1024,
    "cohere/embed-multilingual-v3.0": 1024,
    "voyage/voyage-2": 1024,
    "voyage/voyage-large-2": 1536,
}


def default_dimensions_for(model: str) -> int:
    """Return the documented vector length for *model* (1536 when unknown)."""
    return _MODEL_DIMENSIONS.get(model, _DEFAULT_DIMENSIONS)


class OpenRouterEmbeddingProvider(IEmbeddingProvider):
    """Embedding provider backed by the OpenRouter embeddings API.

    Uses ``openai/text-embedding-3-small`` (1536 dims) by default.  An API
    key is mandatory; construction fails with :class:`ConfigurationError`
    when neither the argument nor ``OPENROUTER_API_KEY`` provides one.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        dimensions: int | None = None,
        timeout: int | None = None,
        site_url: str | None = None,
        site_name: str | None = None,
        *,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        settings = settings or Settings()

        self._api_key = api_key or settings.openrouter_api_key
        if not self._api_key:
            raise ConfigurationError(
                message="OpenRouter API key is required. Set OPENROUTER_API_KEY environment variable.",
                provider_name=self.get_provider_name(),
            )
        if dimensions is not None and dimensions <= 0:
            raise ConfigurationError(
                message=f"OpenRouter embedding dimensions must be positive, got {dimensions}",
                provider_name=self.get_provider_name(),
            )
        if timeout is not None and timeout <= 0:
            raise ConfigurationError(
                message=f"OpenRouter request timeout must be positive, got {timeout}ms",
                provider_name=self.get_provider_name(),
            )

        self._model = model or settings.openrouter_embedding_model or _DEFAULT_MODEL
        self._dimensions = dimensions or default_dimensions_for(self._model)
        self._timeout_ms = timeout or _DEFAULT_TIMEOUT_MS
        self._site_url = site_url or settings.openrouter_site_url
        self._site_name = site_name or settings.openrouter_site_name or _DEFAULT_SITE_NAME

        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout_ms / 1000.0),
        )

        logger.debug(
            "openrouter_embedding_provider_initialized",
            model=self._model,
            dimensions=self._dimensions,
            site_name=self._site_name,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _headers(self) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        if self._site_url:
            headers["HTTP-Referer"] = self._site_url
        if self._site_name:
            headers["X-Title"] = self._site_name
        return headers

    async def _request(self, model_input: str | list[str]) -> Any:
        try:
            response = await self._client.post(
                _API_ENDPOINT,
                json={"input": model_input, "model": self._model},
                headers=self._headers(),
                timeout=self._timeout_ms / 1000.0,
            )
            response.raise_for_status()
            return response.json()
        except Exception as exc:
            error = classify_provider_error(
                exc,
                provider_name=self.get_provider_name(),
                label=_LABEL,
                model=self._model,
                endpoint=_API_ENDPOINT,
            )
            logger.error(
                "openrouter_embedding_request_failed",
                model=self._model,
                status=error.status_code,
                error=str(exc),
            )
            raise error from exc

    def _extract(self, payload: Any, expected: int) -> list[EmbeddingVector]:
        """Pull ``data[i].embedding`` out of *payload*, ordered by ``index``."""
        items = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(items, list) or not items:
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

        # Reorder only when every item carries an integer index; otherwise keep payload order.
        indices = [item.get("index") if isinstance(item, dict) else None for item in items]
        if all(isinstance(index, int) for index in indices):
            items = [item for _, item in sorted(zip(indices, items), key=lambda pair: pair[0])]

        return [
            coerce_embedding(
                item.get("embedding") if isinstance(item, dict) else None,
                label=f"{_LABEL} API",
                provider_name=self.get_provider_name(),
            )
            for item in items
        ]

    def _reconcile_dimensions(self, observed: int) -> None:
        if observed != self._dimensions:
            logger.info(
                "openrouter_dimensions_updated",
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
        logger.debug("openrouter_embedding_request", model=self._model, text=text[:50])

        payload = await self._request(text)
        embedding = self._extract(payload, expected=1)[0]
        self._reconcile_dimensions(len(embedding))
        normalize_vector(embedding)

        logger.debug(
            "openrouter_embedding_generated",
            length=len(embedding),
            usage=payload.get("usage"),
        )
        return embedding

    async def generate_embeddings(self, texts: list[str]) -> list[EmbeddingVector]:
        """Generate normalized embeddings for *texts* in a single request."""
        if not texts:
            return []

        payload = await self._request(list(texts))
        embeddings = self._extract(payload, expected=len(texts))
        for embedding in embeddings:
            self._reconcile_dimensions(len(embedding))
            normalize_vector(embedding)

        logger.info(
            "openrouter_embedding_batch",
            model=self._model,
            batch_size=len(texts),
        )
        return embeddings

    def get_model_info(self) -> ModelInfo:
        return ModelInfo(name=self._model, dimensions=self._dimensions, version=_VERSION)

    def get_provider_name(self) -> str:
        return "openrouter"

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
