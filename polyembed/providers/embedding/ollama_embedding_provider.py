"""Ollama embedding provider adapter (local/free).

Talks to Ollama's native ``/api/embeddings`` endpoint, which accepts one
prompt per request and answers ``{"embedding": [...]}``.  No API key is
required.  Because the endpoint has no batch form, :meth:`generate_embeddings`
issues one request per text, strictly in order.

Dimensions are auto-detected: the first successful response fixes the
vector length for the lifetime of the provider, whatever was configured.
"""

from __future__ import annotations

import httpx
import structlog

from polyembed.config.settings import Settings
from polyembed.interfaces.embedding_provider import IEmbeddingProvider
from polyembed.models.embedding import EmbeddingVector, ModelInfo
from polyembed.utils.error_mapping import classify_provider_error
from polyembed.utils.errors import ConfigurationError, InvalidResponseError
from polyembed.utils.vectors import coerce_embedding, normalize_vector

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_BASE_URL = "http://localhost:11434"
_DEFAULT_MODEL = "nomic-embed-text"
_DEFAULT_DIMENSIONS = 768  # nomic-embed-text
_DEFAULT_TIMEOUT_MS = 30000
_VERSION = "1.0.0"
_LABEL = "Ollama"


class OllamaEmbeddingProvider(IEmbeddingProvider):
    """Embedding provider backed by a local Ollama server.

    Parameters
    ----------
    base_url:
        Server URL.  Falls back to ``OLLAMA_BASE_URL``, then
        ``http://localhost:11434``.  A trailing slash is stripped.
    model:
        Model name.  Falls back to ``OLLAMA_EMBEDDING_MODEL``, then
        ``nomic-embed-text``.
    dimensions:
        Expected vector length until the first response is seen (default 768).
    timeout:
        Request timeout in milliseconds (default 30000).
    settings:
        Environment-backed settings; read from the environment when omitted.
    http_client:
        Injected ``httpx.AsyncClient`` for testability and connection pooling.
    """

    def __init__(
        self,
        base_url: str | None = None,
        model: str | None = None,
        dimensions: int | None = None,
        timeout: int | None = None,
        *,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        settings = settings or Settings()

        if dimensions is not None and dimensions <= 0:
            raise ConfigurationError(
                message=f"Ollama embedding dimensions must be positive, got {dimensions}",
                provider_name=self.get_provider_name(),
            )
        if timeout is not None and timeout <= 0:
            raise ConfigurationError(
                message=f"Ollama request timeout must be positive, got {timeout}ms",
                provider_name=self.get_provider_name(),
            )

        self._base_url = (base_url or settings.ollama_base_url or _DEFAULT_BASE_URL).rstrip("/")
        self._model = model or settings.ollama_embedding_model or _DEFAULT_MODEL
        self._dimensions = dimensions or _DEFAULT_DIMENSIONS
        self._timeout_ms = timeout or _DEFAULT_TIMEOUT_MS
        self._dimensions_detected = False

        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout_ms / 1000.0),
        )

        logger.debug(
            "ollama_embedding_provider_initialized",
            base_url=self._base_url,
            model=self._model,
            dimensions=self._dimensions,
        )

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}/api/embeddings"

    @property
    def dimensions_detected(self) -> bool:
        return self._dimensions_detected

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _request(self, text: str) -> object:
        try:
            response = await self._client.post(
                self.endpoint,
                json={"model": self._model, "prompt": text},
                headers={"Content-Type": "application/json"},
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
                endpoint=self.endpoint,
                not_found_hint=f"try 'ollama pull {self._model}'",
            )
            logger.error(
                "ollama_embedding_request_failed",
                endpoint=self.endpoint,
                model=self._model,
                status=error.status_code,
                error=str(exc),
            )
            raise error from exc

    def _record_dimensions(self, observed: int) -> None:
        if not self._dimensions_detected:
            self._dimensions = observed
            self._dimensions_detected = True
            logger.info("ollama_dimensions_detected", model=self._model, dimensions=observed)
        elif observed != self._dimensions:
            logger.warning(
                "ollama_dimension_mismatch",
                model=self._model,
                expected=self._dimensions,
                actual=observed,
            )

    # ------------------------------------------------------------------
    # IEmbeddingProvider implementation
    # ------------------------------------------------------------------

    async def generate_embedding(self, text: str) -> EmbeddingVector:
        """Generate a normalized embedding for *text* via ``/api/embeddings``."""
        logger.debug("ollama_embedding_request", model=self._model, text=text[:50])

        payload = await self._request(text)
        if not isinstance(payload, dict):
            raise InvalidResponseError(
                message=f"Invalid response from {_LABEL} for model '{self._model}' - expected a JSON object",
                provider_name=self.get_provider_name(),
            )

        embedding = coerce_embedding(
            payload.get("embedding"),
            label=_LABEL,
            provider_name=self.get_provider_name(),
        )
        self._record_dimensions(len(embedding))
        normalize_vector(embedding)
        return embedding

    async def generate_embeddings(self, texts: list[str]) -> list[EmbeddingVector]:
        """Embed *texts* one request at a time, preserving order.

        The first failure propagates and discards vectors already computed
        for earlier texts in the same call.
        """
        embeddings: list[EmbeddingVector] = []
        for text in texts:
            embeddings.append(await self.generate_embedding(text))
        return embeddings

    def get_model_info(self) -> ModelInfo:
        return ModelInfo(name=self._model, dimensions=self._dimensions, version=_VERSION)

    def get_provider_name(self) -> str:
        return "ollama"

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
