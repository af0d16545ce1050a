"""Mock embedding provider generating pseudo-random unit vectors.

Used when no backend is configured, when ``MOCK_EMBEDDINGS=true``, and in
tests that only care about vector shape.  The vectors carry no semantic
meaning and differ between calls, but always have the configured length and
unit norm.
"""

from __future__ import annotations

import random

import structlog

from polyembed.interfaces.embedding_provider import IEmbeddingProvider
from polyembed.models.embedding import EmbeddingVector, ModelInfo
from polyembed.utils.errors import ConfigurationError
from polyembed.utils.vectors import normalize_vector

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_DIMENSIONS = 1536
_MODEL_NAME = "polyembed-mock"
_VERSION = "1.0.0"


class MockEmbeddingProvider(IEmbeddingProvider):
    """Zero-dependency provider returning random normalized vectors."""

    def __init__(self, dimensions: int | None = None) -> None:
        if dimensions is not None and dimensions <= 0:
            raise ConfigurationError(
                message=f"Mock embedding dimensions must be positive, got {dimensions}",
                provider_name=self.get_provider_name(),
            )
        self._dimensions = dimensions or _DEFAULT_DIMENSIONS
        self._random = random.Random()
        logger.debug("mock_embedding_provider_initialized", dimensions=self._dimensions)

    def _random_vector(self) -> EmbeddingVector:
        vector = [self._random.uniform(-1.0, 1.0) for _ in range(self._dimensions)]
        normalize_vector(vector)
        return vector

    async def generate_embedding(self, text: str) -> EmbeddingVector:
        return self._random_vector()

    async def generate_embeddings(self, texts: list[str]) -> list[EmbeddingVector]:
        return [self._random_vector() for _ in texts]

    def get_model_info(self) -> ModelInfo:
        return ModelInfo(name=_MODEL_NAME, dimensions=self._dimensions, version=_VERSION)

    def get_provider_name(self) -> str:
        return "mock"
