"""Abstract base class for text-embedding providers.

Defines the contract every embedding backend satisfies.  Implementations
wrap a local Ollama server, the OpenAI embeddings API, the OpenRouter proxy,
or the pseudo-random mock generator.  Callers depend only on this interface,
so backends are interchangeable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from polyembed.models.embedding import EmbeddingVector, ModelInfo


# Concrete implementations:
#   MockEmbeddingProvider        - pseudo-random unit vectors, no network
#   OpenAIEmbeddingProvider      - OpenAI embeddings API (requires API key)
#   OllamaEmbeddingProvider      - local Ollama server, /api/embeddings
#   OpenRouterEmbeddingProvider  - OpenRouter multi-model proxy (requires API key)
# Located in: polyembed/providers/embedding/
class IEmbeddingProvider(ABC):
    """Contract for text-embedding services.

    Every vector returned by :meth:`generate_embedding` and
    :meth:`generate_embeddings` has unit L2 norm.
    """

    @abstractmethod
    async def generate_embedding(self, text: str) -> EmbeddingVector:
        """Generate one normalized embedding vector for *text*.

        Raises
        ------
        polyembed.utils.errors.BackendUnreachableError
            If the backend cannot be contacted.
        polyembed.utils.errors.AuthenticationError
            If credentials are rejected (HTTP 401).
        polyembed.utils.errors.QuotaExceededError
            If the account is out of credits (HTTP 402).
        polyembed.utils.errors.ModelNotFoundError
            If the model is unknown to the backend (HTTP 404).
        polyembed.utils.errors.RateLimitError
            If the request is throttled (HTTP 429).
        polyembed.utils.errors.InvalidResponseError
            If the payload lacks a non-empty list of numbers.
        polyembed.utils.errors.ProviderError
            For any other transport or protocol failure.
        """

    @abstractmethod
    async def generate_embeddings(self, texts: list[str]) -> list[EmbeddingVector]:
        """Generate embedding vectors for a batch of texts.

        Returns
        -------
        list[list[float]]
            Vectors corresponding positionally to *texts*.  An empty input
            returns an empty list without contacting the backend.
        """

    @abstractmethod
    def get_model_info(self) -> ModelInfo:
        """Return the model name, current dimensions and version.

        Pure read of provider state, never performs I/O.  Reflects
        dimensions learned from responses once detection has happened.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for this provider, e.g. ``"ollama"``."""

    async def aclose(self) -> None:
        """Release network resources held by the provider.

        Providers without network resources inherit this no-op.
        """
