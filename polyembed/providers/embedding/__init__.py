"""Embedding provider implementations.

Four implementations of IEmbeddingProvider, listed in environment-resolution
priority order:
    1. OllamaEmbeddingProvider     - local Ollama server, nomic-embed-text (768 dims).
       Free and self-hosted; no batch endpoint, so batches run sequentially.
    2. OpenRouterEmbeddingProvider - multi-vendor proxy, openai/text-embedding-3-small
       (1536 dims) by default.  Requires OPENROUTER_API_KEY.
    3. OpenAIEmbeddingProvider     - text-embedding-3-small (1536 dims).
       Requires OPENAI_API_KEY.
    4. MockEmbeddingProvider       - pseudo-random unit vectors (1536 dims), no network.
"""

from polyembed.providers.embedding.factory import EmbeddingProviderFactory
from polyembed.providers.embedding.mock_embedding_provider import MockEmbeddingProvider
from polyembed.providers.embedding.ollama_embedding_provider import OllamaEmbeddingProvider
from polyembed.providers.embedding.openai_embedding_provider import OpenAIEmbeddingProvider
from polyembed.providers.embedding.openrouter_embedding_provider import (
    OpenRouterEmbeddingProvider,
)
from polyembed.providers.embedding.registry import ProviderRegistry, build_default_registry

__all__ = [
    "EmbeddingProviderFactory",
    "MockEmbeddingProvider",
    "OllamaEmbeddingProvider",
    "OpenAIEmbeddingProvider",
    "OpenRouterEmbeddingProvider",
    "ProviderRegistry",
    "build_default_registry",
]
