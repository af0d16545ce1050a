"""Public interface definitions for embedding providers.

Every embedding backend is accessed through :class:`IEmbeddingProvider`.
Concrete adapters live in ``polyembed.providers.embedding`` and are chosen at
runtime by ``EmbeddingProviderFactory``.
"""

from polyembed.interfaces.embedding_provider import IEmbeddingProvider

__all__ = ["IEmbeddingProvider"]
