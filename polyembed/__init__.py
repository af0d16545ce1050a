"""polyembed - one interface over interchangeable text-embedding backends.

Typical use::

    from polyembed import EmbeddingProviderFactory

    provider = EmbeddingProviderFactory().create_from_environment()
    vector = await provider.generate_embedding("hello world")
"""

from polyembed.interfaces.embedding_provider import IEmbeddingProvider
from polyembed.models.embedding import BackendConfig, EmbeddingVector, ModelInfo
from polyembed.providers.embedding.factory import EmbeddingProviderFactory
from polyembed.providers.embedding.registry import ProviderRegistry, build_default_registry

__version__ = "0.1.0"

__all__ = [
    "BackendConfig",
    "EmbeddingProviderFactory",
    "EmbeddingVector",
    "IEmbeddingProvider",
    "ModelInfo",
    "ProviderRegistry",
    "build_default_registry",
]
