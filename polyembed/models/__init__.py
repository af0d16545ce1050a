"""polyembed data models - re-exports all public model classes."""

from polyembed.models.embedding import BackendConfig, EmbeddingVector, ModelInfo

__all__ = ["BackendConfig", "EmbeddingVector", "ModelInfo"]
