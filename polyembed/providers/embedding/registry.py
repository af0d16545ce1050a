"""Name-to-builder registry for embedding providers.

A :class:`ProviderRegistry` is a plain object owned by whoever composes the
application, so independent registries can coexist (one per test, one per
service) instead of sharing process-wide mutable state.
:func:`build_default_registry` performs the bulk registration of the
built-in providers.
"""

from __future__ import annotations

from typing import Callable

import structlog

from polyembed.interfaces.embedding_provider import IEmbeddingProvider
from polyembed.models.embedding import BackendConfig
from polyembed.providers.embedding.mock_embedding_provider import MockEmbeddingProvider
from polyembed.providers.embedding.ollama_embedding_provider import OllamaEmbeddingProvider
from polyembed.providers.embedding.openai_embedding_provider import OpenAIEmbeddingProvider
from polyembed.providers.embedding.openrouter_embedding_provider import (
    OpenRouterEmbeddingProvider,
)
from polyembed.utils.errors import ConfigurationError, UnregisteredProviderError

logger = structlog.get_logger(logger_name=__name__)

ProviderBuilder = Callable[[BackendConfig], IEmbeddingProvider]

DEFAULT_PROVIDER_NAME = "default"


class ProviderRegistry:
    """Mapping from lowercase provider name to a provider builder."""

    def __init__(self) -> None:
        self._builders: dict[str, ProviderBuilder] = {}

    def register(self, name: str, builder: ProviderBuilder) -> None:
        """Register *builder* under ``name.lower()``; the last registration wins."""
        self._builders[name.lower()] = builder

    def reset(self) -> None:
        """Remove every registered builder."""
        self._builders.clear()

    def list_available(self) -> list[str]:
        return list(self._builders)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._builders

    def create(self, config: BackendConfig | None = None) -> IEmbeddingProvider:
        """Build the provider named by ``config.provider`` (default ``"default"``).

        Raises
        ------
        UnregisteredProviderError
            If no builder is registered under that name.
        """
        config = config or BackendConfig()
        provider_name = (config.provider or DEFAULT_PROVIDER_NAME).lower()
        logger.debug("embedding_provider_create", provider=provider_name)

        builder = self._builders.get(provider_name)
        if builder is None:
            logger.error("embedding_provider_not_registered", provider=provider_name)
            raise UnregisteredProviderError(
                message=f'Provider "{provider_name}" is not registered',
                provider_name=provider_name,
            )

        try:
            provider = builder(config)
        except Exception as exc:
            logger.error(
                "embedding_provider_create_failed",
                provider=provider_name,
                error=str(exc),
            )
            raise

        logger.debug(
            "embedding_provider_created",
            provider=provider_name,
            model_info=provider.get_model_info().model_dump(),
        )
        return provider


# ---------------------------------------------------------------------------
# Built-in builders
# ---------------------------------------------------------------------------


def _build_mock(config: BackendConfig) -> IEmbeddingProvider:
    return MockEmbeddingProvider(dimensions=config.dimensions)


def _build_openai(config: BackendConfig) -> IEmbeddingProvider:
    if not config.api_key:
        raise ConfigurationError(
            message="API key is required for OpenAI embedding service",
            provider_name="openai",
        )
    return OpenAIEmbeddingProvider(
        api_key=config.api_key,
        model=config.model,
        dimensions=config.dimensions,
        timeout=config.timeout,
        base_url=config.base_url,
    )


def _build_ollama(config: BackendConfig) -> IEmbeddingProvider:
    return OllamaEmbeddingProvider(
        base_url=config.base_url,
        model=config.model,
        dimensions=config.dimensions,
        timeout=config.timeout,
    )


def _build_openrouter(config: BackendConfig) -> IEmbeddingProvider:
    if not config.api_key:
        raise ConfigurationError(
            message="API key is required for OpenRouter embedding service",
            provider_name="openrouter",
        )
    return OpenRouterEmbeddingProvider(
        api_key=config.api_key,
        model=config.model,
        dimensions=config.dimensions,
        timeout=config.timeout,
        site_url=config.site_url,
        site_name=config.site_name,
    )


def build_default_registry() -> ProviderRegistry:
    """Return a new registry holding the built-in providers."""
    registry = ProviderRegistry()
    registry.register(DEFAULT_PROVIDER_NAME, _build_mock)
    registry.register("mock", _build_mock)
    registry.register("openai", _build_openai)
    registry.register("ollama", _build_ollama)
    registry.register("openrouter", _build_openrouter)
    return registry
