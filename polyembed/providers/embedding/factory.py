"""Embedding provider factory and environment-driven resolver.

Resolution order used by :meth:`EmbeddingProviderFactory.create_from_environment`
(first match wins):

    1. MOCK_EMBEDDINGS=true       -> MockEmbeddingProvider
    2. EMBEDDING_PROVIDER=<name>  -> that provider, errors propagate
    3. OLLAMA_BASE_URL            -> OllamaEmbeddingProvider      (failure: try next)
       OPENROUTER_API_KEY         -> OpenRouterEmbeddingProvider  (failure: try next)
       OPENAI_API_KEY             -> OpenAIEmbeddingProvider      (failure: mock)
    4. nothing configured         -> MockEmbeddingProvider

Local/self-hosted is preferred over the paid proxy, the paid proxy over the
paid direct API, and any real backend over the mock.
"""

from __future__ import annotations

import structlog

from polyembed.config.settings import Settings
from polyembed.interfaces.embedding_provider import IEmbeddingProvider
from polyembed.models.embedding import BackendConfig
from polyembed.providers.embedding.mock_embedding_provider import MockEmbeddingProvider
from polyembed.providers.embedding.ollama_embedding_provider import OllamaEmbeddingProvider
from polyembed.providers.embedding.openai_embedding_provider import OpenAIEmbeddingProvider
from polyembed.providers.embedding.openrouter_embedding_provider import (
    OpenRouterEmbeddingProvider,
)
from polyembed.providers.embedding.registry import (
    ProviderBuilder,
    ProviderRegistry,
    build_default_registry,
)

logger = structlog.get_logger(logger_name=__name__)


class EmbeddingProviderFactory:
    """Creates embedding providers by name, from the environment, or via shortcuts.

    Parameters
    ----------
    registry:
        Registry used by :meth:`create`.  A fresh default registry is built
        when omitted, so factories never share registrations implicitly.
    settings:
        Fixed settings for :meth:`create_from_environment`.  When omitted the
        environment is re-read on every call.
    """

    def __init__(
        self,
        registry: ProviderRegistry | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._registry = registry if registry is not None else build_default_registry()
        self._settings = settings

    @property
    def registry(self) -> ProviderRegistry:
        return self._registry

    # ------------------------------------------------------------------
    # Registry delegation
    # ------------------------------------------------------------------

    def register(self, name: str, builder: ProviderBuilder) -> None:
        self._registry.register(name, builder)

    def reset(self) -> None:
        self._registry.reset()

    def list_available(self) -> list[str]:
        return self._registry.list_available()

    def create(self, config: BackendConfig | None = None) -> IEmbeddingProvider:
        """Create a provider through the registry from an explicit config."""
        return self._registry.create(config)

    # ------------------------------------------------------------------
    # Shortcuts
    # ------------------------------------------------------------------

    @staticmethod
    def create_openai(
        api_key: str,
        model: str | None = None,
        dimensions: int | None = None,
    ) -> IEmbeddingProvider:
        """Create an OpenAI provider from explicit credentials."""
        return OpenAIEmbeddingProvider(api_key=api_key, model=model, dimensions=dimensions)

    @staticmethod
    def create_mock(dimensions: int | None = None) -> IEmbeddingProvider:
        """Create the pseudo-random mock provider."""
        return MockEmbeddingProvider(dimensions=dimensions)

    # ------------------------------------------------------------------
    # Environment resolution
    # ------------------------------------------------------------------

    def create_from_environment(self) -> IEmbeddingProvider:
        """Select and build a provider from environment variables."""
        settings = self._settings or Settings()

        logger.debug(
            "embedding_provider_resolving",
            mock_embeddings=settings.mock_embeddings,
            embedding_provider=settings.embedding_provider or "auto",
            ollama_url_present=bool(settings.ollama_base_url),
            openrouter_key_present=bool(settings.openrouter_api_key),
            openai_key_present=bool(settings.openai_api_key),
        )

        if settings.mock_embeddings:
            logger.info("embedding_provider_mock_forced")
            return MockEmbeddingProvider()

        explicit = settings.embedding_provider.strip().lower()
        if explicit:
            return self._create_explicit_provider(explicit, settings)

        # --- Tier 1: Ollama (local/self-hosted, no API key) ---
        if settings.ollama_base_url:
            try:
                provider: IEmbeddingProvider = OllamaEmbeddingProvider(
                    base_url=settings.ollama_base_url,
                    model=settings.ollama_embedding_model or None,
                    settings=settings,
                )
                self._log_selected(provider)
                return provider
            except Exception as exc:
                logger.error("embedding_provider_ollama_failed", error=str(exc))

        # --- Tier 2: OpenRouter ---
        if settings.openrouter_api_key:
            try:
                provider = OpenRouterEmbeddingProvider(
                    api_key=settings.openrouter_api_key,
                    model=settings.openrouter_embedding_model or None,
                    settings=settings,
                )
                self._log_selected(provider)
                return provider
            except Exception as exc:
                logger.error("embedding_provider_openrouter_failed", error=str(exc))

        # --- Tier 3: OpenAI, falling straight back to the mock on failure ---
        if settings.openai_api_key:
            try:
                provider = OpenAIEmbeddingProvider(
                    api_key=settings.openai_api_key,
                    model=settings.openai_embedding_model or None,
                    settings=settings,
                )
                self._log_selected(provider)
                return provider
            except Exception as exc:
                logger.error("embedding_provider_openai_failed", error=str(exc))
                logger.info("embedding_provider_mock_fallback")
                return MockEmbeddingProvider()

        logger.info(
            "embedding_provider_not_configured",
            msg="No embedding provider configured, using mock embeddings.",
        )
        return MockEmbeddingProvider()

    def _create_explicit_provider(self, name: str, settings: Settings) -> IEmbeddingProvider:
        """Build the provider named by ``EMBEDDING_PROVIDER``; errors propagate."""
        logger.info("embedding_provider_explicit", provider=name)

        if name == "ollama":
            return OllamaEmbeddingProvider(settings=settings)
        if name == "openrouter":
            return OpenRouterEmbeddingProvider(settings=settings)
        if name == "openai":
            return OpenAIEmbeddingProvider(settings=settings)
        if name in ("default", "mock"):
            return MockEmbeddingProvider()
        if name in self._registry:
            return self._registry.create(BackendConfig(provider=name))

        logger.warning("embedding_provider_unknown", provider=name, msg="Using mock embeddings.")
        return MockEmbeddingProvider()

    @staticmethod
    def _log_selected(provider: IEmbeddingProvider) -> None:
        info = provider.get_model_info()
        logger.info(
            "embedding_provider_selected",
            provider=provider.get_provider_name(),
            model=info.name,
            dimensions=info.dimensions,
        )
