"""Library settings loaded from environment variables via pydantic-settings.

pydantic-settings reads configuration from two sources, in priority order:

  1. **Environment variables**, e.g. ``OLLAMA_BASE_URL=http://gpu-box:11434``
  2. **.env file** in the working directory (local development)

Field ``openrouter_api_key`` maps to ``OPENROUTER_API_KEY`` and so on.

An empty string means "not configured": the environment resolver in
``polyembed.providers.embedding.factory`` treats an empty value as absent and
moves on to the next candidate.  Hard-coded fallbacks (default base URL,
default model names) live in the provider modules, not here, so that the
resolver can tell "unset" apart from "set to the default".
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """polyembed settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === Resolution overrides ===
    mock_embeddings: bool = False  # MOCK_EMBEDDINGS=true forces the mock provider
    embedding_provider: str = ""  # Explicit provider name, e.g. "ollama"

    # === Ollama (local server) ===
    ollama_base_url: str = ""
    ollama_embedding_model: str = ""

    # === OpenRouter (multi-provider proxy) ===
    openrouter_api_key: str = ""
    openrouter_embedding_model: str = ""
    openrouter_site_url: str = ""  # Sent as HTTP-Referer
    openrouter_site_name: str = ""  # Sent as X-Title

    # === OpenAI (direct API) ===
    openai_api_key: str = ""
    openai_embedding_model: str = ""
    openai_base_url: str = ""  # OpenAI-compatible hosts (Azure proxies, TogetherAI, ...)

    # === Logging ===
    app_env: str = "development"
    log_level: str = "INFO"

    @field_validator("mock_embeddings", mode="before")
    @classmethod
    def _parse_mock_flag(cls, value: object) -> bool:
        # Only a literal "true" enables the mock; empty or other values mean "not set".
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() == "true"

    def get_configured_providers(self) -> list[str]:
        """Return provider names whose identifying variable is set, in probe order."""
        providers: list[str] = []
        if self.ollama_base_url:
            providers.append("ollama")
        if self.openrouter_api_key:
            providers.append("openrouter")
        if self.openai_api_key:
            providers.append("openai")
        return providers
