"""Data models shared by every embedding provider.

``ModelInfo`` is frozen: it is a snapshot of a provider's state at the
moment :meth:`IEmbeddingProvider.get_model_info` was called.  ``BackendConfig``
is the option bag handed to registry builders; unknown keys are kept so
custom providers can receive their own options.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# An embedding is a plain list of floats, unit L2 norm once produced.
EmbeddingVector = list[float]


class ModelInfo(BaseModel):
    """Metadata describing the model behind an embedding provider."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Model identifier as sent to the backend.")
    dimensions: int = Field(gt=0, description="Current vector length, after any auto-detection.")
    version: str = Field(default="1.0.0", description="Provider implementation version.")


class BackendConfig(BaseModel):
    """Options used to construct an embedding provider through the registry.

    Every field is optional.  Unset fields fall back to the environment and
    then to the provider's hard-coded defaults.  ``timeout`` is expressed in
    milliseconds.
    """

    model_config = ConfigDict(extra="allow")

    provider: str | None = None
    model: str | None = None
    dimensions: int | None = None
    api_key: str | None = None
    base_url: str | None = None
    timeout: int | None = None
    site_url: str | None = None
    site_name: str | None = None
