"""Vector helpers shared by every embedding provider."""

from __future__ import annotations

import math
from typing import Any

from polyembed.utils.errors import InvalidResponseError


def coerce_embedding(raw: Any, *, label: str, provider_name: str) -> list[float]:
    """Validate a raw JSON embedding and return it as a fresh ``list[float]``.

    Raises :class:`InvalidResponseError` unless *raw* is a non-empty list of
    numbers.  Booleans are rejected even though they subclass ``int``.
    """
    if raw is None:
        raise InvalidResponseError(
            message=f"Invalid response from {label} - missing embedding data",
            provider_name=provider_name,
        )
    if not isinstance(raw, list):
        raise InvalidResponseError(
            message=f"Invalid embedding returned from {label} - expected a list, got {type(raw).__name__}",
            provider_name=provider_name,
        )
    if not raw:
        raise InvalidResponseError(
            message=f"Invalid embedding returned from {label} - empty vector",
            provider_name=provider_name,
        )
    for idx, value in enumerate(raw):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidResponseError(
                message=f"Invalid embedding returned from {label} - non-numeric value at index {idx}",
                provider_name=provider_name,
            )
    return [float(value) for value in raw]


def normalize_vector(vector: list[float]) -> None:
    """Rescale *vector* to unit L2 norm, **mutating it in place**.

    A zero vector cannot be scaled, so its first element is set to ``1.0``
    and the remaining elements stay zero.  This keeps the output a valid
    unit vector instead of propagating NaN.  Empty vectors are left as-is.
    """
    if not vector:
        return

    magnitude = vector_norm(vector)
    if magnitude > 0:
        for idx, value in enumerate(vector):
            vector[idx] = value / magnitude
    else:
        vector[0] = 1.0


def vector_norm(vector: list[float]) -> float:
    """Return the Euclidean length of *vector*."""
    return math.sqrt(sum(value * value for value in vector))
