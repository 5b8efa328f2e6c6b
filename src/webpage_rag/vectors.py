"""Vector helpers shared by the embedders, stores, and extractors."""

from __future__ import annotations

import math
from collections.abc import Sequence
from numbers import Real
from typing import Any

import numpy as np

from webpage_rag.errors import InvalidEmbeddingError


def coerce_embedding(values: Any, *, dimension: int | None = None) -> list[float]:
    """Validate a raw embedding response and return it as ``list[float]``.

    Every element must be a real, finite number; booleans and numeric
    strings are rejected.  When *dimension* is given the vector must have
    exactly that many elements.

    Raises
    ------
    InvalidEmbeddingError
        On any malformed value; no partial vector is ever returned.
    """
    if isinstance(values, np.ndarray):
        values = values.tolist()
    if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
        raise InvalidEmbeddingError(
            f"Embedding must be a sequence of numbers, got {type(values).__name__}"
        )
    if not values:
        raise InvalidEmbeddingError("Embedding is empty")

    vector: list[float] = []
    for i, val in enumerate(values):
        if isinstance(val, bool) or not isinstance(val, Real):
            raise InvalidEmbeddingError(
                f"Invalid embedding value generated at index {i}: not a number ({val!r})"
            )
        val = float(val)
        if not math.isfinite(val):
            raise InvalidEmbeddingError(f"Invalid embedding value generated at index {i}: {val}")
        vector.append(val)

    if dimension is not None and len(vector) != dimension:
        raise InvalidEmbeddingError(
            f"Embedding has {len(vector)} dimensions, expected {dimension}"
        )
    return vector


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity of two equal-length vectors; ``0.0`` if either is zero."""
    va = np.asarray(a, dtype=float)
    vb = np.asarray(b, dtype=float)
    if va.shape != vb.shape:
        raise ValueError(f"Vector shapes differ: {va.shape} vs {vb.shape}")
    denom = np.linalg.norm(va) * np.linalg.norm(vb)
    if denom == 0:
        return 0.0
    return float(np.dot(va, vb) / denom)


def clamp_similarity(score: float) -> float:
    """Fold a cosine score into the ``[0, 1]`` range used for matches."""
    return min(1.0, max(0.0, score))


def truncate_bytes(text: str, max_bytes: int) -> str:
    """Cap *text* at *max_bytes* of UTF-8 without splitting a character."""
    encoded = text.encode("utf-8")
    if len(encoded) <= max_bytes:
        return text
    return encoded[:max_bytes].decode("utf-8", errors="ignore")
