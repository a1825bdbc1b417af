"""
Vector primitives used by the embedder and the retriever.

Both functions are pure. Vectors are 1-D float64 numpy arrays; an empty
array (shape (0,)) means "no embedding could be computed".
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from commit_rag.core.errors import DimensionMismatchError


def average(vectors: Sequence[np.ndarray]) -> np.ndarray:
    """
    Element-wise arithmetic mean of the given vectors.

    Returns an empty vector when given no vectors. Raises
    DimensionMismatchError when the vectors differ in length.
    """
    if len(vectors) == 0:
        return np.empty(0, dtype=np.float64)

    dim = len(vectors[0])
    for vector in vectors:
        if len(vector) != dim:
            raise DimensionMismatchError(
                f"Cannot average vectors of length {dim} and {len(vector)}"
            )

    return np.mean(np.vstack(vectors).astype(np.float64), axis=0)


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """
    Cosine of the angle between a and b.

    Mismatched lengths score 0.0 ("unrelated") instead of raising, so
    ranking degrades gracefully. A zero-magnitude vector also scores 0.0,
    as does any vector holding nan or inf, so the result is always finite.
    """
    if len(a) != len(b) or len(a) == 0:
        return 0.0

    # Cosine is scale-invariant; normalizing by the largest component keeps
    # the norms from overflowing for very large entries.
    a = _unit_scaled(a)
    b = _unit_scaled(b)
    if a is None or b is None:
        return 0.0

    norm_a = float(np.linalg.norm(a))
    norm_b = float(np.linalg.norm(b))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    similarity = float(np.dot(a, b) / (norm_a * norm_b))
    if not np.isfinite(similarity):
        return 0.0
    return min(1.0, max(-1.0, similarity))


def _unit_scaled(v: np.ndarray) -> np.ndarray | None:
    """v divided by its largest absolute component; None if not finite."""
    v = np.asarray(v, dtype=np.float64)
    scale = float(np.max(np.abs(v)))
    if not np.isfinite(scale):
        return None
    if scale == 0.0:
        return v
    return v / scale
