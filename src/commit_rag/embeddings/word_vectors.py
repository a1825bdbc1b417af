"""
Word Vectors Module - Single Responsibility: per-token vector lookup.

It has ONE job: map a token to a pretrained vector (or to nothing).
Averaging tokens into a text embedding lives in embedder.py.

Production vectors come from a GloVe or word2vec text-format file:

    the 0.418 0.24968 -0.41242 ...
    cat 0.45281 -0.50108 -0.53714 ...

An optional word2vec header line ("<count> <dim>") is skipped.
"""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path

import numpy as np

from commit_rag.core.errors import EmbeddingModelUnavailableError
from commit_rag.core.protocols import WordVectorProvider

logger = logging.getLogger(__name__)


class KeyedVectorsProvider:
    """
    Pretrained word vectors held in memory.

    Lookups try the exact token first, then its lowercase form
    (GloVe vocabularies are lowercase).
    """

    def __init__(
        self,
        vectors: dict[str, np.ndarray],
        lowercase_fallback: bool = True,
    ):
        if not vectors:
            raise EmbeddingModelUnavailableError("Word-vector table is empty")
        self._vectors = vectors
        self._lowercase_fallback = lowercase_fallback
        self._dimensions = len(next(iter(vectors.values())))

    @property
    def dimensions(self) -> int:
        return self._dimensions

    def __len__(self) -> int:
        return len(self._vectors)

    def lookup(self, token: str) -> np.ndarray | None:
        vector = self._vectors.get(token)
        if vector is None and self._lowercase_fallback:
            vector = self._vectors.get(token.lower())
        return vector

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        lowercase_fallback: bool = True,
    ) -> "KeyedVectorsProvider":
        """
        Load a text-format vector file.

        Raises:
            EmbeddingModelUnavailableError: file missing, unreadable or empty
        """
        path = Path(path)
        vectors: dict[str, np.ndarray] = {}
        dim: int | None = None
        skipped = 0

        try:
            with path.open("r", encoding="utf-8", errors="ignore") as f:
                for line_no, line in enumerate(f, start=1):
                    parts = line.rstrip().split(" ")
                    if len(parts) < 2:
                        continue
                    # word2vec header: "<count> <dim>"
                    if line_no == 1 and len(parts) == 2 and parts[0].isdigit() and parts[1].isdigit():
                        continue
                    try:
                        vector = np.asarray(parts[1:], dtype=np.float64)
                    except ValueError:
                        skipped += 1
                        continue
                    if not np.all(np.isfinite(vector)):
                        skipped += 1
                        continue
                    if dim is None:
                        dim = len(vector)
                    elif len(vector) != dim:
                        skipped += 1
                        continue
                    vectors[parts[0]] = vector
        except OSError as e:
            raise EmbeddingModelUnavailableError(
                f"Unable to load word vectors from {path}: {e}"
            ) from e

        if skipped:
            logger.warning("Skipped %d malformed lines in %s", skipped, path)
        if not vectors:
            raise EmbeddingModelUnavailableError(f"No word vectors found in {path}")

        logger.info("Loaded %d word vectors (dim=%d) from %s", len(vectors), dim, path)
        return cls(vectors, lowercase_fallback=lowercase_fallback)


class MockWordVectors:
    """
    Mock word-vector provider for testing without a model file.

    With an explicit mapping, unknown tokens return None. Without one,
    every non-empty token gets a deterministic pseudo-vector from its hash.
    NOT for production use - only for testing/development.
    """

    def __init__(
        self,
        vectors: dict[str, list[float] | np.ndarray] | None = None,
        dimensions: int = 8,
    ):
        self._vectors = (
            {k: np.asarray(v, dtype=np.float64) for k, v in vectors.items()}
            if vectors is not None
            else None
        )
        self._dimensions = dimensions

    @property
    def dimensions(self) -> int:
        if self._vectors:
            return len(next(iter(self._vectors.values())))
        return self._dimensions

    def lookup(self, token: str) -> np.ndarray | None:
        if self._vectors is not None:
            return self._vectors.get(token)
        if not token:
            return None
        h = hashlib.sha256(token.encode()).digest()
        repeated = h * (self._dimensions // len(h) + 1)
        raw = np.frombuffer(repeated, dtype=np.uint8)[: self._dimensions]
        # Center around zero so vectors point in different directions
        return raw.astype(np.float64) - 127.5


def get_word_vector_provider(
    use_mock: bool = False,
    path: str | Path | None = None,
) -> WordVectorProvider:
    """
    Factory function to get the appropriate word-vector provider.

    Args:
        use_mock: If True, return MockWordVectors (for testing)
        path: Vector file for the real provider

    Raises:
        EmbeddingModelUnavailableError: real provider requested without a path
    """
    if use_mock:
        return MockWordVectors()
    if not path:
        raise EmbeddingModelUnavailableError(
            "No word-vector file configured. Set WORD_VECTORS_PATH."
        )
    return KeyedVectorsProvider.from_file(path)
