"""
Embedder - turns a text string into one fixed-dimension vector.

Strategy: whitespace tokenization, per-token lookup through an injected
WordVectorProvider, then the mean of the vectors that were found.
Unknown tokens contribute nothing (they are skipped, not zero-filled).
"""

from __future__ import annotations

import numpy as np

from commit_rag.core.errors import EmbeddingModelUnavailableError
from commit_rag.core.protocols import WordVectorProvider
from commit_rag.retrieval.vector_ops import average


def tokenize(text: str) -> list[str]:
    """Split on runs of whitespace and newlines."""
    return text.split()


class Embedder:
    """
    Word-vector averaging embedder.

    Dependencies are INJECTED, not created internally.
    """

    def __init__(self, provider: WordVectorProvider | None):
        if provider is None:
            raise EmbeddingModelUnavailableError("Unable to load embedding model")
        self._provider = provider

    @property
    def provider(self) -> WordVectorProvider:
        return self._provider

    def tokens(self, text: str) -> list[str]:
        """Tokens of text as embed() sees them."""
        return tokenize(text)

    def embed(self, text: str) -> np.ndarray:
        """
        Embed a text.

        Returns an empty vector when no token has a known vector;
        callers treat that as "no signal".
        """
        found = []
        for token in self.tokens(text):
            vector = self._provider.lookup(token)
            if vector is not None:
                found.append(vector)
        return average(found)
