"""
Embeddings module - text embedding by word-vector averaging.

Follows the project pattern:
1. Protocol (WordVectorProvider) defines the lookup interface
2. Production implementation (KeyedVectorsProvider)
3. Test double (MockWordVectors) for fast testing
4. Factory function (get_word_vector_provider)
"""

from commit_rag.embeddings.word_vectors import (
    KeyedVectorsProvider,
    MockWordVectors,
    get_word_vector_provider,
)
from commit_rag.embeddings.embedder import Embedder, tokenize

__all__ = [
    "KeyedVectorsProvider",
    "MockWordVectors",
    "get_word_vector_provider",
    "Embedder",
    "tokenize",
]
