"""
Retrieval module - in-memory similarity search for RAG.

This module provides:
- Document / ScoredDocument: the document models
- DocumentStore: append-only in-memory store
- Retriever: top-k cosine ranking
- average / cosine_similarity: vector primitives
"""

from commit_rag.retrieval.document import Document, ScoredDocument
from commit_rag.retrieval.vector_ops import average, cosine_similarity
from commit_rag.retrieval.store import DocumentStore
from commit_rag.retrieval.retriever import Retriever, DEFAULT_LIMIT, NO_SIGNAL_SCORE

__all__ = [
    # Documents
    "Document",
    "ScoredDocument",
    # Vector ops
    "average",
    "cosine_similarity",
    # Store and search
    "DocumentStore",
    "Retriever",
    "DEFAULT_LIMIT",
    "NO_SIGNAL_SCORE",
]
