"""
Retriever - top-k cosine ranking over a DocumentStore.

Ranking rules:
- Scores are cosine similarities between the query embedding and each
  document embedding (see vector_ops.cosine_similarity).
- Documents with no embedding, or an empty one, score -inf and sort last.
- The sort is stable: equal scores keep store insertion order.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from commit_rag.observability.attributes import (
    RAG_QUERY_HAS_SIGNAL,
    RAG_QUERY_TOKENS,
    RAG_RETRIEVED_DOC_COUNT,
    RAG_RETRIEVED_DOC_IDS,
    search_attributes,
)
from commit_rag.observability.tracer import get_tracer
from commit_rag.retrieval.document import Document, ScoredDocument
from commit_rag.retrieval.store import DocumentStore
from commit_rag.retrieval.vector_ops import cosine_similarity

if TYPE_CHECKING:
    from commit_rag.embeddings.embedder import Embedder

logger = logging.getLogger(__name__)

NO_SIGNAL_SCORE = float("-inf")
DEFAULT_LIMIT = 3


class Retriever:
    """
    Ranks stored documents against a query.

    Uses the store's embedder for the query unless one is injected.
    """

    def __init__(self, store: DocumentStore, embedder: Embedder | None = None):
        self._store = store
        self._embedder = embedder or store.embedder

    @property
    def store(self) -> DocumentStore:
        return self._store

    def search_scored(self, query: str, limit: int = DEFAULT_LIMIT) -> list[ScoredDocument]:
        """Search and keep each document's score."""
        documents = self._store.all()

        with get_tracer().start_span(
            "retriever.search",
            attributes=search_attributes(limit, len(documents)),
        ) as span:
            if limit <= 0 or not documents:
                span.set_attribute(RAG_RETRIEVED_DOC_COUNT, 0)
                return []

            query_embedding = self._embedder.embed(query)
            span.set_attributes({
                RAG_QUERY_TOKENS: len(self._embedder.tokens(query)),
                RAG_QUERY_HAS_SIGNAL: bool(query_embedding.size),
            })
            if query_embedding.size == 0:
                logger.debug("Query has no known tokens; ranking falls back to store order")

            scored = [
                ScoredDocument(document=doc, score=self._score(query_embedding, doc))
                for doc in documents
            ]
            # sorted() is stable, reverse=True included
            scored.sort(key=lambda s: s.score, reverse=True)
            results = scored[:limit]

            span.set_attributes({
                RAG_RETRIEVED_DOC_COUNT: len(results),
                RAG_RETRIEVED_DOC_IDS: [s.id for s in results],
            })
            return results

    def search(self, query: str, limit: int = DEFAULT_LIMIT) -> list[Document]:
        """Return up to limit documents, most similar first."""
        return [s.document for s in self.search_scored(query, limit=limit)]

    @staticmethod
    def _score(query_embedding, document: Document) -> float:
        if not document.has_signal:
            return NO_SIGNAL_SCORE
        return cosine_similarity(query_embedding, document.embedding)
