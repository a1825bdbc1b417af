"""
In-memory document store.

Append-only: documents are embedded on the way in and never removed or
mutated afterwards. Insertion order is preserved; the retriever relies on
it to break ties deterministically.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Iterable, Iterator

from commit_rag.core.errors import DocumentAlreadyIngestedError
from commit_rag.retrieval.document import Document

if TYPE_CHECKING:
    from commit_rag.embeddings.embedder import Embedder

logger = logging.getLogger(__name__)


class DocumentStore:
    """
    Ordered collection of embedded documents.

    Ingestion and embedding are coupled: a document is never stored
    without its embedding. Appends and snapshots share a lock, so a
    search always sees a consistent sequence.
    """

    def __init__(self, embedder: Embedder):
        """
        Initialize with injected embedder.

        Args:
            embedder: Embedder used to compute each document's vector
        """
        self._embedder = embedder
        self._documents: list[Document] = []
        self._lock = threading.Lock()

    @property
    def embedder(self) -> Embedder:
        return self._embedder

    def append(self, document: Document) -> Document:
        """
        Embed a document and append it.

        Duplicate ids are kept as distinct entries.

        Raises:
            DocumentAlreadyIngestedError: the document already has an embedding
        """
        if document.embedding is not None:
            raise DocumentAlreadyIngestedError(document.id)

        document.embedding = self._embedder.embed(document.content)
        if document.embedding.size == 0:
            logger.debug("Document %r has no known tokens, stored without signal", document.id)

        with self._lock:
            self._documents.append(document)

        logger.debug(
            "Ingested document %r (dim=%d)", document.id, document.embedding.size
        )
        return document

    def extend(self, documents: Iterable[Document]) -> None:
        """Append several documents in order."""
        for document in documents:
            self.append(document)

    def all(self) -> tuple[Document, ...]:
        """Read-only snapshot in insertion order."""
        with self._lock:
            return tuple(self._documents)

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(self.all())
