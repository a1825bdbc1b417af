"""
Document model for the retrieval system.

Single responsibility: Define the structure of documents
held by the DocumentStore.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(eq=False)
class Document:
    """
    A text document and its embedding.

    Equality is identity: two documents with the same id are distinct entries.

    embedding stays None until DocumentStore.append computes it,
    and is never reassigned afterwards.
    """
    id: str
    content: str
    embedding: np.ndarray | None = None

    @property
    def has_signal(self) -> bool:
        """True when the embedding exists and is non-empty."""
        return self.embedding is not None and self.embedding.size > 0


@dataclass
class ScoredDocument:
    """A retrieved document with its similarity to the query."""
    document: Document
    score: float

    @property
    def id(self) -> str:
        return self.document.id

    @property
    def content(self) -> str:
        return self.document.content
