"""
RAGSystem - one constructible object owning the whole pipeline.

Dependencies are INJECTED; build_rag_system() wires production or mock
collaborators from a RAGConfig.
"""

from __future__ import annotations

import logging
from pathlib import Path

from commit_rag.config import RAGConfig, get_config
from commit_rag.core.protocols import GenerationResult, TextGenerator, WordVectorProvider
from commit_rag.embeddings.embedder import Embedder
from commit_rag.embeddings.word_vectors import get_word_vector_provider
from commit_rag.generation.ollama import get_text_generator
from commit_rag.generation.responder import ResponseGenerator
from commit_rag.ingest.sources import IngestError, ingest_command, ingest_file
from commit_rag.retrieval.document import Document, ScoredDocument
from commit_rag.retrieval.retriever import DEFAULT_LIMIT, Retriever
from commit_rag.retrieval.store import DocumentStore

logger = logging.getLogger(__name__)


class RAGSystem:
    """
    Store, retriever and response generator sharing one embedder.

    Raises EmbeddingModelUnavailableError on construction when the
    provider is missing; there is no degraded mode.
    """

    def __init__(
        self,
        provider: WordVectorProvider | None,
        generator: TextGenerator,
        top_k: int = DEFAULT_LIMIT,
    ):
        self.embedder = Embedder(provider)
        self.store = DocumentStore(self.embedder)
        self.retriever = Retriever(self.store)
        self.responder = ResponseGenerator(self.retriever, generator, limit=top_k)

    # Ingestion

    def add_document(self, document: Document) -> Document:
        return self.store.append(document)

    def add_text(self, doc_id: str, content: str) -> Document:
        return self.store.append(Document(id=doc_id, content=content))

    def add_command(
        self,
        command: str,
        working_directory: str | Path | None = None,
    ) -> Document | IngestError:
        return ingest_command(self.store, command, working_directory=working_directory)

    def add_file(self, path: str | Path) -> Document | IngestError:
        return ingest_file(self.store, path)

    # Querying

    def search(self, query: str, limit: int = DEFAULT_LIMIT) -> list[Document]:
        return self.retriever.search(query, limit=limit)

    def search_scored(self, query: str, limit: int = DEFAULT_LIMIT) -> list[ScoredDocument]:
        return self.retriever.search_scored(query, limit=limit)

    def generate(self, query: str) -> str:
        return self.responder.generate(query)

    def generate_result(self, query: str) -> GenerationResult:
        return self.responder.generate_result(query)


def build_rag_system(config: RAGConfig | None = None) -> RAGSystem:
    """
    Factory function wiring a RAGSystem from configuration.

    Raises:
        EmbeddingModelUnavailableError: no usable word-vector model
    """
    config = config or get_config()
    provider = get_word_vector_provider(
        use_mock=config.use_mock_embeddings,
        path=config.word_vectors_path,
    )
    generator = get_text_generator(use_mock=config.use_mock_llm, config=config.ollama)
    logger.debug(
        "Built RAG system (mock_embeddings=%s, mock_llm=%s, top_k=%d)",
        config.use_mock_embeddings,
        config.use_mock_llm,
        config.top_k,
    )
    return RAGSystem(provider, generator, top_k=config.top_k)
