"""
ResponseGenerator - retrieval + prompt + generation.

generate() keeps the best-effort contract (empty string on failure).
generate_result() returns the typed result so callers can tell
"model said nothing" from "call failed".
"""

from __future__ import annotations

import logging
from typing import Sequence

from commit_rag.core.protocols import GenerationResult, GenerationSuccess, TextGenerator
from commit_rag.generation.prompts import RAG_TEMPLATE
from commit_rag.retrieval.document import Document
from commit_rag.retrieval.retriever import DEFAULT_LIMIT, Retriever

logger = logging.getLogger(__name__)


def build_context(documents: Sequence[Document]) -> str:
    """Join document contents with single spaces, in ranked order."""
    return " ".join(doc.content for doc in documents)


def build_prompt(context: str, query: str) -> str:
    """Fill the fixed RAG template."""
    return RAG_TEMPLATE.format(context=context, query=query)


class ResponseGenerator:
    """Answers a query from the top retrieved documents."""

    def __init__(
        self,
        retriever: Retriever,
        generator: TextGenerator,
        limit: int = DEFAULT_LIMIT,
    ):
        self._retriever = retriever
        self._generator = generator
        self.limit = limit

    def prompt_for(self, query: str) -> str:
        """Build the full prompt that would be sent for a query."""
        documents = self._retriever.search(query, limit=self.limit)
        logger.debug("Retrieved %d documents for prompt", len(documents))
        return build_prompt(build_context(documents), query)

    def generate_result(self, query: str) -> GenerationResult:
        return self._generator.generate(self.prompt_for(query))

    def generate(self, query: str) -> str:
        """Answer text, or an empty string if generation failed."""
        result = self.generate_result(query)
        if isinstance(result, GenerationSuccess):
            return result.text
        return ""
