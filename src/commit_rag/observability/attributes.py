"""
Semantic Conventions for Span Attributes

Defines attribute keys following OpenTelemetry GenAI conventions
plus a custom namespace for retrieval.

Reference: https://opentelemetry.io/docs/specs/semconv/gen-ai/
"""

from __future__ import annotations

from typing import Any

# ---------------------------------------------------------------------------
# GENAI NAMESPACE (OTel standard)
# ---------------------------------------------------------------------------

GEN_AI_SYSTEM = "gen_ai.system"  # "ollama"
GEN_AI_REQUEST_MODEL = "gen_ai.request.model"  # "llama3.2:latest"

# Request/Response (optional, controlled by RAG_TRACE_CAPTURE_CONTENT)
GEN_AI_PROMPT = "gen_ai.prompt"
GEN_AI_COMPLETION = "gen_ai.completion"


# ---------------------------------------------------------------------------
# RAG NAMESPACE (custom)
# ---------------------------------------------------------------------------

RAG_QUERY_TOKENS = "rag.query.tokens"
RAG_QUERY_HAS_SIGNAL = "rag.query.has_signal"
RAG_SEARCH_LIMIT = "rag.search.limit"
RAG_STORE_SIZE = "rag.store.size"
RAG_RETRIEVED_DOC_COUNT = "rag.retrieved_doc_count"
RAG_RETRIEVED_DOC_IDS = "rag.retrieved_doc_ids"
RAG_GENERATION_STATUS = "rag.generation.status"  # "success", "failure"
RAG_GENERATION_ERROR_TYPE = "rag.generation.error_type"
RAG_GENERATION_LATENCY_MS = "rag.generation.latency_ms"


# ---------------------------------------------------------------------------
# HELPERS
# ---------------------------------------------------------------------------


def search_attributes(limit: int, store_size: int) -> dict[str, Any]:
    """Attributes for a retriever.search span."""
    return {
        RAG_SEARCH_LIMIT: limit,
        RAG_STORE_SIZE: store_size,
    }


def generation_attributes(model: str) -> dict[str, Any]:
    """Attributes for an LLM generation span."""
    return {
        GEN_AI_SYSTEM: "ollama",
        GEN_AI_REQUEST_MODEL: model,
    }
