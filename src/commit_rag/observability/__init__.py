"""
Observability Module - OpenTelemetry Integration

Spans around retrieval and generation. Disabled by default; when
RAG_TRACING_ENABLED=true, spans are printed by a console exporter.

USAGE:
------
# At application startup:
from commit_rag.observability import init_tracing

init_tracing()

# In code that needs tracing:
from commit_rag.observability import get_tracer

tracer = get_tracer()
with tracer.start_span("my_operation", attributes={"key": "value"}) as span:
    # ... do work ...
    span.set_attribute("result", "success")
"""

from __future__ import annotations

import logging

from commit_rag.observability.config import (
    TracingConfig,
    get_config,
    reset_config,
)
from commit_rag.observability.tracer import (
    Span,
    Tracer,
    get_tracer,
    reset_tracer,
)
from commit_rag.observability.attributes import (
    GEN_AI_SYSTEM,
    GEN_AI_REQUEST_MODEL,
    GEN_AI_PROMPT,
    GEN_AI_COMPLETION,
    RAG_RETRIEVED_DOC_COUNT,
    RAG_RETRIEVED_DOC_IDS,
    RAG_GENERATION_STATUS,
    search_attributes,
    generation_attributes,
)

logger = logging.getLogger(__name__)

_tracing_initialized = False


def init_tracing(config: TracingConfig | None = None) -> bool:
    """
    Initialize OpenTelemetry tracing.

    Call once at application startup. Installs an SDK TracerProvider
    with a console exporter.

    Args:
        config: Optional config (uses env vars if not provided)

    Returns:
        True if tracing was initialized, False if disabled
    """
    global _tracing_initialized
    if _tracing_initialized:
        return True

    config = config or get_config()

    if not config.enabled:
        logger.debug("Tracing disabled")
        return False

    from opentelemetry import trace
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

    provider = TracerProvider(resource=Resource.create({"service.name": config.service_name}))
    provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(provider)

    # Drop any unbacked tracer handed out before the provider existed
    reset_tracer()
    _tracing_initialized = True
    logger.info("Tracing enabled for service %s", config.service_name)
    return True


def shutdown_tracing() -> None:
    """Flush spans and reset tracing state."""
    global _tracing_initialized

    if not _tracing_initialized:
        return

    from opentelemetry import trace

    provider = trace.get_tracer_provider()
    if hasattr(provider, "shutdown"):
        provider.shutdown()

    reset_tracer()
    reset_config()
    _tracing_initialized = False


__all__ = [
    # Initialization
    "init_tracing",
    "shutdown_tracing",
    # Config
    "TracingConfig",
    "get_config",
    "reset_config",
    # Tracer
    "Span",
    "Tracer",
    "get_tracer",
    "reset_tracer",
    # Attributes
    "GEN_AI_SYSTEM",
    "GEN_AI_REQUEST_MODEL",
    "GEN_AI_PROMPT",
    "GEN_AI_COMPLETION",
    "RAG_RETRIEVED_DOC_COUNT",
    "RAG_RETRIEVED_DOC_IDS",
    "RAG_GENERATION_STATUS",
    # Helpers
    "search_attributes",
    "generation_attributes",
]
