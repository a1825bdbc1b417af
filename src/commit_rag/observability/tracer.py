"""
Span helpers for retrieval and generation.

get_tracer() hands out one Tracer per process. When tracing is disabled
the Tracer has no OpenTelemetry backend and its spans drop everything,
so instrumented code never checks whether tracing is on.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Mapping

from opentelemetry.trace import Status, StatusCode


class Span:
    """Attribute sink for one operation. Discards writes when unbacked."""

    def __init__(self, otel_span: Any | None = None):
        self._otel_span = otel_span

    @property
    def recording(self) -> bool:
        return self._otel_span is not None

    def set_attribute(self, key: str, value: Any) -> None:
        if self._otel_span is not None:
            self._otel_span.set_attribute(key, value)

    def set_attributes(self, attributes: Mapping[str, Any]) -> None:
        for key, value in attributes.items():
            self.set_attribute(key, value)

    def fail(self, description: str) -> None:
        """Mark the operation as failed; the span still ends normally."""
        if self._otel_span is not None:
            self._otel_span.set_status(Status(StatusCode.ERROR, description))


class Tracer:
    """Opens Spans, backed by an OpenTelemetry tracer when one is given."""

    def __init__(self, otel_tracer: Any | None = None):
        self._otel_tracer = otel_tracer

    @property
    def enabled(self) -> bool:
        return self._otel_tracer is not None

    @contextmanager
    def start_span(self, name: str, attributes: dict[str, Any] | None = None) -> Iterator[Span]:
        if self._otel_tracer is None:
            yield Span()
            return
        with self._otel_tracer.start_as_current_span(name, attributes=attributes) as otel_span:
            yield Span(otel_span)


_tracer: Tracer | None = None


def get_tracer() -> Tracer:
    """
    Get the process-wide Tracer.

    The first call reads TracingConfig; a disabled config yields an
    unbacked Tracer.
    """
    global _tracer
    if _tracer is not None:
        return _tracer

    from commit_rag.observability.config import get_config

    config = get_config()
    if config.enabled:
        from opentelemetry import trace

        _tracer = Tracer(trace.get_tracer(config.service_name))
    else:
        _tracer = Tracer()
    return _tracer


def reset_tracer() -> None:
    """Forget the cached Tracer so the next get_tracer() rereads config."""
    global _tracer
    _tracer = None
