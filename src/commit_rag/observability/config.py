"""
Tracing Configuration

Loads observability settings from environment variables.
Tracing is off unless explicitly enabled.
"""

import os
from dataclasses import dataclass


@dataclass
class TracingConfig:
    """Configuration for OpenTelemetry tracing.

    Environment Variables:
        RAG_TRACING_ENABLED: Enable span export (default: false)
        RAG_SERVICE_NAME: Service name on exported spans (default: commit-rag)
        RAG_TRACE_CAPTURE_CONTENT: Attach prompts/responses to spans (default: false)

    PRIVACY WARNING:
        Setting RAG_TRACE_CAPTURE_CONTENT=true exports raw prompts, which
        contain the full git diff of the working tree.
    """

    enabled: bool = False
    service_name: str = "commit-rag"
    capture_content: bool = False

    @classmethod
    def from_env(cls) -> "TracingConfig":
        """Load config from environment variables."""
        return cls(
            enabled=os.environ.get("RAG_TRACING_ENABLED", "false").lower() in ("true", "1", "yes"),
            service_name=os.environ.get("RAG_SERVICE_NAME", "commit-rag"),
            capture_content=os.environ.get("RAG_TRACE_CAPTURE_CONTENT", "false").lower() in ("true", "1", "yes"),
        )


# Global config singleton
_config: TracingConfig | None = None


def get_config() -> TracingConfig:
    """Get the global tracing config (lazy-loaded from env)."""
    global _config
    if _config is None:
        _config = TracingConfig.from_env()
    return _config


def reset_config() -> None:
    """Reset config (useful for testing)."""
    global _config
    _config = None
