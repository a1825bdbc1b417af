"""
Ollama text generation - Single Responsibility: prompt in, text out.

Talks to a local Ollama server's /api/generate endpoint:

    POST {base_url}/api/generate
    {"model": "llama3.2:latest", "prompt": "...", "stream": false}

    200 {"model": "...", "response": "Fix bug", "done": true, ...}

Every failure (timeout, connection error, non-2xx status, body without a
string "response" field) becomes a GenerationFailure. Nothing is raised.
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from typing import Callable

import httpx
from pydantic import BaseModel, StrictStr, ValidationError

from commit_rag.core.errors import ConfigurationError
from commit_rag.core.protocols import (
    GenerationFailure,
    GenerationResult,
    GenerationSuccess,
    TextGenerator,
)
from commit_rag.observability.attributes import (
    GEN_AI_COMPLETION,
    GEN_AI_PROMPT,
    RAG_GENERATION_ERROR_TYPE,
    RAG_GENERATION_LATENCY_MS,
    RAG_GENERATION_STATUS,
    generation_attributes,
)
from commit_rag.observability.config import get_config as get_tracing_config
from commit_rag.observability.tracer import get_tracer

logger = logging.getLogger(__name__)

GENERATE_PATH = "/api/generate"


# ---------------------------------------------------------------------------
# CONFIGURATION
# ---------------------------------------------------------------------------


@dataclass
class OllamaConfig:
    """Configuration for the Ollama client.

    Environment Variables:
        OLLAMA_BASE_URL: Server URL (default: http://localhost:11434)
        OLLAMA_MODEL: Model tag (default: llama3.2:latest)
        OLLAMA_TIMEOUT: Request timeout in seconds (default: 120)
    """

    base_url: str = "http://localhost:11434"
    model: str = "llama3.2:latest"
    timeout: float = 120.0

    @classmethod
    def from_env(cls) -> "OllamaConfig":
        """Load config from environment variables."""
        raw_timeout = os.environ.get("OLLAMA_TIMEOUT", "120")
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigurationError(
                f"OLLAMA_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
            ) from None

        return cls(
            base_url=os.environ.get("OLLAMA_BASE_URL", "http://localhost:11434"),
            model=os.environ.get("OLLAMA_MODEL", "llama3.2:latest"),
            timeout=timeout,
        )


# ---------------------------------------------------------------------------
# WIRE SCHEMA
# ---------------------------------------------------------------------------


class GenerateRequest(BaseModel):
    """Body of POST /api/generate."""
    model: str
    prompt: str
    stream: bool = False


class GenerateResponse(BaseModel):
    """The part of the /api/generate reply we rely on."""
    response: StrictStr
    model: str | None = None
    done: bool | None = None


# ---------------------------------------------------------------------------
# OLLAMA CLIENT (Production)
# ---------------------------------------------------------------------------


class OllamaClient:
    """
    Synchronous Ollama client.

    The HTTP client can be INJECTED (e.g. with httpx.MockTransport in tests);
    otherwise one is created from the config.
    """

    def __init__(
        self,
        config: OllamaConfig | None = None,
        http_client: httpx.Client | None = None,
    ):
        self.config = config or OllamaConfig()
        self._client = http_client or httpx.Client(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
        )
        self._owns_client = http_client is None

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "OllamaClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _url(self) -> str:
        return self.config.base_url.rstrip("/") + GENERATE_PATH

    def generate(self, prompt: str) -> GenerationResult:
        """
        Send a prompt and wait for the full response.

        Returns:
            GenerationSuccess on success, GenerationFailure on failure
        """
        tracing = get_tracing_config()
        body = GenerateRequest(model=self.config.model, prompt=prompt)

        with get_tracer().start_span(
            "ollama.generate",
            attributes=generation_attributes(self.config.model),
        ) as span:
            if tracing.capture_content:
                span.set_attribute(GEN_AI_PROMPT, prompt)

            result = self._post(body)

            if isinstance(result, GenerationSuccess):
                span.set_attributes({
                    RAG_GENERATION_STATUS: "success",
                    RAG_GENERATION_LATENCY_MS: result.latency_ms,
                })
                if tracing.capture_content:
                    span.set_attribute(GEN_AI_COMPLETION, result.text)
            else:
                span.set_attributes({
                    RAG_GENERATION_STATUS: "failure",
                    RAG_GENERATION_ERROR_TYPE: result.error_type,
                })
                span.fail(result.error_message)
                logger.warning(
                    "Generation failed (%s): %s", result.error_type, result.error_message
                )
            return result

    def _post(self, body: GenerateRequest) -> GenerationResult:
        start_time = time.time()
        try:
            response = self._client.post(
                self._url(),
                json=body.model_dump(),
                timeout=self.config.timeout,
            )
            response.raise_for_status()
        except httpx.TimeoutException as e:
            return GenerationFailure(
                error_type="TimeoutError",
                error_message=f"No response within {self.config.timeout}s: {e}",
            )
        except httpx.HTTPStatusError as e:
            return GenerationFailure(
                error_type="HTTPStatusError",
                error_message=str(e),
                raw_response=e.response.text,
            )
        except httpx.HTTPError as e:
            return GenerationFailure(
                error_type="TransportError",
                error_message=str(e) or type(e).__name__,
            )
        latency_ms = (time.time() - start_time) * 1000

        try:
            parsed = GenerateResponse.model_validate_json(response.content)
        except ValidationError as e:
            return GenerationFailure(
                error_type="ParseError",
                error_message=f"Failed to parse response: {e.error_count()} error(s)",
                raw_response=response.text,
            )

        return GenerationSuccess(
            text=parsed.response,
            model=parsed.model or self.config.model,
            latency_ms=latency_ms,
        )


# ---------------------------------------------------------------------------
# MOCK GENERATOR (Testing/Development)
# ---------------------------------------------------------------------------


class MockTextGenerator:
    """
    Mock text generator for testing without a running server.

    Records every prompt it receives in `prompts`.
    """

    def __init__(
        self,
        response: str | Callable[[str], str] = "",
        fail: bool = False,
        model: str = "mock",
    ):
        self._response = response
        self._fail = fail
        self.model = model
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> GenerationResult:
        self.prompts.append(prompt)
        if self._fail:
            return GenerationFailure(
                error_type="TransportError",
                error_message="Mock generator configured to fail",
            )
        text = self._response(prompt) if callable(self._response) else self._response
        return GenerationSuccess(text=text, model=self.model)


# ---------------------------------------------------------------------------
# FACTORY FUNCTION
# ---------------------------------------------------------------------------


def get_text_generator(
    use_mock: bool = False,
    config: OllamaConfig | None = None,
) -> TextGenerator:
    """
    Factory function to get the appropriate text generator.

    Args:
        use_mock: Return MockTextGenerator (for testing)
        config: Ollama configuration (reads env vars if not provided)
    """
    if use_mock:
        return MockTextGenerator(response="Mock response")
    return OllamaClient(config or OllamaConfig.from_env())
