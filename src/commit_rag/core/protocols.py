"""
Core protocols defining contracts for the entire system.

All external collaborators implement these protocols, enabling
dependency injection and easy testing.

PATTERN:
- Protocol defines the contract
- Production implementation (KeyedVectorsProvider, OllamaClient)
- Test double (MockWordVectors, MockTextGenerator)
- Factory function for instantiation
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Union, runtime_checkable

import numpy as np


# ---------------------------------------------------------------------------
# WORD VECTOR PROVIDER PROTOCOL
# ---------------------------------------------------------------------------


@runtime_checkable
class WordVectorProvider(Protocol):
    """
    Contract for per-token vector lookup.

    Implementations:
    - KeyedVectorsProvider (pretrained GloVe/word2vec text file)
    - MockWordVectors (testing)
    """

    def lookup(self, token: str) -> np.ndarray | None:
        """Return the vector for a token, or None if the token is unknown."""
        ...


# ---------------------------------------------------------------------------
# TEXT GENERATION PROTOCOL
# ---------------------------------------------------------------------------


@dataclass
class GenerationSuccess:
    """Text produced by the generation service."""
    text: str
    model: str
    latency_ms: float = 0.0


@dataclass
class GenerationFailure:
    """
    Error result when the generation call fails.

    error_type is one of: TimeoutError, TransportError,
    HTTPStatusError, ParseError.
    """
    error_type: str
    error_message: str
    raw_response: str | None = None


GenerationResult = Union[GenerationSuccess, GenerationFailure]


@runtime_checkable
class TextGenerator(Protocol):
    """
    Contract for prompt completion.

    Implementations:
    - OllamaClient (local Ollama server)
    - MockTextGenerator (testing)
    """

    def generate(self, prompt: str) -> GenerationResult:
        """Complete a prompt. Never raises for service failures."""
        ...
