"""
Generation module - prompt assembly and LLM calls.

Follows the project pattern:
1. Protocol (TextGenerator, in core.protocols) defines the contract
2. Production implementation (OllamaClient)
3. Test double (MockTextGenerator)
4. Factory function (get_text_generator)
"""

from commit_rag.generation.ollama import (
    OllamaConfig,
    OllamaClient,
    MockTextGenerator,
    GenerateRequest,
    GenerateResponse,
    get_text_generator,
)
from commit_rag.generation.prompts import (
    RAG_TEMPLATE,
    COMMIT_MESSAGE_PROMPT,
    commit_message_query,
)
from commit_rag.generation.responder import (
    ResponseGenerator,
    build_context,
    build_prompt,
)

__all__ = [
    # Ollama
    "OllamaConfig",
    "OllamaClient",
    "MockTextGenerator",
    "GenerateRequest",
    "GenerateResponse",
    "get_text_generator",
    # Prompts
    "RAG_TEMPLATE",
    "COMMIT_MESSAGE_PROMPT",
    "commit_message_query",
    # Responder
    "ResponseGenerator",
    "build_context",
    "build_prompt",
]
