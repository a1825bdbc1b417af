"""
Application configuration loaded from environment variables.
"""

import os
from dataclasses import dataclass, field

from commit_rag.core.errors import ConfigurationError
from commit_rag.generation.ollama import OllamaConfig


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() in ("true", "1", "yes")


@dataclass
class RAGConfig:
    """Configuration for the RAG pipeline.

    Environment Variables:
        WORD_VECTORS_PATH: GloVe/word2vec text file (required unless mocking)
        RAG_TOP_K: Documents placed in the prompt (default: 3)
        USE_MOCK_EMBEDDINGS: Use hash-derived word vectors (default: false)
        USE_MOCK_LLM: Use a canned text generator (default: false)
        OLLAMA_*: see OllamaConfig
    """

    word_vectors_path: str | None = None
    top_k: int = 3
    use_mock_embeddings: bool = False
    use_mock_llm: bool = False
    ollama: OllamaConfig = field(default_factory=OllamaConfig)

    @classmethod
    def from_env(cls) -> "RAGConfig":
        """
        Load config from environment variables.

        Raises:
            ConfigurationError: RAG_TOP_K or OLLAMA_TIMEOUT is malformed
        """
        raw_top_k = os.environ.get("RAG_TOP_K", "3")
        try:
            top_k = int(raw_top_k)
        except ValueError:
            raise ConfigurationError(f"RAG_TOP_K must be an integer, got {raw_top_k!r}") from None

        return cls(
            word_vectors_path=os.environ.get("WORD_VECTORS_PATH") or None,
            top_k=top_k,
            use_mock_embeddings=_env_flag("USE_MOCK_EMBEDDINGS"),
            use_mock_llm=_env_flag("USE_MOCK_LLM"),
            ollama=OllamaConfig.from_env(),
        )


# Global config singleton
_config: RAGConfig | None = None


def get_config() -> RAGConfig:
    """Get the global RAG config (lazy-loaded from env)."""
    global _config
    if _config is None:
        _config = RAGConfig.from_env()
    return _config


def reset_config() -> None:
    """Reset config (useful for testing)."""
    global _config
    _config = None
