"""
Core module - shared protocols, result types and errors.

USAGE:
------
from commit_rag.core import WordVectorProvider, TextGenerator

class MyProvider:
    '''Implements WordVectorProvider protocol.'''
    ...
"""

from commit_rag.core.errors import (
    CommitRagError,
    ConfigurationError,
    EmbeddingModelUnavailableError,
    DocumentAlreadyIngestedError,
    DimensionMismatchError,
)
from commit_rag.core.protocols import (
    # Protocols
    WordVectorProvider,
    TextGenerator,
    # Data classes
    GenerationSuccess,
    GenerationFailure,
    GenerationResult,
)

__all__ = [
    # Errors
    "CommitRagError",
    "ConfigurationError",
    "EmbeddingModelUnavailableError",
    "DocumentAlreadyIngestedError",
    "DimensionMismatchError",
    # Protocols
    "WordVectorProvider",
    "TextGenerator",
    # Data classes
    "GenerationSuccess",
    "GenerationFailure",
    "GenerationResult",
]
