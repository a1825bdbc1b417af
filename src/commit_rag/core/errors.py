"""
Exception hierarchy for commit-rag.

Only conditions the caller must act on are exceptions. Expected runtime
failures (a generation call timing out, a file that cannot be read) are
returned as typed results instead - see core.protocols.
"""


class CommitRagError(Exception):
    """Base class for all commit-rag errors."""


class ConfigurationError(CommitRagError):
    """The system is misconfigured and cannot start."""


class EmbeddingModelUnavailableError(ConfigurationError):
    """
    The word-vector model could not be loaded.

    There is no fallback embedding strategy, so this is fatal for the
    whole system. Callers decide whether to abort.
    """


class DocumentAlreadyIngestedError(CommitRagError, ValueError):
    """A Document that already carries an embedding was appended again."""

    def __init__(self, document_id: str):
        super().__init__(f"Document {document_id!r} has already been ingested")
        self.document_id = document_id


class DimensionMismatchError(CommitRagError, ValueError):
    """Vectors of different lengths were combined."""
