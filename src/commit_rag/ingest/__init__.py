"""
Ingest module - turn commands and files into stored documents.
"""

from commit_rag.ingest.sources import (
    CommandResult,
    IngestError,
    run_command,
    ingest_command,
    ingest_file,
)

__all__ = [
    "CommandResult",
    "IngestError",
    "run_command",
    "ingest_command",
    "ingest_file",
]
