"""
Document sources - shell commands and files.

These are the I/O edges of the pipeline. Failures are logged and returned
as typed results; a source that fails is simply not ingested.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from commit_rag.retrieval.document import Document
from commit_rag.retrieval.store import DocumentStore

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Outcome of running a shell command."""
    command: str
    output: str | None  # stdout and stderr combined; None if it could not run
    returncode: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.output is not None


@dataclass
class IngestError:
    """A source that could not be turned into a document."""
    source: str
    error_type: str
    error_message: str


def run_command(
    command: str,
    working_directory: str | Path | None = None,
    timeout: float | None = None,
) -> CommandResult:
    """
    Run a command through the shell, merging stderr into stdout.

    A non-zero exit status still yields output (git prints its errors
    there). Only a command that cannot be started, times out, or prints
    undecodable bytes gives output=None.
    """
    try:
        completed = subprocess.run(
            command,
            shell=True,
            cwd=working_directory,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        logger.error("Command %r timed out after %ss", command, timeout)
        return CommandResult(command=command, output=None, error=f"TimeoutExpired: {e}")
    except OSError as e:
        logger.error("Command %r could not be started: %s", command, e)
        return CommandResult(command=command, output=None, error=f"{type(e).__name__}: {e}")

    try:
        output = completed.stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        logger.error("Command %r produced non UTF-8 output", command)
        return CommandResult(
            command=command,
            output=None,
            returncode=completed.returncode,
            error=f"UnicodeDecodeError: {e}",
        )

    return CommandResult(command=command, output=output, returncode=completed.returncode)


def ingest_command(
    store: DocumentStore,
    command: str,
    working_directory: str | Path | None = None,
    timeout: float | None = None,
) -> Document | IngestError:
    """Run a command and ingest "<command>, <output>" as a document."""
    result = run_command(command, working_directory=working_directory, timeout=timeout)
    if result.output is None:
        return IngestError(
            source=command,
            error_type="CommandError",
            error_message=result.error or "no output",
        )
    return store.append(Document(id=command, content=f"{command}, {result.output}"))


def ingest_file(store: DocumentStore, path: str | Path) -> Document | IngestError:
    """Read a UTF-8 text file and ingest it, using the path as id."""
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Unable to read %s: %s", path, e)
        return IngestError(
            source=str(path),
            error_type=type(e).__name__,
            error_message=str(e),
        )
    return store.append(Document(id=str(path), content=content))
