"""
CLI module - unified command-line interface.

Provides entry points for:
- Suggesting a commit message for a git working tree
- Asking a question over files and command output
"""

from commit_rag.cli.commands import (
    main,
    run_commit_cli,
    run_ask_cli,
)

__all__ = [
    "main",
    "run_commit_cli",
    "run_ask_cli",
]
