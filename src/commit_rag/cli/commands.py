"""
CLI commands - entry points for the RAG pipeline.

Each command follows a consistent pattern:
1. Parse arguments
2. Load environment and configure logging
3. Build the RAG system and ingest sources
4. Print results
5. Return exit code

Exit codes: 0 success, 1 generation/ingest failure, 2 configuration
error, 130 interrupted.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys

from dotenv import load_dotenv

from commit_rag.config import RAGConfig, get_config
from commit_rag.core.errors import ConfigurationError
from commit_rag.core.protocols import GenerationFailure
from commit_rag.generation.prompts import commit_message_query
from commit_rag.ingest.sources import IngestError, run_command
from commit_rag.observability import init_tracing, shutdown_tracing
from commit_rag.system import build_rag_system

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130


def _load_env() -> None:
    """Load environment variables from .env file."""
    load_dotenv()


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging with ISO timestamps on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
    # Reduce noise from verbose third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use mock word vectors and a canned LLM (no model file, no server)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")


def _resolve_config(args: argparse.Namespace) -> RAGConfig:
    config = get_config()
    if args.mock:
        config = dataclasses.replace(config, use_mock_embeddings=True, use_mock_llm=True)
    if getattr(args, "limit", None) is not None:
        config = dataclasses.replace(config, top_k=args.limit)
    return config


def _report_ingest(result) -> bool:
    if isinstance(result, IngestError):
        print(f"  [SKIP] {result.source}: {result.error_message}", file=sys.stderr)
        return False
    return True


def run_commit_cli() -> int:
    """CLI entry point for commit message generation."""
    parser = argparse.ArgumentParser(description="Suggest a commit message for the working tree")
    parser.add_argument("--repo", default=".", help="Git working directory (default: .)")
    parser.add_argument("--hint", default=None, help="Optional hint for the message")
    _add_common_arguments(parser)
    args = parser.parse_args()

    configure_logging(args.verbose)
    init_tracing()

    try:
        diff = run_command("git diff", working_directory=args.repo)
        if diff.output is None:
            print(f"Unable to run git diff: {diff.error}", file=sys.stderr)
            return EXIT_FAILURE
        if not diff.output.strip():
            print("git diff is empty")
            return EXIT_OK

        try:
            system = build_rag_system(_resolve_config(args))
        except ConfigurationError as e:
            print(f"Configuration error: {e}", file=sys.stderr)
            return EXIT_CONFIG_ERROR

        for command in ("git diff", "git status"):
            _report_ingest(system.add_command(command, working_directory=args.repo))

        result = system.generate_result(commit_message_query(args.hint))
        if isinstance(result, GenerationFailure):
            print(
                f"Generation failed ({result.error_type}): {result.error_message}",
                file=sys.stderr,
            )
            return EXIT_FAILURE

        print(f"Commit: {result.text.strip()}")
        return EXIT_OK
    finally:
        shutdown_tracing()


def run_ask_cli() -> int:
    """CLI entry point for answering a question over files and command output."""
    parser = argparse.ArgumentParser(description="Answer a question from ingested context")
    parser.add_argument("query", help="Question to answer")
    parser.add_argument(
        "--file", dest="files", action="append", default=[], help="File to ingest (repeatable)"
    )
    parser.add_argument(
        "--command",
        dest="commands",
        action="append",
        default=[],
        help="Shell command whose output is ingested (repeatable)",
    )
    parser.add_argument("--repo", default=None, help="Working directory for --command")
    parser.add_argument("--limit", type=int, default=None, help="Documents in context")
    parser.add_argument(
        "--show-context",
        action="store_true",
        help="Print ranked documents instead of calling the LLM",
    )
    _add_common_arguments(parser)
    args = parser.parse_args()

    configure_logging(args.verbose)
    init_tracing()

    try:
        try:
            config = _resolve_config(args)
            system = build_rag_system(config)
        except ConfigurationError as e:
            print(f"Configuration error: {e}", file=sys.stderr)
            return EXIT_CONFIG_ERROR

        for path in args.files:
            _report_ingest(system.add_file(path))
        for command in args.commands:
            _report_ingest(system.add_command(command, working_directory=args.repo))

        if args.show_context:
            for i, scored in enumerate(system.search_scored(args.query, limit=config.top_k), 1):
                print(f"[{i}] {scored.id} score={scored.score:.4f}")
                print(scored.content)
                print("-" * 80)
            return EXIT_OK

        result = system.generate_result(args.query)
        if isinstance(result, GenerationFailure):
            print(
                f"Generation failed ({result.error_type}): {result.error_message}",
                file=sys.stderr,
            )
            return EXIT_FAILURE

        print(result.text)
        return EXIT_OK
    finally:
        shutdown_tracing()


def main() -> int:
    """
    Main CLI entry point with subcommands.

    Usage:
        commit-rag commit [--repo DIR] [--hint TEXT]
        commit-rag ask "question" --file README.md --command "git log -5"
    """
    _load_env()

    parser = argparse.ArgumentParser(
        description="Retrieval-augmented commit message helper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  commit      Suggest a commit message from git diff and git status
  ask         Answer a question from files and command output

Examples:
  commit-rag commit --repo ~/src/project
  commit-rag commit --hint "fixes login redirect"
  commit-rag ask "What does this project do?" --file README.md
  commit-rag ask "cat" --file notes.txt --show-context --mock
        """,
    )

    parser.add_argument(
        "command",
        choices=["commit", "ask"],
        help="Command to run",
    )

    # Parse just the command first
    args, remaining = parser.parse_known_args()

    commands = {
        "commit": run_commit_cli,
        "ask": run_ask_cli,
    }

    # Re-inject remaining args for the subcommand
    sys.argv = [sys.argv[0]] + remaining

    try:
        return commands[args.command]()
    except KeyboardInterrupt:
        print("\nInterrupted")
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
