"""Git Changes Commit (MCP server)

Serves one MCP tool over stdio that summarizes pending git changes and asks
OpenAI for a Conventional Commit message. The tool returns a ready-to-run
``git add . && git commit -m ...`` command; it never commits by itself.

Env vars (a .env file in the working directory is loaded first):
- OPENAI_API_KEY (required unless --key is given)
- OPENAI_MODEL (optional, default: gpt-4o-mini)
- OPENAI_BASE_URL (optional)
- LOG_LEVEL (optional, default: INFO)

Usage:
  python -m git_changes_commit [--key sk-...] [--model gpt-4o-mini]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from dataclasses import dataclass
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from .generator import DEFAULT_MODEL, CommitMessageGenerator, build_openai_client
from .server import create_server, serve

logger = logging.getLogger(__name__)

NO_KEY_MESSAGE = (
    "No API key provided. Please set OPENAI_API_KEY environment variable "
    "or use --key argument"
)
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


# -----------------------------
# Configuration
# -----------------------------

@dataclass(frozen=True)
class Settings:
    api_key: str
    model: str = DEFAULT_MODEL
    base_url: Optional[str] = None
    log_level: str = "INFO"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-changes-commit",
        description="MCP server that suggests a commit command for pending git changes.",
    )
    parser.add_argument(
        "--key",
        default=None,
        help="OpenAI API key (default: env OPENAI_API_KEY)",
    )
    parser.add_argument(
        "--model",
        default=None,
        help=f"OpenAI model (default: env OPENAI_MODEL or {DEFAULT_MODEL})",
    )
    parser.add_argument(
        "--base-url",
        default=None,
        help="OpenAI-compatible API base URL (default: env OPENAI_BASE_URL)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level written to stderr (default: env LOG_LEVEL or INFO)",
    )
    return parser


def load_settings(args: argparse.Namespace) -> Optional[Settings]:
    """Merge flags over environment; None when no API key is available."""
    api_key = (args.key or os.environ.get("OPENAI_API_KEY", "")).strip()
    if not api_key:
        return None
    return Settings(
        api_key=api_key,
        model=args.model or os.environ.get("OPENAI_MODEL") or DEFAULT_MODEL,
        base_url=args.base_url or os.environ.get("OPENAI_BASE_URL") or None,
        log_level=(args.log_level or os.environ.get("LOG_LEVEL") or "INFO").upper(),
    )


def configure_logging(level: str) -> None:
    # stdout carries the MCP stream
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


# -----------------------------
# Main
# -----------------------------

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    load_dotenv(find_dotenv(usecwd=True))

    settings = load_settings(args)
    if settings is None:
        print(NO_KEY_MESSAGE, file=sys.stderr)
        return 1

    configure_logging(settings.log_level)

    client = build_openai_client(settings.api_key, settings.base_url)
    generator = CommitMessageGenerator(client, model=settings.model)
    server = create_server(generator)

    try:
        asyncio.run(serve(server))
    except KeyboardInterrupt:
        return 0
    except Exception:
        logger.exception("Fatal error in main()")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
