"""MCP server exposing the commit message tool."""

import asyncio
import logging
from typing import Annotated, Awaitable, Callable, List

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from .collector import CollectionResult, collect_changes_async
from .generator import CommitMessageGenerator
from .summary import format_summary

logger = logging.getLogger(__name__)

SERVER_NAME = "git-changes-summary"
TOOL_NAME = "git-changes-commit-message"
TOOL_DESCRIPTION = "Analyzes current git changes and provides a commit message"
INPUT_DESCRIPTION = "Optional path to analyze specific directory/file"

Collector = Callable[[str], Awaitable[CollectionResult]]

_SHELL_SPECIAL = ("\\", '"', "$", "`")


def _quote(segment: str) -> str:
    for ch in _SHELL_SPECIAL:
        segment = segment.replace(ch, "\\" + ch)
    return f'"{segment}"'


def build_commit_command(message: str) -> str:
    """Turn a (possibly multi-line) message into a stage-and-commit command.

    Each non-blank line becomes its own ``-m`` segment.
    """
    lines: List[str] = [line.rstrip("\r") for line in message.split("\n")]
    lines = [line for line in lines if line.strip()]
    segments = " ".join(f"-m {_quote(line)}" for line in lines)
    return f"git add . && git commit {segments}"


async def generate_commit_command(
    path: str,
    generator: CommitMessageGenerator,
    collector: Collector = collect_changes_async,
) -> str:
    result = await collector(path)
    if not result.ok:
        logger.warning("%s", result.error)
        return f"Error: {result.error}"

    summary = format_summary(result.changes)
    message = await asyncio.to_thread(generator.generate, summary)
    return build_commit_command(message)


def create_server(
    generator: CommitMessageGenerator,
    collector: Collector = collect_changes_async,
) -> FastMCP:
    server = FastMCP(
        name=SERVER_NAME,
        instructions=(
            "Inspects pending changes in a git working tree and suggests a "
            "conventional commit command. The command is returned, not executed."
        ),
    )

    @server.tool(name=TOOL_NAME, description=TOOL_DESCRIPTION)
    async def git_changes_commit_message(
        input: Annotated[str, Field(description=INPUT_DESCRIPTION)] = "",
    ) -> str:
        return await generate_commit_command(input, generator, collector)

    return server


async def serve(server: FastMCP) -> None:
    logger.info("MCP Server running on stdio")
    await server.run_stdio_async()
