"""Collect pending working-tree changes from git.

Runs ``git diff HEAD`` and ``git status --porcelain`` against a directory
and parses both into a :class:`ChangeRecord`.
"""

from __future__ import annotations

import asyncio
import logging
import os
import subprocess
from dataclasses import dataclass, field
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

DIFF_HEADER = "diff --git"
NEW_PATH_TOKEN = " b/"
ERROR_PREFIX = "Failed to get git changes"


# -----------------------------
# Models
# -----------------------------

@dataclass
class ChangeRecord:
    modified: List[str] = field(default_factory=list)
    added: List[str] = field(default_factory=list)
    deleted: List[str] = field(default_factory=list)
    # path -> raw "+"/"-" lines, markers kept, in diff order
    details: Dict[str, List[str]] = field(default_factory=dict)


@dataclass(frozen=True)
class CollectionResult:
    changes: Optional[ChangeRecord] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# -----------------------------
# Git helpers
# -----------------------------

def run_git(repo: str, *args: str) -> str:
    """Run a git command inside repo and return its stdout."""
    cmd = ["git", "-C", repo, *args]
    cp = subprocess.run(
        cmd,
        encoding="utf-8",
        errors="replace",
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        check=True,
    )
    return cp.stdout or ""


def get_diff(repo: str) -> str:
    return run_git(repo, "diff", "HEAD")


def get_status(repo: str) -> str:
    return run_git(repo, "status", "--porcelain")


def describe_failure(exc: Exception) -> str:
    if isinstance(exc, subprocess.CalledProcessError):
        detail = (exc.stderr or exc.stdout or str(exc)).strip()
    else:
        detail = str(exc)
    return f"{ERROR_PREFIX}: {detail}"


# -----------------------------
# Parsing
# -----------------------------

def parse_status(output: str, record: ChangeRecord) -> None:
    """Sort porcelain status lines into modified/added/deleted.

    Membership is per letter, so ``MM`` or ``AM`` can land in more than one
    list. Untracked (``??``) entries land in none.
    """
    for line in output.split("\n"):
        if not line:
            continue
        code, path = line[:2].strip(), line[3:]
        if "M" in code:
            record.modified.append(path)
        if "A" in code:
            record.added.append(path)
        if "D" in code:
            record.deleted.append(path)


def _header_path(line: str) -> Optional[str]:
    parts = line.split(NEW_PATH_TOKEN)
    if len(parts) < 2:
        return None
    return parts[1]


def parse_diff(output: str, record: ChangeRecord) -> None:
    """Group added/removed diff lines under the file they belong to."""
    current: Optional[str] = None
    for line in output.split("\n"):
        if line.startswith(DIFF_HEADER):
            current = _header_path(line)
            if current is not None:
                record.details[current] = []
        elif line.startswith(("+", "-")):
            if current is not None and not line.startswith(("+++", "---")):
                record.details[current].append(line)


def build_record(diff_output: str, status_output: str) -> ChangeRecord:
    record = ChangeRecord()
    parse_status(status_output, record)
    parse_diff(diff_output, record)
    return record


# -----------------------------
# Collection
# -----------------------------

def _target_dir(path: str) -> str:
    return path or os.getcwd()


async def collect_changes_async(path: str = "") -> CollectionResult:
    """Collect changes for path (default: current directory).

    Both git commands run concurrently and are joined before parsing.
    """
    repo = _target_dir(path)
    logger.debug("Collecting git changes in %s", repo)
    try:
        diff_output, status_output = await asyncio.gather(
            asyncio.to_thread(get_diff, repo),
            asyncio.to_thread(get_status, repo),
        )
    except (subprocess.CalledProcessError, OSError) as e:
        return CollectionResult(error=describe_failure(e))
    return CollectionResult(changes=build_record(diff_output, status_output))
