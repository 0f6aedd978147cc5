"""Render a ChangeRecord as the text block sent to the model."""

from __future__ import annotations

from typing import List

from .collector import ChangeRecord

MAX_DETAIL_LINES = 10
TRUNCATION_MARKER = "  ... and more changes"

HEADER = "Git Changes Summary:\n\n"
MODIFIED_TITLE = "📝 Modified Files:"
ADDED_TITLE = "✨ New Files:"
DELETED_TITLE = "🗑️ Deleted Files:"
DETAILS_TITLE = "📄 Detailed Changes:\n"


def _file_section(title: str, files: List[str]) -> str:
    if not files:
        return ""
    return title + "\n" + "\n".join(f"  - {f}" for f in files) + "\n\n"


def format_summary(changes: ChangeRecord) -> str:
    summary = HEADER
    summary += _file_section(MODIFIED_TITLE, changes.modified)
    summary += _file_section(ADDED_TITLE, changes.added)
    summary += _file_section(DELETED_TITLE, changes.deleted)

    summary += DETAILS_TITLE
    for file_path, lines in changes.details.items():
        if not lines:
            continue
        summary += f"\n{file_path}:\n"
        summary += "\n".join(f"  {line}" for line in lines[:MAX_DETAIL_LINES])
        if len(lines) > MAX_DETAIL_LINES:
            summary += "\n" + TRUNCATION_MARKER
    return summary
