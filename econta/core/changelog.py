"""Append-only change log recording which handler touched which files."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterator, List, Sequence

from pydantic import BaseModel, Field

NO_CHANGES = "No changes recorded."
FILE_SEPARATOR = ", "


class ChangeLogEntry(BaseModel):
    """Structured record for one handler action."""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    agent: str = Field(..., description="Handler that acted, e.g. 'LatexTA'.")
    action: str = Field(..., description="Short action label, e.g. 'execute'.")
    files: List[str] = Field(default_factory=list)
    description: str = ""


class ChangeLog:
    """In-memory, append-only sequence of :class:`ChangeLogEntry` items."""

    def __init__(self) -> None:
        self._entries: List[ChangeLogEntry] = []

    def record(self, agent: str, action: str, files: Sequence[str], description: str) -> ChangeLogEntry:
        """Append one entry and return it."""
        entry = ChangeLogEntry(agent=agent, action=action, files=list(files), description=description)
        self._entries.append(entry)
        return entry

    @property
    def entries(self) -> tuple[ChangeLogEntry, ...]:
        return tuple(self._entries)

    def __iter__(self) -> Iterator[ChangeLogEntry]:
        return iter(tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def render(self) -> str:
        return render_change_log(self._entries)


def render_change_log(entries: Sequence[ChangeLogEntry]) -> str:
    """Format entries as markdown, in append order."""

    if not entries:
        return NO_CHANGES

    lines = ["# Change Log", ""]
    for entry in entries:
        lines.append(f"## {entry.timestamp.isoformat()}")
        lines.append(f"**Agent:** {entry.agent}")
        lines.append(f"**Action:** {entry.action}")
        lines.append(f"**Files:** {FILE_SEPARATOR.join(entry.files)}")
        lines.append(f"**Description:** {entry.description}")
        lines.append("")
    return "\n".join(lines) + "\n"


__all__ = ["ChangeLog", "ChangeLogEntry", "FILE_SEPARATOR", "NO_CHANGES", "render_change_log"]
