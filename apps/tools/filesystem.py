"""Sandboxed read/write access to the course materials directory."""

from __future__ import annotations

import fnmatch
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Literal


class SandboxViolation(PermissionError):
    """Raised when a path would resolve outside the sandbox root."""


@dataclass(frozen=True)
class FileListEntry:
    name: str
    type: Literal["file", "directory"]
    path: str


class SandboxedFileSystem:
    """Path-confined file access; every argument resolves against one fixed root.

    Instances hold no state besides the root, so parallel handlers may share
    one as long as they write disjoint paths.
    """

    def __init__(self, base_path: Path | str) -> None:
        self.base_path = Path(base_path).expanduser().resolve()

    def resolve(self, file_path: Path | str) -> Path:
        resolved = (self.base_path / Path(file_path)).resolve()
        if resolved != self.base_path and not resolved.is_relative_to(self.base_path):
            raise SandboxViolation(f"Access denied: path outside sandbox ({file_path})")
        return resolved

    def read(self, file_path: Path | str) -> str:
        return self.resolve(file_path).read_text(encoding="utf-8")

    def write(self, file_path: Path | str, content: str | bytes) -> Path:
        """Write ``content``, creating parent directories as needed."""

        target = self.resolve(file_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            target.write_bytes(content)
        else:
            target.write_text(content, encoding="utf-8")
        return target

    def exists(self, file_path: Path | str) -> bool:
        return self.resolve(file_path).exists()

    def mkdir(self, dir_path: Path | str) -> Path:
        target = self.resolve(dir_path)
        target.mkdir(parents=True, exist_ok=True)
        return target

    def list(self, dir_path: Path | str = ".") -> List[FileListEntry]:
        target = self.resolve(dir_path)
        entries: List[FileListEntry] = []
        for child in sorted(target.iterdir(), key=lambda item: item.name):
            entries.append(
                FileListEntry(
                    name=child.name,
                    type="directory" if child.is_dir() else "file",
                    path=child.relative_to(self.base_path).as_posix(),
                )
            )
        return entries

    def find(self, pattern: str, dir_path: Path | str = ".") -> List[str]:
        """Return sandbox-relative paths of files whose name matches a ``*`` glob."""

        target = self.resolve(dir_path)
        matches: List[str] = []
        for root, _dirs, files in os.walk(target):
            for name in sorted(files):
                if fnmatch.fnmatch(name, pattern):
                    matches.append((Path(root) / name).relative_to(self.base_path).as_posix())
        return sorted(matches)


__all__ = ["FileListEntry", "SandboxViolation", "SandboxedFileSystem"]
