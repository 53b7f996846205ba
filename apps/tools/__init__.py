"""Collaborator tools shared by the task handlers."""

from .filesystem import FileListEntry, SandboxedFileSystem, SandboxViolation

__all__ = ["FileListEntry", "SandboxViolation", "SandboxedFileSystem"]
