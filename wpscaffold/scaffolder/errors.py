"""Exceptions raised while generating a plugin skeleton.

Every error carries a single human-readable message; callers at the UI
boundary only ever show ``str(exc)``.
"""

from __future__ import annotations

from pathlib import Path


class GenerationError(Exception):
    """Base class for all plugin generation failures."""


class InvalidOptionsError(GenerationError):
    """Raised when the options record fails validation.

    Always raised before the file system is touched.
    """


class DestinationConflictError(GenerationError):
    """Raised when the target plugin directory exists and is not empty."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Directory '{path}' already exists and is not empty.")


class FileSystemError(GenerationError):
    """Raised when inspecting the destination, creating a directory or
    writing a file fails.

    *action* names the failed operation (``"read"``, ``"create"`` or
    ``"write"``).  The originating ``OSError`` is chained as
    ``__cause__``.  Files written before the failure are left on disk.
    """

    def __init__(self, path: Path, reason: str, action: str = "write") -> None:
        self.path = path
        self.action = action
        super().__init__(f"Could not {action} '{path}': {reason}")
