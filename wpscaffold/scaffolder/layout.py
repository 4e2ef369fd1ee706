"""On-disk layout of a generated plugin.

``LayoutPlanner`` computes where every artifact goes and performs the
directory creation and file writes.  The blocking calls are exposed
as-is and as awaitable wrappers that run them in a worker thread, one at
a time.
"""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass, field
from pathlib import Path

SUBDIRECTORIES: tuple[str, ...] = (
    "includes",
    "admin",
    "admin/css",
    "admin/js",
    "public",
    "public/css",
    "public/js",
    "languages",
)


@dataclass(frozen=True)
class LayoutPlan:
    """Target paths for one plugin.

    Attributes:
        root: ``<output_directory>/<slug>``.
        slug: The plugin slug used in every file name.
        subdirectories: Absolute paths of the fixed subdirectories, in
            creation order.
        files: Artifact key -> absolute file path.
    """

    root: Path
    slug: str
    subdirectories: tuple[Path, ...]
    files: dict[str, Path] = field(default_factory=dict)

    def addon_path(self, addon_id: str) -> Path:
        """Path of the stub file for a library or snippet add-on."""
        return self.root / "includes" / f"class-{self.slug}-{addon_id}.php"


class LayoutPlanner:
    """Plans and writes the plugin directory tree."""

    def plan(self, output_directory: str | Path, slug: str) -> LayoutPlan:
        root = Path(output_directory) / slug
        files = {
            "entry": root / f"{slug}.php",
            "activator": root / "includes" / f"class-{slug}-activator.php",
            "deactivator": root / "includes" / f"class-{slug}-deactivator.php",
            "core": root / "includes" / f"class-{slug}.php",
            "loader": root / "includes" / f"class-{slug}-loader.php",
            "admin": root / "admin" / f"class-{slug}-admin.php",
            "public": root / "public" / f"class-{slug}-public.php",
            "readme": root / "readme.txt",
            "manifest": root / "composer.json",
            "admin_css": root / "admin" / "css" / f"{slug}-admin.css",
            "admin_js": root / "admin" / "js" / f"{slug}-admin.js",
            "public_css": root / "public" / "css" / f"{slug}-public.css",
            "public_js": root / "public" / "js" / f"{slug}-public.js",
        }
        return LayoutPlan(
            root=root,
            slug=slug,
            subdirectories=tuple(root / sub for sub in SUBDIRECTORIES),
            files=files,
        )

    # -- Blocking operations -----------------------------------------------

    @staticmethod
    def is_occupied(path: Path) -> bool:
        """Return ``True`` if *path* is a directory with at least one entry.

        A missing path is not occupied.  Any other ``OSError`` (e.g. *path*
        is a regular file, or is unreadable) propagates.
        """
        try:
            with os.scandir(path) as entries:
                return any(True for _ in entries)
        except FileNotFoundError:
            return False

    @staticmethod
    def ensure_directory(path: Path) -> Path:
        """Create *path* and any missing parents; no-op if it exists."""
        path.mkdir(parents=True, exist_ok=True)
        return path

    @staticmethod
    def write(path: Path, text: str) -> Path:
        """Write *text* as the full UTF-8 contents of *path*.

        The parent directory is created first and an existing file is
        overwritten.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    # -- Async wrappers ----------------------------------------------------

    async def is_occupied_async(self, path: Path) -> bool:
        return await asyncio.to_thread(self.is_occupied, path)

    async def ensure_directory_async(self, path: Path) -> Path:
        return await asyncio.to_thread(self.ensure_directory, path)

    async def write_async(self, path: Path, text: str) -> Path:
        return await asyncio.to_thread(self.write, path, text)
