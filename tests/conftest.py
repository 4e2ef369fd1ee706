"""Shared pytest fixtures for the wp-plugin-scaffold test suite.

Provides reusable fixtures for:
- Temporary output directories
- Minimal and fully-populated plugin options
- Generator, catalog and configuration instances
"""

from __future__ import annotations

from pathlib import Path

import pytest

from wpscaffold.config import ScaffoldConfig
from wpscaffold.scaffolder import PluginGenerator, PluginOptions, TemplateCatalog
from wpscaffold.utils import console


# ---------------------------------------------------------------------------
# Console
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _no_console_wrap(monkeypatch):
    """Keep long messages on one line so captured output can be matched."""
    monkeypatch.setattr(console, "soft_wrap", True)


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Parent directory that receives generated plugins (auto-cleanup)."""
    out = tmp_path / "out"
    out.mkdir()
    yield out


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

@pytest.fixture
def demo_options(output_dir: Path) -> PluginOptions:
    """Smallest valid options record: a name and an output directory."""
    return PluginOptions(name="Demo", output_directory=str(output_dir))


@pytest.fixture
def full_options(output_dir: Path) -> PluginOptions:
    """Options with every metadata field filled in."""
    return PluginOptions(
        name="My Cool Plugin",
        description="Does cool things.",
        version="2.1.0",
        author="Jane Doe",
        author_uri="https://jane.example",
        plugin_uri="https://jane.example/my-cool-plugin",
        requires_at_least="6.2",
        tested_up_to="6.5",
        requires_php="8.0",
        repository_url="https://github.com/jane/my-cool-plugin",
        branch="release",
        include_dependency_manifest=True,
        output_directory=str(output_dir),
        libraries=["cmb2", "cron"],
        snippets=["settings"],
    )


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------

@pytest.fixture
def config() -> ScaffoldConfig:
    return ScaffoldConfig()


@pytest.fixture
def generator(config: ScaffoldConfig) -> PluginGenerator:
    return PluginGenerator(config)


@pytest.fixture
def catalog(config: ScaffoldConfig) -> TemplateCatalog:
    return TemplateCatalog(config=config)


@pytest.fixture
def snapshot_tree():
    """Return a helper mapping every file under a root to its bytes."""

    def _snapshot(root: Path) -> dict[str, bytes]:
        return {
            p.relative_to(root).as_posix(): p.read_bytes()
            for p in sorted(root.rglob("*"))
            if p.is_file()
        }

    return _snapshot
