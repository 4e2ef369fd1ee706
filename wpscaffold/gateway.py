"""Boundary between a front end and the generator.

A front end (the CLI, or any form-based UI) needs exactly two calls:

* ``pick_directory()`` asks the user for an output directory and returns
  ``None`` when they cancel.
* ``generate(options)`` runs one generation and returns a
  ``GenerationResult``; failures come back as ``ok=False`` with a
  human-readable message instead of an exception.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol

from pydantic import BaseModel, Field, ValidationError
from rich.console import Console
from rich.prompt import Prompt

from wpscaffold.config import ScaffoldConfig
from wpscaffold.scaffolder import GenerationError, PluginGenerator, PluginOptions
from wpscaffold.utils import console as default_console
from wpscaffold.utils import print_warning


class GenerationResult(BaseModel):
    """Outcome of one ``generate`` call, as shown to the user."""

    ok: bool
    plugin_path: str | None = None
    files: list[str] = Field(default_factory=list)
    error: str | None = None


# ---------------------------------------------------------------------------
# Directory picker
# ---------------------------------------------------------------------------


class DirectoryPicker(Protocol):
    """Anything that can ask the user for a directory."""

    def pick(self) -> Path | None: ...


class ConsoleDirectoryPicker:
    """Asks for the output directory on the terminal.

    Blank input, end-of-file and Ctrl-C count as cancelling.  A path that
    exists but is not a directory is rejected with a warning.
    """

    def __init__(self, console: Console | None = None, prompt: str = "Output directory") -> None:
        self.console = console or default_console
        self.prompt = prompt

    def pick(self) -> Path | None:
        try:
            answer = Prompt.ask(self.prompt, console=self.console, default="", show_default=False)
        except (EOFError, KeyboardInterrupt):
            return None
        answer = answer.strip()
        if not answer:
            return None
        path = Path(answer).expanduser()
        if path.exists() and not path.is_dir():
            print_warning(f"'{path}' is not a directory.")
            return None
        return path


def pick_directory(picker: DirectoryPicker | None = None) -> Path | None:
    """Ask the user for an output directory; ``None`` means cancelled."""
    return (picker or ConsoleDirectoryPicker()).pick()


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


def format_validation_error(exc: ValidationError) -> str:
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err["loc"]) or "options"
        problems.append(f"{location}: {err['msg']}")
    return "Invalid options: " + "; ".join(problems)


async def generate_async(
    options: PluginOptions | Mapping[str, Any],
    config: ScaffoldConfig | None = None,
) -> GenerationResult:
    """Awaitable form of :func:`generate`."""
    try:
        if not isinstance(options, PluginOptions):
            options = PluginOptions.model_validate(dict(options))
        report = await PluginGenerator(config).generate(options)
    except ValidationError as exc:
        return GenerationResult(ok=False, error=format_validation_error(exc))
    except GenerationError as exc:
        return GenerationResult(ok=False, error=str(exc))
    return GenerationResult(
        ok=True,
        plugin_path=str(report.plugin_path),
        files=[str(path) for path in report.files],
    )


def generate(
    options: PluginOptions | Mapping[str, Any],
    config: ScaffoldConfig | None = None,
) -> GenerationResult:
    """Generate a plugin and report the outcome.

    *options* may be a ``PluginOptions`` or the raw record a form sends
    (``camelCase`` or ``snake_case`` keys).
    """
    return asyncio.run(generate_async(options, config))
