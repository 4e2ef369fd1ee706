"""Jinja2 template rendering for plugin scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``wpscaffold/scaffolder/templates/`` directory and renders them with
plugin-specific context data.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from .naming import to_php_identifier


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders the Jinja2 templates that make up a plugin skeleton.

    Output is PHP, JSON and plain text, so HTML autoescaping is disabled:
    values are inserted verbatim.  Undefined variables raise instead of
    rendering as empty strings.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filters
        self.env.filters["php_identifier"] = to_php_identifier
        self.env.filters["php_string"] = escape_php_string

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"addons/settings.php.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def escape_php_string(value: str | None) -> str:
    """Escape *value* for use inside a single-quoted PHP literal.

    Backslashes are doubled first, then single quotes are backslashed.
    ``None`` and ``""`` both yield ``""``.
    """
    if not value:
        return ""
    return value.replace("\\", "\\\\").replace("'", "\\'")
