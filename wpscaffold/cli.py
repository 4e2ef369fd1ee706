"""Command-line front end for wp-plugin-scaffold.

Usage::

    wp-scaffold "My Cool Plugin" --output ./plugins
    wp-scaffold "My Cool Plugin" -o ./plugins --composer --library cmb2 --snippet settings
    wp-scaffold --options-file plugin.json
    wp-scaffold --config team.json --strict-settings --save-config wps.json
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from rich.markup import escape
from rich.table import Table

from wpscaffold.config import ScaffoldConfig
from wpscaffold.gateway import format_validation_error, generate, pick_directory
from wpscaffold.scaffolder import LIBRARY_CATALOG, SNIPPET_CATALOG, PluginOptions
from wpscaffold.utils import (
    console,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)

# CLI flag destination -> PluginOptions field
_OPTION_FIELDS = (
    "name",
    "slug",
    "description",
    "version",
    "author",
    "author_uri",
    "plugin_uri",
    "requires_at_least",
    "tested_up_to",
    "requires_php",
    "repository_url",
    "branch",
    "include_dependency_manifest",
    "output_directory",
)

_SETTINGS_FIELDS = ("page_title", "menu_slug", "capability", "parent_menu", "format")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wp-scaffold",
        description="Generate a WordPress plugin boilerplate",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            '  wp-scaffold "My Cool Plugin" -o ./plugins\n'
            '  wp-scaffold "My Cool Plugin" -o ./plugins --composer --library cmb2\n'
            "  wp-scaffold --options-file plugin.json\n"
        ),
    )

    parser.add_argument("name", nargs="?", default=None, help="Human-readable plugin name")
    parser.add_argument("--slug", default=None, help="Directory/file slug (derived from the name if omitted)")
    parser.add_argument("--description", default=None)
    parser.add_argument("--version", dest="version", default=None, help="Plugin version (default: 1.0.0)")
    parser.add_argument("--author", default=None)
    parser.add_argument("--author-uri", dest="author_uri", default=None)
    parser.add_argument("--plugin-uri", dest="plugin_uri", default=None)
    parser.add_argument("--requires-at-least", dest="requires_at_least", default=None)
    parser.add_argument("--tested-up-to", dest="tested_up_to", default=None)
    parser.add_argument("--requires-php", dest="requires_php", default=None)
    parser.add_argument(
        "--repo",
        dest="repository_url",
        default=None,
        help="Public Git repository URL; enables the update checker",
    )
    parser.add_argument("--branch", default=None, help="Release branch for the update checker (default: main)")
    parser.add_argument(
        "--composer",
        dest="include_dependency_manifest",
        action="store_true",
        default=None,
        help="Also write a composer.json",
    )
    parser.add_argument(
        "--library",
        dest="libraries",
        action="append",
        default=None,
        metavar="ID",
        help="Add a library stub (repeatable; see --list-addons)",
    )
    parser.add_argument(
        "--snippet",
        dest="snippets",
        action="append",
        default=None,
        metavar="ID",
        help="Add a snippet stub (repeatable; see --list-addons)",
    )
    for field in _SETTINGS_FIELDS:
        flag = field.replace("_", "-")
        parser.add_argument(
            f"--settings-{flag}",
            dest=f"settings_{field}",
            default=None,
            help=f"Settings snippet: {field.replace('_', ' ')}",
        )
    parser.add_argument(
        "--output", "-o",
        dest="output_directory",
        default=None,
        help="Parent directory for the plugin folder (prompted for if omitted)",
    )
    parser.add_argument(
        "--options-file",
        default=None,
        help="JSON options record; command-line flags override its values",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="JSON configuration file (default: read WPS_* environment variables)",
    )
    parser.add_argument(
        "--save-config",
        default=None,
        metavar="PATH",
        help="Write the effective configuration to a JSON file and exit",
    )
    parser.add_argument(
        "--strict-settings",
        action="store_true",
        help="Require every settings field when the settings snippet is selected",
    )
    parser.add_argument(
        "--list-addons",
        action="store_true",
        help="List the available libraries and snippets and exit",
    )
    return parser


def collect_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Return the ``PluginOptions`` fields given explicitly on the command line."""
    overrides: dict[str, Any] = {
        field: getattr(args, field)
        for field in _OPTION_FIELDS
        if getattr(args, field) is not None
    }
    if args.libraries is not None:
        overrides["libraries"] = args.libraries
    if args.snippets is not None:
        overrides["snippets"] = args.snippets

    settings = {
        field: getattr(args, f"settings_{field}")
        for field in _SETTINGS_FIELDS
        if getattr(args, f"settings_{field}") is not None
    }
    if settings:
        overrides["settings_config"] = settings
    return overrides


def load_config(args: argparse.Namespace) -> ScaffoldConfig:
    config = ScaffoldConfig.load(Path(args.config)) if args.config else ScaffoldConfig.from_env()
    if args.strict_settings:
        config = config.model_copy(update={"strict_settings": True})
    return config


def print_addons() -> None:
    """Print the library and snippet catalogs."""
    table = Table(title="Available add-ons", show_header=True, header_style="bold cyan")
    table.add_column("Kind", style="dim", no_wrap=True)
    table.add_column("ID", style="bold")
    table.add_column("Description")
    table.add_column("Composer package")
    for addon in LIBRARY_CATALOG.values():
        package = " ".join(addon.requirement) if addon.requirement else "-"
        table.add_row("library", addon.id, addon.label, package)
    for addon in SNIPPET_CATALOG.values():
        table.add_row("snippet", addon.id, addon.label, "-")
    console.print(table)


def _warn_unknown_addons(options: PluginOptions) -> None:
    for library_id in options.libraries:
        if library_id not in LIBRARY_CATALOG:
            print_warning(f"Ignoring unknown library '{library_id}'.")
    for snippet_id in options.snippets:
        if snippet_id not in SNIPPET_CATALOG:
            print_warning(f"Ignoring unknown snippet '{snippet_id}'.")


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``wp-scaffold`` and ``python -m wpscaffold``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_addons:
        print_addons()
        return

    try:
        config = load_config(args)
        overrides = collect_overrides(args)
        if args.options_file:
            options = PluginOptions.from_file(args.options_file, **overrides)
        else:
            options = PluginOptions.model_validate(overrides)
    except FileNotFoundError as exc:
        print_error(f"Error: file not found: {exc.filename}")
        sys.exit(1)
    except ValidationError as exc:
        print_error(f"Error: {format_validation_error(exc)}")
        sys.exit(1)
    except json.JSONDecodeError as exc:
        print_error(f"Error: invalid JSON in {args.options_file or args.config}: {exc}")
        sys.exit(1)
    except ValueError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    if args.save_config:
        path = config.save(Path(args.save_config))
        print_success(f"Configuration saved to {path}")
        return

    if not options.name:
        print_error("Error: Please enter a plugin name.")
        sys.exit(1)

    if not options.output_directory:
        picked = pick_directory()
        if picked is None:
            print_error("Error: Please choose an output directory.")
            sys.exit(1)
        options = options.model_copy(update={"output_directory": str(picked)})

    _warn_unknown_addons(options)
    console.print(f"  Generating plugin [bold]{escape(options.name)}[/bold]...")
    result = generate(options, config)

    if not result.ok:
        print_error(f"Error: {result.error}")
        sys.exit(1)

    print_summary_table(
        {
            "Plugin": options.name,
            "Location": result.plugin_path or "",
            "Files written": str(len(result.files)),
        },
        title="Plugin generated",
    )
    print_success(f"Plugin generated successfully in {result.plugin_path}")


if __name__ == "__main__":
    main()
