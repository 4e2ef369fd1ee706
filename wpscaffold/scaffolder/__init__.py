"""wp-plugin-scaffold scaffolder -- generates WordPress plugin skeletons.

This module takes a ``PluginOptions`` record and renders a ready-to-edit
plugin directory: entry file, core/loader/activator/deactivator classes,
admin and public classes, readme, optional composer.json and one stub
per selected library or snippet.

Quick usage::

    from wpscaffold.scaffolder import PluginGenerator, PluginOptions

    options = PluginOptions(
        name="My Cool Plugin",
        output_directory="/tmp/output",
        libraries=["cmb2"],
    )
    report = await PluginGenerator().generate(options)
    report.plugin_path  # /tmp/output/my-cool-plugin
"""

from wpscaffold.scaffolder.catalog import LIBRARY_CATALOG, SNIPPET_CATALOG, TemplateCatalog
from wpscaffold.scaffolder.errors import (
    DestinationConflictError,
    FileSystemError,
    GenerationError,
    InvalidOptionsError,
)
from wpscaffold.scaffolder.generator import GenerationReport, PluginGenerator
from wpscaffold.scaffolder.layout import LayoutPlan, LayoutPlanner
from wpscaffold.scaffolder.naming import slugify, to_namespace
from wpscaffold.scaffolder.options import PluginOptions, SettingsConfig
from wpscaffold.scaffolder.templates import TemplateRenderer

__all__ = [
    "DestinationConflictError",
    "FileSystemError",
    "GenerationError",
    "GenerationReport",
    "InvalidOptionsError",
    "LIBRARY_CATALOG",
    "LayoutPlan",
    "LayoutPlanner",
    "PluginGenerator",
    "PluginOptions",
    "SNIPPET_CATALOG",
    "SettingsConfig",
    "TemplateCatalog",
    "TemplateRenderer",
    "slugify",
    "to_namespace",
]
