"""Main scaffolding orchestrator.

Takes a ``PluginOptions`` record and writes a complete WordPress plugin
skeleton under ``<output_directory>/<slug>/``: entry file, core, loader,
activator/deactivator, admin/public classes, readme, optional
composer.json, empty CSS/JS stubs and one stub per selected add-on.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, Field

from wpscaffold.config import ScaffoldConfig

from .catalog import TemplateCatalog, selected_libraries, selected_snippets
from .errors import DestinationConflictError, FileSystemError, InvalidOptionsError
from .layout import LayoutPlan, LayoutPlanner
from .naming import is_valid_slug, slugify, to_namespace
from .options import PluginOptions, SettingsConfig
from .templates import TemplateRenderer

T = TypeVar("T")


class GenerationReport(BaseModel):
    """What a successful generation produced."""

    plugin_path: Path
    slug: str
    namespace: str
    files: list[Path] = Field(default_factory=list, description="Written files, in write order")


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class PluginGenerator:
    """Scaffolding orchestrator.

    One instance can serve many calls; nothing is kept between them.
    Each ``generate`` call validates the options, refuses to touch a
    non-empty destination, then writes every artifact sequentially.
    """

    def __init__(
        self,
        config: ScaffoldConfig | None = None,
        renderer: TemplateRenderer | None = None,
        planner: LayoutPlanner | None = None,
    ) -> None:
        self.config = config or ScaffoldConfig()
        self.catalog = TemplateCatalog(renderer or TemplateRenderer(), self.config)
        self.planner = planner or LayoutPlanner()

    # -- Public API --------------------------------------------------------

    async def generate(self, options: PluginOptions) -> GenerationReport:
        """Generate the plugin skeleton described by *options*.

        Returns:
            A report holding the plugin root and every written file.

        Raises:
            InvalidOptionsError: Before any file-system access.
            DestinationConflictError: If the plugin root exists and is not
                empty; nothing is written.
            FileSystemError: On any I/O failure; files already written stay.
        """
        # 1. Validate and derive names
        slug = self.resolve_slug(options)
        namespace = to_namespace(slug)

        # 2. Fill in defaults
        options = self.resolve_defaults(options, slug)

        # 3. Refuse to clobber an existing, non-empty directory
        plan = self.planner.plan(options.output_directory, slug)
        occupied = await self._io(plan.root, self.planner.is_occupied_async(plan.root), "read")
        if occupied:
            raise DestinationConflictError(plan.root)

        report = GenerationReport(plugin_path=plan.root, slug=slug, namespace=namespace)

        # 4. Create the directory tree
        await self._io(plan.root, self.planner.ensure_directory_async(plan.root), "create")
        for directory in plan.subdirectories:
            await self._io(directory, self.planner.ensure_directory_async(directory), "create")

        # 5. Fixed skeleton, in a fixed order
        await self._write_skeleton(plan, options, slug, namespace, report)

        # 6. Library stubs
        for addon in selected_libraries(options):
            content = self.catalog.render_library(addon.id, slug, namespace)
            await self._write(plan.addon_path(addon.id), content, report)

        # 7. Snippet stubs
        for addon in selected_snippets(options):
            content = self.catalog.render_snippet(
                addon.id, slug, namespace, settings=options.settings_config
            )
            await self._write(plan.addon_path(addon.id), content, report)

        return report

    # -- Option resolution -------------------------------------------------

    def resolve_slug(self, options: PluginOptions) -> str:
        """Validate *options* and return the plugin slug.

        Raises:
            InvalidOptionsError: On a missing name or output directory, a
                name that yields an empty slug, a malformed explicit slug,
                or (with ``strict_settings``) incomplete settings fields.
        """
        if not options.name:
            raise InvalidOptionsError("Please enter a plugin name.")
        if not options.output_directory:
            raise InvalidOptionsError("Please choose an output directory.")

        if options.slug:
            if not is_valid_slug(options.slug):
                raise InvalidOptionsError(
                    f"Slug '{options.slug}' must contain only lowercase letters, "
                    "digits and single hyphens (e.g. 'my-plugin')."
                )
            slug = options.slug
        else:
            slug = slugify(options.name)
            if not slug:
                raise InvalidOptionsError(
                    f"Cannot derive a slug from plugin name '{options.name}'; "
                    "use at least one letter or digit."
                )

        if self.config.strict_settings and "settings" in options.snippets:
            settings = options.settings_config or SettingsConfig()
            missing = settings.missing_fields()
            if missing:
                raise InvalidOptionsError(
                    "Settings snippet is missing required fields: " + ", ".join(missing)
                )
        return slug

    def resolve_defaults(self, options: PluginOptions, slug: str) -> PluginOptions:
        """Return a copy of *options* with blank identity fields filled in."""
        return options.model_copy(update={
            "slug": slug,
            "author": options.author or self.config.default_author,
            "author_uri": options.author_uri or self.config.default_author_uri,
            "plugin_uri": options.plugin_uri or f"{self.config.plugin_base_uri}{slug}/",
            "branch": options.branch or self.config.default_branch,
        })

    # -- Writing -----------------------------------------------------------

    async def _write_skeleton(
        self,
        plan: LayoutPlan,
        options: PluginOptions,
        slug: str,
        namespace: str,
        report: GenerationReport,
    ) -> None:
        """Render and write the fixed files, then the empty asset stubs."""
        renderers: list[tuple[str, Callable[[PluginOptions, str, str], str]]] = [
            ("entry", self.catalog.render_entry_file),
            ("activator", self.catalog.render_activator),
            ("deactivator", self.catalog.render_deactivator),
            ("core", self.catalog.render_core_class),
            ("loader", self.catalog.render_loader),
            ("admin", self.catalog.render_admin),
            ("public", self.catalog.render_public),
            ("readme", self.catalog.render_readme),
        ]
        if options.include_dependency_manifest:
            renderers.append(("manifest", self.catalog.render_dependency_manifest))

        for key, render in renderers:
            await self._write(plan.files[key], render(options, slug, namespace), report)

        for key in ("admin_css", "admin_js", "public_css", "public_js"):
            await self._write(plan.files[key], "", report)

    async def _write(self, path: Path, content: str, report: GenerationReport) -> None:
        await self._io(path, self.planner.write_async(path, content), "write")
        report.files.append(path)

    @staticmethod
    async def _io(path: Path, operation: Awaitable[T], action: str) -> T:
        """Await a file-system *operation*, translating ``OSError``.

        *action* ends up in the ``FileSystemError`` message.
        """
        try:
            return await operation
        except OSError as exc:
            raise FileSystemError(path, exc.strerror or str(exc), action) from exc
