"""Template catalog for every generated plugin artifact.

Maps each file of the plugin skeleton to its Jinja2 template and builds
the context it is rendered with.  The optional add-ons (third-party
libraries and ready-made snippets) live in two read-only registries,
``LIBRARY_CATALOG`` and ``SNIPPET_CATALOG``, built once at import time.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from wpscaffold.config import ScaffoldConfig

from .options import PluginOptions, SettingsConfig
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Add-on registries
# ---------------------------------------------------------------------------

UPDATE_CHECKER_PACKAGE = "yahnis-elsts/plugin-update-checker"


@dataclass(frozen=True)
class AddOn:
    """A selectable library or snippet and the stub file it produces."""

    id: str
    label: str
    template: str
    # Composer package and version constraint, if the add-on needs one.
    requirement: tuple[str, str] | None = None


LIBRARY_CATALOG: Mapping[str, AddOn] = MappingProxyType({
    "cmb2": AddOn(
        id="cmb2",
        label="CMB2 metaboxes",
        template="addons/cmb2.php.j2",
        requirement=("cmb2/cmb2", "^2.10"),
    ),
    "cron": AddOn(
        id="cron",
        label="CronPlus scheduled events",
        template="addons/cron.php.j2",
        requirement=("wpbp/cronplus", "^1.0"),
    ),
    "widgets": AddOn(
        id="widgets",
        label="Widgets Helper",
        template="addons/widgets.php.j2",
        requirement=("wpbp/widgets-helper", "^1.0"),
    ),
})

SNIPPET_CATALOG: Mapping[str, AddOn] = MappingProxyType({
    "settings": AddOn(
        id="settings",
        label="Import/export settings page",
        template="addons/settings.php.j2",
    ),
})

SETTINGS_DEFAULTS: Mapping[str, str] = MappingProxyType({
    "page_title": "Plugin Settings",
    "capability": "manage_options",
    "parent_menu": "options-general.php",
    "format": "json",
})


def selected_libraries(options: PluginOptions) -> list[AddOn]:
    """Return the catalogued libraries in *options*, in selection order.

    Unknown identifiers are dropped silently.
    """
    return [LIBRARY_CATALOG[i] for i in options.libraries if i in LIBRARY_CATALOG]


def selected_snippets(options: PluginOptions) -> list[AddOn]:
    """Return the catalogued snippets in *options*, in selection order."""
    return [SNIPPET_CATALOG[i] for i in options.snippets if i in SNIPPET_CATALOG]


def resolve_settings(slug: str, settings: SettingsConfig | None = None) -> dict[str, str]:
    """Fill in defaults for the settings snippet.

    The export format is reduced to lowercase alphanumerics and falls back
    to ``json`` when nothing is left.
    """
    settings = settings or SettingsConfig()
    fmt = re.sub(r"[^a-z0-9]", "", (settings.format or SETTINGS_DEFAULTS["format"]).lower())
    return {
        "page_title": settings.page_title or SETTINGS_DEFAULTS["page_title"],
        "menu_slug": settings.menu_slug or f"{slug}-settings",
        "capability": settings.capability or SETTINGS_DEFAULTS["capability"],
        "parent_menu": settings.parent_menu or SETTINGS_DEFAULTS["parent_menu"],
        "format": fmt or SETTINGS_DEFAULTS["format"],
    }


# ---------------------------------------------------------------------------
# Class names
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ClassNames:
    """PHP class names of the fixed skeleton, all prefixed by the namespace."""

    core: str
    loader: str
    admin: str
    public: str
    activator: str
    deactivator: str

    @classmethod
    def from_namespace(cls, namespace: str) -> "ClassNames":
        return cls(
            core=namespace,
            loader=f"{namespace}_Loader",
            admin=f"{namespace}_Admin",
            public=f"{namespace}_Public",
            activator=f"{namespace}_Activator",
            deactivator=f"{namespace}_Deactivator",
        )


# ---------------------------------------------------------------------------
# TemplateCatalog
# ---------------------------------------------------------------------------


class TemplateCatalog:
    """Renders each artifact of a plugin skeleton to text.

    Every ``render_*`` method expects *options* whose defaults have already
    been resolved (see ``PluginGenerator``).  Free-text fields are inserted
    verbatim; only the settings snippet escapes its values.
    """

    def __init__(
        self,
        renderer: TemplateRenderer | None = None,
        config: ScaffoldConfig | None = None,
    ) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.config = config or ScaffoldConfig()

    # -- Context building --------------------------------------------------

    def _context(self, options: PluginOptions, slug: str, namespace: str) -> dict[str, Any]:
        return {
            "options": options,
            "slug": slug,
            "namespace": namespace,
            "classes": ClassNames.from_namespace(namespace),
            "update_uri": options.repository_url or options.plugin_uri,
        }

    # -- Fixed skeleton ----------------------------------------------------

    def render_entry_file(self, options: PluginOptions, slug: str, namespace: str) -> str:
        """Render ``<slug>.php``: header block, update checker and bootstrap."""
        return self.renderer.render("plugin.php.j2", self._context(options, slug, namespace))

    def render_activator(self, options: PluginOptions, slug: str, namespace: str) -> str:
        return self.renderer.render("activator.php.j2", self._context(options, slug, namespace))

    def render_deactivator(self, options: PluginOptions, slug: str, namespace: str) -> str:
        return self.renderer.render("deactivator.php.j2", self._context(options, slug, namespace))

    def render_loader(self, options: PluginOptions, slug: str, namespace: str) -> str:
        return self.renderer.render("loader.php.j2", self._context(options, slug, namespace))

    def render_core_class(self, options: PluginOptions, slug: str, namespace: str) -> str:
        """Render the core class.

        One ``require_once`` line is emitted per selected library, then per
        selected snippet, in selection order, ahead of the fixed
        skeleton requires.
        """
        ctx = self._context(options, slug, namespace)
        ctx["addon_ids"] = [
            addon.id for addon in selected_libraries(options) + selected_snippets(options)
        ]
        return self.renderer.render("core.php.j2", ctx)

    def render_admin(self, options: PluginOptions, slug: str, namespace: str) -> str:
        return self.renderer.render("admin.php.j2", self._context(options, slug, namespace))

    def render_public(self, options: PluginOptions, slug: str, namespace: str) -> str:
        return self.renderer.render("public.php.j2", self._context(options, slug, namespace))

    def render_readme(self, options: PluginOptions, slug: str, namespace: str) -> str:
        ctx = self._context(options, slug, namespace)
        ctx["contributors"] = self.config.readme_contributors
        return self.renderer.render("readme.txt.j2", ctx)

    def dependency_requirements(self, options: PluginOptions) -> list[tuple[str, str]]:
        """Return the composer ``require`` entries for *options*.

        The update checker comes first (only with a repository URL), then
        every selected library that declares a package.
        """
        requirements: list[tuple[str, str]] = []
        if options.repository_url:
            requirements.append((UPDATE_CHECKER_PACKAGE, self.config.update_checker_version))
        for addon in selected_libraries(options):
            if addon.requirement:
                requirements.append(addon.requirement)
        return requirements

    def render_dependency_manifest(self, options: PluginOptions, slug: str, namespace: str) -> str:
        """Render ``composer.json``."""
        ctx = self._context(options, slug, namespace)
        ctx["requirements"] = self.dependency_requirements(options)
        return self.renderer.render("composer.json.j2", ctx)

    # -- Add-ons -----------------------------------------------------------

    def render_library(self, library_id: str, slug: str, namespace: str) -> str:
        """Render the stub class for a catalogued library.

        Raises:
            KeyError: If *library_id* is not in ``LIBRARY_CATALOG``.
        """
        addon = LIBRARY_CATALOG[library_id]
        return self.renderer.render(addon.template, {"slug": slug, "namespace": namespace})

    def render_snippet(
        self,
        snippet_id: str,
        slug: str,
        namespace: str,
        settings: SettingsConfig | None = None,
    ) -> str:
        """Render the stub class for a catalogued snippet.

        *settings* is only used by the ``settings`` snippet; missing values
        fall back to ``SETTINGS_DEFAULTS``.

        Raises:
            KeyError: If *snippet_id* is not in ``SNIPPET_CATALOG``.
        """
        addon = SNIPPET_CATALOG[snippet_id]
        ctx: dict[str, Any] = {"slug": slug, "namespace": namespace}
        if snippet_id == "settings":
            resolved = resolve_settings(slug, settings)
            ctx["settings"] = resolved
            ctx["format_label"] = resolved["format"].upper()
        return self.renderer.render(addon.template, ctx)
