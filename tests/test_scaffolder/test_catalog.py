"""Tests for the TemplateCatalog and the add-on registries."""

from __future__ import annotations

import json

import pytest

from wpscaffold.config import ScaffoldConfig
from wpscaffold.scaffolder import PluginGenerator, PluginOptions, SettingsConfig
from wpscaffold.scaffolder.catalog import (
    LIBRARY_CATALOG,
    SETTINGS_DEFAULTS,
    SNIPPET_CATALOG,
    UPDATE_CHECKER_PACKAGE,
    ClassNames,
    TemplateCatalog,
    resolve_settings,
    selected_libraries,
    selected_snippets,
)

pytestmark = pytest.mark.unit


def _resolve(options: PluginOptions) -> PluginOptions:
    generator = PluginGenerator()
    return generator.resolve_defaults(options, generator.resolve_slug(options))


@pytest.fixture
def demo(demo_options) -> PluginOptions:
    return _resolve(demo_options)


@pytest.fixture
def full(full_options) -> PluginOptions:
    return _resolve(full_options)


# ---------------------------------------------------------------------------
# Registries
# ---------------------------------------------------------------------------


class TestRegistries:
    def test_library_ids(self):
        assert list(LIBRARY_CATALOG) == ["cmb2", "cron", "widgets"]

    def test_snippet_ids(self):
        assert list(SNIPPET_CATALOG) == ["settings"]

    def test_registries_are_read_only(self):
        with pytest.raises(TypeError):
            LIBRARY_CATALOG["extra"] = LIBRARY_CATALOG["cmb2"]
        with pytest.raises(TypeError):
            SNIPPET_CATALOG["extra"] = SNIPPET_CATALOG["settings"]

    def test_every_library_declares_a_package(self):
        for addon in LIBRARY_CATALOG.values():
            assert addon.requirement is not None

    def test_templates_exist(self, catalog):
        for addon in [*LIBRARY_CATALOG.values(), *SNIPPET_CATALOG.values()]:
            assert (catalog.renderer.template_dir / addon.template).is_file()

    def test_selection_skips_unknown(self):
        options = PluginOptions(
            name="Demo", libraries=["widgets", "bogus", "cmb2"], snippets=["nope", "settings"]
        )
        assert [a.id for a in selected_libraries(options)] == ["widgets", "cmb2"]
        assert [a.id for a in selected_snippets(options)] == ["settings"]


class TestClassNames:
    def test_from_namespace(self):
        names = ClassNames.from_namespace("MyCoolPlugin")
        assert names.core == "MyCoolPlugin"
        assert names.loader == "MyCoolPlugin_Loader"
        assert names.admin == "MyCoolPlugin_Admin"
        assert names.public == "MyCoolPlugin_Public"
        assert names.activator == "MyCoolPlugin_Activator"
        assert names.deactivator == "MyCoolPlugin_Deactivator"


# ---------------------------------------------------------------------------
# Entry file
# ---------------------------------------------------------------------------


class TestEntryFile:
    def test_header_block(self, catalog, demo):
        text = catalog.render_entry_file(demo, "demo", "Demo")
        assert text.startswith("<?php\n/*\n * Plugin Name:       Demo\n")
        assert " * Plugin URI:        https://example.com/plugins/demo/\n" in text
        assert " * Version:           1.0.0\n" in text
        assert " * Author:            Plugin Author\n" in text
        assert " * Author URI:        https://example.com\n" in text
        assert " * Text Domain:       demo\n" in text
        assert " * Domain Path:       /languages\n" in text
        assert " * Update URI:        https://example.com/plugins/demo/\n" in text

    def test_no_update_checker_without_repository(self, catalog, demo):
        text = catalog.render_entry_file(demo, "demo", "Demo")
        assert "PucFactory" not in text
        assert "defined( 'ABSPATH' ) || exit; // Exit if accessed directly.\n\nrequire_once" in text

    def test_bootstrap(self, catalog, demo):
        text = catalog.render_entry_file(demo, "demo", "Demo")
        assert "function activate_demo() {\n    Demo_Activator::activate();\n}" in text
        assert "function deactivate_demo() {\n    Demo_Deactivator::deactivate();\n}" in text
        assert "register_activation_hook( __FILE__, 'activate_demo' );" in text
        assert "register_deactivation_hook( __FILE__, 'deactivate_demo' );" in text
        assert "$plugin = new Demo();" in text
        assert text.endswith("run_demo();\n")

    def test_update_checker_block(self, catalog, full):
        text = catalog.render_entry_file(full, "my-cool-plugin", "MyCoolPlugin")
        assert "use YahnisElsts\\PluginUpdateChecker\\v5\\PucFactory;" in text
        assert (
            "PucFactory::buildUpdateChecker(\n"
            "    'https://github.com/jane/my-cool-plugin',\n"
            "    __FILE__,\n"
            "    'my-cool-plugin'\n"
            ");"
        ) in text
        assert "$update_checker->setBranch( 'release' );" in text
        assert " * Update URI:        https://github.com/jane/my-cool-plugin\n" in text
        assert " * Plugin URI:        https://jane.example/my-cool-plugin\n" in text

    def test_hyphenated_slug_gives_valid_function_names(self, catalog, full):
        text = catalog.render_entry_file(full, "my-cool-plugin", "MyCoolPlugin")
        assert "function run_my_cool_plugin() {" in text
        assert "'activate_my_cool_plugin'" in text
        assert "includes/class-my-cool-plugin.php" in text

    def test_free_text_inserted_verbatim(self, catalog, output_dir):
        options = _resolve(PluginOptions(
            name="Demo", description="It's \"quoted\" \\ text", output_directory=str(output_dir)
        ))
        text = catalog.render_entry_file(options, "demo", "Demo")
        assert " * Description:       It's \"quoted\" \\ text\n" in text


# ---------------------------------------------------------------------------
# Fixed skeleton classes
# ---------------------------------------------------------------------------


class TestSkeletonClasses:
    def test_activator(self, catalog, demo):
        text = catalog.render_activator(demo, "demo", "Demo")
        assert text.startswith("<?php\n")
        assert "class Demo_Activator {\n    public static function activate() {" in text

    def test_deactivator(self, catalog, demo):
        text = catalog.render_deactivator(demo, "demo", "Demo")
        assert "class Demo_Deactivator {\n    public static function deactivate() {" in text

    def test_loader(self, catalog, demo):
        text = catalog.render_loader(demo, "demo", "Demo")
        assert "class Demo_Loader {" in text
        assert "public function add_action(" in text
        assert "public function add_filter(" in text

    def test_admin(self, catalog, demo):
        text = catalog.render_admin(demo, "demo", "Demo")
        assert "class Demo_Admin {" in text
        assert "'css/demo-admin.css'" in text
        assert "'js/demo-admin.js'" in text

    def test_public(self, catalog, demo):
        text = catalog.render_public(demo, "demo", "Demo")
        assert "class Demo_Public {" in text
        assert "'css/demo-public.css'" in text
        assert "'js/demo-public.js'" in text

    def test_core_class_fixed_dependencies(self, catalog, demo):
        text = catalog.render_core_class(demo, "demo", "Demo")
        assert "class Demo {" in text
        assert "protected $plugin_name = 'demo';" in text
        assert "protected $version = '1.0.0';" in text
        assert " * @author     Plugin Author\n" in text
        assert (
            "        require_once plugin_dir_path( __DIR__ ) . 'public/class-demo-public.php';\n"
            "        $this->loader = new Demo_Loader();\n"
        ) in text

    def test_core_class_addon_requires_in_order(self, catalog, full):
        text = catalog.render_core_class(full, "my-cool-plugin", "MyCoolPlugin")
        expected = (
            "    private function load_dependencies() {\n"
            "        require_once plugin_dir_path( __FILE__ ) . 'class-my-cool-plugin-cmb2.php';\n"
            "        require_once plugin_dir_path( __FILE__ ) . 'class-my-cool-plugin-cron.php';\n"
            "        require_once plugin_dir_path( __FILE__ ) . 'class-my-cool-plugin-settings.php';\n"
            "        require_once plugin_dir_path( __FILE__ ) . 'class-my-cool-plugin-loader.php';\n"
        )
        assert expected in text

    def test_core_class_skips_unknown_addons(self, catalog, output_dir):
        options = _resolve(PluginOptions(
            name="Demo", libraries=["bogus"], snippets=["nope"], output_directory=str(output_dir)
        ))
        text = catalog.render_core_class(options, "demo", "Demo")
        assert "bogus" not in text
        assert "nope" not in text


class TestReadme:
    def test_fields(self, catalog, full):
        text = catalog.render_readme(full, "my-cool-plugin", "MyCoolPlugin")
        assert text.startswith("=== My Cool Plugin ===\n\nContributors: pluginauthor\n")
        assert "Requires at least: 6.2\n" in text
        assert "Tested up to: 6.5\n" in text
        assert "Requires PHP: 8.0\n" in text
        assert "Stable tag: 2.1.0\n" in text
        assert "Update URI: https://github.com/jane/my-cool-plugin\n" in text
        assert "\nDoes cool things.\n" in text
        assert text.endswith("= 2.1.0 =\n* Initial release.\n")

    def test_contributors_from_config(self, demo):
        catalog = TemplateCatalog(config=ScaffoldConfig(readme_contributors="janedoe"))
        assert "Contributors: janedoe\n" in catalog.render_readme(demo, "demo", "Demo")


# ---------------------------------------------------------------------------
# Dependency manifest
# ---------------------------------------------------------------------------


class TestDependencyManifest:
    def test_requirements_order(self, catalog, full):
        assert catalog.dependency_requirements(full) == [
            (UPDATE_CHECKER_PACKAGE, "^5.6"),
            ("cmb2/cmb2", "^2.10"),
            ("wpbp/cronplus", "^1.0"),
        ]

    def test_full_manifest_is_valid_json(self, catalog, full):
        data = json.loads(catalog.render_dependency_manifest(full, "my-cool-plugin", "MyCoolPlugin"))
        assert data["name"] == "custom/my-cool-plugin"
        assert data["description"] == "Does cool things."
        assert data["type"] == "wordpress-plugin"
        assert data["authors"] == [{"name": "Jane Doe", "homepage": "https://jane.example"}]
        assert list(data["require"].items()) == [
            ("yahnis-elsts/plugin-update-checker", "^5.6"),
            ("cmb2/cmb2", "^2.10"),
            ("wpbp/cronplus", "^1.0"),
        ]
        assert data["autoload"] == {"psr-4": {"MyCoolPlugin\\": "includes/"}}

    def test_only_update_checker(self, catalog, output_dir):
        options = _resolve(PluginOptions(
            name="Demo",
            repository_url="https://github.com/x/demo",
            include_dependency_manifest=True,
            output_directory=str(output_dir),
        ))
        data = json.loads(catalog.render_dependency_manifest(options, "demo", "Demo"))
        assert data["require"] == {"yahnis-elsts/plugin-update-checker": "^5.6"}

    def test_empty_require(self, catalog, demo):
        text = catalog.render_dependency_manifest(demo, "demo", "Demo")
        assert '    "require": {},\n' in text
        assert json.loads(text)["require"] == {}

    def test_unknown_library_adds_nothing(self, catalog, output_dir):
        options = _resolve(PluginOptions(
            name="Demo", libraries=["bogus", "widgets"], output_directory=str(output_dir)
        ))
        assert catalog.dependency_requirements(options) == [("wpbp/widgets-helper", "^1.0")]


# ---------------------------------------------------------------------------
# Add-on stubs
# ---------------------------------------------------------------------------


class TestLibraryStubs:
    @pytest.mark.parametrize(
        "library_id, class_name",
        [("cmb2", "Demo_CMB2"), ("cron", "Demo_Cron"), ("widgets", "Demo_Widgets")],
    )
    def test_class_name(self, catalog, library_id, class_name):
        text = catalog.render_library(library_id, "demo", "Demo")
        assert text.startswith("<?php\n")
        assert f"class {class_name} {{" in text

    def test_namespace_prefix(self, catalog):
        text = catalog.render_library("cmb2", "my-cool-plugin", "MyCoolPlugin")
        assert "class MyCoolPlugin_CMB2 {" in text

    def test_unknown_library(self, catalog):
        with pytest.raises(KeyError):
            catalog.render_library("bogus", "demo", "Demo")


class TestSettingsSnippet:
    def test_defaults(self, catalog):
        text = catalog.render_snippet("settings", "demo", "Demo")
        assert "class Demo_Settings {" in text
        assert "protected $page_title = 'Plugin Settings';" in text
        assert "protected $menu_slug = 'demo-settings';" in text
        assert "protected $capability = 'manage_options';" in text
        assert "protected $parent_menu = 'options-general.php';" in text
        assert "protected $format = 'json';" in text
        assert "Output settings as JSON and trigger download." in text
        assert "Handle the uploaded JSON file" in text

    def test_format_defaults_when_omitted(self, catalog):
        settings = SettingsConfig(page_title="Demo Tools", capability="edit_posts")
        text = catalog.render_snippet("settings", "demo", "Demo", settings=settings)
        assert "protected $page_title = 'Demo Tools';" in text
        assert "protected $capability = 'edit_posts';" in text
        assert "protected $format = 'json';" in text
        assert "protected $menu_slug = 'demo-settings';" in text

    def test_format_normalised(self, catalog):
        text = catalog.render_snippet("settings", "demo", "Demo", SettingsConfig(format="X.M-L!"))
        assert "protected $format = 'xml';" in text
        assert "Output settings as XML" in text

    def test_format_without_alphanumerics_falls_back(self, catalog):
        text = catalog.render_snippet("settings", "demo", "Demo", SettingsConfig(format="!!!"))
        assert "protected $format = 'json';" in text

    def test_values_escaped(self, catalog):
        settings = SettingsConfig(page_title="Bob's Tools", parent_menu="a\\b.php")
        text = catalog.render_snippet("settings", "demo", "Demo", settings=settings)
        assert "protected $page_title = 'Bob\\'s Tools';" in text
        assert "protected $parent_menu = 'a\\\\b.php';" in text

    def test_unknown_snippet(self, catalog):
        with pytest.raises(KeyError):
            catalog.render_snippet("nope", "demo", "Demo")


class TestResolveSettings:
    def test_all_defaults(self):
        assert resolve_settings("demo") == {
            **SETTINGS_DEFAULTS,
            "menu_slug": "demo-settings",
        }

    def test_given_values_kept(self):
        settings = SettingsConfig(menu_slug="custom", format="CSV")
        resolved = resolve_settings("demo", settings)
        assert resolved["menu_slug"] == "custom"
        assert resolved["format"] == "csv"
