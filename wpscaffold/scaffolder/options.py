"""Input models for plugin generation.

``PluginOptions`` is the single options schema accepted by the generator.
It validates the raw record coming from a front end (the CLI, a JSON
file or any other UI), accepting both ``snake_case`` field names and the
``camelCase`` keys a form sends.  Blank values are kept as blank here;
defaults that depend on the slug or on configuration are resolved by the
generator, never at storage time.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from wpscaffold.utils import load_json


class SettingsConfig(BaseModel):
    """Configuration for the import/export settings snippet.

    A key holds a value only when its source value was non-empty; blank
    strings are stored as ``None`` so the renderer can substitute its own
    defaults.
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    page_title: str | None = None
    menu_slug: str | None = None
    capability: str | None = None
    parent_menu: str | None = None
    format: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def missing_fields(self) -> list[str]:
        """Return the names of fields that were left blank."""
        return [name for name, value in self if value is None]


class PluginOptions(BaseModel):
    """Everything needed to scaffold one plugin."""

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    name: str = Field(default="", description="Human-readable plugin name")
    slug: str = Field(default="", description="Directory/file slug; derived from name if blank")
    description: str = Field(default="")
    version: str = Field(default="1.0.0")
    author: str = Field(default="")
    author_uri: str = Field(default="")
    plugin_uri: str = Field(default="")
    requires_at_least: str = Field(default="6.0")
    tested_up_to: str = Field(default="6.6")
    requires_php: str = Field(default="7.4")
    repository_url: str = Field(
        default="",
        validation_alias=AliasChoices("repository_url", "repositoryUrl", "repo"),
        description="Public Git repository used by the update checker",
    )
    branch: str = Field(default="")
    include_dependency_manifest: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "include_dependency_manifest", "includeDependencyManifest", "withComposer"
        ),
        description="Write a composer.json next to the entry file",
    )
    output_directory: str = Field(
        default="",
        validation_alias=AliasChoices("output_directory", "outputDirectory", "outputDir"),
        description="Parent directory that receives the <slug>/ folder",
    )
    libraries: tuple[str, ...] = Field(default=())
    snippets: tuple[str, ...] = Field(default=())
    settings_config: SettingsConfig | None = Field(default=None)

    @field_validator("output_directory", mode="before")
    @classmethod
    def _path_to_str(cls, value: Any) -> Any:
        if isinstance(value, os.PathLike):
            return os.fspath(value)
        return value

    @field_validator("libraries", "snippets", mode="after")
    @classmethod
    def _dedupe_ids(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        seen: list[str] = []
        for item in value:
            item = item.strip()
            if item and item not in seen:
                seen.append(item)
        return tuple(seen)

    @classmethod
    def from_file(cls, path: str | Path, **overrides: Any) -> "PluginOptions":
        """Load an options record from a JSON file.

        Keyword *overrides* (``snake_case`` names) replace values from the
        file, which lets a CLI flag win over a saved record.  A
        ``settings_config`` override is merged field by field, so settings
        the override leaves out keep their values from the file.

        Raises:
            ValueError: If the file's JSON root is not an object.
        """
        base = cls.model_validate(load_json(path)).model_dump()
        settings = overrides.pop("settings_config", None)
        if settings is not None:
            if isinstance(settings, SettingsConfig):
                settings = settings.model_dump(exclude_none=True)
            else:
                settings = SettingsConfig.model_validate(settings).model_dump(exclude_none=True)
            overrides["settings_config"] = {**(base["settings_config"] or {}), **settings}
        return cls.model_validate({**base, **overrides})
