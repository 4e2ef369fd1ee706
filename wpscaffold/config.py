"""wp-plugin-scaffold configuration.

Typed settings for the generator: the fallback identity used when the
author fields are blank, the base URI for derived plugin URIs, and a few
knobs for the generated files.  Pydantic v2 validates them at
construction time and handles JSON round-trips.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from wpscaffold.utils import save_json

_TRUTHY = {"1", "true", "yes", "on"}


class ScaffoldConfig(BaseModel):
    """Global generator configuration.

    Instances are typically created once by the CLI (from the environment
    or a JSON file) and handed to ``PluginGenerator``.
    """

    default_author: str = Field(default="Plugin Author", min_length=1)
    default_author_uri: str = Field(default="https://example.com", min_length=1)
    plugin_base_uri: str = Field(
        default="https://example.com/plugins/",
        min_length=1,
        description="Prefix for the derived Plugin URI; the slug and a '/' are appended",
    )
    default_branch: str = Field(default="main", min_length=1)
    readme_contributors: str = Field(default="pluginauthor")
    update_checker_version: str = Field(default="^5.6")
    strict_settings: bool = Field(
        default=False,
        description="Reject a selected settings snippet whose fields are not all filled in",
    )

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        return save_json(self.model_dump(mode="json"), path)

    @classmethod
    def load(cls, path: Path) -> "ScaffoldConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            WPS_DEFAULT_AUTHOR, WPS_DEFAULT_AUTHOR_URI, WPS_PLUGIN_BASE_URI,
            WPS_DEFAULT_BRANCH, WPS_README_CONTRIBUTORS, WPS_STRICT_SETTINGS.
        """
        env_map = {
            "WPS_DEFAULT_AUTHOR": "default_author",
            "WPS_DEFAULT_AUTHOR_URI": "default_author_uri",
            "WPS_PLUGIN_BASE_URI": "plugin_base_uri",
            "WPS_DEFAULT_BRANCH": "default_branch",
            "WPS_README_CONTRIBUTORS": "readme_contributors",
        }
        kwargs: dict[str, Any] = {}
        for var, field_name in env_map.items():
            if os.environ.get(var):
                kwargs[field_name] = os.environ[var]
        if os.environ.get("WPS_STRICT_SETTINGS"):
            kwargs["strict_settings"] = os.environ["WPS_STRICT_SETTINGS"].strip().lower() in _TRUTHY
        return cls(**kwargs)
