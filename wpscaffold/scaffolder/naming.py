"""Name derivation helpers.

Turns a human-readable plugin name into the slug used for directory and
file names, and a slug into the PascalCase token that prefixes every
generated PHP class.
"""

from __future__ import annotations

import re

_NON_SLUG_RUN = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """Convert a plugin name to a URL/filename-safe slug.

    Every run of characters outside ``[a-z0-9]`` collapses to a single
    hyphen and leading/trailing hyphens are stripped.  An input with no
    alphanumerics yields ``""``; callers must treat that as invalid.

    Examples::

        slugify("My Cool Plugin!") -> "my-cool-plugin"
        slugify("!!!") -> ""
    """
    slug = _NON_SLUG_RUN.sub("-", name.lower())
    return slug.strip("-")


def to_namespace(slug: str) -> str:
    """Convert ``my-cool-plugin`` to ``MyCoolPlugin``.

    Only the first letter of each segment is upper-cased; the rest of the
    segment is kept as is.  An empty slug yields an empty token.
    """
    return "".join(part[0].upper() + part[1:] for part in slug.split("-") if part)


def to_php_identifier(slug: str) -> str:
    """Convert a slug to a PHP-function-safe suffix (``my-plugin`` -> ``my_plugin``)."""
    return slug.replace("-", "_")


def is_valid_slug(value: str) -> bool:
    """Return ``True`` if *value* is already a canonical, non-empty slug."""
    return bool(value) and slugify(value) == value
