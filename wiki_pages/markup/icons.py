"""Resolve icon names and image references to public URLs."""

from __future__ import annotations

import re
import typing as typ

from wiki_pages._constants import ICON_EXTENSIONS, ICON_URL_PREFIX

if typ.TYPE_CHECKING:
    from pathlib import Path

LITERAL_EXTENSION_PATTERN = re.compile(
    r"\.(?:svg|png|jpe?g|gif|webp|avif|ico|bmp)$", re.IGNORECASE
)


def is_literal_reference(reference: str) -> bool:
    """Return True when ``reference`` is a path rather than an icon name."""
    return "/" in reference or LITERAL_EXTENSION_PATTERN.search(reference) is not None


class IconResolver:
    """Map a callout/inline icon reference to the URL an ``<img>`` should use.

    References containing ``/`` or ending in an image extension are returned
    as-is. Bare names are looked up in ``icons_dir`` preferring ``.svg``, then
    ``.png``, ``.jpg``, and ``.jpeg``; when none exists the ``.png`` URL is
    returned anyway and the browser shows a broken image.
    """

    def __init__(self, icons_dir: Path | None) -> None:
        self.icons_dir = icons_dir
        self._cache: dict[str, str | None] = {}

    def resolve(self, reference: str) -> str:
        """Return the URL for ``reference``, or ``""`` for a blank reference."""
        value = reference.strip()
        if not value:
            return ""
        if is_literal_reference(value):
            return value
        return self.find(value) or ICON_URL_PREFIX.format(name=value, ext="png")

    def find(self, name: str) -> str | None:
        """Return the URL of an existing icon file called ``name``, if any."""
        key = name.strip()
        if not key:
            return None
        if key not in self._cache:
            self._cache[key] = self._lookup(key)
        return self._cache[key]

    def _lookup(self, name: str) -> str | None:
        if self.icons_dir is None:
            return None
        for ext in ICON_EXTENSIONS:
            if (self.icons_dir / f"{name}.{ext}").is_file():
                return ICON_URL_PREFIX.format(name=name, ext=ext)
        return None


__all__ = ["IconResolver", "is_literal_reference"]
