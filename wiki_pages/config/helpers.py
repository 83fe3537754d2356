"""Utility helpers shared by the wiki configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .models import SectionOverride


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _is_number(value: object) -> bool:
    """Return True for ints and floats, rejecting booleans."""
    return isinstance(value, int | float) and not isinstance(value, bool)


def normalize_base(value: str | None) -> str:
    """Return ``value`` as a base path with leading and trailing slashes.

    Examples
    --------
    >>> normalize_base("")
    '/'
    >>> normalize_base("wiki.velora")
    '/wiki.velora/'
    """
    base = (value or "").strip()
    if not base:
        return "/"
    if not base.startswith("/"):
        base = f"/{base}"
    if not base.endswith("/"):
        base = f"{base}/"
    return base


def _resolve_path(root: Path, value: object | None, default: str) -> Path:
    """Resolve a configured path relative to ``root``."""
    raw = _optional_str(value) or default
    path = Path(raw).expanduser()
    return path if path.is_absolute() else root / path


def _build_section_override(payload: object) -> SectionOverride | None:
    """Build a SectionOverride from one ``sections`` entry, or None if unusable."""
    match payload:
        case {"dir": str() as directory}:
            pass
        case _:
            return None
    entry = typ.cast("typ.Mapping[str, typ.Any]", payload)
    title = entry.get("title")
    slug = entry.get("slug")
    order = entry.get("order")
    return SectionOverride(
        dir=directory,
        title=str(title) if title else None,
        slug=str(slug) if slug else None,
        order=order if _is_number(order) else None,
    )


def _merge_callout_titles(
    base: typ.Mapping[str, str], override: typ.Mapping[str, typ.Any] | None
) -> dict[str, str]:
    """Merge configured callout headings over the defaults."""
    merged = dict(base)
    if override:
        for key, value in override.items():
            merged[str(key).lower()] = "" if value is None else str(value)
    return merged


__all__ = [
    "_build_section_override",
    "_is_number",
    "_merge_callout_titles",
    "_optional_str",
    "_resolve_path",
    "normalize_base",
]
