"""Resolve tree-shaping fields from front matter with explicit defaulting.

Front matter is author input and is never validated strictly: a missing or
ill-typed field silently falls back to a default. :class:`Resolved` records
which of the two happened so callers and tests can tell a defaulted value
from one the author actually supplied.

Example
-------
>>> from wiki_pages.content.fields import resolve_order
>>> resolve_order({"order": "first"})
Resolved(value=0, defaulted=True)
>>> resolve_order({"order": 2.5})
Resolved(value=2.5, defaulted=False)
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

T = typ.TypeVar("T")


@dc.dataclass(frozen=True, slots=True)
class Resolved(typ.Generic[T]):
    """A field value and whether it came from the default."""

    value: T
    defaulted: bool


def _is_number(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def resolve_text(
    metadata: cabc.Mapping[str, object], key: str, fallback: str
) -> Resolved[str]:
    """Return ``metadata[key]`` as text, or ``fallback`` when absent or empty.

    Numbers are accepted and converted so that ``title: 2024`` still names a
    page; booleans, lists, and blank strings fall back.
    """
    value = metadata.get(key)
    if isinstance(value, str) and value.strip():
        return Resolved(value, defaulted=False)
    if _is_number(value):
        return Resolved(str(value), defaulted=False)
    return Resolved(fallback, defaulted=True)


def resolve_order(metadata: cabc.Mapping[str, object]) -> Resolved[int | float]:
    """Return the numeric ``order`` field, or ``0`` when absent or non-numeric."""
    value = metadata.get("order")
    if _is_number(value):
        return Resolved(typ.cast("int | float", value), defaulted=False)
    return Resolved(0, defaulted=True)


__all__ = ["Resolved", "resolve_order", "resolve_text"]
