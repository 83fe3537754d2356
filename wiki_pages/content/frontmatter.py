r"""Split YAML front matter from markdown bodies.

A content file may open with a ``---`` delimited YAML header. The header is
parsed with ruamel.yaml's safe loader and normalized into a small closed set
of value kinds (strings, numbers, booleans, string lists). Malformed headers
never raise: the page keeps its body and receives empty metadata.

Example
-------
>>> from wiki_pages.content.frontmatter import parse_front_matter
>>> doc = parse_front_matter("---\ntitle: Intro\norder: 2\n---\n# Hello\n")
>>> doc.metadata
{'title': 'Intro', 'order': 2}
>>> doc.body
'# Hello\n'
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import logging
import re
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

if typ.TYPE_CHECKING:
    from .models import Metadata, MetaValue

logger = logging.getLogger(__name__)

FRONT_MATTER_PATTERN = re.compile(
    r"\A\ufeff?---[ \t]*\r?\n(?P<header>.*?)^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


@dc.dataclass(slots=True)
class FrontMatterDocument:
    """A content file split into metadata and markdown body.

    Attributes
    ----------
    metadata : Metadata
        Normalized front matter; empty when absent or malformed.
    body : str
        Markdown following the header (the whole text when there is none).
    malformed : bool
        True when a header was present but could not be used.
    """

    metadata: Metadata
    body: str
    malformed: bool = False


def _coerce_value(value: object) -> MetaValue | None:
    """Map a YAML scalar or sequence onto the supported metadata kinds."""
    match value:
        case bool() | int() | float() | str():
            return value
        case dt.date():
            return value.isoformat()
        case list() | tuple():
            return [
                str(item)
                for item in value
                if item is not None and not isinstance(item, dict | list)
            ]
        case _:
            return None


def normalize_metadata(raw: object) -> Metadata:
    """Return a metadata mapping with unsupported values dropped."""
    if not isinstance(raw, dict):
        return {}
    metadata: Metadata = {}
    for key, value in raw.items():
        coerced = _coerce_value(value)
        if coerced is not None:
            metadata[str(key)] = coerced
    return metadata


def parse_front_matter(text: str, *, source: object = None) -> FrontMatterDocument:
    """Split ``text`` into front matter metadata and markdown body.

    Parameters
    ----------
    text : str
        Raw file contents.
    source : object, optional
        Label used in log messages (usually the file path).

    Returns
    -------
    FrontMatterDocument
        Metadata and body. YAML errors, unconstructable values such as
        impossible dates, and non-mapping headers yield empty metadata with
        ``malformed`` set.
    """
    match = FRONT_MATTER_PATTERN.match(text)
    if match is None:
        return FrontMatterDocument(metadata={}, body=text.removeprefix("\ufeff"))

    body = text[match.end() :]
    header = match.group("header")
    if not header.strip():
        return FrontMatterDocument(metadata={}, body=body)

    loader = YAML(typ="safe")
    try:
        loaded = loader.load(header)
    except (YAMLError, ValueError, TypeError) as exc:
        logger.warning("Ignoring malformed front matter in %s: %s", source, exc)
        return FrontMatterDocument(metadata={}, body=body, malformed=True)

    if loaded is None:
        return FrontMatterDocument(metadata={}, body=body)
    if not isinstance(loaded, dict):
        logger.warning("Ignoring non-mapping front matter in %s", source)
        return FrontMatterDocument(metadata={}, body=body, malformed=True)
    return FrontMatterDocument(metadata=normalize_metadata(loaded), body=body)


__all__ = [
    "FRONT_MATTER_PATTERN",
    "FrontMatterDocument",
    "normalize_metadata",
    "parse_front_matter",
]
