"""Dataclasses and errors describing the wiki content tree."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path

MetaValue: typ.TypeAlias = str | int | float | bool | list[str]
Metadata: typ.TypeAlias = dict[str, MetaValue]


class ContentReadError(OSError):
    """Raised when a content directory cannot be listed or a page cannot be read."""


class ContentRootError(ContentReadError):
    """Raised when the content root is missing or is not a directory."""


@dc.dataclass(slots=True)
class Page:
    """A leaf content unit backed by one markdown file.

    Attributes
    ----------
    title : str
        Front matter ``title`` or the decoded file basename.
    slug : str
        URL segment, unique among siblings in practice.
    path : str
        Absolute URL path built from the ancestor slugs.
    source : Path
        Markdown file the page is re-read from when rendering.
    order : int | float
        Sibling sort key; ``0`` unless front matter supplies a number.
    metadata : Metadata
        Normalized front matter, passed through to presentation.
    """

    title: str
    slug: str
    path: str
    source: Path
    order: int | float = 0
    metadata: Metadata = dc.field(default_factory=dict)


@dc.dataclass(slots=True)
class Section:
    """An internal navigation node for one content folder.

    Attributes
    ----------
    title : str
        Index page title, or the decoded folder name.
    slug : str
        URL segment derived from the folder name or an override.
    path : str
        Absolute URL path; empty for the synthetic root.
    directory : Path | None
        Folder the section was built from.
    order : int | float
        Index page ``order`` when numeric, else ``0``.
    index_page : Page | None
        Landing page rendered at the section's own path.
    children : list[Section | Page]
        Child nodes sorted by ``order`` then title.
    metadata : Metadata
        Index page metadata, or empty.
    """

    title: str
    slug: str
    path: str
    directory: Path | None = None
    order: int | float = 0
    index_page: Page | None = None
    children: list[Section | Page] = dc.field(default_factory=list)
    metadata: Metadata = dc.field(default_factory=dict)

    def walk(self) -> cabc.Iterator[Section | Page]:
        """Yield every descendant depth-first, sections before their children."""
        for child in self.children:
            yield child
            if isinstance(child, Section):
                yield from child.walk()

    def pages(self) -> cabc.Iterator[Page]:
        """Yield index pages and leaf pages below this section depth-first."""
        if self.index_page is not None:
            yield self.index_page
        for child in self.children:
            match child:
                case Section():
                    yield from child.pages()
                case Page():
                    yield child


Node: typ.TypeAlias = Section | Page


__all__ = [
    "ContentReadError",
    "ContentRootError",
    "MetaValue",
    "Metadata",
    "Node",
    "Page",
    "Section",
]
