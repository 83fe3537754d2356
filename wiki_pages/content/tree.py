r"""Build the wiki navigation tree from a content directory.

Every folder under the content root becomes a :class:`Section` and every
markdown file a :class:`Page`. Folder names may carry archive-style
``#UXXXX`` escapes (used to keep Cyrillic names portable); they are decoded
before slugs and titles are derived. Top-level folders can be retitled,
reordered, or re-slugged through :class:`~wiki_pages.config.OrderingConfig`;
a slug override cascades through every descendant path.

Example
-------
>>> from pathlib import Path
>>> from wiki_pages.content.tree import TreeBuilder, decode_unicode_escapes
>>> decode_unicode_escapes("#U0413#U043b#U0430#U0432#U043d#U0430#U044f")
'Главная'
>>> tree = TreeBuilder(Path("content")).build_tree()  # doctest: +SKIP
>>> [child.path for child in tree.children]  # doctest: +SKIP
['/Главная', '/Примеры']
"""

from __future__ import annotations

import logging
import re
import typing as typ

from wiki_pages._constants import INDEX_FILENAME, MARKDOWN_SUFFIX
from wiki_pages.config.models import OrderingConfig

from .fields import resolve_order, resolve_text
from .frontmatter import parse_front_matter
from .models import ContentReadError, ContentRootError, Page, Section

if typ.TYPE_CHECKING:
    from pathlib import Path

    from wiki_pages.config import SectionOverride

    from .models import Node

logger = logging.getLogger(__name__)

ESCAPE_PATTERN = re.compile(r"#U([0-9A-Fa-f]{4})")
WHITESPACE_PATTERN = re.compile(r"\s+")
SEPARATOR_PATTERN = re.compile(r"[\\/]+")
DOT_SEGMENT_PATTERN = re.compile(r"\.+")


def decode_unicode_escapes(value: str) -> str:
    """Replace ``#UXXXX`` sequences with the code points they encode."""
    return ESCAPE_PATTERN.sub(lambda match: chr(int(match.group(1), 16)), value)


def normalize_slug(value: str) -> str:
    """Return a URL segment: decoded, trimmed, whitespace runs as hyphens.

    Path separators also become hyphens and a dot-only segment is spelled
    with hyphens, so a slug never leaves its parent folder.

    Examples
    --------
    >>> normalize_slug("  Getting   started ")
    'Getting-started'
    >>> normalize_slug("../etc")
    '..-etc'
    """
    decoded = decode_unicode_escapes(str(value))
    slug = SEPARATOR_PATTERN.sub("-", WHITESPACE_PATTERN.sub("-", decoded.strip()))
    if DOT_SEGMENT_PATTERN.fullmatch(slug):
        return "-" * len(slug)
    return slug


def join_url(parent_path: str, slug: str) -> str:
    """Append ``slug`` to ``parent_path``; root children get ``/slug``."""
    return f"{parent_path}/{slug}" if parent_path else f"/{slug}"


def sort_key(node: Node) -> tuple[int | float, str, str]:
    """Sibling ordering: ``order`` ascending, then casefolded title, then title."""
    return (node.order, node.title.casefold(), node.title)


def recompute_paths(node: Node, parent_path: str) -> None:
    """Rewrite ``node.path`` and every descendant path below ``parent_path``.

    Paths are stored, never derived from parent references, so any slug
    change must be followed by a call to this function.
    """
    node.path = join_url(parent_path, node.slug)
    match node:
        case Section():
            if node.index_page is not None:
                node.index_page.slug = node.slug
                node.index_page.path = node.path
            for child in node.children:
                recompute_paths(child, node.path)
        case Page():
            pass


def _page_basename(file_path: Path) -> str:
    return file_path.name[: -len(MARKDOWN_SUFFIX)]


def _is_markdown(file_path: Path) -> bool:
    return file_path.name.lower().endswith(MARKDOWN_SUFFIX) and file_path.is_file()


class TreeBuilder:
    """Convert a content directory into a sorted Section/Page tree."""

    def __init__(
        self, content_root: Path, ordering: OrderingConfig | None = None
    ) -> None:
        """Initialize the builder.

        Parameters
        ----------
        content_root : Path
            Directory whose subfolders become top-level sections.
        ordering : OrderingConfig, optional
            Overrides for top-level folders; ``None`` builds in
            ``(order, title)`` order only.
        """
        self.content_root = content_root
        self.ordering = ordering

    def build_tree(self) -> Section:
        """Build the full tree under a synthetic root section.

        Returns
        -------
        Section
            Root with empty title, slug, and path whose children are the
            sorted top-level sections.

        Raises
        ------
        ContentRootError
            If the content root does not exist or is not a directory.
        ContentReadError
            If any directory or page below it cannot be read.
        """
        if not self.content_root.is_dir():
            msg = f"Content root '{self.content_root}' does not exist or is not a directory."
            raise ContentRootError(msg)

        directories = {
            entry.name: entry for entry in self._list_entries(self.content_root)
            if entry.is_dir()
        }
        top: list[Section] = []
        built: set[str] = set()
        ordering = self.ordering or OrderingConfig()
        for name in ordering.directories:
            directory = directories.get(name)
            override = ordering.get(name)
            if directory is None or override is None or name in built:
                logger.debug("Skipping ordering entry for '%s'", name)
                continue
            section = self.build_section(directory, "")
            self.apply_override(section, override)
            top.append(section)
            built.add(name)

        for name, directory in directories.items():
            if name not in built:
                top.append(self.build_section(directory, ""))

        top.sort(key=sort_key)
        return Section(
            title="", slug="", path="", directory=self.content_root, children=list(top)
        )

    def build_section(self, directory: Path, parent_url_path: str) -> Section:
        """Recursively build the section for ``directory``.

        Parameters
        ----------
        directory : Path
            Folder to scan.
        parent_url_path : str
            URL path of the parent section; empty for top-level folders.

        Returns
        -------
        Section
            Section with its index page, sorted children, and inherited
            title/order/metadata.

        Raises
        ------
        ContentReadError
            If the folder cannot be listed or a page cannot be read.
        """
        decoded_name = decode_unicode_escapes(directory.name)
        slug = normalize_slug(decoded_name)
        url_path = join_url(parent_url_path, slug)

        index_page: Page | None = None
        children: list[Section | Page] = []
        for entry in self._list_entries(directory):
            if entry.is_dir():
                children.append(self.build_section(entry, url_path))
            elif _is_markdown(entry):
                if entry.name.lower() == INDEX_FILENAME:
                    index_page = self.read_page(entry, url_path)
                else:
                    page_url = join_url(url_path, normalize_slug(_page_basename(entry)))
                    page = self.read_page(entry, page_url)
                    # a front matter slug replaces the file-name segment
                    recompute_paths(page, url_path)
                    children.append(page)

        children.sort(key=sort_key)
        logger.debug("Built section %s with %d children", url_path, len(children))

        if index_page is None:
            return Section(
                title=decoded_name,
                slug=slug,
                path=url_path,
                directory=directory,
                children=children,
            )
        return Section(
            title=index_page.title or decoded_name,
            slug=slug,
            path=url_path,
            directory=directory,
            order=resolve_order(index_page.metadata).value,
            index_page=index_page,
            children=children,
            metadata=index_page.metadata,
        )

    def read_page(self, file_path: Path, url_path: str) -> Page:
        """Read one markdown file into a Page rooted at ``url_path``.

        Raises
        ------
        ContentReadError
            If the file cannot be read or decoded as UTF-8.
        """
        try:
            raw = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"Unable to read page '{file_path}': {exc}"
            raise ContentReadError(msg) from exc

        document = parse_front_matter(raw, source=file_path)
        metadata = document.metadata
        basename = decode_unicode_escapes(_page_basename(file_path))
        return Page(
            title=resolve_text(metadata, "title", basename).value,
            slug=normalize_slug(resolve_text(metadata, "slug", basename).value),
            path=url_path,
            source=file_path,
            order=resolve_order(metadata).value,
            metadata=metadata,
        )

    @staticmethod
    def apply_override(section: Section, override: SectionOverride) -> None:
        """Apply a top-level override, cascading slug changes to descendants."""
        if override.title:
            section.title = override.title
        if override.order is not None:
            section.order = override.order
        if override.slug:
            section.slug = normalize_slug(override.slug)
            recompute_paths(section, "")

    @staticmethod
    def _list_entries(directory: Path) -> list[Path]:
        """Return directory entries sorted by name for deterministic builds."""
        try:
            return sorted(directory.iterdir(), key=lambda entry: entry.name)
        except OSError as exc:
            msg = f"Unable to list content directory '{directory}': {exc}"
            raise ContentReadError(msg) from exc


__all__ = [
    "TreeBuilder",
    "decode_unicode_escapes",
    "join_url",
    "normalize_slug",
    "recompute_paths",
    "sort_key",
]
