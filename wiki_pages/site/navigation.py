"""View models for the sidebar, breadcrumbs, section listings and page shell.

Everything here is derived from the content tree and page metadata only;
the Jinja templates turn these dataclasses into markup.
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ
from urllib.parse import quote, unquote

from wiki_pages.content.models import Page, Section
from wiki_pages.markup.css import safe_css_size
from wiki_pages.markup.icons import is_literal_reference

from .urls import pretty_href, with_base

if typ.TYPE_CHECKING:
    from wiki_pages.content.models import Metadata, Node
    from wiki_pages.markup.icons import IconResolver

# characters encodeURI leaves untouched
URI_SAFE = "/;,?:@&=+$#-_.!~*'()"
HEADER_SOURCE_KEYS = ("header", "headerImage", "header_image", "hero")
HEADER_ALT_KEYS = ("headerAlt", "header_alt", "heroAlt")
HEADER_HEIGHT_KEYS = ("headerHeight", "header_height", "heroHeight")
HEADER_FIT_KEYS = ("headerFit", "header_fit", "heroFit")
HEADER_POSITION_KEYS = ("headerPos", "header_pos", "headerPosition")
HIDE_TITLE_KEYS = ("hideTitle", "hide_title", "noTitle", "no_title")
SHOW_TITLE_KEYS = ("showTitle", "show_title")
DESCRIPTION_KEYS = ("desc", "description")
HEADER_POSITION_PATTERN = re.compile(
    r"(center|top|bottom|left|right)(\s+(center|top|bottom|left|right))?"
)

NavKind = typ.Literal["section", "label", "page"]


@dc.dataclass(frozen=True, slots=True)
class NavIcon:
    """Either an image URL or the name of a built-in SVG symbol."""

    src: str = ""
    symbol: str = "folder"


@dc.dataclass(slots=True)
class NavItem:
    """One entry of the navigation sidebar.

    Sections with an index page are links; sections without one are plain
    labels. ``state`` is ``is-open`` when the active page lives inside the
    section, ``is-collapsed`` otherwise, and ``is-leaf`` for childless
    sections and pages.
    """

    title: str
    href: str
    depth: int
    kind: NavKind
    nav_path: str
    icon: NavIcon
    state: str = "is-leaf"
    children: list[NavItem] = dc.field(default_factory=list)

    @property
    def expanded(self) -> str | None:
        """Value for ``aria-expanded`` or ``None`` when there are no children."""
        if not self.children:
            return None
        return "true" if self.state == "is-open" else "false"


@dc.dataclass(frozen=True, slots=True)
class ListingCard:
    """A child page or subsection card shown under a section's index page."""

    kind: typ.Literal["page", "section"]
    title: str
    slug: str
    href: str


@dc.dataclass(frozen=True, slots=True)
class PageHeader:
    """Hero image shown above the page title."""

    src: str
    alt: str
    fit: str = "cover"
    position: str = "center"
    height: str = ""

    @property
    def style(self) -> str:
        """CSS custom properties consumed by the page header styles."""
        parts = [f"--header-fit:{self.fit}", f"--header-pos:{self.position}"]
        if self.height:
            parts.append(f"--header-h:{self.height}")
        return ";".join(parts)


def _first_value(metadata: Metadata, keys: typ.Iterable[str]) -> typ.Any:
    for key in keys:
        if key in metadata:
            return metadata[key]
    return None


def _text(value: object) -> str:
    return "" if value is None else str(value).strip()


def infer_section_symbol(slug: str, title: str) -> str:
    """Pick a built-in symbol for a section from its slug or title."""
    s = slug.lower()
    t = title.lower()
    if "home" in s or "глав" in t:
        return "home"
    if "demo" in s or "демо" in t:
        return "spark"
    if "gallery" in s or "галер" in t:
        return "image"
    if any(word in s for word in ("doc", "section")) or any(
        word in t for word in ("раздел", "док")
    ):
        return "book"
    return "folder"


def infer_page_symbol(slug: str, title: str) -> str:
    """Pick a built-in symbol for a page from its slug or title."""
    if "install" in slug.lower() or "установ" in title.lower():
        return "spark"
    return "file"


def page_header(metadata: Metadata, fallback_alt: str, base: str = "/") -> PageHeader | None:
    """Build the header model from front matter, or ``None`` without an image.

    ``headerFit`` accepts ``cover``/``contain`` (default ``cover``), the
    position accepts one or two CSS keywords (default ``center``) and the
    height passes through the CSS size whitelist.
    """
    src = _text(_first_value(metadata, HEADER_SOURCE_KEYS))
    if not src:
        return None
    if src.startswith("/"):
        src = with_base(src, base)
    alt = _text(_first_value(metadata, HEADER_ALT_KEYS)) or fallback_alt.strip()
    fit = _text(_first_value(metadata, HEADER_FIT_KEYS)) or "cover"
    position = _text(_first_value(metadata, HEADER_POSITION_KEYS)) or "center"
    return PageHeader(
        src=src,
        alt=alt,
        fit=fit if fit in ("cover", "contain") else "cover",
        position=position if HEADER_POSITION_PATTERN.fullmatch(position) else "center",
        height=safe_css_size(_first_value(metadata, HEADER_HEIGHT_KEYS)),
    )


def hide_title(metadata: Metadata) -> bool:
    """Return True when front matter asks for the page title to be hidden."""
    if bool(_first_value(metadata, HIDE_TITLE_KEYS)):
        return True
    return any(metadata.get(key) is False for key in SHOW_TITLE_KEYS)


def page_description(metadata: Metadata) -> str:
    """Return ``desc`` or ``description`` from front matter."""
    return _text(_first_value(metadata, DESCRIPTION_KEYS))


class NavigationBuilder:
    """Derive sidebar, breadcrumb and listing models from a content tree."""

    def __init__(self, tree: Section, icons: IconResolver, base: str = "/") -> None:
        self.tree = tree
        self.icons = icons
        self.base = base

    def icon(self, reference: object, fallback_symbol: str) -> NavIcon:
        """Resolve a front matter ``icon`` to an image or a built-in symbol."""
        raw = reference.strip() if isinstance(reference, str) else ""
        if not raw:
            return NavIcon(symbol=fallback_symbol)
        if "/" in raw:
            return NavIcon(src=with_base(raw, self.base) if raw.startswith("/") else raw)
        if is_literal_reference(raw):
            return NavIcon(src=raw)
        found = self.icons.find(raw)
        if found:
            return NavIcon(src=with_base(found, self.base))
        return NavIcon(symbol=raw)

    def nav(self, active_path: str = "") -> list[NavItem]:
        """Return top-level navigation items with open state for ``active_path``."""
        active = unquote(active_path.removesuffix("/"))
        return [self._item(child, 0, active) for child in self.tree.children]

    def _item(self, node: Node, depth: int, active: str) -> NavItem:
        nav_path = quote(node.path, safe=URI_SAFE)
        if isinstance(node, Page):
            return NavItem(
                title=node.title,
                href=pretty_href(node.path, self.base),
                depth=depth,
                kind="page",
                nav_path=nav_path,
                icon=self.icon(
                    node.metadata.get("icon"), infer_page_symbol(node.slug, node.title)
                ),
            )
        children = [self._item(child, depth + 1, active) for child in node.children]
        is_open = bool(active) and (
            active == node.path or active.startswith(f"{node.path}/")
        )
        if not children:
            state = "is-leaf"
        else:
            state = "is-open" if is_open else "is-collapsed"
        target = node.index_page.path if node.index_page else node.path
        return NavItem(
            title=node.title,
            href=pretty_href(target, self.base),
            depth=depth,
            kind="section" if node.index_page else "label",
            nav_path=nav_path,
            icon=self.icon(
                node.metadata.get("icon"), infer_section_symbol(node.slug, node.title)
            ),
            state=state,
            children=children,
        )

    def breadcrumbs(self, url_path: str) -> list[str]:
        """Return the section titles leading to ``url_path`` and the page title."""
        target = url_path.removesuffix("/")

        def _walk(section: Section, trail: list[str]) -> list[str] | None:
            here = [*trail, section.title]
            if section.index_page and section.index_page.path.removesuffix("/") == target:
                return [*here, section.index_page.title]
            for child in section.children:
                if isinstance(child, Page):
                    if child.path.removesuffix("/") == target:
                        return [*here, child.title]
                else:
                    found = _walk(child, here)
                    if found is not None:
                        return found
            return None

        for top in self.tree.children:
            if isinstance(top, Section):
                found = _walk(top, [])
                if found is not None:
                    return [title for title in found if title]
        return []

    def section_for_index_page(self, page: Page) -> Section | None:
        """Return the section whose landing page is ``page``."""
        for node in self.tree.walk():
            if isinstance(node, Section) and node.index_page is not None:
                if node.index_page.source == page.source:
                    return node
        return None

    def listing(self, section: Section) -> list[ListingCard]:
        """Return cards for the pages and subsections of ``section``."""
        cards: list[ListingCard] = []
        for child in section.children:
            if isinstance(child, Page):
                if section.index_page and section.index_page.source == child.source:
                    continue
                cards.append(
                    ListingCard("page", child.title, child.slug, pretty_href(child.path, self.base))
                )
            else:
                target = child.index_page.path if child.index_page else child.path
                cards.append(
                    ListingCard("section", child.title, child.slug, pretty_href(target, self.base))
                )
        return cards

    def first_entry(self) -> str | None:
        """Return the landing path of the first top-level section, if any."""
        first = next(iter(self.tree.children), None)
        if first is None:
            return None
        if isinstance(first, Section) and first.index_page:
            return first.index_page.path
        return first.path


__all__ = [
    "ListingCard",
    "NavIcon",
    "NavItem",
    "NavigationBuilder",
    "PageHeader",
    "hide_title",
    "infer_page_symbol",
    "infer_section_symbol",
    "page_description",
    "page_header",
]
