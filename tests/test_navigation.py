"""Tests for navigation view models and URL helpers."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest

from wiki_pages.content import Page, Section, TreeBuilder
from wiki_pages.markup.icons import IconResolver
from wiki_pages.site import (
    NavigationBuilder,
    apply_base_to_html,
    pretty_href,
    url_to_output_path,
    with_base,
)
from wiki_pages.site.navigation import (
    NavIcon,
    PageHeader,
    hide_title,
    infer_page_symbol,
    infer_section_symbol,
    page_header,
)

if typ.TYPE_CHECKING:
    from wiki_pages.content import Metadata

HOME = "Главная"


@pytest.fixture
def navigation(wiki_project: Path) -> NavigationBuilder:
    """Return a navigation builder over the sample project under ``/wiki/``."""
    tree = TreeBuilder(wiki_project / "content").build_tree()
    icons = IconResolver(wiki_project / "public" / "assets" / "icons")
    return NavigationBuilder(tree, icons, "/wiki/")


def test_nav_items_and_states(navigation: NavigationBuilder) -> None:
    """Sections link to their landing page; labels mark index-less folders."""
    items = navigation.nav(f"/{HOME}/faq/")
    docs, home = items
    assert (docs.kind, docs.state, docs.href) == ("section", "is-collapsed", "/wiki/Docs/")
    assert home.state == "is-open"
    assert home.expanded == "true"
    assert home.nav_path == "/%D0%93%D0%BB%D0%B0%D0%B2%D0%BD%D0%B0%D1%8F"
    api = docs.children[0]
    assert (api.kind, api.depth) == ("label", 1)
    leaf = api.children[0]
    assert (leaf.kind, leaf.state, leaf.expanded) == ("page", "is-leaf", None)
    assert leaf.href == "/wiki/Docs/api/reference/"


def test_nav_icons(navigation: NavigationBuilder) -> None:
    """Icons come from front matter, the icon directory, or a symbol guess."""
    docs, home = navigation.nav()
    assert home.icon == NavIcon(src="/wiki/assets/icons/idea.svg")
    assert docs.icon == NavIcon(symbol="book")
    install = home.children[0]
    assert install.icon == NavIcon(symbol="spark")


@pytest.mark.parametrize(
    ("reference", "expected"),
    [
        ("", NavIcon(symbol="file")),
        ("ghost", NavIcon(symbol="ghost")),
        ("/img/x.png", NavIcon(src="/wiki/img/x.png")),
        ("https://cdn.test/x.png", NavIcon(src="https://cdn.test/x.png")),
        ("x.png", NavIcon(src="x.png")),
    ],
)
def test_icon_resolution(
    navigation: NavigationBuilder, reference: str, expected: NavIcon
) -> None:
    """Icon references resolve to base-prefixed URLs or symbols."""
    assert navigation.icon(reference, "file") == expected


def test_breadcrumbs(navigation: NavigationBuilder) -> None:
    """Breadcrumbs list section titles down to the page title."""
    assert navigation.breadcrumbs("/Docs/api/reference") == [
        "Docs",
        "api",
        "API reference",
    ]
    assert navigation.breadcrumbs(f"/{HOME}") == ["Главная страница", "Главная страница"]
    assert navigation.breadcrumbs("/missing") == []


def test_listing_and_first_entry(navigation: NavigationBuilder) -> None:
    """Index pages list their section's children; the first entry is Docs."""
    home = navigation.tree.children[1]
    assert isinstance(home, Section)
    assert home.index_page is not None
    assert navigation.section_for_index_page(home.index_page) is home
    cards = navigation.listing(home)
    assert [(card.kind, card.title) for card in cards] == [
        ("page", "Install Guide"),
        ("page", "FAQ"),
    ]
    assert navigation.first_entry() == "/Docs"


def test_first_entry_without_sections() -> None:
    """An empty tree has no first entry."""
    builder = NavigationBuilder(Section(title="", slug="", path=""), IconResolver(None))
    assert builder.first_entry() is None
    stray = Page(title="p", slug="p", path="/p", source=Path("p.md"))
    assert builder.section_for_index_page(stray) is None


@pytest.mark.parametrize(
    ("slug", "title", "expected"),
    [
        ("home", "Start", "home"),
        ("x", "Главная", "home"),
        ("demos", "x", "spark"),
        ("x", "Галерея", "image"),
        ("docs", "x", "book"),
        ("misc", "Misc", "folder"),
    ],
)
def test_infer_section_symbol(slug: str, title: str, expected: str) -> None:
    """Section symbols are guessed from slug and title keywords."""
    assert infer_section_symbol(slug, title) == expected


def test_infer_page_symbol() -> None:
    """Install pages get the spark symbol; others the file symbol."""
    assert infer_page_symbol("Install-Guide", "x") == "spark"
    assert infer_page_symbol("x", "Установка") == "spark"
    assert infer_page_symbol("faq", "FAQ") == "file"


def test_page_header_sanitises_values() -> None:
    """Invalid fit, position and height fall back to safe defaults."""
    metadata: Metadata = {
        "hero": "/img/top.jpg",
        "headerFit": "stretch",
        "headerPos": "left; top",
        "headerHeight": "100vh;x",
    }
    header = page_header(metadata, " Title ", "/wiki/")
    assert header == PageHeader(src="/wiki/img/top.jpg", alt="Title")
    assert header is not None
    assert header.style == "--header-fit:cover;--header-pos:center"


def test_page_header_requires_image() -> None:
    """Without an image there is no header."""
    assert page_header({"headerAlt": "x"}, "Title") is None


@pytest.mark.parametrize(
    ("metadata", "expected"),
    [
        ({"hideTitle": True}, True),
        ({"no_title": 1}, True),
        ({"showTitle": False}, True),
        ({"showTitle": True}, False),
        ({}, False),
    ],
)
def test_hide_title(metadata: Metadata, expected: bool) -> None:
    """Several front matter spellings hide the page title."""
    assert hide_title(metadata) is expected


def test_url_helpers(tmp_path: Path) -> None:
    """Base path helpers leave absolute URLs alone."""
    assert with_base("/a", "/wiki/") == "/wiki/a"
    assert with_base("//cdn/a", "/wiki/") == "//cdn/a"
    assert with_base("https://x.test/a", "/wiki/") == "https://x.test/a"
    assert pretty_href("", "/wiki/") == "/wiki/"
    assert pretty_href("/a/b", "/") == "/a/b/"
    assert apply_base_to_html("<img src='/i.png'>", "/") == "<img src='/i.png'>"
    assert apply_base_to_html("<img src='/i.png'>", "/w/") == "<img src='/w/i.png'>"
    assert url_to_output_path("", tmp_path) == tmp_path / "index.html"
    assert url_to_output_path("/%D0%93/a", tmp_path) == tmp_path / "Г" / "a" / "index.html"


@pytest.mark.parametrize("url_path", ["/%2E%2E", "/a/%2F..%2F..", "/.."])
def test_url_to_output_path_stays_inside_output_dir(
    tmp_path: Path, url_path: str
) -> None:
    """Decoded segments may not place a page outside the output directory."""
    with pytest.raises(ValueError, match="escapes the output directory"):
        url_to_output_path(url_path, tmp_path / "site")
