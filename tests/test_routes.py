"""Tests for deriving the URL route table from the content tree."""

from __future__ import annotations

import typing as typ

from wiki_pages.content import TreeBuilder, build_routes, resolve_route, route_table

if typ.TYPE_CHECKING:
    from pathlib import Path

HOME = "Главная"


def test_every_page_is_routed_once(wiki_project: Path) -> None:
    """Index pages and leaf pages each get exactly one route."""
    tree = TreeBuilder(wiki_project / "content").build_tree()
    entries = build_routes(tree)

    paths = [entry.url_path for entry in entries]
    assert paths == [
        "/Docs",
        "/Docs/api/reference",
        f"/{HOME}",
        f"/{HOME}/Install-Guide",
        f"/{HOME}/faq",
    ], f"unexpected route order {paths!r}"
    assert len({id(entry.page) for entry in entries}) == len(entries), (
        "a page should not be routed twice"
    )


def test_index_page_is_routed_at_section_path(wiki_project: Path) -> None:
    """A section's landing page is what its own path resolves to."""
    tree = TreeBuilder(wiki_project / "content").build_tree()
    routes = route_table(tree)
    page = routes[f"/{HOME}"]
    assert page.source.name == "index.md"


def test_resolve_route_accepts_encoded_and_slashed_paths(wiki_project: Path) -> None:
    """Request paths may be percent-encoded and carry a trailing slash."""
    tree = TreeBuilder(wiki_project / "content").build_tree()
    routes = route_table(tree)

    encoded = "/%D0%93%D0%BB%D0%B0%D0%B2%D0%BD%D0%B0%D1%8F/"
    page = resolve_route(routes, encoded)
    assert page is not None, "encoded section path should resolve"
    assert page.title == "Главная страница"
    assert resolve_route(routes, "/Docs/api/reference/") is not None
    assert resolve_route(routes, "/Docs/api") is None, (
        "sections without an index page are not routable"
    )
    assert resolve_route(routes, "/") is None
