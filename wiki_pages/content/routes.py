"""Derive the URL route table from a built content tree."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from urllib.parse import unquote

from .models import Page, Section

if typ.TYPE_CHECKING:
    from .models import Node


@dc.dataclass(frozen=True, slots=True)
class RouteEntry:
    """One routable page and the URL path it renders at."""

    url_path: str
    page: Page


def normalize_route_path(url_path: str) -> str:
    """Strip one trailing slash; ``"/"`` normalizes to ``""``."""
    return url_path[:-1] if url_path.endswith("/") else url_path


def build_routes(tree: Section) -> list[RouteEntry]:
    """Walk ``tree`` depth-first, emitting index pages before section children."""
    routes: list[RouteEntry] = []

    def _walk(node: Node) -> None:
        match node:
            case Page():
                routes.append(RouteEntry(node.path, node))
            case Section():
                if node.index_page is not None:
                    routes.append(RouteEntry(node.index_page.path, node.index_page))
                for child in node.children:
                    _walk(child)

    _walk(tree)
    return routes


def route_table(tree: Section) -> dict[str, Page]:
    """Return a mapping of normalized URL path to the page rendered there."""
    return {
        normalize_route_path(entry.url_path): entry.page for entry in build_routes(tree)
    }


def resolve_route(routes: typ.Mapping[str, Page], request_path: str) -> Page | None:
    """Look up a request path (percent-encoded, with or without slash)."""
    return routes.get(normalize_route_path(unquote(request_path)))


__all__ = [
    "RouteEntry",
    "build_routes",
    "normalize_route_path",
    "resolve_route",
    "route_table",
]
