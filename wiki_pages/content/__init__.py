"""Content tree construction for the wiki.

Exports the :class:`TreeBuilder` that turns a folder hierarchy into
:class:`Section`/:class:`Page` nodes, the route helpers that map URL paths to
pages, and the errors raised when content cannot be read.
"""

from .models import ContentReadError, ContentRootError, Metadata, Node, Page, Section
from .routes import RouteEntry, build_routes, resolve_route, route_table
from .tree import TreeBuilder, decode_unicode_escapes, normalize_slug, recompute_paths

__all__ = [
    "ContentReadError",
    "ContentRootError",
    "Metadata",
    "Node",
    "Page",
    "RouteEntry",
    "Section",
    "TreeBuilder",
    "build_routes",
    "decode_unicode_escapes",
    "normalize_slug",
    "recompute_paths",
    "resolve_route",
    "route_table",
]
