"""Static site generation and live preview for the wiki."""

from .generator import SiteGenerator
from .navigation import NavigationBuilder, NavItem
from .server import resolve_request, serve
from .urls import apply_base_to_html, pretty_href, url_to_output_path, with_base

__all__ = [
    "NavItem",
    "NavigationBuilder",
    "SiteGenerator",
    "apply_base_to_html",
    "pretty_href",
    "resolve_request",
    "serve",
    "url_to_output_path",
    "with_base",
]
