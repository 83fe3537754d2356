"""URL helpers for serving the wiki below a base path.

GitHub Pages project sites live under ``/<repo>/``, so every root-relative
link the generator writes is prefixed with the configured base path.

Examples
--------
>>> pretty_href("/guide/install", "/wiki/")
'/wiki/guide/install/'
>>> apply_base_to_html('<a href="/x">x</a><img src="//cdn/y">', "/wiki/")
'<a href="/wiki/x">x</a><img src="//cdn/y">'
"""

from __future__ import annotations

import re
import typing as typ
from urllib.parse import unquote

from wiki_pages.config.helpers import normalize_base

if typ.TYPE_CHECKING:
    from pathlib import Path

ROOT_RELATIVE_ATTR_PATTERN = re.compile(r"\b(href|src)=([\"'])/(?!/)")
ABSOLUTE_URL_PREFIXES = ("http://", "https://", "//")


def with_base(url: str, base: str = "/") -> str:
    """Prefix a site URL with ``base``; absolute URLs are returned unchanged."""
    if not url or url.startswith(ABSOLUTE_URL_PREFIXES):
        return url
    return f"{base}{url.removeprefix('/')}"


def pretty_href(url_path: str, base: str = "/") -> str:
    """Return the directory-style link for ``url_path`` so ``index.html`` resolves."""
    if not url_path or url_path == "/":
        return with_base("/", base)
    return with_base(url_path if url_path.endswith("/") else f"{url_path}/", base)


def apply_base_to_html(html: str, base: str = "/") -> str:
    """Rewrite root-relative ``href``/``src`` attributes to live under ``base``."""
    if not base or base == "/":
        return html
    return ROOT_RELATIVE_ATTR_PATTERN.sub(rf"\1=\2{base}", html)


def url_to_output_path(url_path: str, output_dir: Path) -> Path:
    """Map ``/a/b`` to ``output_dir/a/b/index.html``, decoding each segment.

    Raises
    ------
    ValueError
        If a decoded segment would place the file outside ``output_dir``.
    """
    parts = [unquote(part) for part in url_path.strip("/").split("/") if part]
    target = output_dir.joinpath(*parts, "index.html")
    if not target.resolve().is_relative_to(output_dir.resolve()):
        msg = f"URL path '{url_path}' escapes the output directory '{output_dir}'."
        raise ValueError(msg)
    return target


__all__ = [
    "apply_base_to_html",
    "normalize_base",
    "pretty_href",
    "url_to_output_path",
    "with_base",
]
