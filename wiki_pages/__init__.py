"""Static site generator and live preview for a markdown wiki.

This package turns a folder tree of markdown files into a navigable wiki,
rendering custom block and inline macros, and exposes the ``wiki`` console
command used to build the static site or preview it locally.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from wiki_pages import main
>>> main()  # doctest: +SKIP
>>> from wiki_pages import app
>>> app(["routes"])  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
