"""Cyclopts CLI entrypoint for building and previewing the wiki.

The ``wiki`` console script defined here pre-renders the content tree into a
static site, lists the routes the tree produces, or runs a live preview
server that re-reads content on every request. Typical usage involves
running ``wiki serve`` while writing and ``wiki generate`` in CI, with
``BASE_PATH`` set when publishing a GitHub Pages project site.

Examples
--------
Generate the site for the configuration in the current directory:

>>> from wiki_pages.cli import main
>>> main()  # doctest: +SKIP

Generate into a custom directory under a project-site prefix:

>>> from wiki_pages.cli import app
>>> app(
...     ["generate", "--output-dir", "dist", "--base-path", "/wiki.velora/"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import SITE_CONFIG_FILENAME
from .config import load_site_config
from .content import route_table
from .site import SiteGenerator
from .site.server import DEFAULT_HOST, DEFAULT_PORT, serve as serve_preview

DEFAULT_CONFIG = Path(SITE_CONFIG_FILENAME)

app = App(name="wiki", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Pre-render the wiki into a static site.")
def generate(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    base_path: typ.Annotated[
        str | None,
        Parameter(
            help="URL prefix the site is served under",
            env_var=["INPUT_BASE_PATH", "BASE_PATH"],
        ),
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Log debug output")] = False,
) -> None:
    """Generate static HTML for every page of the wiki.

    Parameters
    ----------
    config : Path, optional
        Path to the ``wiki.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``). A missing file selects the defaults.
    output_dir : Path or None, optional
        Override for the configured output directory.
    base_path : str or None, optional
        Override for the configured base path; also read from ``BASE_PATH``.
    verbose : bool, optional
        Enable debug logging.

    Returns
    -------
    None
        Writes the site and prints each generated path.

    Raises
    ------
    ContentReadError
        If the content tree cannot be read.
    SiteConfigError
        If the configuration file is structurally invalid.
    """
    _configure_logging(verbose)
    site_config = load_site_config(config)
    generator = SiteGenerator(site_config, output_dir=output_dir, base_path=base_path)
    for path in generator.run():
        print(f"wrote {_format_path(path)}")


@app.command(help="List the URL paths the content tree produces.")
def routes(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    verbose: typ.Annotated[bool, Parameter(help="Log debug output")] = False,
) -> None:
    """Print one ``url_path<TAB>source`` line per routed page."""
    _configure_logging(verbose)
    site_config = load_site_config(config)
    tree = SiteGenerator(site_config).load_tree()
    for url_path, page in route_table(tree).items():
        print(f"{url_path or '/'}\t{_format_path(page.source)}")


@app.command(help="Run the live preview server.")
def serve(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    host: typ.Annotated[
        str, Parameter(help="Interface to bind", env_var="INPUT_HOST")
    ] = DEFAULT_HOST,
    port: typ.Annotated[
        int, Parameter(help="Port to listen on", env_var="INPUT_PORT")
    ] = DEFAULT_PORT,
    verbose: typ.Annotated[bool, Parameter(help="Log debug output")] = False,
) -> None:
    """Serve the wiki from disk, rebuilding the tree on every request."""
    _configure_logging(verbose)
    site_config = load_site_config(config)
    serve_preview(SiteGenerator(site_config, base_path="/"), host=host, port=port)


def main() -> None:
    """Invoke the Cyclopts application that powers the `wiki` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
