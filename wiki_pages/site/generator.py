"""Pre-render the whole wiki into a static output tree.

:class:`SiteGenerator` builds the content tree, renders every routed page
through the markdown pipeline and the Jinja templates, and writes one
``index.html`` per route so the result can be hosted on any static file
server (GitHub Pages included, thanks to the base path rewriting).

Example
-------
>>> from pathlib import Path
>>> from wiki_pages.config import load_site_config
>>> from wiki_pages.site import SiteGenerator
>>> config = load_site_config(Path("wiki.yaml"))  # doctest: +SKIP
>>> SiteGenerator(config).run()  # doctest: +SKIP
[PosixPath('site/Главная/index.html'), ...]
"""

from __future__ import annotations

import logging
import shutil
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from wiki_pages.config.loader import load_ordering_config
from wiki_pages.content.routes import route_table
from wiki_pages.content.tree import TreeBuilder
from wiki_pages.markup.renderer import MarkdownRenderer

from .navigation import (
    NavigationBuilder,
    hide_title,
    page_description,
    page_header,
)
from .urls import apply_base_to_html, normalize_base, pretty_href, url_to_output_path

if typ.TYPE_CHECKING:
    from wiki_pages.config.models import SiteConfig
    from wiki_pages.content.models import Page, Section

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"
NOT_FOUND_FILENAME = "404.html"


class SiteGenerator:
    """Render the content tree into themed HTML files on disk."""

    def __init__(
        self,
        config: SiteConfig,
        *,
        output_dir: Path | None = None,
        base_path: str | None = None,
        renderer: MarkdownRenderer | None = None,
    ) -> None:
        """Initialize the generator with configuration and template context.

        Parameters
        ----------
        config : SiteConfig
            Resolved project configuration.
        output_dir : Path, optional
            Override for the output directory; defaults to ``config.output_dir``.
        base_path : str, optional
            Override for the URL prefix; defaults to ``config.base_path``.
        renderer : MarkdownRenderer, optional
            Renderer to reuse; one is built from ``config`` when omitted.
        """
        self.config = config
        self.output_dir = output_dir or config.output_dir
        self.base = normalize_base(base_path if base_path is not None else config.base_path)
        self.renderer = renderer or MarkdownRenderer.from_config(config)
        self.templates_dir = config.templates_dir or DEFAULT_TEMPLATES_DIR
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def load_tree(self) -> Section:
        """Build a fresh content tree, applying the ordering configuration."""
        ordering = load_ordering_config(self.config.ordering_path)
        return TreeBuilder(self.config.content_dir, ordering).build_tree()

    def navigation(self, tree: Section) -> NavigationBuilder:
        """Return the navigation builder for ``tree`` under this base path."""
        return NavigationBuilder(tree, self.renderer.context.icons, self.base)

    def _layout_context(
        self, navigation: NavigationBuilder, active_path: str
    ) -> dict[str, typ.Any]:
        return {
            "site_name": self.config.site_name,
            "base": self.base,
            "nav": navigation.nav(active_path),
            "pygments_css": Markup(self.renderer.stylesheet),  # noqa: S704
        }

    def render_page(self, tree: Section, url_path: str, page: Page) -> str:
        """Render ``page`` at ``url_path`` into a complete HTML document."""
        rendered = self.renderer.render_file(page.source)
        metadata = rendered.metadata
        navigation = self.navigation(tree)
        title = str(metadata.get("title") or page.title)
        icon_ref = metadata.get("icon")
        crumbs = navigation.breadcrumbs(url_path)
        section = navigation.section_for_index_page(page)
        context = self._layout_context(navigation, url_path)
        context.update(
            {
                "title": title,
                "where": " / ".join(crumbs) if crumbs else self.config.site_name,
                "description": page_description(metadata),
                "header": page_header(metadata, title, self.base),
                "hide_title": hide_title(metadata),
                "title_icon": (
                    navigation.icon(icon_ref, "file")
                    if isinstance(icon_ref, str) and icon_ref.strip()
                    else None
                ),
                "body_html": Markup(apply_base_to_html(rendered.html, self.base)),  # noqa: S704
                "listing": navigation.listing(section) if section else [],
            }
        )
        return self.env.get_template("page.jinja").render(**context)

    def render_not_found(self, tree: Section, active_path: str = "/404") -> str:
        """Render the 404 page with the regular navigation."""
        context = self._layout_context(self.navigation(tree), active_path)
        context.update(
            {
                "title": "404",
                "where": f"{self.config.site_name} / 404",
                "description": "",
            }
        )
        return self.env.get_template("not_found.jinja").render(**context)

    def render_redirect(self, target: str) -> str:
        """Render a tiny document redirecting the browser to ``target``."""
        return self.env.get_template("redirect.jinja").render(target=target)

    def run(self) -> list[Path]:
        """Rebuild the output directory and write every page.

        Returns
        -------
        list[Path]
            Written HTML files: one per route, then the root redirect (when
            the tree has a first section) and ``404.html``.

        Raises
        ------
        ContentReadError
            Raised when the content tree cannot be read; nothing is written.

        Notes
        -----
        The output directory is removed before writing and the public assets
        directory is copied into it.
        """
        tree = self.load_tree()
        routes = route_table(tree)
        navigation = self.navigation(tree)

        out_dir = self.output_dir
        if out_dir.exists():
            shutil.rmtree(out_dir)
        out_dir.mkdir(parents=True)
        if self.config.public_dir.is_dir():
            shutil.copytree(self.config.public_dir, out_dir, dirs_exist_ok=True)

        written: list[Path] = []
        for url_path, page in routes.items():
            html = self.render_page(tree, url_path or "/", page)
            written.append(self._write(url_to_output_path(url_path, out_dir), html))
            logger.debug("Rendered %s from %s", url_path or "/", page.source)

        destination = navigation.first_entry()
        if destination:
            redirect = self.render_redirect(pretty_href(destination, self.base))
            written.append(self._write(out_dir / "index.html", redirect))
        written.append(
            self._write(out_dir / NOT_FOUND_FILENAME, self.render_not_found(tree))
        )
        logger.info("Generated %d pages into %s", len(routes), out_dir)
        return written

    @staticmethod
    def _write(path: Path, html: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding="utf-8")
        return path


__all__ = ["DEFAULT_TEMPLATES_DIR", "SiteGenerator"]
