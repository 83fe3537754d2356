"""Live preview server.

Every page request rebuilds the content tree and renders the requested page
from disk, so edits show up on reload without a build step. Static assets
are served straight from the public directory.
"""

from __future__ import annotations

import dataclasses as dc
import functools
import http
import logging
import typing as typ
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import quote, unquote, urlsplit

from wiki_pages.content.routes import resolve_route, route_table

from .navigation import URI_SAFE

if typ.TYPE_CHECKING:
    from .generator import SiteGenerator

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000


@dc.dataclass(frozen=True, slots=True)
class PreviewResponse:
    """Outcome of resolving one preview request."""

    status: http.HTTPStatus
    body: str = ""
    location: str | None = None


def resolve_request(generator: SiteGenerator, request_path: str) -> PreviewResponse:
    """Render the page for ``request_path`` against a freshly built tree.

    ``/`` redirects to the first section's landing page; unknown paths get
    the 404 page.
    """
    tree = generator.load_tree()
    routes = route_table(tree)
    if request_path == "/":
        destination = generator.navigation(tree).first_entry()
        if destination and resolve_route(routes, destination) is not None:
            return PreviewResponse(
                http.HTTPStatus.FOUND, location=quote(destination, safe=URI_SAFE)
            )
    page = resolve_route(routes, request_path)
    if page is None:
        return PreviewResponse(
            http.HTTPStatus.NOT_FOUND, generator.render_not_found(tree, request_path)
        )
    url_path = unquote(request_path).removesuffix("/") or "/"
    return PreviewResponse(http.HTTPStatus.OK, generator.render_page(tree, url_path, page))


class PreviewRequestHandler(SimpleHTTPRequestHandler):
    """Serve public assets, falling back to rendered wiki pages."""

    generator: SiteGenerator

    def __init__(self, *args: typ.Any, generator: SiteGenerator, **kwargs: typ.Any) -> None:
        self.generator = generator
        super().__init__(*args, directory=str(generator.config.public_dir), **kwargs)

    def do_GET(self) -> None:  # noqa: N802
        """Send a static file when one exists, else the rendered page."""
        request_path = urlsplit(self.path).path
        if request_path != "/" and self._is_static(request_path):
            super().do_GET()
            return
        response = resolve_request(self.generator, request_path)
        self.send_response(response.status)
        if response.location is not None:
            self.send_header("Location", response.location)
        payload = response.body.encode("utf-8")
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def _is_static(self, request_path: str) -> bool:
        public_dir = self.generator.config.public_dir
        candidate = (public_dir / unquote(request_path).lstrip("/")).resolve()
        try:
            candidate.relative_to(public_dir.resolve())
        except ValueError:
            return False
        return candidate.is_file()

    def log_message(self, format: str, *args: typ.Any) -> None:  # noqa: A002
        """Route access logs through :mod:`logging`."""
        logger.info("%s - %s", self.address_string(), format % args)


def serve(
    generator: SiteGenerator, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT
) -> None:
    """Run the preview server until interrupted."""
    handler = functools.partial(PreviewRequestHandler, generator=generator)
    with ThreadingHTTPServer((host, port), handler) as httpd:
        logger.info("Wiki running: http://%s:%s", host, port)
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            logger.info("Server stopped.")


__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "PreviewRequestHandler",
    "PreviewResponse",
    "resolve_request",
    "serve",
]
