"""Render macro tokens into HTML fragments.

``render_macro`` is the single entry point used by the markdown extension;
it dispatches on the token type. Everything the renderers need from the
outside world (icons, the public assets root, localized titles, and the
markdown pipeline itself for callout bodies) is carried by
:class:`MacroContext`, so rendering a token never reaches for module globals.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import json
import logging
import posixpath
import typing as typ
from urllib.parse import quote

from wiki_pages._constants import DOWNLOAD_ICON_URL
from wiki_pages.config.models import DEFAULT_CALLOUT_TITLES

from .css import escape_attr, human_file_size, safe_css_color, safe_css_size
from .tokens import (
    CalloutToken,
    ColorToken,
    DownloadToken,
    GalleryToken,
    GradientToken,
    ImageToken,
    InlineAssetToken,
    WikiLinkToken,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .icons import IconResolver
    from .tokens import MacroToken, WrappingToken

logger = logging.getLogger(__name__)

# characters encodeURIComponent leaves untouched
URI_COMPONENT_SAFE = "-_.!~*'()"
VERTICAL_ALIGNMENTS = ("top", "bottom", "baseline")


def _plain_text(text: str) -> str:
    return text


@dc.dataclass(slots=True)
class MacroContext:
    """Collaborators shared by every macro renderer for one markdown pass."""

    icons: IconResolver
    public_dir: Path | None = None
    callout_titles: cabc.Mapping[str, str] = dc.field(
        default_factory=lambda: dict(DEFAULT_CALLOUT_TITLES)
    )
    render_markdown: cabc.Callable[[str], str] = _plain_text


def _style(parts: cabc.Iterable[str]) -> str:
    return ";".join(part for part in parts if part)


def wrapper_attributes(token: WrappingToken) -> dict[str, str]:
    """Return the ``span`` attributes for a gradient or color token.

    Invalid colors fall back to theme variables, never to the raw value.

    Examples
    --------
    >>> wrapper_attributes(GradientToken("#bad!", "#123456", "x"))
    {'class': 'gradient-text', 'style': '--g1:var(--accent);--g2:#123456'}
    """
    if isinstance(token, GradientToken):
        first = safe_css_color(token.color1) or "var(--accent)"
        second = safe_css_color(token.color2) or "var(--accent2)"
        return {"class": "gradient-text", "style": f"--g1:{first};--g2:{second}"}
    color = safe_css_color(token.color) or "var(--text)"
    return {"class": "color-text", "style": f"color:{color}"}


def render_wrapper(token: WrappingToken, inner_html: str) -> str:
    """Render a wrapping token around already rendered ``inner_html``."""
    attrs = wrapper_attributes(token)
    return (
        f'<span class="{escape_attr(attrs["class"])}" '
        f'style="{escape_attr(attrs["style"])}">{inner_html}</span>'
    )


def render_wiki_link(token: WikiLinkToken) -> str:
    """Render an internal link with an absolute target."""
    target = token.target.strip()
    if not target:
        return ""
    if not target.startswith("/"):
        target = f"/{target}"
    text = token.label.strip() or target.removeprefix("/")
    return f'<a class="wiki-link" href="{escape_attr(target)}">{escape_attr(text)}</a>'


def render_inline_asset(token: InlineAssetToken, context: MacroContext) -> str:
    """Render an inline icon or image sized to the surrounding text."""
    opts = token.options
    src = context.icons.resolve(token.ref)
    alt = opts.get("alt", "")
    height = (
        safe_css_size(opts.get("h") or opts.get("height") or opts.get("size") or "1em")
        or "1em"
    )
    width = safe_css_size(opts.get("w") or opts.get("width") or "")
    valign = (opts.get("a") or opts.get("align") or "middle").lower()
    if valign not in VERTICAL_ALIGNMENTS:
        valign = "middle"
    style = _style((f"height:{height}", f"vertical-align:{valign}", width and f"width:{width}"))
    img = (
        f'<img class="inline-media" src="{escape_attr(src)}" alt="{escape_attr(alt)}" '
        f'style="{escape_attr(style)}" loading="eager" decoding="async" />'
    )
    link = opts.get("link") or opts.get("href") or ""
    if link:
        return f'<a class="inline-media-link" href="{escape_attr(link)}">{img}</a>'
    return img


def render_image(token: ImageToken) -> str:
    """Render a figure; an image without ``src`` renders nothing."""
    src = token.src.strip()
    if not src:
        return ""
    width = safe_css_size(token.width)
    height = safe_css_size(token.height)
    style = _style(
        (
            width and f"--wimage-w:{width}",
            height and f"--wimage-h:{height}",
            height and f"--wimage-fit:{token.fit}",
        )
    )
    style_attr = f' style="{escape_attr(style)}"' if style else ""
    img = (
        f'<img src="{escape_attr(src)}" alt="{escape_attr(token.alt.strip())}" '
        'loading="eager" decoding="async" />'
    )
    link = token.link.strip()
    media = f'<a class="wimage-link" href="{escape_attr(link)}">{img}</a>' if link else img
    caption = token.caption.strip()
    caption_html = (
        f'<figcaption class="wimage-cap">{escape_attr(caption)}</figcaption>'
        if caption
        else ""
    )
    return (
        f'<figure class="wimage align-{escape_attr(token.align)}"{style_attr}>'
        f'<div class="wimage-media">{media}</div>{caption_html}</figure>'
    )


def gallery_payload(token: GalleryToken) -> str:
    """Return the URI-component encoded JSON list of gallery items.

    Examples
    --------
    >>> from wiki_pages.markup.tokens import GalleryItem
    >>> gallery_payload(GalleryToken(items=(GalleryItem("/a.png", "Hi"),)))
    '%5B%7B%22src%22%3A%22%2Fa.png%22%2C%22caption%22%3A%22Hi%22%7D%5D'
    """
    items = [item.as_json() for item in token.items]
    encoded = json.dumps(items, ensure_ascii=False, separators=(",", ":"))
    return quote(encoded, safe=URI_COMPONENT_SAFE)


def render_gallery(token: GalleryToken) -> str:
    """Render the mount point read by the client-side gallery widget."""
    width = "" if token.width is None else str(token.width)
    return (
        f'<div class="wgallery" data-align="{escape_attr(token.align)}" '
        f'data-width="{escape_attr(width)}" '
        f'data-items="{escape_attr(gallery_payload(token))}"></div>'
    )


def download_size(file: str, public_dir: Path | None) -> str:
    """Return the human readable size of ``file`` under ``public_dir``.

    The leading slash of ``file`` is dropped. Missing files yield ``""``.
    """
    if not file or public_dir is None:
        return ""
    try:
        size = (public_dir / file.lstrip("/")).stat().st_size
    except OSError:
        logger.debug("Download target %s not found under %s", file, public_dir)
        return ""
    return human_file_size(size)


def render_download(token: DownloadToken, context: MacroContext) -> str:
    """Render a download card, including the file size when it is known."""
    file = token.file.strip()
    size = download_size(file, context.public_dir)
    label = token.label or (posixpath.basename(file) if file else "")
    size_html = f'<div class="download-size">{escape_attr(size)}</div>' if size else ""
    desc_html = (
        f'<div class="download-desc">{escape_attr(token.desc)}</div>'
        if token.desc
        else ""
    )
    return (
        f'<div class="wdownload"><a class="download-card" href="{escape_attr(file)}" '
        f'download><div class="download-icon"><img src="{DOWNLOAD_ICON_URL}" alt="" />'
        f'</div><div class="download-info"><div class="download-label">'
        f"{escape_attr(label)}</div>{size_html}{desc_html}</div></a></div>"
    )


def render_callout(token: CalloutToken, context: MacroContext) -> str:
    """Render a callout box whose body goes through the markdown pipeline."""
    callout_type = token.callout_type
    title = token.title or context.callout_titles.get(callout_type, "")
    body_html = context.render_markdown(token.body) if token.body else ""
    icon_src = context.icons.resolve(token.icon) if token.icon else ""
    icon_html = (
        f'<div class="callout-icon"><img src="{escape_attr(icon_src)}" alt="" '
        'loading="eager" decoding="async" /></div>'
        if icon_src
        else ""
    )
    icon_class = " has-icon" if icon_src else ""
    return (
        f'<div class="callout {escape_attr(callout_type)}{icon_class}">'
        f'<div class="callout-inner">{icon_html}<div class="callout-content">'
        f'<div class="callout-title">{escape_attr(title)}</div>'
        f'<div class="callout-body">{body_html}</div></div></div></div>'
    )


def render_macro(token: MacroToken, context: MacroContext, inner_html: str = "") -> str:
    """Render any macro token to HTML.

    Parameters
    ----------
    token : MacroToken
        Token produced by one of the tokenizers in :mod:`.macros`.
    context : MacroContext
        Collaborators used by the icon, download, and callout renderers.
    inner_html : str, optional
        Rendered content for wrapping tokens (gradient and color). When empty
        the raw inner text is escaped and used instead.

    Returns
    -------
    str
        The HTML fragment; may be empty for tokens missing required fields.
    """
    match token:
        case GradientToken() | ColorToken():
            return render_wrapper(token, inner_html or escape_attr(token.inner))
        case WikiLinkToken():
            return render_wiki_link(token)
        case InlineAssetToken():
            return render_inline_asset(token, context)
        case ImageToken():
            return render_image(token)
        case GalleryToken():
            return render_gallery(token)
        case DownloadToken():
            return render_download(token, context)
        case CalloutToken():
            return render_callout(token, context)
    msg = f"unsupported macro token: {type(token).__name__}"
    raise TypeError(msg)


__all__ = [
    "MacroContext",
    "download_size",
    "gallery_payload",
    "render_callout",
    "render_download",
    "render_gallery",
    "render_image",
    "render_inline_asset",
    "render_macro",
    "render_wiki_link",
    "render_wrapper",
    "wrapper_attributes",
]
