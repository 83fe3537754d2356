r"""Tokenizers and the ordered registry of wiki macros.

Every macro is described by a :class:`MacroSpec`: a level (``block`` or
``inline``), a start marker used only as a fast search hint, and a pure
tokenizer ``(src) -> (consumed, token) | None`` anchored at the beginning of
``src``. The registries list macros in the order they are tried; the first
tokenizer that matches wins.

Block macros are fenced, with ``key: value`` bodies::

    ```image
    src: /assets/pic.png
    align: left
    ```

Unparseable lines are ignored, never fatal.

Example
-------
>>> from wiki_pages.markup.macros import tokenize_block
>>> consumed, token = tokenize_block("```download\nfile: /a.zip\n```\n")
>>> token.file, consumed
('/a.zip', 29)
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import math
import re
import typing as typ

from .tokens import (
    CalloutToken,
    ColorToken,
    DownloadToken,
    GalleryItem,
    GalleryToken,
    GradientToken,
    ImageToken,
    InlineAssetToken,
    WikiLinkToken,
)

if typ.TYPE_CHECKING:
    from .tokens import MacroToken

Tokenizer = cabc.Callable[[str], "tuple[int, MacroToken] | None"]

KEY_VALUE_PATTERN = re.compile(r"(\w+)\s*:\s*(.+)")
ALIGNMENTS = ("left", "center", "right")
CALLOUT_TYPES = ("note", "warning", "tip", "error")
IMAGE_FITS = ("cover", "contain")

GRADIENT_PATTERN = re.compile(r"<gradient:([^:>]+):([^>]+)>(.*?)</gradient>", re.DOTALL)
WIKI_LINK_PATTERN = re.compile(r"\[\[(link|page|cat):([^\]|]+?)(?:\|([^\]]+))?\]\]")
COLOR_PATTERN = re.compile(
    r"<(#[0-9a-f]{3,8})>(.*?)(?:</\1>|<\.\1>)", re.DOTALL | re.IGNORECASE
)
INLINE_ASSET_PATTERN = re.compile(r"\[\[(icon|img):([^\]|]+?)(?:\|([^\]]+))?\]\]")


@dc.dataclass(frozen=True, slots=True)
class MacroSpec:
    """Self-description of one macro extension."""

    name: str
    level: typ.Literal["block", "inline"]
    start: str
    tokenize: Tokenizer


def _fence_pattern(kind: str) -> re.Pattern[str]:
    return re.compile(
        rf"```{kind}[ \t]*\n(?P<body>.*?)^```[ \t]*(?:\n|\Z)",
        re.DOTALL | re.MULTILINE,
    )


IMAGE_FENCE = _fence_pattern("image")
GALLERY_FENCE = _fence_pattern("gallery")
DOWNLOAD_FENCE = _fence_pattern("download")
CALLOUT_FENCE = _fence_pattern("callout")


def parse_key_value(line: str) -> tuple[str, str] | None:
    """Return ``(key, value)`` for a ``key: value`` line, lower-casing the key."""
    match = KEY_VALUE_PATTERN.fullmatch(line.strip())
    if match is None:
        return None
    return match.group(1).lower(), match.group(2).strip()


def _content_lines(body: str) -> cabc.Iterator[str]:
    """Yield stripped lines, skipping blanks and ``#`` comments."""
    for raw in body.split("\n"):
        line = raw.strip()
        if line and not line.startswith("#"):
            yield line


def parse_fields(body: str) -> dict[str, str]:
    """Collect ``key: value`` pairs from a macro body; later keys win."""
    fields: dict[str, str] = {}
    for line in _content_lines(body):
        pair = parse_key_value(line)
        if pair is not None:
            key, value = pair
            fields[key] = value
    return fields


def _first(fields: cabc.Mapping[str, str], *keys: str) -> str:
    for key in keys:
        if key in fields:
            return fields[key]
    return ""


def _positive_number(value: str) -> int | float | None:
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return int(number) if number.is_integer() else number


def tokenize_image(src: str) -> tuple[int, ImageToken] | None:
    """Tokenize a fenced ``image`` block at the start of ``src``."""
    match = IMAGE_FENCE.match(src)
    if match is None:
        return None
    fields = parse_fields(match.group("body"))
    align = fields.get("align", "center")
    fit = fields.get("fit", "contain")
    token = ImageToken(
        src=_first(fields, "src", "file", "path"),
        alt=fields.get("alt", ""),
        caption=fields.get("caption", ""),
        link=_first(fields, "link", "href"),
        align=typ.cast("typ.Any", align if align in ALIGNMENTS else "center"),
        width=fields.get("width", ""),
        height=fields.get("height", ""),
        fit=typ.cast("typ.Any", fit if fit in IMAGE_FITS else "contain"),
    )
    return match.end(), token


def tokenize_gallery(src: str) -> tuple[int, GalleryToken] | None:
    """Tokenize a fenced ``gallery`` block of ``src | caption`` lines."""
    match = GALLERY_FENCE.match(src)
    if match is None:
        return None
    align = "center"
    width: int | float | None = None
    items: list[GalleryItem] = []
    for line in _content_lines(match.group("body")):
        pair = parse_key_value(line)
        if pair is not None:
            key, value = pair
            if key == "align" and value in ALIGNMENTS:
                align = value
            elif key == "width":
                width = _positive_number(value)
            continue
        source, _, caption = (part.strip() for part in line.partition("|"))
        if source:
            caption = caption.split("|", 1)[0].strip()
            items.append(GalleryItem(src=source, caption=caption or None))
    token = GalleryToken(
        items=tuple(items), align=typ.cast("typ.Any", align), width=width
    )
    return match.end(), token


def tokenize_download(src: str) -> tuple[int, DownloadToken] | None:
    """Tokenize a fenced ``download`` block."""
    match = DOWNLOAD_FENCE.match(src)
    if match is None:
        return None
    fields = parse_fields(match.group("body"))
    token = DownloadToken(
        file=fields.get("file", ""),
        label=fields.get("label", ""),
        desc=_first(fields, "desc", "description"),
    )
    return match.end(), token


def tokenize_callout(src: str) -> tuple[int, CalloutToken] | None:
    """Tokenize a fenced ``callout`` block; non-option lines form the body."""
    match = CALLOUT_FENCE.match(src)
    if match is None:
        return None
    callout_type = "note"
    title = ""
    icon = ""
    body: list[str] = []
    for line in match.group("body").split("\n"):
        pair = parse_key_value(line)
        if pair is None:
            body.append(line if line.strip() else "")
            continue
        key, value = pair
        if key == "type":
            if value in CALLOUT_TYPES:
                callout_type = value
        elif key == "title":
            title = value
        elif key == "icon":
            icon = value
        else:
            body.append(line)
    token = CalloutToken(
        callout_type=typ.cast("typ.Any", callout_type),
        title=title,
        icon=icon,
        body="\n".join(body).strip(),
    )
    return match.end(), token


def tokenize_gradient(src: str) -> tuple[int, GradientToken] | None:
    """Tokenize ``<gradient:C1:C2>text</gradient>``."""
    match = GRADIENT_PATTERN.match(src)
    if match is None:
        return None
    token = GradientToken(
        color1=match.group(1).strip(),
        color2=match.group(2).strip(),
        inner=match.group(3),
    )
    return match.end(), token


def tokenize_wiki_link(src: str) -> tuple[int, WikiLinkToken] | None:
    """Tokenize ``[[link:target|label]]``, ``[[page:...]]`` or ``[[cat:...]]``."""
    match = WIKI_LINK_PATTERN.match(src)
    if match is None:
        return None
    token = WikiLinkToken(
        kind=match.group(1).lower(),
        target=match.group(2).strip(),
        label=(match.group(3) or "").strip(),
    )
    return match.end(), token


def tokenize_color(src: str) -> tuple[int, ColorToken] | None:
    """Tokenize ``<#HEX>text</#HEX>`` or ``<#HEX>text<.#HEX>``."""
    match = COLOR_PATTERN.match(src)
    if match is None:
        return None
    return match.end(), ColorToken(color=match.group(1).strip(), inner=match.group(2))


def parse_options(raw: str) -> dict[str, str]:
    """Parse ``k=v|k=v`` options; parts without ``=`` or a key are ignored."""
    options: dict[str, str] = {}
    for part in raw.split("|"):
        key, sep, value = part.strip().partition("=")
        key = key.strip().lower()
        if sep and key:
            options[key] = value.strip()
    return options


def tokenize_inline_asset(src: str) -> tuple[int, InlineAssetToken] | None:
    """Tokenize ``[[icon:name|opts]]`` or ``[[img:ref|opts]]``."""
    match = INLINE_ASSET_PATTERN.match(src)
    if match is None:
        return None
    token = InlineAssetToken(
        kind=match.group(1),
        ref=match.group(2).strip(),
        options=parse_options(match.group(3) or ""),
    )
    return match.end(), token


BLOCK_MACROS: tuple[MacroSpec, ...] = (
    MacroSpec("image", "block", "```image", tokenize_image),
    MacroSpec("gallery", "block", "```gallery", tokenize_gallery),
    MacroSpec("download", "block", "```download", tokenize_download),
    MacroSpec("callout", "block", "```callout", tokenize_callout),
)
INLINE_MACROS: tuple[MacroSpec, ...] = (
    MacroSpec("gradient", "inline", "<gradient:", tokenize_gradient),
    MacroSpec("wiki_link", "inline", "[[", tokenize_wiki_link),
    MacroSpec("color", "inline", "<#", tokenize_color),
    MacroSpec("inline_asset", "inline", "[[", tokenize_inline_asset),
)
BLOCK_MACRO_NAMES = tuple(spec.name for spec in BLOCK_MACROS)


def tokenize_block(src: str) -> tuple[int, MacroToken] | None:
    """Try each block macro in registry order at the start of ``src``."""
    for spec in BLOCK_MACROS:
        if src.startswith(spec.start):
            result = spec.tokenize(src)
            if result is not None:
                return result
    return None


__all__ = [
    "BLOCK_MACROS",
    "BLOCK_MACRO_NAMES",
    "INLINE_MACROS",
    "MacroSpec",
    "parse_fields",
    "parse_key_value",
    "parse_options",
    "tokenize_block",
    "tokenize_callout",
    "tokenize_color",
    "tokenize_download",
    "tokenize_gallery",
    "tokenize_gradient",
    "tokenize_image",
    "tokenize_inline_asset",
    "tokenize_wiki_link",
]
