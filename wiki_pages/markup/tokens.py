"""Typed tokens produced by the macro tokenizers.

Each macro kind has its own frozen dataclass carrying only the fields its
renderer needs. Tokens hold raw author values; sanitising happens at render
time so tokenizers stay simple and lossless.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

Align = typ.Literal["left", "center", "right"]


@dc.dataclass(frozen=True, slots=True)
class GradientToken:
    """``<gradient:C1:C2>text</gradient>``."""

    color1: str
    color2: str
    inner: str


@dc.dataclass(frozen=True, slots=True)
class ColorToken:
    """``<#HEX>text</#HEX>`` or ``<#HEX>text<.#HEX>``."""

    color: str
    inner: str


@dc.dataclass(frozen=True, slots=True)
class WikiLinkToken:
    """``[[link:target|label]]`` and its ``page:``/``cat:`` aliases."""

    kind: str
    target: str
    label: str = ""


@dc.dataclass(frozen=True, slots=True)
class InlineAssetToken:
    """``[[icon:name|k=v]]`` or ``[[img:ref|k=v]]``."""

    kind: str
    ref: str
    options: dict[str, str] = dc.field(default_factory=dict)


@dc.dataclass(frozen=True, slots=True)
class ImageToken:
    """A fenced ``image`` block."""

    src: str = ""
    alt: str = ""
    caption: str = ""
    link: str = ""
    align: Align = "center"
    width: str = ""
    height: str = ""
    fit: typ.Literal["cover", "contain"] = "contain"


@dc.dataclass(frozen=True, slots=True)
class GalleryItem:
    """One gallery slide."""

    src: str
    caption: str | None = None

    def as_json(self) -> dict[str, str]:
        """Return the payload object consumed by the client-side widget."""
        if self.caption:
            return {"src": self.src, "caption": self.caption}
        return {"src": self.src}


@dc.dataclass(frozen=True, slots=True)
class GalleryToken:
    """A fenced ``gallery`` block."""

    items: tuple[GalleryItem, ...] = ()
    align: Align = "center"
    width: int | float | None = None


@dc.dataclass(frozen=True, slots=True)
class DownloadToken:
    """A fenced ``download`` block."""

    file: str = ""
    label: str = ""
    desc: str = ""


@dc.dataclass(frozen=True, slots=True)
class CalloutToken:
    """A fenced ``callout`` block; ``body`` is markdown."""

    callout_type: typ.Literal["note", "warning", "tip", "error"] = "note"
    title: str = ""
    icon: str = ""
    body: str = ""


MacroToken: typ.TypeAlias = (
    GradientToken
    | WikiLinkToken
    | ColorToken
    | ImageToken
    | GalleryToken
    | DownloadToken
    | CalloutToken
    | InlineAssetToken
)
WrappingToken: typ.TypeAlias = GradientToken | ColorToken


__all__ = [
    "Align",
    "CalloutToken",
    "ColorToken",
    "DownloadToken",
    "GalleryItem",
    "GalleryToken",
    "GradientToken",
    "ImageToken",
    "InlineAssetToken",
    "MacroToken",
    "WikiLinkToken",
    "WrappingToken",
]
