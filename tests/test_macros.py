"""Tests for the macro tokenizers and registries.

Tokenizers are pure functions anchored at the start of their input, so each
test feeds a source string and inspects the consumed length and the token.
"""

from __future__ import annotations

import pytest

from wiki_pages.markup.macros import (
    BLOCK_MACRO_NAMES,
    INLINE_MACROS,
    parse_fields,
    parse_options,
    tokenize_block,
    tokenize_callout,
    tokenize_color,
    tokenize_gallery,
    tokenize_gradient,
    tokenize_image,
    tokenize_inline_asset,
    tokenize_wiki_link,
)
from wiki_pages.markup.tokens import (
    CalloutToken,
    ColorToken,
    DownloadToken,
    GalleryItem,
    GradientToken,
    ImageToken,
    InlineAssetToken,
    WikiLinkToken,
)


def test_registries_are_ordered() -> None:
    """Block and inline macros are tried in a fixed order."""
    assert BLOCK_MACRO_NAMES == ("image", "gallery", "download", "callout")
    names = [spec.name for spec in INLINE_MACROS]
    assert names == ["gradient", "wiki_link", "color", "inline_asset"]


def test_parse_fields_ignores_noise() -> None:
    """Comments, blanks and non key/value lines are skipped; keys lowercase."""
    fields = parse_fields("# note\n\nSRC: /a.png\nnot a field\nsrc: /b.png\n")
    assert fields == {"src": "/b.png"}, f"unexpected fields {fields!r}"


def test_tokenize_image_reads_aliases() -> None:
    """``file`` and ``href`` are accepted for ``src`` and ``link``."""
    src = "```image\nfile: /p.png\nhref: https://x.test\nalign: left\nfit: cover\n```\nrest"
    result = tokenize_image(src)
    assert result is not None
    consumed, token = result
    assert src[consumed:] == "rest", "only the fenced block should be consumed"
    assert token == ImageToken(
        src="/p.png", link="https://x.test", align="left", fit="cover"
    )


def test_tokenize_image_coerces_invalid_choices() -> None:
    """Unknown align and fit values fall back to their defaults."""
    result = tokenize_image("```image\nsrc: /p.png\nalign: middle\nfit: fill\n```")
    assert result is not None
    _, token = result
    assert (token.align, token.fit) == ("center", "contain")


def test_tokenize_image_requires_closing_fence() -> None:
    """An unterminated fence does not tokenize."""
    assert tokenize_image("```image\nsrc: /p.png\n") is None


def test_tokenize_gallery_settings_and_items() -> None:
    """Key/value lines are settings or skipped; the remaining lines are slides."""
    src = (
        "```gallery\n"
        "align: right\n"
        "caption: not a slide\n"
        "width: 480\n"
        "/a.png | First: intro\n"
        "/b.png\n"
        "| orphan caption\n"
        "```\n"
    )
    result = tokenize_gallery(src)
    assert result is not None
    _, token = result
    assert token.align == "right"
    assert token.width == 480
    assert token.items == (
        GalleryItem(src="/a.png", caption="First: intro"),
        GalleryItem(src="/b.png"),
    ), f"unexpected items {token.items!r}"


@pytest.mark.parametrize(("width", "expected"), [("0", None), ("wide", None), ("2.5", 2.5)])
def test_tokenize_gallery_width(width: str, expected: float | None) -> None:
    """Gallery widths must be positive numbers."""
    result = tokenize_gallery(f"```gallery\nwidth: {width}\n/a.png\n```")
    assert result is not None
    assert result[1].width == expected


def test_tokenize_block_dispatches_by_kind() -> None:
    """The first matching block macro wins."""
    result = tokenize_block("```download\nfile: /a.zip\ndescription: Zip\n```\n")
    assert result is not None
    consumed, token = result
    assert token == DownloadToken(file="/a.zip", desc="Zip")
    assert consumed == len("```download\nfile: /a.zip\ndescription: Zip\n```\n")
    assert tokenize_block("```python\nprint(1)\n```\n") is None


def test_tokenize_callout_separates_options_from_body() -> None:
    """Options are consumed; other lines and unknown keys stay in the body."""
    src = (
        "```callout\n"
        "type: warning\n"
        "title: Careful\n"
        "icon: idea\n"
        "First line with **bold**.\n"
        "\n"
        "note: kept\n"
        "```\n"
    )
    result = tokenize_callout(src)
    assert result is not None
    _, token = result
    assert token == CalloutToken(
        callout_type="warning",
        title="Careful",
        icon="idea",
        body="First line with **bold**.\n\nnote: kept",
    )


def test_tokenize_callout_rejects_unknown_type() -> None:
    """An unknown callout type stays ``note``."""
    result = tokenize_callout("```callout\ntype: danger\nBody\n```")
    assert result is not None
    assert result[1].callout_type == "note"


def test_tokenize_gradient() -> None:
    """Gradients capture two colors and the inner text."""
    result = tokenize_gradient("<gradient:#f00:blue>Hi *there*</gradient> after")
    assert result is not None
    consumed, token = result
    assert token == GradientToken(color1="#f00", color2="blue", inner="Hi *there*")
    assert consumed == len("<gradient:#f00:blue>Hi *there*</gradient>")


@pytest.mark.parametrize("closing", ["</#ff0000>", "<.#ff0000>"])
def test_tokenize_color_accepts_both_closers(closing: str) -> None:
    """Color spans close with ``</#HEX>`` or ``<.#HEX>``."""
    result = tokenize_color(f"<#ff0000>red{closing}")
    assert result is not None
    assert result[1] == ColorToken(color="#ff0000", inner="red")


def test_tokenize_color_requires_matching_closer() -> None:
    """A closer for a different color does not end the span."""
    assert tokenize_color("<#ff0000>red</#00ff00>") is None


@pytest.mark.parametrize(
    ("src", "expected"),
    [
        ("[[link:guide|Guide]]", WikiLinkToken("link", "guide", "Guide")),
        ("[[page: Docs/api ]]", WikiLinkToken("page", "Docs/api", "")),
        ("[[cat:news| All news ]]", WikiLinkToken("cat", "news", "All news")),
    ],
)
def test_tokenize_wiki_link(src: str, expected: WikiLinkToken) -> None:
    """Wiki links accept three aliases with an optional label."""
    result = tokenize_wiki_link(src)
    assert result is not None
    assert result[1] == expected


def test_tokenize_wiki_link_declines_assets() -> None:
    """Inline asset syntax is left for the inline asset tokenizer."""
    assert tokenize_wiki_link("[[icon:idea]]") is None


def test_tokenize_inline_asset_options() -> None:
    """Options are ``k=v`` pairs; keys are lowercased; bare parts dropped."""
    result = tokenize_inline_asset("[[img:/x.png|H=2em|align=top|bogus|link=/a]]")
    assert result is not None
    assert result[1] == InlineAssetToken(
        kind="img", ref="/x.png", options={"h": "2em", "align": "top", "link": "/a"}
    )


def test_parse_options_keeps_later_values() -> None:
    """Repeated option keys keep the last value."""
    assert parse_options("w=1|w=2| =3") == {"w": "2"}
