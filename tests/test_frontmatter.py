"""Tests for front matter parsing and tree-shaping field resolution."""

from __future__ import annotations

import logging

import pytest

from wiki_pages.content.fields import Resolved, resolve_order, resolve_text
from wiki_pages.content.frontmatter import normalize_metadata, parse_front_matter


def test_parse_front_matter_splits_header_and_body() -> None:
    """A ``---`` header should become metadata with the body left intact."""
    doc = parse_front_matter(
        "---\ntitle: Intro\norder: 2\ntags:\n  - a\n  - b\n---\n# Hello\n"
    )
    assert doc.metadata == {"title": "Intro", "order": 2, "tags": ["a", "b"]}, (
        f"unexpected metadata {doc.metadata!r}"
    )
    assert doc.body == "# Hello\n"
    assert not doc.malformed


def test_text_without_header_is_all_body() -> None:
    """Files without a header keep their whole text as body."""
    doc = parse_front_matter("# Title\n\n---\n\nAfter a rule.\n")
    assert doc.metadata == {}
    assert doc.body.startswith("# Title"), "body should be returned unchanged"


@pytest.mark.parametrize(
    "header",
    ["title: [oops", "title: T\ndate: 2024-13-45", "date: 2024-02-30"],
)
def test_malformed_header_is_logged_not_raised(
    header: str, caplog: pytest.LogCaptureFixture
) -> None:
    """YAML errors and impossible dates degrade to empty metadata and a warning."""
    with caplog.at_level(logging.WARNING):
        doc = parse_front_matter(f"---\n{header}\n---\nBody\n", source="bad.md")
    assert doc.metadata == {}
    assert doc.malformed
    assert doc.body == "Body\n"
    assert "bad.md" in caplog.text, "warning should name the source file"


def test_non_mapping_header_is_malformed() -> None:
    """A YAML list header is treated as malformed."""
    doc = parse_front_matter("---\n- one\n- two\n---\nBody\n")
    assert doc.metadata == {}
    assert doc.malformed


def test_normalize_metadata_drops_nested_values() -> None:
    """Only scalar values and scalar lists survive normalization."""
    metadata = normalize_metadata(
        {"title": "T", "nested": {"a": 1}, "empty": None, "flag": True, "ratio": 1.5}
    )
    assert metadata == {"title": "T", "flag": True, "ratio": 1.5}


@pytest.mark.parametrize(
    ("metadata", "expected"),
    [
        ({"order": 3}, Resolved(3, defaulted=False)),
        ({"order": -1.5}, Resolved(-1.5, defaulted=False)),
        ({"order": "3"}, Resolved(0, defaulted=True)),
        ({"order": True}, Resolved(0, defaulted=True)),
        ({}, Resolved(0, defaulted=True)),
    ],
)
def test_resolve_order(metadata: dict[str, object], expected: Resolved[float]) -> None:
    """Only real numbers are accepted as ``order``."""
    assert resolve_order(metadata) == expected


@pytest.mark.parametrize(
    ("metadata", "expected"),
    [
        ({"title": "Guide"}, Resolved("Guide", defaulted=False)),
        ({"title": 2024}, Resolved("2024", defaulted=False)),
        ({"title": "   "}, Resolved("fallback", defaulted=True)),
        ({"title": ["a"]}, Resolved("fallback", defaulted=True)),
        ({}, Resolved("fallback", defaulted=True)),
    ],
)
def test_resolve_text(metadata: dict[str, object], expected: Resolved[str]) -> None:
    """Blank or non-text values fall back to the supplied default."""
    assert resolve_text(metadata, "title", "fallback") == expected
