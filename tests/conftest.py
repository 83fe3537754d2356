"""Shared fixtures describing a small wiki project on disk.

The ``wiki_project`` fixture lays out a content tree exercising escaped
folder names, case-insensitive index files, front matter ordering, nested
sections without an index page, and a loose top-level file that must be
ignored. A ``public`` directory carries an icon and a download target of a
known size.
"""

from __future__ import annotations

import typing as typ

import pytest

if typ.TYPE_CHECKING:
    from pathlib import Path

HOME_DIR = "#U0413#U043b#U0430#U0432#U043d#U0430#U044f"
HOME = "Главная"
DOWNLOAD_SIZE = 1536


def write_file(path: Path, text: str) -> Path:
    """Write ``text`` to ``path``, creating parent folders."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def wiki_project(tmp_path: Path) -> Path:
    """Return the root of a sample wiki project."""
    content = tmp_path / "content"
    write_file(
        content / HOME_DIR / "index.md",
        "---\ntitle: Главная страница\norder: 1\nicon: idea\n---\n"
        "Welcome to the [[link:Docs|docs]].\n",
    )
    write_file(
        content / HOME_DIR / "faq.md",
        "---\ntitle: FAQ\norder: 2\n---\nQuestions.\n",
    )
    write_file(content / HOME_DIR / "Install Guide.md", "# Install\n\nSteps.\n")
    write_file(
        content / "Docs" / "INDEX.MD",
        "---\ntitle: Docs\ndescription: Reference material\nheader: /assets/hero.png\n"
        "headerFit: contain\nheaderHeight: 240\n---\n"
        "See the [download](/downloads/archive.zip).\n",
    )
    write_file(
        content / "Docs" / "api" / "ref.md",
        "---\nslug: reference\ntitle: API reference\n---\n"
        "```download\nfile: /downloads/archive.zip\nlabel: Archive\n```\n",
    )
    write_file(content / "loose.md", "Ignored at the top level.\n")

    public = tmp_path / "public"
    write_file(public / "assets" / "icons" / "idea.svg", "<svg/>")
    write_file(public / "styles.css", "body{}")
    archive = public / "downloads" / "archive.zip"
    archive.parent.mkdir(parents=True, exist_ok=True)
    archive.write_bytes(b"\0" * DOWNLOAD_SIZE)
    return tmp_path
