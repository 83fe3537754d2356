"""Unit tests for the ``wiki`` Cyclopts commands.

The command functions are invoked directly with explicit arguments; the
preview server is patched out with pytest-mock so no socket is opened.

Usage
-----
Run ``pytest tests/test_cli.py``.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

from wiki_pages import cli

if typ.TYPE_CHECKING:
    import pytest
    from pytest_mock import MockerFixture

    from wiki_pages.site import SiteGenerator


def test_generate_prints_written_paths(
    wiki_project: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """``generate`` writes the site and reports each file relative to cwd."""
    monkeypatch.chdir(wiki_project)
    cli.generate(config=Path("wiki.yaml"), output_dir=Path("dist"))

    lines = capsys.readouterr().out.splitlines()
    assert "wrote dist/404.html" in lines, f"unexpected output {lines!r}"
    assert "wrote dist/index.html" in lines
    assert (wiki_project / "dist" / "Docs" / "index.html").is_file()


def test_generate_honours_base_path(
    wiki_project: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """The base path override reaches the generated links."""
    monkeypatch.chdir(wiki_project)
    cli.generate(config=Path("wiki.yaml"), base_path="/wiki.velora/")
    redirect = (wiki_project / "site" / "index.html").read_text(encoding="utf-8")
    assert "url=/wiki.velora/Docs/" in redirect


def test_routes_lists_pages(
    wiki_project: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """``routes`` prints one tab-separated line per routed page."""
    monkeypatch.chdir(wiki_project)
    cli.routes(config=Path("wiki.yaml"))

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "/Docs\tcontent/Docs/INDEX.MD", f"unexpected output {lines!r}"
    assert len(lines) == 5


def test_serve_starts_preview_at_site_root(
    wiki_project: Path, monkeypatch: pytest.MonkeyPatch, mocker: MockerFixture
) -> None:
    """``serve`` hands a root-based generator to the preview server."""
    monkeypatch.chdir(wiki_project)
    (wiki_project / "wiki.yaml").write_text("base_path: /wiki/\n", encoding="utf-8")
    serve = mocker.patch("wiki_pages.cli.serve_preview")

    cli.serve(config=Path("wiki.yaml"), host="0.0.0.0", port=8080)  # noqa: S104

    serve.assert_called_once()
    generator = typ.cast("SiteGenerator", serve.call_args.args[0])
    assert generator.base == "/", "preview always serves from the root"
    assert serve.call_args.kwargs == {"host": "0.0.0.0", "port": 8080}  # noqa: S104


def test_base_path_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """``BASE_PATH`` feeds the ``--base-path`` option."""
    monkeypatch.setenv("BASE_PATH", "/from-env/")
    _command, bound, _ignored = cli.app.parse_args(["generate"])
    assert bound.arguments["base_path"] == "/from-env/"
