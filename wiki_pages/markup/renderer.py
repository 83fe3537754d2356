"""Render wiki markdown, macros and syntax-highlighted code to HTML."""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ
from html import escape
from pathlib import Path

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from wiki_pages.config.models import DEFAULT_CALLOUT_TITLES
from wiki_pages.content.frontmatter import parse_front_matter
from wiki_pages.content.models import ContentReadError

from .extension import WikiMacroExtension
from .icons import IconResolver
from .macros import BLOCK_MACRO_NAMES
from .widgets import MacroContext

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from markdown.extensions import Extension

    from wiki_pages.config.models import SiteConfig
    from wiki_pages.content.models import Metadata
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

CODE_BLOCK_PATTERN = re.compile(
    r"^(?P<fence>`{3,}|~{3,})(?P<lang>[A-Za-z0-9_+#.-]+)?[^\n]*\n(?P<code>.*?)"
    r"^(?P=fence)[ \t]*$",
    re.DOTALL | re.MULTILINE,
)
FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')


@dc.dataclass(frozen=True, slots=True)
class RenderedPage:
    """HTML for one content file plus its front matter."""

    html: str
    metadata: Metadata


class MarkdownRenderer:
    """Render wiki markdown with macros and consistent code styling."""

    def __init__(
        self,
        *,
        icons_dir: Path | None = None,
        public_dir: Path | None = None,
        pygments_style: str = "monokai",
        callout_titles: cabc.Mapping[str, str] | None = None,
    ) -> None:
        """Initialize a renderer.

        Parameters
        ----------
        icons_dir : Path, optional
            Directory searched for named icons used by callouts and inline
            ``[[icon:...]]`` macros.
        public_dir : Path, optional
            Static assets root used to size ``download`` targets; sizes are
            omitted when ``None``.
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults to
            ``"monokai"``.
        callout_titles : Mapping[str, str], optional
            Default callout titles keyed by callout type.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")
        self.context = MacroContext(
            icons=IconResolver(icons_dir),
            public_dir=public_dir,
            callout_titles=dict(callout_titles or DEFAULT_CALLOUT_TITLES),
            render_markdown=self.markdown,
        )

    @classmethod
    def from_config(cls, config: SiteConfig) -> MarkdownRenderer:
        """Build a renderer for the directories named in ``config``."""
        return cls(
            icons_dir=config.icons_dir,
            public_dir=config.public_dir,
            pygments_style=config.pygments_style,
            callout_titles=config.callout_titles,
        )

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def markdown(self, text: str) -> str:
        """Render markdown into HTML using the configured extensions."""
        normalized = self._normalize_fenced_blocks(text)
        if not normalized.strip():
            return ""
        extensions: list[Extension | str] = [
            WikiMacroExtension(self.context),
            "fenced_code",
            "codehilite",
            "tables",
            "sane_lists",
        ]
        md = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        html = md.convert(normalized)
        return self._annotate_codehilite(html, normalized)

    def render_file(self, path: Path) -> RenderedPage:
        """Read ``path``, split its front matter and render the body.

        Raises
        ------
        ContentReadError
            Raised when the file cannot be read or decoded.
        """
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"Unable to read content file {path}: {exc}"
            raise ContentReadError(msg) from exc
        document = parse_front_matter(text, source=path)
        return RenderedPage(html=self.markdown(document.body), metadata=document.metadata)

    def _annotate_codehilite(self, html: str, source_markdown: str) -> str:
        """Attach language metadata to each highlighted block in converted markdown."""
        languages = [
            match.group("lang") or "text"
            for match in CODE_BLOCK_PATTERN.finditer(source_markdown)
            if match.group("lang") not in BLOCK_MACRO_NAMES
        ]
        if not languages:
            return html
        lang_iter = iter(languages)

        def _repl(match: re.Match[str]) -> str:
            lang = next(lang_iter, "text")
            return (
                f'<div class="codehilite" data-language="{escape(lang, quote=True)}">'
            )

        return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

        def _strip_labels(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            label = language or ""
            return f"{fence}{label}"

        return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


def render_markdown(path: Path, renderer: MarkdownRenderer | None = None) -> RenderedPage:
    """Render one content file with ``renderer`` or a default renderer."""
    return (renderer or MarkdownRenderer()).render_file(Path(path))


__all__ = [
    "CODE_BLOCK_PATTERN",
    "MarkdownRenderer",
    "RenderedPage",
    "render_markdown",
]
