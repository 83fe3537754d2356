"""Python-Markdown extension wiring the wiki macros into the parser.

Block macros are expanded by a preprocessor before ``fenced_code`` sees the
document, so their fences never become code blocks. Inline macros run as
inline processors below the code span and escape patterns and above links
and raw HTML.
"""

from __future__ import annotations

import re
import typing as typ
import xml.etree.ElementTree as etree  # noqa: N813

from markdown.extensions import Extension
from markdown.inlinepatterns import InlineProcessor
from markdown.preprocessors import Preprocessor

from .macros import INLINE_MACROS, MacroSpec, tokenize_block
from .tokens import ColorToken, GradientToken
from .widgets import MacroContext, render_macro, wrapper_attributes

if typ.TYPE_CHECKING:
    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any

FENCE_OPEN_PATTERN = re.compile(r"^(?P<fence>`{3,}|~{3,})[^\n]*$", re.MULTILINE)
BLOCK_PRIORITY = 27
INLINE_PRIORITY = 175


class MacroBlockPreprocessor(Preprocessor):
    """Replace fenced block macros with stashed HTML placeholders.

    Fence openings are visited in document order. A macro fence is rendered
    and replaced; any other fence is skipped up to its closing fence so macro
    syntax quoted inside code samples stays literal.
    """

    def __init__(self, md: Markdown, context: MacroContext) -> None:
        super().__init__(md)
        self.context = context

    def run(self, lines: list[str]) -> list[str]:
        """Expand block macros in ``lines``."""
        return self.expand("\n".join(lines)).split("\n")

    def expand(self, text: str) -> str:
        """Return ``text`` with every block macro replaced by a placeholder."""
        parts: list[str] = []
        pos = 0
        while (match := FENCE_OPEN_PATTERN.search(text, pos)) is not None:
            start = match.start()
            result = tokenize_block(text[start:])
            if result is None:
                end = self._skip_fence(text, match)
                parts.append(text[pos:end])
                pos = end
                continue
            consumed, token = result
            parts.append(text[pos:start])
            html = render_macro(token, self.context)
            if html:
                parts.append(f"\n{self.md.htmlStash.store(html)}\n\n")
            else:
                parts.append("\n")
            pos = start + consumed
        parts.append(text[pos:])
        return "".join(parts)

    @staticmethod
    def _skip_fence(text: str, opening: re.Match[str]) -> int:
        """Return the offset just past the fence closing ``opening``."""
        fence = opening.group("fence")
        closing = re.compile(
            rf"^{re.escape(fence[0])}{{{len(fence)},}}[ \t]*$", re.MULTILINE
        )
        found = closing.search(text, opening.end())
        return len(text) if found is None else found.end()


class MacroInlineProcessor(InlineProcessor):
    """Apply one inline macro wherever its start marker occurs.

    Leaf macros become stashed raw HTML. Gradient and color macros return a
    ``span`` element whose text is handed to the lower priority patterns.
    """

    def __init__(self, spec: MacroSpec, md: Markdown, context: MacroContext) -> None:
        super().__init__(re.escape(spec.start), md)
        self.spec = spec
        self.context = context

    def handleMatch(  # type: ignore[override]  # noqa: N802
        self, m: re.Match[str], data: str
    ) -> tuple[etree.Element | str | None, int | None, int | None]:
        """Tokenize at the marker; decline so the search continues on a miss."""
        start = m.start(0)
        result = self.spec.tokenize(data[start:])
        if result is None:
            return None, None, None
        consumed, token = result
        if isinstance(token, GradientToken | ColorToken):
            element = etree.Element("span")
            for name, value in wrapper_attributes(token).items():
                element.set(name, value)
            element.text = token.inner
            return element, start, start + consumed
        html = render_macro(token, self.context)
        return self.md.htmlStash.store(html), start, start + consumed


class WikiMacroExtension(Extension):
    """Register the wiki block and inline macros on a Markdown instance."""

    def __init__(self, context: MacroContext) -> None:
        self.context = context

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the block preprocessor and one inline processor per macro."""
        md.preprocessors.register(
            MacroBlockPreprocessor(md, self.context), "wiki_block_macros", BLOCK_PRIORITY
        )
        for offset, spec in enumerate(INLINE_MACROS):
            md.inlinePatterns.register(
                MacroInlineProcessor(spec, md, self.context),
                f"wiki_{spec.name}",
                INLINE_PRIORITY - offset,
            )


__all__ = [
    "MacroBlockPreprocessor",
    "MacroInlineProcessor",
    "WikiMacroExtension",
]
