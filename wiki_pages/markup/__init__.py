"""Markdown rendering with wiki macros.

The renderer wraps python-markdown with the base extensions used for code
highlighting and tables plus :class:`WikiMacroExtension`, which adds fenced
block macros (``image``, ``gallery``, ``download``, ``callout``) and inline
macros (gradient and color text, wiki links, inline icons and images).

Examples
--------
>>> from wiki_pages.markup import MarkdownRenderer
>>> MarkdownRenderer().markdown("[[link:guide|Guide]]")
'<p><a class="wiki-link" href="/guide">Guide</a></p>'
"""

from .css import escape_attr, human_file_size, safe_css_color, safe_css_size
from .extension import WikiMacroExtension
from .icons import IconResolver
from .macros import BLOCK_MACROS, INLINE_MACROS, MacroSpec
from .renderer import MarkdownRenderer, RenderedPage, render_markdown
from .widgets import MacroContext, render_macro

__all__ = [
    "BLOCK_MACROS",
    "INLINE_MACROS",
    "IconResolver",
    "MacroContext",
    "MacroSpec",
    "MarkdownRenderer",
    "RenderedPage",
    "WikiMacroExtension",
    "escape_attr",
    "human_file_size",
    "render_macro",
    "render_markdown",
    "safe_css_color",
    "safe_css_size",
]
