"""Whitelist sanitisers for author-supplied CSS values and attribute text.

Macro fields end up inside ``style`` and other attributes, so every size or
color is matched against a narrow grammar and discarded when it does not fit.
An empty string means "unset" to callers.

Examples
--------
>>> safe_css_size("320")
'320px'
>>> safe_css_size("50 vw")
''
>>> safe_css_color("red; background:url(x)")
''
>>> human_file_size(1536)
'1.5 KB'
"""

from __future__ import annotations

import re
from html import escape

SIZE_PATTERN = re.compile(r"[0-9]+(?:\.[0-9]+)?")
SIZE_WITH_UNIT_PATTERN = re.compile(r"[0-9]+(?:\.[0-9]+)?(?:px|%|vw|vh|rem|em)")
HEX_COLOR_PATTERN = re.compile(
    r"#(?:[0-9a-f]{3}|[0-9a-f]{4}|[0-9a-f]{6}|[0-9a-f]{8})", re.IGNORECASE
)
FUNCTION_COLOR_PATTERN = re.compile(r"(?:rgba?|hsla?)\(\s*[0-9.,%\s]+\)")
NAMED_COLOR_PATTERN = re.compile(r"[a-zA-Z]+")
VAR_COLOR_PATTERN = re.compile(r"var\(--[a-zA-Z0-9_-]+\)")
COLOR_PATTERNS = (
    HEX_COLOR_PATTERN,
    FUNCTION_COLOR_PATTERN,
    NAMED_COLOR_PATTERN,
    VAR_COLOR_PATTERN,
)
FILE_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")


def escape_attr(value: object) -> str:
    """Escape ``value`` for use inside a double-quoted HTML attribute."""
    return escape(str(value), quote=True)


def safe_css_size(value: object) -> str:
    """Return a CSS length, bare numbers as pixels, or ``""`` when rejected."""
    text = "" if value is None else str(value).strip()
    if SIZE_PATTERN.fullmatch(text):
        return f"{text}px"
    if SIZE_WITH_UNIT_PATTERN.fullmatch(text):
        return text
    return ""


def safe_css_color(value: object) -> str:
    """Return the color unchanged when it matches the whitelist, else ``""``."""
    text = "" if value is None else str(value).strip()
    if any(pattern.fullmatch(text) for pattern in COLOR_PATTERNS):
        return text
    return ""


def human_file_size(size: int) -> str:
    """Format a byte count with binary prefixes.

    Scaled values below ten keep one decimal place, except that a whole
    number drops its ``.0``; bytes are always whole.

    Examples
    --------
    >>> [human_file_size(n) for n in (0, 1536, 1048576, 20480)]
    ['0 B', '1.5 KB', '1 MB', '20 KB']
    """
    if size < 0:
        return ""
    scaled = float(size)
    unit = 0
    while scaled >= 1024 and unit < len(FILE_SIZE_UNITS) - 1:
        scaled /= 1024
        unit += 1
    decimals = 1 if scaled < 10 and unit > 0 else 0
    number = f"{scaled:.{decimals}f}".removesuffix(".0")
    return f"{number} {FILE_SIZE_UNITS[unit]}"


__all__ = [
    "escape_attr",
    "human_file_size",
    "safe_css_color",
    "safe_css_size",
]
