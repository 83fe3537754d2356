"""Typed dataclasses describing wiki site configuration structures."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

DEFAULT_CALLOUT_TITLES: dict[str, str] = {
    "note": "Примечание",
    "warning": "Предупреждение",
    "tip": "Совет",
}


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class SectionOverride:
    """Override applied to one top-level content folder.

    Attributes
    ----------
    dir : str
        Folder name under the content root, exactly as it appears on disk.
    title : str | None
        Display title replacing the folder or index page title.
    slug : str | None
        URL segment replacing the folder-derived slug.
    order : int | float | None
        Sort key replacing the index page ``order``.
    """

    dir: str
    title: str | None = None
    slug: str | None = None
    order: int | float | None = None


@dc.dataclass(slots=True)
class OrderingConfig:
    """Ordered top-level section overrides read from ``wiki.config.json``."""

    sections: list[SectionOverride] = dc.field(default_factory=list)

    def get(self, directory: str) -> SectionOverride | None:
        """Return the override registered for ``directory``, if any."""
        for override in self.sections:
            if override.dir == directory:
                return override
        return None

    @property
    def directories(self) -> list[str]:
        """Folder names in configured order."""
        return [override.dir for override in self.sections]


@dc.dataclass(slots=True)
class SiteConfig:
    """A fully resolved wiki project configuration.

    Attributes
    ----------
    root_dir : Path
        Project root; relative paths below are resolved against it.
    content_dir : Path
        Directory holding the markdown content tree.
    public_dir : Path
        Static assets root, copied verbatim into the build output and used
        to resolve ``download`` macro file sizes.
    icons_dir : Path
        Flat directory of icon images keyed by basename.
    output_dir : Path
        Destination for the pre-rendered static site.
    templates_dir : Path | None
        Jinja template directory; ``None`` selects the packaged templates.
    ordering_path : Path
        Location of the optional ordering configuration JSON file.
    base_path : str
        URL prefix the site is served under (``"/"`` for custom domains).
    site_name : str
        Name shown in page titles and breadcrumbs.
    pygments_style : str
        Pygments style used for highlighted code blocks.
    callout_titles : dict[str, str]
        Default callout headings keyed by callout type.
    """

    root_dir: Path
    content_dir: Path
    public_dir: Path
    icons_dir: Path
    output_dir: Path
    ordering_path: Path
    templates_dir: Path | None = None
    base_path: str = "/"
    site_name: str = "Wiki"
    pygments_style: str = "monokai"
    callout_titles: dict[str, str] = dc.field(
        default_factory=lambda: dict(DEFAULT_CALLOUT_TITLES)
    )


__all__ = [
    "DEFAULT_CALLOUT_TITLES",
    "OrderingConfig",
    "SectionOverride",
    "SiteConfig",
    "SiteConfigError",
]
