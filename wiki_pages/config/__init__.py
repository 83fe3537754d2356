"""Load and validate wiki site configuration.

This subpackage parses the optional ``wiki.yaml`` project file and the optional
``wiki.config.json`` ordering file, resolving directories relative to the
project root and producing typed dataclasses (:class:`SiteConfig`,
:class:`OrderingConfig`) that the tree builder, renderer, and generator
consume.

Examples
--------
>>> from pathlib import Path
>>> from wiki_pages.config import load_ordering_config, load_site_config
>>> site = load_site_config(Path("wiki.yaml"))  # doctest: +SKIP
>>> ordering = load_ordering_config(site.ordering_path)  # doctest: +SKIP
>>> ordering.directories  # doctest: +SKIP
['Главная', 'Примеры']
"""

from .helpers import normalize_base
from .loader import load_ordering_config, load_site_config
from .models import (
    DEFAULT_CALLOUT_TITLES,
    OrderingConfig,
    SectionOverride,
    SiteConfig,
    SiteConfigError,
)

__all__ = [
    "DEFAULT_CALLOUT_TITLES",
    "OrderingConfig",
    "SectionOverride",
    "SiteConfig",
    "SiteConfigError",
    "load_ordering_config",
    "load_site_config",
    "normalize_base",
]
