"""Load site configuration YAML and ordering JSON into typed dataclasses."""

from __future__ import annotations

import json
import logging
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from wiki_pages._constants import ORDERING_CONFIG_FILENAME

from .helpers import (
    _build_section_override,
    _merge_callout_titles,
    _optional_str,
    _resolve_path,
    normalize_base,
)
from .models import DEFAULT_CALLOUT_TITLES, OrderingConfig, SiteConfig, SiteConfigError

logger = logging.getLogger(__name__)


def load_site_config(path: Path, *, root_dir: Path | None = None) -> SiteConfig:
    """Load the YAML configuration describing where the wiki lives on disk.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``wiki.yaml``). A missing file is not an error: every key has a
        default relative to the project root.
    root_dir : Path, optional
        Project root used to resolve relative paths. Defaults to the
        directory containing ``path``.

    Returns
    -------
    SiteConfig
        Parsed configuration with every directory resolved to an absolute
        path.

    Raises
    ------
    SiteConfigError
        If the YAML document is not a mapping.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from wiki_pages.config import load_site_config
    >>> config = load_site_config(Path("wiki.yaml"))  # doctest: +SKIP
    >>> config.content_dir.name  # doctest: +SKIP
    'content'
    """
    root = (root_dir or path.parent).resolve()
    raw: dict[str, typ.Any] = {}
    if path.exists():
        loader = YAML(typ="safe")
        loader.version = (1, 2)
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
        if not isinstance(loaded, dict):
            msg = f"Top-level YAML structure in '{path}' must be a mapping."
            raise SiteConfigError(msg)
        raw = dict(loaded)
    else:
        logger.debug("No site configuration at %s; using defaults", path)

    public_dir = _resolve_path(root, raw.get("public_dir"), "public")
    icons_default = str(public_dir / "assets" / "icons")
    templates_raw = _optional_str(raw.get("templates_dir"))
    callouts = raw.get("callout_titles")
    if callouts is not None and not isinstance(callouts, dict):
        msg = "'callout_titles' must be a mapping of callout type to heading."
        raise SiteConfigError(msg)

    return SiteConfig(
        root_dir=root,
        content_dir=_resolve_path(root, raw.get("content_dir"), "content"),
        public_dir=public_dir,
        icons_dir=_resolve_path(root, raw.get("icons_dir"), icons_default),
        output_dir=_resolve_path(root, raw.get("output_dir"), "site"),
        ordering_path=_resolve_path(
            root, raw.get("ordering_config"), ORDERING_CONFIG_FILENAME
        ),
        templates_dir=_resolve_path(root, templates_raw, "") if templates_raw else None,
        base_path=normalize_base(_optional_str(raw.get("base_path"))),
        site_name=_optional_str(raw.get("site_name")) or "Wiki",
        pygments_style=_optional_str(raw.get("pygments_style")) or "monokai",
        callout_titles=_merge_callout_titles(DEFAULT_CALLOUT_TITLES, callouts),
    )


def load_ordering_config(path: Path) -> OrderingConfig:
    """Load top-level section overrides from ``wiki.config.json``.

    A missing file, unreadable file, invalid JSON, or unexpected structure all
    degrade to an empty configuration; nothing is raised.

    Parameters
    ----------
    path : Path
        Location of the ordering configuration file.

    Returns
    -------
    OrderingConfig
        Overrides in file order; entries without a string ``dir`` are skipped.
    """
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return OrderingConfig()
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        logger.debug("Ignoring ordering configuration %s: %s", path, exc)
        return OrderingConfig()

    match payload:
        case {"sections": list() as entries}:
            pass
        case _:
            return OrderingConfig()

    sections = []
    for entry in entries:
        override = _build_section_override(entry)
        if override is not None:
            sections.append(override)
    return OrderingConfig(sections=sections)


__all__ = ["load_ordering_config", "load_site_config"]
