"""Common literal values used across wiki_pages.

These constants keep reserved filenames and directory names centralized so the
tree builder, renderer, generator, and tests can import the same values
without drifting. Intended for internal use within the wiki_pages package.

Examples
--------
>>> from wiki_pages import _constants
>>> _constants.INDEX_FILENAME
'index.md'
>>> _constants.ICON_URL_PREFIX.format(name="idea", ext="svg")
'/assets/icons/idea.svg'
"""

INDEX_FILENAME = "index.md"
MARKDOWN_SUFFIX = ".md"
SITE_CONFIG_FILENAME = "wiki.yaml"
ORDERING_CONFIG_FILENAME = "wiki.config.json"
ICON_URL_PREFIX = "/assets/icons/{name}.{ext}"
ICON_EXTENSIONS = ("svg", "png", "jpg", "jpeg")
DOWNLOAD_ICON_URL = "/assets/download.svg"
