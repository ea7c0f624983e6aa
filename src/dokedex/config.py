"""Configuration for dokedex.

This module contains the configurable constants used by the parsers and the
``doke`` command line tool. Magic numbers are documented here rather than
scattered throughout the codebase.
"""

import logging
import os
import re

log = logging.getLogger(__name__)


# =============================================================================
# Markdown Grammar
# =============================================================================

# markdown-it preset used for document bodies.
MARKDOWN_PRESET = "commonmark"

# Rules enabled on top of the preset. Strikethrough gives the "delete" wrapper
# its text; tables are parsed so they show up as single unknown nodes instead
# of being read as paragraphs of pipes.
MARKDOWN_EXTENSIONS: tuple[str, ...] = ("strikethrough", "table")

# Presets markdown-it-py ships with.
KNOWN_PRESETS = frozenset({"commonmark", "default", "zero", "gfm-like", "js-default"})


# =============================================================================
# Wiki Links
# =============================================================================

# [[Name]] - captures everything between the double brackets, no nesting.
WIKI_LINK_PATTERN = re.compile(r"\[\[([^\]]+)\]\]")


# =============================================================================
# Frontmatter
# =============================================================================

# Opening marker, lazily matched YAML block, closing marker, remaining body.
FRONTMATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)(.*)\Z",
    re.DOTALL,
)

# The YAML block always starts on the second line of the document.
FRONTMATTER_FIRST_LINE = 2


# =============================================================================
# Command Line
# =============================================================================

# Resource type used by `doke parse` when --type is not given.
DEFAULT_RESOURCE_TYPE = "Markdown"

# Documents above this size are rejected before parsing. Parsing has no
# cancellation, so unbounded input is refused up front.
DEFAULT_MAX_DOCUMENT_BYTES = 5 * 1024 * 1024


def get_max_document_bytes() -> int:
    """Get the document size limit for the CLI.

    Reads DOKEDEX_MAX_DOCUMENT_BYTES; invalid or non-positive values fall back
    to DEFAULT_MAX_DOCUMENT_BYTES.

    Returns:
        Maximum accepted document size in bytes.
    """
    raw = os.environ.get("DOKEDEX_MAX_DOCUMENT_BYTES")
    if not raw:
        return DEFAULT_MAX_DOCUMENT_BYTES

    try:
        value = int(raw)
    except ValueError:
        log.warning("Ignoring invalid DOKEDEX_MAX_DOCUMENT_BYTES=%r", raw)
        return DEFAULT_MAX_DOCUMENT_BYTES

    if value <= 0:
        log.warning("Ignoring non-positive DOKEDEX_MAX_DOCUMENT_BYTES=%r", raw)
        return DEFAULT_MAX_DOCUMENT_BYTES
    return value
