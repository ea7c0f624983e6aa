"""Wiki link ([[Name]]) extraction."""

from ..config import WIKI_LINK_PATTERN
from ..models import Reference


def extract_references(text: str) -> list[Reference]:
    """Extract unresolved references from a piece of text.

    Every non-overlapping [[...]] produces one Reference, left to right.
    Duplicates are kept; brackets cannot be escaped or nested.

    Args:
        text: Raw text of a single text leaf.

    Returns:
        List of References with resolved=False.
    """
    return [Reference(name=match.group(1)) for match in WIKI_LINK_PATTERN.finditer(text)]


def extract_link_names(text: str) -> list[str]:
    """Names of all [[...]] links in text, in order."""
    return WIKI_LINK_PATTERN.findall(text)


def strip_link_brackets(text: str) -> str:
    """Replace each [[Name]] with Name."""
    return WIKI_LINK_PATTERN.sub(r"\1", text)
