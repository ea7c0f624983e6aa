"""YAML frontmatter extraction and flattening.

A document may start with a metadata block between two ``---`` lines. The
block is parsed as YAML and flattened into a single-level mapping whose keys
are dotted paths (``stats.health``). Documents without a well-formed block are
all body; that is not an error.
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime
from os import PathLike
from typing import Any, NamedTuple

import yaml
from frontmatter import YAMLHandler

from .config import FRONTMATTER_FIRST_LINE, FRONTMATTER_PATTERN
from .errors import InvalidFrontmatterError
from .models import FlatMap

log = logging.getLogger(__name__)

_handler = YAMLHandler()

# Marks a value flatten_metadata() leaves out of the result.
_DROP = object()


class FrontmatterSplit(NamedTuple):
    """A document cut into its metadata block and body."""

    metadata: str | None  # Raw YAML text, None when there is no block
    body: str  # Remaining text, verbatim
    body_line: int  # Document line the body starts on


def split_frontmatter(content: str) -> FrontmatterSplit:
    """Separate the leading ``---`` block from the body without parsing it.

    Args:
        content: Full document text.

    Returns:
        FrontmatterSplit. Without a well-formed block, metadata is None and
        the body is content unchanged.
    """
    match = FRONTMATTER_PATTERN.match(content)
    if match is None:
        return FrontmatterSplit(None, content, 1)

    body_line = content.count("\n", 0, match.start(2)) + 1
    return FrontmatterSplit(match.group(1), match.group(2), body_line)


def load_frontmatter(
    metadata: str,
    file: str | PathLike[str] | None = None,
    *,
    parser: str | None = None,
) -> FlatMap:
    """Parse a metadata block and flatten it.

    Args:
        metadata: YAML text found between the markers.
        file: Document path for error messages.
        parser: Name of the calling parser, for error messages.

    Returns:
        Flattened metadata.

    Raises:
        InvalidFrontmatterError: If the YAML is malformed, empty, not a mapping
            or nested beyond the interpreter's recursion limit.
    """
    try:
        data = _handler.load(metadata)
    except yaml.YAMLError as e:
        line = 0
        column = None
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            line = FRONTMATTER_FIRST_LINE + mark.line
            column = mark.column + 1
        raise InvalidFrontmatterError(
            f"YAML parsing error: {e}", file=file, line=line, column=column, parser=parser
        ).with_source(e) from e
    except RecursionError as e:
        # The pure-Python composer recurses once per nesting level
        raise _too_deep(file, parser).with_source(e) from e

    if data is None:
        raise InvalidFrontmatterError(
            "Empty YAML frontmatter", file=file, line=FRONTMATTER_FIRST_LINE, parser=parser
        )

    if not isinstance(data, dict):
        raise InvalidFrontmatterError(
            f"Frontmatter must be a mapping, got {type(data).__name__}",
            file=file,
            line=FRONTMATTER_FIRST_LINE,
            parser=parser,
        )

    try:
        return flatten_metadata(data)
    except RecursionError as e:
        raise _too_deep(file, parser).with_source(e) from e


def _too_deep(file: str | PathLike[str] | None, parser: str | None) -> InvalidFrontmatterError:
    return InvalidFrontmatterError(
        "Frontmatter nests too deeply", file=file, line=FRONTMATTER_FIRST_LINE, parser=parser
    )


def parse_frontmatter(
    content: str,
    file: str | PathLike[str] | None = None,
) -> tuple[FlatMap, str]:
    """Split a document and parse its frontmatter.

    Args:
        content: Full document text.
        file: Document path for error messages.

    Returns:
        Tuple of (flattened metadata, body). Metadata is empty and body is
        the whole document when there is no frontmatter block.

    Raises:
        InvalidFrontmatterError: If a block is present but unusable.
    """
    split = split_frontmatter(content)
    if split.metadata is None:
        log.debug("No frontmatter block in %s", file or "<string>")
        return {}, split.body

    return load_frontmatter(split.metadata, file), split.body


def flatten_metadata(data: dict[Any, Any], prefix: str = "") -> FlatMap:
    """Flatten nested mappings into dotted-path keys.

    Lists are kept as lists; mapping items inside them are flattened on their
    own, starting from an empty prefix. Non-finite floats (.nan, .inf) have no
    JSON form and are dropped.

    Args:
        data: Parsed YAML mapping.
        prefix: Path of data inside the enclosing mapping.

    Returns:
        Single-level dict of dotted path -> value.
    """
    result: FlatMap = {}

    for key, value in data.items():
        if not isinstance(key, str):
            log.warning("Skipping non-string frontmatter key %r", key)
            continue

        path = f"{prefix}.{key}" if prefix else key

        if isinstance(value, dict):
            result.update(flatten_metadata(value, path))
            continue

        converted = _convert_value(value, path)
        if converted is not _DROP:
            result[path] = converted

    return result


def _convert_value(value: Any, path: str) -> Any:
    if value is None or isinstance(value, (str, bool, int)):
        return value

    if isinstance(value, float):
        if math.isfinite(value):
            return value
        log.debug("Dropping non-finite number at %s", path)
        return _DROP

    if isinstance(value, (datetime, date)):
        return value.isoformat()

    if isinstance(value, list):
        items = []
        for item in value:
            if isinstance(item, dict):
                items.append(flatten_metadata(item))
                continue
            converted = _convert_value(item, path)
            if converted is not _DROP:
                items.append(converted)
        return items

    log.debug("Dropping unsupported %s value at %s", type(value).__name__, path)
    return _DROP
