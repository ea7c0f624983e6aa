"""Markdown body parsing into DomainNode trees.

The body is parsed once by markdown-it and walked as a SyntaxTreeNode tree.
Headings, paragraphs, lists, list items, block quotes and text leaves become
DomainNodes; every other element becomes an empty ``unknown`` node so sibling
order survives. markdown-it's ``inline`` wrappers are transparent.

Positions are tracked per node: block nodes use the line map markdown-it
records, inline leaves inherit their block's line and move down one line per
soft or hard break. Lines never decrease in document order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode
from pydantic import BaseModel, Field, field_validator

from ..config import KNOWN_PRESETS, MARKDOWN_EXTENSIONS, MARKDOWN_PRESET
from ..context import ErrorKind, ParseContext
from ..models import DomainNode, Reference
from .links import extract_references, strip_link_brackets

log = logging.getLogger(__name__)

# markdown-it node type -> DomainNode kind
_CONTAINER_KINDS = {
    "heading": "heading",
    "paragraph": "paragraph",
    "bullet_list": "list",
    "ordered_list": "list",
    "list_item": "list_item",
    "blockquote": "blockquote",
}

# Inline nodes whose text is read through their children
_WRAPPERS = frozenset({"em", "strong", "s", "link"})

_BREAKS = frozenset({"softbreak", "hardbreak"})

_GATHERED = frozenset(_CONTAINER_KINDS) | _WRAPPERS | {"inline"}


class MarkdownOptions(BaseModel):
    """Grammar settings for body parsing."""

    preset: str = MARKDOWN_PRESET
    extensions: list[str] = Field(default_factory=lambda: list(MARKDOWN_EXTENSIONS))
    strip_link_brackets: bool = True  # Render [[Name]] as Name in node text

    @field_validator("preset")
    @classmethod
    def _known_preset(cls, value: str) -> str:
        if value not in KNOWN_PRESETS:
            raise ValueError(f"unknown markdown-it preset '{value}'")
        return value


@lru_cache(maxsize=8)
def _get_markdown(preset: str, extensions: tuple[str, ...]) -> MarkdownIt:
    md = MarkdownIt(preset)
    if extensions:
        md.enable(list(extensions))
    return md


@dataclass
class _Cursor:
    """Where the next inline leaf is searched for in the source lines."""

    line: int  # 0-based body line
    pos: int = 0  # 0-based character index in that line


class _Normalizer:
    def __init__(self, body: str, line_offset: int, strip_brackets: bool) -> None:
        self.lines = body.replace("\r\n", "\n").replace("\r", "\n").split("\n")
        self.line_offset = line_offset
        self.strip_brackets = strip_brackets

    # ─────────────────────────────────────────────────────────────────────
    # Positions
    # ─────────────────────────────────────────────────────────────────────

    def _line_text(self, index: int) -> str:
        if 0 <= index < len(self.lines):
            return self.lines[index]
        return ""

    def _doc_line(self, index: int) -> int:
        return index + 1 + self.line_offset

    def _indent_column(self, index: int) -> int:
        text = self._line_text(index)
        return len(text) - len(text.lstrip()) + 1

    def _locate(self, cursor: _Cursor, needle: str) -> int:
        """Column of needle at or after the cursor; advances the cursor past it."""
        first = needle.split("\n", 1)[0]
        index = self._line_text(cursor.line).find(first, cursor.pos) if first else -1
        if index < 0:
            return cursor.pos + 1
        cursor.pos = index + len(first)
        return index + 1

    def _raw(self, node: SyntaxTreeNode) -> str:
        if not node.map:
            return ""
        start, end = node.map
        return "\n".join(self.lines[start:end])

    # ─────────────────────────────────────────────────────────────────────
    # Text and references
    # ─────────────────────────────────────────────────────────────────────

    def _plain(self, text: str) -> str:
        return strip_link_brackets(text) if self.strip_brackets else text

    def _gather(self, node: SyntaxTreeNode) -> tuple[str, list[Reference]]:
        """Plain text and references of node's text leaves, in document order."""
        if node.type == "text":
            return self._plain(node.content), extract_references(node.content)
        if node.type == "code_inline":
            return node.content, []
        if node.type == "image":
            # Alt text reads like text but its links are not references
            alt = [self._gather(child)[0] for child in node.children]
            return "".join(alt), []
        if node.type in _BREAKS:
            return "\n", []
        if node.type not in _GATHERED:
            return "", []

        parts: list[str] = []
        references: list[Reference] = []
        for child in node.children:
            text, found = self._gather(child)
            parts.append(text)
            references.extend(found)
        return "".join(parts), references

    @staticmethod
    def _count_breaks(node: SyntaxTreeNode) -> int:
        if node.type in _BREAKS:
            return 1
        return sum(_Normalizer._count_breaks(child) for child in node.children)

    # ─────────────────────────────────────────────────────────────────────
    # Conversion
    # ─────────────────────────────────────────────────────────────────────

    def _unknown(self, line: int, column: int) -> DomainNode:
        return DomainNode(kind="unknown", line=self._doc_line(line), column=column)

    def convert_block(self, node: SyntaxTreeNode, parent_line: int, parent_column: int) -> DomainNode:
        if node.map:
            line = node.map[0]
            column = self._indent_column(line)
        else:
            line, column = parent_line, parent_column

        kind = _CONTAINER_KINDS.get(node.type)
        if kind is None:
            log.debug("Unrecognized markdown node %s at body line %d", node.type, line + 1)
            return self._unknown(line, column)

        if node.type == "paragraph" and node.children:
            first = node.children[0].content.split("\n", 1)[0]
            found = self._line_text(line).find(first) if first else -1
            if found >= 0:
                column = found + 1

        children: list[DomainNode] = []
        for child in node.children:
            if child.type == "inline":
                children.extend(self.convert_inline(child, line))
            else:
                children.append(self.convert_block(child, line, column))

        text, references = self._gather(node)

        return DomainNode(
            kind=kind,
            text=text,
            raw=self._raw(node),
            level=int(node.tag[1:]) if node.type == "heading" else None,
            line=self._doc_line(line),
            column=column,
            children=children,
            references=references,
            ordered=(node.type == "ordered_list") if kind == "list" else None,
        )

    def convert_inline(self, inline: SyntaxTreeNode, line: int) -> list[DomainNode]:
        cursor = _Cursor(line)
        nodes: list[DomainNode] = []

        for child in inline.children:
            if child.type == "text":
                column = self._locate(cursor, child.content)
                nodes.append(
                    DomainNode(
                        kind="text",
                        text=self._plain(child.content),
                        raw=child.content,
                        line=self._doc_line(cursor.line),
                        column=column,
                        references=extract_references(child.content),
                    )
                )
                continue

            if child.type in _BREAKS:
                nodes.append(self._unknown(cursor.line, cursor.pos + 1))
                cursor.line += 1
                cursor.pos = 0
                continue

            text, _ = self._gather(child)
            column = self._locate(cursor, text)
            nodes.append(self._unknown(cursor.line, column))
            breaks = self._count_breaks(child)
            if breaks:
                cursor.line += breaks
                cursor.pos = 0

        return nodes


def parse_markdown_body(
    body: str,
    context: ParseContext,
    *,
    line_offset: int = 0,
    options: MarkdownOptions | None = None,
) -> list[DomainNode]:
    """Parse a Markdown body into top-level DomainNodes.

    Args:
        body: Markdown text (frontmatter already removed).
        context: Parse context, used for error reporting.
        line_offset: Number of document lines preceding the body.
        options: Grammar settings; defaults from dokedex.config.

    Returns:
        One DomainNode per top-level block, in document order.

    Raises:
        AstConversionError: If the grammar fails or the tree cannot be converted.
    """
    options = options or MarkdownOptions()

    try:
        md = _get_markdown(options.preset, tuple(options.extensions))
        tree = SyntaxTreeNode(md.parse(body))
    except Exception as e:
        raise context.error(
            ErrorKind.AST_CONVERSION, f"Markdown parsing error: {e}"
        ).with_source(e) from e

    normalizer = _Normalizer(body, line_offset, options.strip_link_brackets)
    try:
        return [normalizer.convert_block(child, 0, 1) for child in tree.children]
    except RecursionError as e:
        raise context.error(
            ErrorKind.AST_CONVERSION, "Document nests too deeply to convert"
        ).with_source(e) from e


def collect_references(nodes: list[DomainNode]) -> list[Reference]:
    """All references under a list of top-level nodes, in document order."""
    return [reference for node in nodes for reference in node.references]


def nodes_to_json(nodes: list[DomainNode]) -> list[dict[str, Any]]:
    return [node.model_dump(mode="json") for node in nodes]
