"""Pydantic models for parsed documents."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# Dotted metadata path -> JSON-like value (scalar, list or None)
FlatMap = dict[str, Any]


class Reference(BaseModel):
    """An unresolved [[wiki link]] found in document text."""

    type_hint: str | None = None  # Resource type of the target, when known
    name: str  # Text between the brackets
    resolved: bool = False  # Set by consumers once the target is looked up


class DomainNode(BaseModel):
    """Normalized Markdown element.

    Nodes are built bottom-up by the normalizer and never shared between
    parents. ``resolved`` is always False when a node is created; resolving
    references is left to consumers.
    """

    kind: str  # heading, paragraph, list, list_item, blockquote, text or unknown
    text: str | None = None  # Plain text of the node and its descendants
    raw: str = ""  # Source text the node was built from
    level: int | None = None  # Heading depth
    line: int = 1
    column: int = 1
    children: list[DomainNode] = Field(default_factory=list)
    references: list[Reference] = Field(default_factory=list)
    ordered: bool | None = None  # Lists only
    resolved: bool = False

    def walk(self):
        """Yield this node and its descendants in document (pre-)order."""
        yield self
        for child in self.children:
            yield from child.walk()
