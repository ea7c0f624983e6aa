"""Markdown normalization and wiki link extraction."""

from ..models import DomainNode, Reference
from .links import extract_link_names, extract_references, strip_link_brackets
from .markdown import MarkdownOptions, collect_references, nodes_to_json, parse_markdown_body

__all__ = [
    "DomainNode",
    "Reference",
    "MarkdownOptions",
    "parse_markdown_body",
    "collect_references",
    "nodes_to_json",
    "extract_references",
    "extract_link_names",
    "strip_link_brackets",
]
