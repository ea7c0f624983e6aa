"""Built-in document parsers."""

from ..registry import ParserRegistry
from .doke_parser import DokeMarkdownParser
from .text_parser import TextParser


def default_registry() -> ParserRegistry:
    """Create a registry holding the built-in parsers."""
    registry = ParserRegistry()
    registry.register(DokeMarkdownParser())
    registry.register(TextParser())
    return registry


__all__ = ["DokeMarkdownParser", "TextParser", "default_registry"]
