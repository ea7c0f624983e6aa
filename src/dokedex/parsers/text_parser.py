"""Minimal parser returning the document as-is."""

from typing import Any

from ..context import ParseContext
from ..parser_api import DokeParser


class TextParser(DokeParser):
    """Wraps plain text without interpreting it.

    Useful as a fallback type and as the smallest example of the parser
    contract.
    """

    def parse(self, content: str, context: ParseContext) -> dict[str, Any]:
        return {
            "content": content,
            "length": len(content.encode("utf-8")),
            "type": "simple_text",
        }

    def supported_types(self) -> list[str]:
        return ["Text", "Simple"]

    def version(self) -> str:
        return "1.0.0"
