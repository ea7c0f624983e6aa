"""The contract every document-type parser implements.

Parsers are plain objects registered with a ParserRegistry. Their output must
be string-keyed JSON-compatible data: consumers serialize it across process
and plugin boundaries, so nothing else may leak out of parse().
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any

from .context import ParseContext

# Major version of this contract. Bump when the abstract methods change.
PARSER_API_VERSION = "1"


class DokeParser(ABC):
    """Base class for document parsers.

    Requirements for implementations:
    - parse() raises only DokeError subclasses on malformed input
    - Empty and arbitrary input never crash the process
    - Output is string-keyed and JSON-compatible
    """

    api_version: str = PARSER_API_VERSION

    @property
    def name(self) -> str:
        """Parser identity used in contexts and error messages."""
        return type(self).__name__

    @abstractmethod
    def parse(self, content: str, context: ParseContext) -> dict[str, Any]:
        """Parse document text into a string-keyed mapping."""
        raise NotImplementedError

    @abstractmethod
    def supported_types(self) -> list[str]:
        """Resource type names this parser handles (matched case-insensitively)."""
        raise NotImplementedError

    @abstractmethod
    def version(self) -> str:
        """Opaque version string, compared by equality for cache invalidation."""
        raise NotImplementedError

    def default_config(self) -> dict[str, Any] | None:
        return None

    def validate_config(self, config: dict[str, Any]) -> None:
        """Raise DokeValidationError when config is unusable. Accepts anything by default."""
        return None

    def parse_json(self, content: str, context: ParseContext) -> str:
        """parse() serialized to JSON, the form that crosses plugin boundaries."""
        return json.dumps(self.parse(content, context), ensure_ascii=False)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(types={self.supported_types()!r}, version={self.version()!r})"
