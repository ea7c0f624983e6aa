"""Lookup table from resource type name to parser."""

from __future__ import annotations

import logging

from .errors import ParserNotFoundError, UnsupportedOperationError
from .parser_api import PARSER_API_VERSION, DokeParser

log = logging.getLogger(__name__)


class ParserRegistry:
    """Maps lower-cased resource type names to parser instances.

    One parser may serve several type names. Registration overwrites (last
    one wins) and nothing is ever removed. Lookups are plain dict reads and
    safe to share between threads once setup is done; callers serialize
    registration themselves.
    """

    def __init__(self) -> None:
        self._parsers: dict[str, DokeParser] = {}

    def register(self, parser: DokeParser) -> None:
        if parser.api_version.split(".")[0] != PARSER_API_VERSION:
            raise UnsupportedOperationError(
                f"parser contract version {parser.api_version} is not supported "
                f"(expected {PARSER_API_VERSION})",
                parser=parser.name,
            )

        for type_name in parser.supported_types():
            key = type_name.lower()
            previous = self._parsers.get(key)
            if previous is not None and previous is not parser:
                log.debug("Type %s: %s replaces %s", key, parser.name, previous.name)
            self._parsers[key] = parser
            log.debug("Registered parser %s for type %s", parser.name, key)

    def get_parser(self, type_name: str) -> DokeParser | None:
        return self._parsers.get(type_name.lower())

    def require_parser(
        self,
        type_name: str,
        *,
        file=None,
        parser: str | None = None,
    ) -> DokeParser:
        """Like get_parser() but raise ParserNotFoundError on a miss."""
        found = self.get_parser(type_name)
        if found is None:
            log.debug("No parser for type %s", type_name)
            raise ParserNotFoundError(type_name, parser=parser, file=file)
        return found

    def get_all_parsers(self) -> list[DokeParser]:
        """Distinct parsers that still serve at least one type."""
        seen: dict[int, DokeParser] = {}
        for parser in self._parsers.values():
            seen.setdefault(id(parser), parser)
        return list(seen.values())

    def get_supported_types(self) -> list[str]:
        return list(self._parsers)

    def __contains__(self, type_name: str) -> bool:
        return type_name.lower() in self._parsers

    def __len__(self) -> int:
        return len(self._parsers)
