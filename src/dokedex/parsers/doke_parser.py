"""Frontmatter + Markdown document parser."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from ..context import ParseContext
from ..errors import DokeValidationError
from ..frontmatter import load_frontmatter, split_frontmatter
from ..parser.markdown import MarkdownOptions, nodes_to_json, parse_markdown_body
from ..parser_api import DokeParser

log = logging.getLogger(__name__)


class DokeMarkdownParser(DokeParser):
    """Parses Markdown documents with an optional YAML frontmatter block.

    Output:
        {"frontmatter": {dotted.key: value, ...}, "body": [node, ...]}

    Body node lines are document lines, counted from the first ``---``.
    """

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        if config is not None:
            self.validate_config(config)
        self.options = MarkdownOptions.model_validate(config or {})

    def parse(self, content: str, context: ParseContext) -> dict[str, Any]:
        split = split_frontmatter(content)

        frontmatter: dict[str, Any] = {}
        if split.metadata is not None:
            frontmatter = load_frontmatter(
                split.metadata, context.current_file, parser=context.parser_name
            )
            log.debug("%s: %d frontmatter keys", context.current_file, len(frontmatter))

        nodes = parse_markdown_body(
            split.body,
            context,
            line_offset=split.body_line - 1,
            options=self.options,
        )

        return {
            "frontmatter": frontmatter,
            "body": nodes_to_json(nodes),
        }

    def supported_types(self) -> list[str]:
        return ["Markdown", "Doke", "Generic"]

    def version(self) -> str:
        return "1.0.0"

    def default_config(self) -> dict[str, Any]:
        return MarkdownOptions().model_dump()

    def validate_config(self, config: dict[str, Any]) -> None:
        try:
            MarkdownOptions.model_validate(config)
        except ValidationError as e:
            errors = []
            for error in e.errors():
                loc = ".".join(str(x) for x in error["loc"])
                errors.append(f"  - {loc}: {error['msg']}")
            raise DokeValidationError(
                "Invalid parser configuration:\n" + "\n".join(errors),
                file="<config>",
                parser=self.name,
            ).with_source(e) from e
