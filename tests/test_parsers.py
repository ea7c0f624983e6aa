"""Tests for the built-in parsers.

Coverage:
- DokeMarkdownParser: frontmatter + body output, error attribution, config
- TextParser: passthrough output
- Parser contract defaults (name, api_version, parse_json)
"""

import json
from pathlib import Path

import pytest

from dokedex.errors import DokeValidationError, InvalidFrontmatterError
from dokedex.parser_api import PARSER_API_VERSION
from dokedex.parsers import DokeMarkdownParser, TextParser

SWORD = """---
name: Sword
stats:
  damage: 10
  weight: 3.5
tags: [weapon, melee]
---
# Sword

A blade. Pairs well with [[Shield]].
"""


# ─────────────────────────────────────────────────────────────────────────────
# DokeMarkdownParser
# ─────────────────────────────────────────────────────────────────────────────


class TestDokeMarkdownParser:
    """Full document parsing."""

    def test_frontmatter_and_body(self, markdown_parser, context):
        result = markdown_parser.parse(SWORD, context)

        assert set(result) == {"frontmatter", "body"}
        assert result["frontmatter"] == {
            "name": "Sword",
            "stats.damage": 10,
            "stats.weight": 3.5,
            "tags": ["weapon", "melee"],
        }

        heading, paragraph = result["body"]
        assert heading["kind"] == "heading"
        assert heading["text"] == "Sword"
        assert paragraph["references"] == [
            {"type_hint": None, "name": "Shield", "resolved": False}
        ]

    def test_body_lines_count_frontmatter(self, markdown_parser, context):
        heading, paragraph = markdown_parser.parse(SWORD, context)["body"]
        assert heading["line"] == 8
        assert paragraph["line"] == 10

    def test_without_frontmatter(self, markdown_parser, context):
        result = markdown_parser.parse("# Just a body", context)
        assert result["frontmatter"] == {}
        assert result["body"][0]["line"] == 1

    def test_empty_document(self, markdown_parser, context):
        assert markdown_parser.parse("", context) == {"frontmatter": {}, "body": []}

    def test_unterminated_block_is_body(self, markdown_parser, context):
        result = markdown_parser.parse("---\nname: x\nno closing marker", context)
        assert result["frontmatter"] == {}
        assert result["body"]

    def test_dates_are_serialized(self, markdown_parser, context):
        result = markdown_parser.parse("---\ncreated: 2024-01-15\n---\nBody", context)
        assert result["frontmatter"] == {"created": "2024-01-15"}
        json.dumps(result)

    def test_malformed_yaml(self, markdown_parser, context):
        with pytest.raises(InvalidFrontmatterError) as exc_info:
            markdown_parser.parse("---\nname: [unclosed\n---\nBody", context)

        error = exc_info.value
        assert error.file == Path("test.md")
        assert error.parser == "DokeMarkdownParser"
        assert error.line >= 2
        assert error.source is not None

    def test_empty_block(self, markdown_parser, context):
        with pytest.raises(InvalidFrontmatterError, match="Empty YAML frontmatter"):
            markdown_parser.parse("---\n\n---\nBody", context)

    def test_scalar_block(self, markdown_parser, context):
        with pytest.raises(InvalidFrontmatterError, match="must be a mapping"):
            markdown_parser.parse("---\njust a string\n---\nBody", context)

    def test_deeply_nested_frontmatter(self, markdown_parser, context):
        content = "---\nx: " + "[" * 1500 + "]" * 1500 + "\n---\nBody"
        with pytest.raises(InvalidFrontmatterError) as exc_info:
            markdown_parser.parse(content, context)
        assert exc_info.value.parser == "DokeMarkdownParser"

    def test_types_and_version(self, markdown_parser):
        assert markdown_parser.supported_types() == ["Markdown", "Doke", "Generic"]
        assert markdown_parser.version() == "1.0.0"


class TestDokeMarkdownParserConfig:
    """Configuration handling."""

    def test_default_config(self, markdown_parser):
        assert markdown_parser.default_config() == {
            "preset": "commonmark",
            "extensions": ["strikethrough", "table"],
            "strip_link_brackets": True,
        }

    def test_validate_accepts_defaults(self, markdown_parser):
        markdown_parser.validate_config(markdown_parser.default_config())

    def test_invalid_preset(self, markdown_parser):
        with pytest.raises(DokeValidationError) as exc_info:
            markdown_parser.validate_config({"preset": "bogus"})

        error = exc_info.value
        assert "preset" in error.message
        assert error.parser == "DokeMarkdownParser"
        assert error.source is not None

    def test_invalid_config_at_construction(self):
        with pytest.raises(DokeValidationError):
            DokeMarkdownParser({"strip_link_brackets": "sometimes"})

    def test_config_applies_to_parsing(self, context):
        parser = DokeMarkdownParser({"strip_link_brackets": False})
        (paragraph,) = parser.parse("See [[Ref]]", context)["body"]
        assert paragraph["text"] == "See [[Ref]]"


# ─────────────────────────────────────────────────────────────────────────────
# TextParser
# ─────────────────────────────────────────────────────────────────────────────


class TestTextParser:
    """Passthrough parser."""

    def test_parse(self, context):
        result = TextParser().parse("héllo", context)
        assert result == {"content": "héllo", "length": 6, "type": "simple_text"}

    def test_empty(self, context):
        assert TextParser().parse("", context)["length"] == 0

    def test_types_and_version(self):
        parser = TextParser()
        assert parser.supported_types() == ["Text", "Simple"]
        assert parser.version() == "1.0.0"
        assert parser.default_config() is None


# ─────────────────────────────────────────────────────────────────────────────
# Contract defaults
# ─────────────────────────────────────────────────────────────────────────────


class TestParserContract:
    """Behavior shared through the DokeParser base class."""

    def test_name_and_api_version(self, markdown_parser):
        assert markdown_parser.name == "DokeMarkdownParser"
        assert markdown_parser.api_version == PARSER_API_VERSION

    def test_parse_json_round_trips(self, markdown_parser, context):
        encoded = markdown_parser.parse_json(SWORD, context)
        assert json.loads(encoded) == markdown_parser.parse(SWORD, context)

    def test_validate_config_accepts_anything_by_default(self):
        TextParser().validate_config({"anything": object()})

    def test_repr(self):
        assert repr(TextParser()) == "TextParser(types=['Text', 'Simple'], version='1.0.0')"
