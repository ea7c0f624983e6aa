"""Shared test fixtures for the dokedex test suite.

Design:
- context: ParseContext pointing at an in-memory document path
- registry: fresh ParserRegistry with the built-in parsers
- docs_dir / cli_invoke: temp content root and isolated CLI runner
"""

from pathlib import Path

import pytest
from click.testing import CliRunner

from dokedex.cli import cli
from dokedex.context import ParseContext
from dokedex.parsers import DokeMarkdownParser, default_registry
from dokedex.registry import ParserRegistry


# ─────────────────────────────────────────────────────────────────────────────
# Core Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def context() -> ParseContext:
    """Context for a document that is never read from disk."""
    return ParseContext(
        root="/dokedex",
        project_root="/project",
        resource_type="Markdown",
        current_file="test.md",
        parser_name="DokeMarkdownParser",
    )


@pytest.fixture
def markdown_parser() -> DokeMarkdownParser:
    return DokeMarkdownParser()


@pytest.fixture
def registry() -> ParserRegistry:
    return default_registry()


# ─────────────────────────────────────────────────────────────────────────────
# CLI Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def runner() -> CliRunner:
    """CLI runner with isolated environment."""
    return CliRunner()


@pytest.fixture
def docs_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temp content root with DOKEDEX_* environment cleared."""
    root = tmp_path / "docs"
    root.mkdir()
    for name in ("DOKEDEX_ROOT", "DOKEDEX_PROJECT_ROOT", "DOKEDEX_MAX_DOCUMENT_BYTES", "DOKEDEX_QUIET"):
        monkeypatch.delenv(name, raising=False)
    return root


@pytest.fixture
def cli_invoke(runner: CliRunner, docs_dir: Path):
    """Invoke the CLI with the content root set to docs_dir.

    Usage:
        def test_parse(cli_invoke, docs_dir):
            result = cli_invoke(["parse", str(docs_dir / "a.md")])
            assert result.exit_code == 0
    """

    def _invoke(args: list[str], obj: dict | None = None):
        return runner.invoke(
            cli,
            args,
            obj=obj,
            env={"DOKEDEX_ROOT": str(docs_dir)},
            catch_exceptions=False,
        )

    return _invoke
