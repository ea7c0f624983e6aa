#!/usr/bin/env python3
"""
doke: CLI for dokedex document parsing

Usage:
    doke parse items/sword.md --type Item     # Parse a document to JSON
    doke links items/sword.md                 # List [[wiki links]] in a document
    doke types                                # Show registered resource types
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, NoReturn

import click

from . import __version__ as DOKEDEX_VERSION
from .config import DEFAULT_RESOURCE_TYPE, get_max_document_bytes
from .context import ParseContext
from .errors import DokeError, DokeIOError, DokeValidationError, UnsupportedOperationError
from .parsers import default_registry
from .positions import SourcePosition, SourceSpan
from .registry import ParserRegistry

CLI_PARSER_NAME = "doke"


def _json_dumps(data: Any, *, compact: bool) -> str:
    if compact:
        return json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    return json.dumps(data, indent=2, ensure_ascii=False)


def _handle_error(ctx: click.Context, error: DokeError, exit_code: int = 1) -> NoReturn:
    """Report a DokeError and exit.

    With --json-errors the error is written as a JSON object, otherwise as
    its one-line description.
    """
    json_errors = ctx.obj.get("json_errors", False) if ctx.obj else False

    if json_errors:
        click.echo(json.dumps({"error": error.to_dict()}), err=True)
    else:
        click.echo(f"Error: {error}", err=True)

    sys.exit(exit_code)


def _get_registry(ctx: click.Context) -> ParserRegistry:
    return ctx.obj["registry"]


def _read_document(path: Path) -> str:
    """Read a document, enforcing the size limit and UTF-8 encoding."""
    try:
        data = path.read_bytes()
    except OSError as e:
        raise DokeIOError.from_os_error(e, path) from e

    limit = get_max_document_bytes()
    if len(data) > limit:
        raise DokeValidationError(
            f"Document is {len(data)} bytes, the limit is {limit}",
            file=path,
            parser=CLI_PARSER_NAME,
        )

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        position = SourcePosition.from_byte_offset(data.decode("utf-8", errors="replace"), e.start)
        raise DokeValidationError(
            f"Document is not valid UTF-8: {e.reason}",
            file=path,
            parser=CLI_PARSER_NAME,
            span=SourceSpan.single_position(position),
        ).with_source(e) from e


def _parse_file(
    ctx: click.Context,
    path: Path,
    resource_type: str,
    root: Path,
    project_root: Path,
) -> dict[str, Any]:
    parser = _get_registry(ctx).require_parser(resource_type, file=path, parser=CLI_PARSER_NAME)
    content = _read_document(path)
    context = ParseContext(
        root=root,
        project_root=project_root,
        resource_type=resource_type,
        current_file=path,
        parser_name=parser.name,
    )
    return parser.parse(content, context)


# ─────────────────────────────────────────────────────────────────────────────
# Main CLI Group
# ─────────────────────────────────────────────────────────────────────────────


@click.group()
@click.version_option(version=DOKEDEX_VERSION, prog_name="doke")
@click.option(
    "--json-errors",
    "json_errors",
    is_flag=True,
    help="Output errors as JSON (for programmatic use)",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    envvar="DOKEDEX_QUIET",
    help="Suppress warnings, show only errors and essential output",
)
@click.pass_context
def cli(ctx: click.Context, json_errors: bool, quiet: bool):
    """doke: parse frontmatter + Markdown documents.

    \b
    Quick start:
      doke parse notes/sword.md              # Frontmatter + node tree as JSON
      doke parse notes/sword.md -t Text      # Use another registered parser
      doke links notes/sword.md              # [[wiki links]] in document order
      doke types                             # Registered resource types
    """
    from ._logging import set_quiet_mode

    ctx.ensure_object(dict)
    ctx.obj["json_errors"] = json_errors
    ctx.obj["quiet"] = quiet
    ctx.obj.setdefault("registry", default_registry())

    if quiet:
        set_quiet_mode(True)


_type_option = click.option(
    "--type",
    "-t",
    "resource_type",
    default=DEFAULT_RESOURCE_TYPE,
    show_default=True,
    help="Resource type; selects the parser (case-insensitive)",
)
_root_option = click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
    envvar="DOKEDEX_ROOT",
    help="Content root directory",
)
_project_root_option = click.option(
    "--project-root",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
    envvar="DOKEDEX_PROJECT_ROOT",
    help="Host project root directory",
)


@cli.command()
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@_type_option
@_root_option
@_project_root_option
@click.option("--compact", is_flag=True, help="Single-line JSON output")
@click.pass_context
def parse(
    ctx: click.Context,
    file: Path,
    resource_type: str,
    root: Path,
    project_root: Path,
    compact: bool,
):
    """Parse FILE and print the result as JSON.

    Examples:
      doke parse items/sword.md
      doke parse items/sword.md --type Item --compact
    """
    try:
        result = _parse_file(ctx, file, resource_type, root, project_root)
    except DokeError as e:
        _handle_error(ctx, e)

    click.echo(_json_dumps(result, compact=compact))


@cli.command()
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@_type_option
@_root_option
@_project_root_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def links(
    ctx: click.Context,
    file: Path,
    resource_type: str,
    root: Path,
    project_root: Path,
    as_json: bool,
):
    """List the [[wiki links]] in FILE, in document order.

    Only parsers that produce a Markdown body support this.
    """
    try:
        result = _parse_file(ctx, file, resource_type, root, project_root)
        body = result.get("body")
        if not isinstance(body, list):
            parser = _get_registry(ctx).require_parser(resource_type)
            raise UnsupportedOperationError(
                "parser does not produce a Markdown body", parser=parser.name, file=file
            )
    except DokeError as e:
        _handle_error(ctx, e)

    references = [reference for node in body for reference in node.get("references", [])]

    if as_json:
        click.echo(_json_dumps(references, compact=False))
        return

    for reference in references:
        click.echo(reference["name"])


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def types(ctx: click.Context, as_json: bool):
    """Show registered resource types and the parser serving each."""
    registry = _get_registry(ctx)
    rows = []
    for type_name in sorted(registry.get_supported_types()):
        parser = registry.get_parser(type_name)
        rows.append({"type": type_name, "parser": parser.name, "version": parser.version()})

    if as_json:
        click.echo(_json_dumps(rows, compact=False))
        return

    if not rows:
        click.echo("No parsers registered.")
        return

    width = max(len(row["type"]) for row in rows)
    for row in rows:
        click.echo(f"{row['type'].ljust(width)}  {row['parser']} {row['version']}")


# ─────────────────────────────────────────────────────────────────────────────
# Entry Point
# ─────────────────────────────────────────────────────────────────────────────


def main():
    """Entry point for doke CLI."""
    from ._logging import configure_logging

    configure_logging()
    cli()


if __name__ == "__main__":
    main()
