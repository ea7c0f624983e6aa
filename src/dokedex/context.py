"""Per-call parse context.

A ParseContext tells a parser where the document lives, which resource type
it is being parsed as, and who is parsing it. Contexts are immutable; the
helpers return modified copies.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .errors import (
    AstConversionError,
    DokeError,
    DokeSyntaxError,
    DokeValidationError,
    ParserFailureError,
    TypeMismatchError,
)
from .positions import SourcePosition, SourceSpan


class ErrorKind(Enum):
    """Error variants a parser can build straight from its context."""

    SYNTAX = "syntax"
    VALIDATION = "validation"
    TYPE_MISMATCH = "type_mismatch"
    AST_CONVERSION = "ast_conversion"
    FAILURE = "failure"


class ParseContext(BaseModel):
    """Environment threaded through a single parse call."""

    model_config = ConfigDict(frozen=True)

    root: Path  # Content root (where documents are authored)
    project_root: Path  # Host project root
    resource_type: str
    current_file: Path
    parser_name: str
    parent_resource: dict[str, Any] | None = None  # Lineage of the enclosing parse
    metadata: dict[str, Any] = Field(default_factory=dict)

    def create_child(self, resource_type: str) -> ParseContext:
        """Derive the context for parsing a nested resource.

        Roots, file and parser identity carry over. The parent snapshot only
        records where the child came from, not any parsed data.
        """
        return self.model_copy(
            update={
                "resource_type": resource_type,
                "parent_resource": {
                    "resource_type": self.resource_type,
                    "file": str(self.current_file),
                    "parser": self.parser_name,
                },
            }
        )

    def with_parent_resource(self, parent: dict[str, Any]) -> ParseContext:
        return self.model_copy(update={"parent_resource": dict(parent)})

    def with_metadata(self, **values: Any) -> ParseContext:
        return self.model_copy(update={"metadata": {**self.metadata, **values}})

    def with_parser(self, parser_name: str) -> ParseContext:
        return self.model_copy(update={"parser_name": parser_name})

    def error(
        self,
        kind: ErrorKind,
        message: str,
        span: SourceSpan | None = None,
    ) -> DokeError:
        """Build an error of the given kind located in this context's file.

        Syntax errors always carry a span; without one they point at the
        start of the document.
        """
        file = self.current_file
        parser = self.parser_name

        if kind is ErrorKind.SYNTAX:
            return DokeSyntaxError(
                message,
                span=span or SourceSpan.single_position(SourcePosition()),
                file=file,
                parser=parser,
            )
        if kind is ErrorKind.VALIDATION:
            return DokeValidationError(message, file=file, parser=parser, span=span)
        if kind is ErrorKind.TYPE_MISMATCH:
            return TypeMismatchError(
                message,
                file=file,
                parser=parser,
                span=span or SourceSpan.single_position(SourcePosition()),
            )
        if kind is ErrorKind.AST_CONVERSION:
            return AstConversionError(message, file=file, parser=parser, span=span)
        return ParserFailureError(message, parser=parser, file=file, span=span)
