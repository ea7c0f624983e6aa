"""Error taxonomy for dokedex parsers.

Every failure surfaced by the library is a DokeError subclass carrying enough
context to print ``file:line:col: message (parser: name)``. The set of
subclasses is closed; parser implementations raise these rather than
defining their own.

Variants that can wrap a lower-level cause (a YAML scanner error, an OSError)
have a source slot; with_source() on the others is a no-op.
"""

from __future__ import annotations

import logging
from os import PathLike
from pathlib import Path
from typing import Any

from .positions import SourceSpan

log = logging.getLogger(__name__)

PathArg = str | PathLike[str] | None


def _to_path(file: PathArg) -> Path | None:
    return Path(file) if file is not None else None


class DokeError(Exception):
    """Base class for all dokedex errors."""

    kind = "Error"
    has_source_slot = False

    def __init__(
        self,
        message: str = "",
        *,
        file: PathArg = None,
        parser: str | None = None,
        span: SourceSpan | None = None,
    ) -> None:
        self.message = message
        self.file = _to_path(file)
        self.parser = parser
        self.span = span
        self.source: BaseException | None = None
        super().__init__(message)

    @property
    def line(self) -> int | None:
        return self.span.start.line if self.span is not None else None

    @property
    def column(self) -> int | None:
        return self.span.start.column if self.span is not None else None

    def with_source(self, source: BaseException) -> DokeError:
        """Attach an inner cause and return self.

        Variants without a source slot return themselves unchanged.
        """
        if not self.has_source_slot:
            log.debug("%s has no source slot, dropping cause %r", type(self).__name__, source)
            return self
        self.source = source
        self.__cause__ = source
        return self

    def _location(self) -> str:
        line = self.line
        if not line:
            return ""
        column = self.column
        if column:
            return f" at line {line}, column {column}"
        return f" at line {line}"

    def __str__(self) -> str:
        text = self.kind
        if self.file is not None:
            text += f" in {self.file}"
        text += f"{self._location()}: {self.message}"
        if self.parser:
            text += f" (parser: {self.parser})"
        return text

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible summary of the error."""
        return {
            "kind": type(self).__name__,
            "message": self.message,
            "file": str(self.file) if self.file is not None else None,
            "line": self.line,
            "column": self.column,
            "parser": self.parser,
        }


class InvalidFrontmatterError(DokeError):
    """Metadata block present but not parseable, or empty."""

    kind = "Invalid frontmatter"
    has_source_slot = True

    def __init__(
        self,
        message: str,
        *,
        file: PathArg = None,
        line: int = 0,
        column: int | None = None,
        parser: str | None = None,
    ) -> None:
        span = SourceSpan.from_line(line, column or 1) if line > 0 else None
        super().__init__(message, file=file, parser=parser, span=span)
        self._line = line
        self._column = column

    @property
    def line(self) -> int | None:
        # 0 means the YAML error carried no mark
        return self._line or None

    @property
    def column(self) -> int | None:
        return self._column


class DokeSyntaxError(DokeError):
    """Body content violates the expected grammar."""

    kind = "Syntax error"
    has_source_slot = True

    def __init__(self, message: str, *, span: SourceSpan, file: PathArg, parser: str) -> None:
        super().__init__(message, file=file, parser=parser, span=span)


class DokeValidationError(DokeError):
    """Structurally parseable but semantically invalid."""

    kind = "Validation error"
    has_source_slot = True

    def __init__(
        self,
        message: str,
        *,
        file: PathArg,
        parser: str,
        span: SourceSpan | None = None,
    ) -> None:
        super().__init__(message, file=file, parser=parser, span=span)


class TypeMismatchError(DokeError):
    """A value has the wrong shape.

    The older form reports only what was expected and what was found, without
    a span; the message is derived from those when not given.
    """

    kind = "Type mismatch"

    def __init__(
        self,
        message: str = "",
        *,
        file: PathArg,
        parser: str,
        span: SourceSpan | None = None,
        expected: str | None = None,
        found: str | None = None,
    ) -> None:
        if not message and expected is not None:
            message = f"expected {expected}, found {found}"
        super().__init__(message, file=file, parser=parser, span=span)
        self.expected = expected
        self.found = found


class ParserNotFoundError(DokeError):
    """No parser is registered for a resource type."""

    kind = "Parser not found"

    def __init__(self, target_type: str, *, parser: str | None = None, file: PathArg = None) -> None:
        super().__init__(
            f"no parser registered for type '{target_type}'", file=file, parser=parser
        )
        self.target_type = target_type


class DokeIOError(DokeError):
    """Reading a document failed. Always wraps the underlying OSError."""

    kind = "I/O error"
    has_source_slot = True

    def __init__(self, cause: OSError, *, file: PathArg) -> None:
        super().__init__(cause.strerror or str(cause), file=file)
        self.with_source(cause)

    @classmethod
    def from_os_error(cls, cause: OSError, file: PathArg = None) -> DokeIOError:
        return cls(cause, file=file if file is not None else cause.filename)


class AstConversionError(DokeError):
    """Turning the generic Markdown tree into domain nodes failed."""

    kind = "AST conversion error"
    has_source_slot = True

    def __init__(
        self,
        message: str,
        *,
        file: PathArg,
        parser: str,
        span: SourceSpan | None = None,
    ) -> None:
        super().__init__(message, file=file, parser=parser, span=span)


class UnsupportedOperationError(DokeError):
    """A parser does not implement the requested capability."""

    kind = "Unsupported operation"

    def __init__(self, message: str, *, parser: str, file: PathArg = None) -> None:
        super().__init__(message, file=file, parser=parser)


class ParserFailureError(DokeError):
    """Catch-all failure reported by a parser."""

    kind = "Parser failure"
    has_source_slot = True

    def __init__(
        self,
        message: str,
        *,
        parser: str,
        file: PathArg,
        span: SourceSpan | None = None,
    ) -> None:
        super().__init__(message, file=file, parser=parser, span=span)


class DokeDefect(DokeError):
    """Invariant violations and unfinished code paths, never input errors."""


class InternalError(DokeDefect):
    kind = "Internal error"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class DokeNotImplementedError(DokeDefect):
    kind = "Not implemented"

    def __init__(self, message: str) -> None:
        super().__init__(message)
