"""dokedex: frontmatter + Markdown document parsing with wiki link extraction."""

__version__ = "0.1.0"

from .context import ErrorKind, ParseContext
from .errors import (
    AstConversionError,
    DokeDefect,
    DokeError,
    DokeIOError,
    DokeNotImplementedError,
    DokeSyntaxError,
    DokeValidationError,
    InternalError,
    InvalidFrontmatterError,
    ParserFailureError,
    ParserNotFoundError,
    TypeMismatchError,
    UnsupportedOperationError,
)
from .frontmatter import flatten_metadata, parse_frontmatter, split_frontmatter
from .models import DomainNode, FlatMap, Reference
from .parser_api import PARSER_API_VERSION, DokeParser
from .parsers import DokeMarkdownParser, TextParser, default_registry
from .positions import SourcePosition, SourceSpan
from .registry import ParserRegistry

__all__ = [
    "__version__",
    "AstConversionError",
    "DokeDefect",
    "DokeError",
    "DokeIOError",
    "DokeMarkdownParser",
    "DokeNotImplementedError",
    "DokeParser",
    "DokeSyntaxError",
    "DokeValidationError",
    "DomainNode",
    "ErrorKind",
    "FlatMap",
    "InternalError",
    "InvalidFrontmatterError",
    "PARSER_API_VERSION",
    "ParseContext",
    "ParserFailureError",
    "ParserNotFoundError",
    "ParserRegistry",
    "Reference",
    "SourcePosition",
    "SourceSpan",
    "TextParser",
    "TypeMismatchError",
    "UnsupportedOperationError",
    "default_registry",
    "flatten_metadata",
    "parse_frontmatter",
    "split_frontmatter",
]
