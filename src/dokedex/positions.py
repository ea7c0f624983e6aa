"""Source coordinates for error reporting and node positions."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SourcePosition(BaseModel):
    """A point in a document: 1-based line and column plus a byte offset."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(default=1, ge=1)
    column: int = Field(default=1, ge=1)
    byte_offset: int = Field(default=0, ge=0)

    @classmethod
    def from_byte_offset(cls, content: str, byte_offset: int) -> SourcePosition:
        """Locate a UTF-8 byte offset in content.

        Scans forward once, counting newlines. The running offset advances by
        the encoded width of each character, so multi-byte characters count
        as one column but several bytes.

        Args:
            content: The full document text.
            byte_offset: Offset into the UTF-8 encoding of content.

        Returns:
            The position of the character starting at byte_offset (or the
            position after the last character if the offset is past the end).
        """
        line = 1
        column = 1
        current = 0

        for char in content:
            if current >= byte_offset:
                break
            if char == "\n":
                line += 1
                column = 1
            else:
                column += 1
            current += len(char.encode("utf-8"))

        return cls(line=line, column=column, byte_offset=byte_offset)

    @classmethod
    def from_char_offset(cls, content: str, index: int) -> SourcePosition:
        """Locate a Python string index in content.

        The stored byte_offset is the UTF-8 offset of the same character.
        """
        prefix = content[:index]
        line = prefix.count("\n") + 1
        column = index - (prefix.rfind("\n") + 1) + 1
        return cls(line=line, column=column, byte_offset=len(prefix.encode("utf-8")))

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


class SourceSpan(BaseModel):
    """Start and end positions of a source region."""

    model_config = ConfigDict(frozen=True)

    start: SourcePosition = Field(default_factory=SourcePosition)
    end: SourcePosition = Field(default_factory=SourcePosition)

    @classmethod
    def single_position(cls, position: SourcePosition) -> SourceSpan:
        return cls(start=position, end=position)

    @classmethod
    def from_line(cls, line: int, column: int = 1) -> SourceSpan:
        """Point span for a known line/column when no offset is available."""
        return cls.single_position(SourcePosition(line=max(line, 1), column=max(column, 1)))

    @property
    def is_point(self) -> bool:
        return self.start == self.end
