"""Tests for dokedex.positions."""

import pytest
from pydantic import ValidationError

from dokedex.positions import SourcePosition, SourceSpan


class TestSourcePosition:
    """Tests for SourcePosition."""

    def test_default_is_document_start(self):
        position = SourcePosition()
        assert (position.line, position.column, position.byte_offset) == (1, 1, 0)

    @pytest.mark.parametrize(
        "offset,expected",
        [
            (0, (1, 1)),
            (3, (1, 4)),
            (4, (2, 1)),
            (6, (2, 3)),
            (7, (3, 1)),
        ],
    )
    def test_from_byte_offset_ascii(self, offset, expected):
        """Newlines start a new line and reset the column."""
        position = SourcePosition.from_byte_offset("abc\nde\nf", offset)
        assert (position.line, position.column) == expected
        assert position.byte_offset == offset

    def test_from_byte_offset_multibyte(self):
        """Multi-byte characters advance the offset by their encoded width."""
        content = "é€x\ny"
        # é is 2 bytes, € is 3 bytes: x starts at byte 5
        position = SourcePosition.from_byte_offset(content, 5)
        assert (position.line, position.column) == (1, 3)

        after_newline = SourcePosition.from_byte_offset(content, 7)
        assert (after_newline.line, after_newline.column) == (2, 1)

    def test_from_byte_offset_past_end(self):
        position = SourcePosition.from_byte_offset("ab\nc", 100)
        assert (position.line, position.column) == (2, 2)

    def test_from_char_offset(self):
        position = SourcePosition.from_char_offset("é\nxy", 3)
        assert (position.line, position.column) == (2, 2)
        assert position.byte_offset == 4

    def test_rejects_zero_line(self):
        with pytest.raises(ValidationError):
            SourcePosition(line=0)

    def test_str(self):
        assert str(SourcePosition(line=3, column=7)) == "line 3, column 7"


class TestSourceSpan:
    """Tests for SourceSpan."""

    def test_single_position_is_point(self):
        position = SourcePosition(line=2, column=5, byte_offset=9)
        span = SourceSpan.single_position(position)
        assert span.start == span.end == position
        assert span.is_point

    def test_range_is_not_point(self):
        span = SourceSpan(start=SourcePosition(), end=SourcePosition(line=2))
        assert not span.is_point

    def test_from_line(self):
        span = SourceSpan.from_line(4, 2)
        assert span.start.line == 4
        assert span.start.column == 2
