"""Source location tracking for patched output and error messages.

SourceLocation describes a span of text by absolute offsets plus 1-indexed
line/column pairs. The splicer reports where the replacement landed in the
output; the editor adapter turns that into a selection.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass

from smartpatch.utils.text import line_col_at


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """A span of text.

    All line and column numbers are 1-indexed.

    Attributes:
        lineno: Starting line number
        col_offset: Starting column
        offset: Absolute start offset
        end_offset: Absolute end offset (exclusive)
        end_lineno: Ending line number
        end_col_offset: Ending column (exclusive)
        source_file: Path of the file the span belongs to (optional)

    Examples:
            >>> loc = SourceLocation.from_offsets("int x;\\nint y;", 7, 13)
            >>> (loc.lineno, loc.col_offset, loc.end_lineno, loc.end_col_offset)
            (2, 1, 2, 7)

    """

    lineno: int
    col_offset: int
    offset: int = 0
    end_offset: int = 0
    end_lineno: int | None = None
    end_col_offset: int | None = None
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for messages, like "out.cpp:10:5"."""
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @classmethod
    def from_offsets(
        cls, text: str, start: int, end: int, source_file: str | None = None
    ) -> SourceLocation:
        """Build a location for text[start:end]."""
        lineno, col = line_col_at(text, start)
        end_lineno, end_col = line_col_at(text, end)
        return cls(
            lineno=lineno,
            col_offset=col,
            offset=start,
            end_offset=end,
            end_lineno=end_lineno,
            end_col_offset=end_col,
            source_file=source_file,
        )

    def with_file(self, source_file: str) -> SourceLocation:
        """Copy of this location attached to a file path."""
        return SourceLocation(
            lineno=self.lineno,
            col_offset=self.col_offset,
            offset=self.offset,
            end_offset=self.end_offset,
            end_lineno=self.end_lineno,
            end_col_offset=self.end_col_offset,
            source_file=source_file,
        )
