"""Text utilities for smartpatch.

Offsets throughout smartpatch are string indices. These helpers translate
them to the 1-indexed line/column pairs used in error messages and by the
editor adapter.

Example:
    >>> from smartpatch.utils.text import line_col_at
    >>> line_col_at("int x;\\nint y;", 7)
    (2, 1)
"""

from __future__ import annotations

import re

# Patch fragments may come from CRLF documents
_LINE_BREAK = re.compile(r"\r?\n")


def line_col_at(text: str, offset: int) -> tuple[int, int]:
    """Convert a string offset to a 1-indexed (line, column) pair.

    Offsets past the end of the text are clamped to its length.

    Args:
        text: Text the offset points into
        offset: String index

    Returns:
        (lineno, col_offset), both starting at 1

    Examples:
        >>> line_col_at("abc", 0)
        (1, 1)
        >>> line_col_at("a\\nbc", 3)
        (2, 2)
    """
    offset = max(0, min(offset, len(text)))
    lineno = text.count("\n", 0, offset) + 1
    last_nl = text.rfind("\n", 0, offset)
    return lineno, offset - last_nl


def split_lines(text: str) -> list[str]:
    """Split text on LF or CRLF, keeping a trailing empty line.

    Unlike str.splitlines, a trailing newline yields a final empty string,
    which the splicer relies on to re-indent the text that follows a block.

    Examples:
        >>> split_lines("a\\r\\nb\\n")
        ['a', 'b', '']
    """
    return _LINE_BREAK.split(text)
