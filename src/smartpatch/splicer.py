"""Indentation-aware splicer.

Inserts the patch fragment at the matched offset, optionally deleting up
to the folder offset. Two insertion styles exist, chosen from how the
match snippet was written:

- block: ``>>>`` alone on its line; the patch is placed on its own lines,
  each indented like the insertion point's line
- inline: ``>>>`` shares its line with code; the stripped patch is spliced
  in verbatim, continuing the current line

A line that holds only whitespace before the insertion point is a
placeholder and is dropped rather than left behind as a stray blank line.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from smartpatch.location import SourceLocation
from smartpatch.matcher import MatchResult
from smartpatch.tokens import INSERTER_TEXT
from smartpatch.utils.text import split_lines


class InsertStyle(Enum):
    """How the replacement is laid out around the insertion point."""

    INLINE = auto()
    BLOCK = auto()


@dataclass(frozen=True, slots=True)
class SpliceResult:
    """Patched text plus where the replacement landed in it.

    Attributes:
        text: The patched text
        style: Insertion style used
        inserted: Span of the replacement within text

    """

    text: str
    style: InsertStyle
    inserted: SourceLocation


def detect_style(match_text: str) -> InsertStyle:
    """Choose the insertion style from the match snippet's layout.

    The first line containing >>> decides: exactly ``>>>`` once stripped
    means block style, anything else (or no marker at all) inline.

    Examples:
        >>> detect_style("foo(>>> bar)")
        <InsertStyle.INLINE: 1>
        >>> detect_style("int x;\\n    >>>\\nint y;")
        <InsertStyle.BLOCK: 2>
    """
    for line in split_lines(match_text):
        if INSERTER_TEXT in line:
            return InsertStyle.BLOCK if line.strip() == INSERTER_TEXT else InsertStyle.INLINE
    return InsertStyle.INLINE


def splice(
    source: str,
    match: MatchResult,
    patch_text: str,
    style: InsertStyle,
) -> SpliceResult:
    """Splice patch_text into source at the matched offsets.

    Args:
        source: Original source text
        match: Offsets from the matcher
        patch_text: Replacement fragment
        style: INLINE or BLOCK (see detect_style)

    Returns:
        SpliceResult with the patched text

    Examples:
        >>> splice("int x;", MatchResult(6), "int y;", InsertStyle.INLINE).text
        'int x;int y;'
        >>> splice("int x;", MatchResult(6), "int y;", InsertStyle.BLOCK).text
        'int x;\\nint y;'
    """
    offset = match.insertion_offset
    before = source[:offset]

    line_start = before.rfind("\n") + 1
    trailing = before[line_start:]
    indent = trailing[: len(trailing) - len(trailing.lstrip())]

    # Placeholder line: nothing but whitespace before the insertion point
    if trailing.strip() == "":
        before = before[:line_start]

    if style is InsertStyle.INLINE:
        if before.endswith("\n"):
            before = before[:-1]
        lead = ""
        replacement = patch_text.strip()
    else:
        lead = "\n" if offset != 0 and not before.endswith("\n") else ""
        replacement = "\n".join(indent + line for line in split_lines(patch_text))

    tail_start = match.deletion_offset if match.deletes else offset
    text = before + lead + replacement + source[tail_start:]

    start = len(before) + len(lead)
    inserted = SourceLocation.from_offsets(text, start, start + len(replacement))
    return SpliceResult(text=text, style=style, inserted=inserted)
