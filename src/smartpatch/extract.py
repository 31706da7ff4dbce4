"""Extract match and patch fragments from a markdown document.

A patch document carries two labeled sections:

    ### match
    ```cpp
    int main() {
        >>>
    }
    ```

    ### patch
    ```cpp
    return 0;
    ```

The first fenced code block after a heading whose text contains the word
"match" (case-insensitive) is the match fragment; likewise for "patch". A
fence only belongs to a heading if it appears before the next heading.

Scanning works line by line: find the line window, classify it as an ATX
heading, a fence opener, or neither, then commit. Fence handling follows
CommonMark: backtick or tilde fences of 3+ characters, closing fences at
least as long as the opener and indented at most 3 spaces, and the
opener's indentation stripped from content lines. Each fragment then loses
its leading blank lines and common indentation.

"""

from __future__ import annotations

import re
import textwrap
from dataclasses import dataclass

from smartpatch.errors import ExtractionError

MATCH_SECTION = "match"
PATCH_SECTION = "patch"

_SECTION_WORDS: dict[str, re.Pattern[str]] = {
    MATCH_SECTION: re.compile(r"\bmatch\b", re.IGNORECASE),
    PATCH_SECTION: re.compile(r"\bpatch\b", re.IGNORECASE),
}


@dataclass(frozen=True, slots=True)
class PatchBlocks:
    """Raw fragment texts pulled from a document.

    Attributes:
        match: Match snippet (fenced block content, dedented)
        patch: Replacement fragment (fenced block content, dedented)

    """

    match: str
    patch: str


@dataclass(frozen=True, slots=True)
class _Fence:
    char: str
    count: int
    indent: int


def extract_blocks(document: str, source_file: str | None = None) -> PatchBlocks:
    """Pull the match and patch fragments out of a markdown document.

    Args:
        document: Markdown text
        source_file: Document path, used in error messages

    Returns:
        PatchBlocks with both fragments

    Raises:
        ExtractionError: If either section (or its fenced block) is missing
    """
    sections = _scan_sections(document)
    missing = [name for name in (MATCH_SECTION, PATCH_SECTION) if name not in sections]
    if missing:
        raise ExtractionError(missing, source_file)
    return PatchBlocks(match=sections[MATCH_SECTION], patch=sections[PATCH_SECTION])


def _scan_sections(document: str) -> dict[str, str]:
    """Map section name to the first fenced block under a matching heading."""
    found: dict[str, str] = {}
    lines = document.splitlines(keepends=True)
    wanted: list[str] = []
    index = 0
    while index < len(lines):
        line = lines[index]
        index += 1
        indent, content = _split_indent(line)
        if indent >= 4:
            continue

        heading = _classify_atx_heading(content)
        if heading is not None:
            wanted = [
                name
                for name, word in _SECTION_WORDS.items()
                if name not in found and word.search(heading)
            ]
            continue

        fence = _classify_fence_start(content, indent)
        if fence is None:
            continue
        body, index = _collect_fence(lines, index, fence)
        for name in wanted:
            found[name] = body
        wanted = []
    return found


def _split_indent(line: str) -> tuple[int, str]:
    """Count leading spaces (tabs expand to the next multiple of 4)."""
    indent = 0
    pos = 0
    while pos < len(line):
        char = line[pos]
        if char == " ":
            indent += 1
        elif char == "\t":
            indent += 4 - (indent % 4)
        else:
            break
        pos += 1
    return indent, line[pos:]


def _classify_atx_heading(content: str) -> str | None:
    """Heading text if content is an ATX heading (1-6 # then space or end)."""
    level = 0
    while level < len(content) and content[level] == "#":
        level += 1
    if level == 0 or level > 6:
        return None
    rest = content[level:]
    if rest and rest[0] not in " \t\r\n":
        return None
    return rest.strip().rstrip("#").strip()


def _classify_fence_start(content: str, indent: int) -> _Fence | None:
    """Fence opener: 3+ backticks or tildes; no backticks in a backtick info string."""
    if not content or content[0] not in "`~":
        return None
    char = content[0]
    count = 0
    while count < len(content) and content[count] == char:
        count += 1
    if count < 3:
        return None
    info = content[count:].strip()
    if char == "`" and "`" in info:
        return None
    return _Fence(char=char, count=count, indent=indent)


def _is_closing_fence(line: str, fence: _Fence) -> bool:
    indent, content = _split_indent(line)
    if indent >= 4 or not content.startswith(fence.char):
        return False
    count = 0
    while count < len(content) and content[count] == fence.char:
        count += 1
    return count >= fence.count and content[count:].strip() == ""


def _collect_fence(lines: list[str], index: int, fence: _Fence) -> tuple[str, int]:
    """Gather content lines until the closing fence (or end of document).

    Returns:
        (content, index of the line after the closing fence)
    """
    body: list[str] = []
    while index < len(lines):
        line = lines[index]
        index += 1
        if _is_closing_fence(line, fence):
            break
        body.append(_strip_fence_indent(line, fence.indent))
    return _normalize_fragment(body), index


def _normalize_fragment(body: list[str]) -> str:
    """Drop leading blank lines and the indentation shared by every line.

    The splicer re-indents block insertions to the target line, so a
    fragment authored at its destination indent must not keep it.
    Relative indentation between lines is kept.
    """
    start = 0
    while start < len(body) and not body[start].strip():
        start += 1
    return textwrap.dedent("".join(body[start:]))


def _strip_fence_indent(line: str, indent: int) -> str:
    pos = 0
    while pos < len(line) and pos < indent and line[pos] == " ":
        pos += 1
    return line[pos:]
