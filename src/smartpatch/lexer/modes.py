"""Lexer operating modes and character sets.

The same scanner tokenizes match snippets and target source files; the
mode decides whether meta markers are recognized and whether comments are
kept.
"""

from __future__ import annotations

import string
from enum import Enum, auto

from smartpatch.tokens import FOLDER_TEXT, INSERTER_TEXT, WILDCARD_TEXT, TokenKind


class LexerMode(Enum):
    """Lexer operating modes.

    - PATTERN: match snippets; meta markers recognized, comments emitted,
      no offsets recorded
    - SOURCE: target files; no meta markers, comments dropped, offsets
      recorded

    """

    PATTERN = auto()
    SOURCE = auto()


# Three-character meta markers, checked before any operator
META_MARKERS: dict[str, TokenKind] = {
    WILDCARD_TEXT: TokenKind.WILDCARD,
    INSERTER_TEXT: TokenKind.INSERTER,
    FOLDER_TEXT: TokenKind.FOLDER,
}

# Markers that split a string literal; ... stays literal text inside quotes
STRING_MARKERS: dict[str, TokenKind] = {
    INSERTER_TEXT: TokenKind.INSERTER,
    FOLDER_TEXT: TokenKind.FOLDER,
}

TWO_CHAR_OPERATORS: frozenset[str] = frozenset(
    {"==", "!=", "<=", ">=", "++", "--", "->", "&&", "||", "<<", ">>"}
)

OPEN_BRACE = "{"
CLOSE_BRACE = "}"
BRACKETS: frozenset[str] = frozenset("{}()[]")

QUOTES: frozenset[str] = frozenset("\"'")

IDENT_START: frozenset[str] = frozenset(string.ascii_letters + "_")
DIGITS: frozenset[str] = frozenset(string.digits)
