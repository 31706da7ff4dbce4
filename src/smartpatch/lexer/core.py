"""Single-pass scanner for match snippets and C-family source text.

Recognition order at each position (first match wins):
whitespace, meta markers (pattern mode), #directive, string literal,
comment, two-character operator, identifier, integer, bracket, symbol.

Depth is an explicit accumulator: { is emitted at the current depth and
raises it, } is emitted at the current depth and lowers it. Raw depths can
go negative for text that closes scopes it never opened; normalize_depths
shifts a finished stream back to a zero floor.

Thread Safety:
Lexer instances are single-use. Create one per text.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Iterator

from smartpatch.lexer.modes import (
    BRACKETS,
    CLOSE_BRACE,
    DIGITS,
    IDENT_START,
    META_MARKERS,
    OPEN_BRACE,
    QUOTES,
    TWO_CHAR_OPERATORS,
    LexerMode,
)
from smartpatch.lexer.scanners import LiteralScannerMixin
from smartpatch.tokens import Token, TokenKind


class Lexer(LiteralScannerMixin):
    """Scanner producing Tokens with raw nesting depths.

    Usage:
        >>> for token in Lexer("if (a >>> b) {").tokenize():
        ...     print(token)
        Token(IDENTIFIER, 'if', d=0)
        Token(BRACKET, '(', d=0)
        Token(IDENTIFIER, 'a', d=0)
        Token(INSERTER, '>>>', d=0)
        Token(IDENTIFIER, 'b', d=0)
        Token(BRACKET, ')', d=0)
        Token(BRACKET, '{', d=0)

    The lexer never raises; malformed input yields tokens that simply fail
    to match downstream.

    """

    __slots__ = (
        "_source",
        "_end",
        "_pos",
        "_depth",
        "_mode",
    )

    def __init__(self, source: str, mode: LexerMode = LexerMode.PATTERN) -> None:
        """Initialize lexer with text.

        Args:
            source: Match snippet or target source text
            mode: PATTERN for snippets, SOURCE for target files
        """
        self._source = source
        self._end = len(source)
        self._pos = 0
        self._depth = 0
        self._mode = mode

    @property
    def depth(self) -> int:
        """Current raw depth (after everything scanned so far)."""
        return self._depth

    def tokenize(self) -> Iterator[Token]:
        """Tokenize the whole text.

        Yields:
            Token objects one at a time, with raw depths.
        """
        return self.tokenize_span(0, len(self._source))

    def tokenize_span(self, start: int, end: int) -> Iterator[Token]:
        """Tokenize source[start:end], continuing the depth accumulator.

        Token offsets stay absolute. Used by providers that already know
        leaf boundaries and only need them split consistently.

        Yields:
            Token objects one at a time, with raw depths.
        """
        self._pos = start
        self._end = end
        while self._pos < self._end:
            yield from self._scan_token()

    # =========================================================================
    # Token scanning
    # =========================================================================

    def _scan_token(self) -> Iterator[Token]:
        """Scan one token (or skip whitespace) at the current position."""
        source = self._source
        pos = self._pos
        char = source[pos]

        if char.isspace():
            self._skip_whitespace()
            return

        if self._mode is LexerMode.PATTERN:
            marker = source[pos : pos + 3]
            kind = META_MARKERS.get(marker)
            if kind is not None and pos + 3 <= self._end:
                self._pos = pos + 3
                yield self._make_token(kind, marker, pos)
                return

        if char == "#" and pos + 1 < self._end and source[pos + 1] in IDENT_START:
            stop = self._word_end(pos + 1)
            self._pos = stop
            yield self._make_token(TokenKind.DIRECTIVE, source[pos:stop], pos)
            return

        if char in QUOTES:
            yield from self._scan_string()
            return

        if char == "/" and source[pos + 1 : pos + 2] in ("/", "*") and pos + 1 < self._end:
            comment = self._scan_comment()
            if self._mode is LexerMode.PATTERN:
                yield comment
            return

        pair = source[pos : pos + 2]
        if pair in TWO_CHAR_OPERATORS and pos + 2 <= self._end:
            self._pos = pos + 2
            yield self._make_token(TokenKind.OPERATOR, pair, pos)
            return

        if char in IDENT_START:
            stop = self._word_end(pos + 1)
            self._pos = stop
            yield self._make_token(TokenKind.IDENTIFIER, source[pos:stop], pos)
            return

        if char in DIGITS:
            stop = pos + 1
            while stop < self._end and source[stop] in DIGITS:
                stop += 1
            self._pos = stop
            yield self._make_token(TokenKind.NUMBER, source[pos:stop], pos)
            return

        self._pos = pos + 1
        if char in BRACKETS:
            yield self._make_token(TokenKind.BRACKET, char, pos)
            if char == OPEN_BRACE:
                self._depth += 1
            elif char == CLOSE_BRACE:
                self._depth -= 1
            return

        yield self._make_token(TokenKind.SYMBOL, char, pos)

    # =========================================================================
    # Navigation helpers
    # =========================================================================

    def _skip_whitespace(self) -> None:
        source = self._source
        pos = self._pos
        while pos < self._end and source[pos].isspace():
            pos += 1
        self._pos = pos

    def _word_end(self, pos: int) -> int:
        """Position after the run of word characters starting at pos."""
        source = self._source
        while pos < self._end and (source[pos].isalnum() or source[pos] == "_"):
            pos += 1
        return pos

    def _make_token(self, kind: TokenKind, text: str, start: int) -> Token:
        """Create a Token at the current depth.

        Source mode records the absolute offset; pattern tokens carry none.
        """
        offset = start if self._mode is LexerMode.SOURCE else None
        return Token(kind=kind, text=text, depth=self._depth, offset=offset)


def normalize_depths(tokens: Iterable[Token], final_depth: int = 0) -> tuple[Token, ...]:
    """Shift raw depths so the shallowest scope sits at depth 0.

    Raw depths only go negative when the text closes a scope it never
    opened (a snippet taken from the middle of a function body, say).
    A trailing unmatched ``}`` leaves no token at the lexer's final depth,
    so that depth joins the floor; otherwise ``x; }`` and ``x; } y`` would
    put the brace at different depths. Balanced or partially-open text is
    returned unchanged.

    Args:
        tokens: Tokens with raw depths
        final_depth: Lexer depth after the last token (``Lexer.depth``)

    Returns:
        Immutable token tuple with non-negative depths
    """
    result = tuple(tokens)
    floor = min(min((token.depth for token in result), default=0), final_depth)
    if floor >= 0:
        return result
    return tuple(dataclasses.replace(token, depth=token.depth - floor) for token in result)
