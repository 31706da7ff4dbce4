"""Scanner mixin for opaque literal units: strings and comments."""

from __future__ import annotations

from collections.abc import Iterator

from smartpatch.lexer.modes import STRING_MARKERS, LexerMode
from smartpatch.tokens import Token, TokenKind


class LiteralScannerMixin:
    """Mixin providing string literal and comment scanning.

    In pattern mode a >>> or <<< inside an open string literal splits it:
    the text before the marker becomes a STRING_FRAGMENT, the marker becomes
    its own token, and scanning resumes inside the literal. Fragment texts
    concatenate back to the full literal.

    """

    # These will be set by the Lexer class
    _source: str
    _end: int
    _pos: int
    _mode: LexerMode

    def _make_token(self, kind: TokenKind, text: str, start: int) -> Token:
        """Create token at the current depth. Implemented by Lexer."""
        raise NotImplementedError

    def _scan_string(self) -> Iterator[Token]:
        """Scan a string or character literal starting at the current quote.

        An escape consumes the following character unconditionally. An
        unterminated literal runs to the end of input.

        Yields:
            One STRING_LITERAL token, or STRING_FRAGMENT tokens interleaved
            with INSERTER/FOLDER tokens when markers occur inside.
        """
        source = self._source
        end = self._end
        start = self._pos
        quote = source[start]
        piece_start = start
        split = False
        splits_markers = self._mode is LexerMode.PATTERN

        pos = start + 1
        while pos < end:
            char = source[pos]
            if char == "\\":
                pos += 2
                continue
            if char == quote:
                pos += 1
                break
            if splits_markers:
                kind = STRING_MARKERS.get(source[pos : pos + 3])
                if kind is not None:
                    if pos > piece_start:
                        yield self._make_token(
                            TokenKind.STRING_FRAGMENT, source[piece_start:pos], piece_start
                        )
                    yield self._make_token(kind, source[pos : pos + 3], pos)
                    pos += 3
                    piece_start = pos
                    split = True
                    continue
            pos += 1

        pos = min(pos, end)
        self._pos = pos
        if pos > piece_start:
            kind = TokenKind.STRING_FRAGMENT if split else TokenKind.STRING_LITERAL
            yield self._make_token(kind, source[piece_start:pos], piece_start)

    def _scan_comment(self) -> Token:
        """Scan a // line comment or a /* */ block comment.

        Line comments stop before the newline. Block comments end at the
        first */ or at end of input.
        """
        source = self._source
        start = self._pos
        if source.startswith("//", start):
            stop = source.find("\n", start + 2, self._end)
            if stop == -1:
                stop = self._end
        else:
            close = source.find("*/", start + 2, self._end)
            stop = close + 2 if close != -1 else self._end
        self._pos = stop
        return self._make_token(TokenKind.COMMENT, source[start:stop], start)
