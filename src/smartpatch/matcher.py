"""Structural matcher: locate a pattern in a source token stream.

The search is classic backtracking over a (source index, pattern index)
cursor pair. Literal tokens must agree in text and nesting depth. A
wildcard tries every later source token that can start the rest of the
pattern, in source order, and the first branch that reaches the end of
the pattern wins. Inserter and folder markers are zero-width: they record
the offset of the source token under the cursor.

Runs of literal tokens are matched in a loop, so recursion only happens
at wildcards; max_wildcards bounds the recursion depth and max_steps the
total work.

Thread Safety:
Matcher instances are single-use. find_offsets() creates one per call.

"""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Sequence
from dataclasses import dataclass

from smartpatch.config import PatchConfig, get_patch_config
from smartpatch.errors import MissingInserter, NoMatchFound, SearchLimitExceeded, TokenNotFound
from smartpatch.lexer.modes import CLOSE_BRACE
from smartpatch.pattern import Pattern
from smartpatch.profiling import get_match_accumulator
from smartpatch.tokens import Token, TokenKind
from smartpatch.utils.logger import get_logger

logger = get_logger(__name__)

# (insertion offset, deletion offset) recorded along a successful branch
_Marks = tuple[int | None, int | None]


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Where to splice.

    Attributes:
        insertion_offset: Source offset at which the patch is inserted
        deletion_offset: End of the range to delete, if any

    """

    insertion_offset: int
    deletion_offset: int | None = None

    @property
    def deletes(self) -> bool:
        """True when [insertion_offset, deletion_offset) is removed."""
        return self.deletion_offset is not None and self.deletion_offset > self.insertion_offset


class Matcher:
    """Backtracking search for one pattern over one source token stream."""

    __slots__ = (
        "_source",
        "_pattern",
        "_source_length",
        "_config",
        "_positions",
        "_string_positions",
        "_closers",
        "_steps",
        "_branches",
    )

    def __init__(
        self,
        source_tokens: Sequence[Token],
        pattern: Pattern,
        source_length: int,
        config: PatchConfig | None = None,
    ) -> None:
        self._source = tuple(source_tokens)
        self._pattern = pattern
        self._source_length = source_length
        self._config = config or get_patch_config()
        self._steps = 0
        self._branches = 0

        # Source indices by token text, for wildcard candidate lookup
        self._positions: dict[str, list[int]] = {}
        self._string_positions: list[int] = []
        # Indices of closing braces by depth, for wildcard scope bounds
        self._closers: dict[int, list[int]] = {}
        for index, token in enumerate(self._source):
            self._positions.setdefault(token.text, []).append(index)
            if token.kind is TokenKind.STRING_LITERAL:
                self._string_positions.append(index)
            elif token.text == CLOSE_BRACE:
                self._closers.setdefault(token.depth, []).append(index)

    @property
    def steps(self) -> int:
        return self._steps

    def match(self) -> MatchResult:
        """Run the search.

        Raises:
            TokenNotFound: A literal pattern token never occurs in the source
            NoMatchFound: Backtracking exhausted
            MissingInserter: Matched, but the pattern has no >>> marker
            SearchLimitExceeded: max_steps or max_wildcards exceeded
        """
        try:
            result = self._match()
        finally:
            accumulator = get_match_accumulator()
            if accumulator is not None:
                accumulator.record_match(self._steps, self._branches)
        logger.debug(
            "Matched at insertion=%d deletion=%s after %d steps",
            result.insertion_offset,
            result.deletion_offset,
            self._steps,
        )
        return result

    def _match(self) -> MatchResult:
        pattern = self._pattern
        if pattern.is_replace_all:
            logger.debug("Pattern replaces the whole file")
            return MatchResult(0, self._source_length)
        if pattern.is_append:
            logger.debug("Pattern appends at end of file")
            return MatchResult(self._source_length, None)

        max_wildcards = self._config.max_wildcards
        if pattern.wildcard_count > max_wildcards:
            raise SearchLimitExceeded("max_wildcards", max_wildcards)

        self._check_literals_present()

        delta = None if self._config.relative_depth else 0
        found = self._search(0, 0, 0, (None, None), delta)
        if found is None:
            raise NoMatchFound()
        insertion, deletion = found
        if insertion is None:
            raise MissingInserter()
        return MatchResult(insertion, deletion)

    def _check_literals_present(self) -> None:
        """Linear pre-scan: every literal must occur somewhere in the source."""
        for token in self._pattern.literals():
            if token.text not in self._positions:
                raise TokenNotFound(token)

    # =========================================================================
    # Search
    # =========================================================================

    def _tick(self) -> None:
        self._steps += 1
        if self._steps > self._config.max_steps:
            raise SearchLimitExceeded("max_steps", self._config.max_steps)

    def _offset_at(self, si: int, sub: int) -> int:
        if si >= len(self._source):
            return self._source_length
        offset = self._source[si].offset
        return (offset or 0) + sub

    def _search(
        self, si: int, sub: int, pi: int, marks: _Marks, delta: int | None
    ) -> _Marks | None:
        """Match pattern[pi:] against source[si:].

        Args:
            si: Source cursor
            sub: Character cursor inside source[si] while matching a split
                string literal, else 0
            pi: Pattern cursor
            marks: Offsets recorded so far
            delta: Depth offset between source and pattern; None until the
                first literal anchors it (relative mode)

        Returns:
            Recorded marks on success, None when this branch fails.
        """
        source = self._source
        pattern = self._pattern
        insertion, deletion = marks

        while pi < len(pattern):
            self._tick()
            token = pattern[pi]
            kind = token.kind

            if kind is TokenKind.COMMENT:
                pi += 1
                continue

            if kind is TokenKind.INSERTER:
                insertion = self._offset_at(si, sub)
                pi += 1
                continue

            if kind is TokenKind.FOLDER:
                deletion = self._offset_at(si, sub)
                pi += 1
                continue

            if kind is TokenKind.WILDCARD:
                if sub:
                    return None
                return self._expand_wildcard(si, pi, (insertion, deletion), delta)

            if si >= len(source):
                return None
            candidate = source[si]

            if kind is TokenKind.STRING_FRAGMENT:
                if candidate.kind is not TokenKind.STRING_LITERAL:
                    return None
                if not candidate.text.startswith(token.text, sub):
                    return None
                if sub == 0:
                    if delta is None:
                        delta = candidate.depth - token.depth
                    elif candidate.depth != token.depth + delta:
                        return None
                sub += len(token.text)
                if sub >= len(candidate.text):
                    si += 1
                    sub = 0
                pi += 1
                continue

            if sub or candidate.text != token.text:
                return None
            if delta is None:
                delta = candidate.depth - token.depth
            elif candidate.depth != token.depth + delta:
                return None
            si += 1
            pi += 1

        return insertion, deletion

    def _expand_wildcard(
        self, si: int, pi: int, marks: _Marks, delta: int | None
    ) -> _Marks | None:
        """Try each source position where the rest of the pattern can start."""
        pattern = self._pattern
        target_index = pi + 1
        while target_index < len(pattern) and pattern[target_index].is_meta:
            target_index += 1

        if target_index == len(pattern):
            # Trailing wildcard swallows the rest of the source
            return self._search(len(self._source), 0, pi + 1, marks, delta)

        target = pattern[target_index]
        limit = len(self._source)
        if delta is not None:
            limit = self._scope_end(si, pattern[pi].depth + delta)
        for sj in self._candidates(target, si):
            if sj > limit:
                break
            candidate = self._source[sj]
            if delta is not None and candidate.depth != target.depth + delta:
                continue
            self._branches += 1
            self._tick()
            found = self._search(sj, 0, pi + 1, marks, delta)
            if found is not None:
                return found
        return None

    def _scope_end(self, si: int, depth: int) -> int:
        """Index of the } closing the scope at depth, or the end of the source.

        A wildcard may reach that brace but not skip past it into a
        sibling block.
        """
        closers = self._closers.get(depth)
        if not closers:
            return len(self._source)
        index = bisect_left(closers, si)
        return closers[index] if index < len(closers) else len(self._source)

    def _candidates(self, target: Token, si: int) -> list[int]:
        """Source indices >= si whose token can start matching target."""
        if target.kind is TokenKind.STRING_FRAGMENT:
            indices = self._string_positions
            start = bisect_left(indices, si)
            return [i for i in indices[start:] if self._source[i].text.startswith(target.text)]
        indices = self._positions.get(target.text, [])
        return indices[bisect_left(indices, si) :]


def find_offsets(
    source_tokens: Sequence[Token],
    pattern: Pattern | Sequence[Token],
    source_length: int,
    *,
    config: PatchConfig | None = None,
) -> MatchResult:
    """Compute insertion and deletion offsets for a pattern.

    Args:
        source_tokens: Tokens from a source token provider
        pattern: Lexed pattern (or a bare token sequence)
        source_length: Length of the source text
        config: Overrides the active PatchConfig

    Returns:
        MatchResult for the first successful branch

    Example:
        >>> from smartpatch.pattern import lex_pattern
        >>> from smartpatch.providers.builtin import BuiltinTokenProvider
        >>> source = "int a; int b;"
        >>> tokens = BuiltinTokenProvider().tokenize(source)
        >>> find_offsets(tokens, lex_pattern("int a; >>> int"), len(source))
        MatchResult(insertion_offset=7, deletion_offset=None)
    """
    if not isinstance(pattern, Pattern):
        pattern = Pattern(tokens=tuple(pattern))
    return Matcher(source_tokens, pattern, source_length, config).match()
