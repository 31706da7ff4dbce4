"""Tests for the structural matcher."""

import pytest

from smartpatch.config import PatchConfig
from smartpatch.errors import (
    MissingInserter,
    NoMatchFound,
    SearchLimitExceeded,
    TokenNotFound,
)
from smartpatch.matcher import Matcher, MatchResult, find_offsets
from smartpatch.pattern import lex_pattern
from smartpatch.providers.builtin import BuiltinTokenProvider
from smartpatch.tokens import Token, TokenKind


def offsets(source: str, match: str, **config: object) -> MatchResult:
    tokens = BuiltinTokenProvider().tokenize(source)
    return find_offsets(tokens, lex_pattern(match), len(source), config=PatchConfig(**config))


# =========================================================================
# Special cases
# =========================================================================


class TestSpecialCases:
    """Whole-file shapes bypass the search."""

    def test_replace_all(self) -> None:
        assert offsets("int x;\nint y;\n", ">>>\n...\n<<<") == MatchResult(0, 14)

    def test_replace_all_on_empty_source(self) -> None:
        assert offsets("", ">>> ... <<<") == MatchResult(0, 0)

    def test_append(self) -> None:
        assert offsets("int x;", "...\n>>>") == MatchResult(6, None)

    def test_append_ignores_trailing_comment_in_source(self) -> None:
        source = "int x; // end"
        assert offsets(source, "... >>>").insertion_offset == len(source)

    def test_bare_token_sequence_accepted(self) -> None:
        pattern = [Token(TokenKind.WILDCARD, "..."), Token(TokenKind.INSERTER, ">>>")]
        assert find_offsets((), pattern, 3) == MatchResult(3, None)


# =========================================================================
# Literal matching
# =========================================================================


class TestLiterals:
    """Literal tokens need identical text and depth."""

    def test_anchored_at_source_start(self) -> None:
        assert offsets("int a; int b;", "int a; >>> int").insertion_offset == 7

    def test_pattern_not_at_start_needs_wildcard(self) -> None:
        with pytest.raises(NoMatchFound):
            offsets("int a; int b;", "int b; >>>")
        assert offsets("int a; int b;", "... int b; >>>").insertion_offset == 13

    def test_inserter_at_end_of_source(self) -> None:
        assert offsets("a; b;", "... b ; >>>").insertion_offset == 5

    def test_inserter_is_zero_width(self) -> None:
        assert offsets("f(x, y);", "f(x, >>> y);").insertion_offset == 5

    def test_comments_in_pattern_are_transparent(self) -> None:
        assert offsets("a; b;", "... // the second one\nb >>> ;").insertion_offset == 4

    def test_depth_mismatch_fails(self) -> None:
        # 'a' is at depth 1 in the source, depth 0 in the pattern
        with pytest.raises(NoMatchFound):
            offsets("{ a; }", "... a >>> ;")


# =========================================================================
# Wildcards and backtracking
# =========================================================================


class TestWildcards:
    """Wildcard expansion, first success wins."""

    def test_backtracks_to_later_candidate(self) -> None:
        # first 'x' is followed by ',', not ';'
        assert offsets("f(x, y); x;", "... x >>> ;").insertion_offset == 10

    def test_first_success_wins(self) -> None:
        assert offsets("x; x;", "... x >>> ;").insertion_offset == 1

    def test_consecutive_wildcards(self) -> None:
        assert offsets("a b c d", "... ... c >>> d").insertion_offset == 6

    def test_trailing_wildcard_consumes_rest(self) -> None:
        assert offsets("a b c", "a >>> ...").insertion_offset == 2
        assert offsets("a b c", "a ... >>>").insertion_offset == 5

    def test_inserter_before_target_records_target(self) -> None:
        assert offsets("int a; int b;", "... >>> int b").insertion_offset == 7

    def test_nested_scope_candidates_skipped(self) -> None:
        source = "f { g { a; } a; }"
        # inner 'a' (offset 8) sits at depth 2; only the outer one fits
        assert offsets(source, "f { ... a >>> ; }").insertion_offset == 14

    def test_scope_boundary_first_block(self) -> None:
        source = "{ a; } { a; }"
        assert offsets(source, "{ ... a >>> ; }").insertion_offset == 3

    def test_wildcard_does_not_leave_its_block(self) -> None:
        with pytest.raises(NoMatchFound):
            offsets("{ a; } { b; }", "{ ... b >>> ; }")

    def test_wildcard_may_reach_closing_brace(self) -> None:
        assert offsets("{ a; b; }", "{ ... >>> }").insertion_offset == 8

    def test_top_level_wildcard_crosses_blocks(self) -> None:
        assert offsets("{ a; } { b; }", "... { b >>> ; }").insertion_offset == 10


# =========================================================================
# Folder (deletion boundary)
# =========================================================================


class TestFolder:
    """The <<< marker records the end of a deletion range."""

    def test_deletion_range(self) -> None:
        result = offsets("a; b; c;", "... >>> b ; <<< c")
        assert result == MatchResult(3, 6)
        assert result.deletes

    def test_folder_at_end(self) -> None:
        assert offsets("a; b;", "a ; >>> ... <<<") == MatchResult(3, 5)

    def test_folder_before_inserter_does_not_delete(self) -> None:
        result = offsets("a; b;", "a <<< ; >>> b")
        assert result == MatchResult(3, 1)
        assert not result.deletes

    def test_no_folder(self) -> None:
        assert not offsets("a; b;", "a ; >>> b").deletes


# =========================================================================
# String fragments
# =========================================================================


class TestStringFragments:
    """Markers inside string literals address positions within them."""

    def test_insert_inside_literal(self) -> None:
        source = 'puts("abcdef");'
        assert offsets(source, '... "abc>>>def"').insertion_offset == 9

    def test_delete_inside_literal(self) -> None:
        source = 'x = "hello world";'
        result = offsets(source, '... "hello>>> world<<<"')
        assert result == MatchResult(10, 16)

    def test_fragment_continuation_mismatch(self) -> None:
        with pytest.raises(NoMatchFound):
            offsets('s("abcdef");', '... "abc>>>de" )')

    def test_fragment_mismatch(self) -> None:
        with pytest.raises(NoMatchFound):
            offsets('s("abcdef");', '... "abx>>>def"')


# =========================================================================
# Failures and limits
# =========================================================================


class TestFailures:
    """Terminal failure modes."""

    def test_token_not_found(self) -> None:
        with pytest.raises(TokenNotFound) as exc_info:
            offsets("int a;", "... missing >>>")
        assert exc_info.value.token.text == "missing"

    def test_token_not_found_is_no_match(self) -> None:
        with pytest.raises(NoMatchFound):
            offsets("int a;", "... float >>>")

    def test_order_mismatch_is_no_match(self) -> None:
        with pytest.raises(NoMatchFound) as exc_info:
            offsets("a; b;", "... b ; a >>>")
        assert not isinstance(exc_info.value, TokenNotFound)

    def test_missing_inserter(self) -> None:
        with pytest.raises(MissingInserter):
            offsets("a; b;", "... b ;")

    def test_step_limit(self) -> None:
        source = " ".join(["a"] * 60)
        # Many equivalent wildcard splits; nothing follows the only b
        with pytest.raises(SearchLimitExceeded) as exc_info:
            offsets(source + " b", "... a ... a ... a ... a ... b a >>>", max_steps=1000)
        assert exc_info.value.limit_name == "max_steps"

    def test_wildcard_limit(self) -> None:
        with pytest.raises(SearchLimitExceeded) as exc_info:
            offsets("a", "... ... ... a >>>", max_wildcards=2)
        assert exc_info.value.limit_name == "max_wildcards"

    def test_steps_reported(self) -> None:
        tokens = BuiltinTokenProvider().tokenize("a; b;")
        matcher = Matcher(tokens, lex_pattern("... b >>> ;"), 5)
        matcher.match()
        assert matcher.steps > 0


# =========================================================================
# Relative depth
# =========================================================================


class TestRelativeDepth:
    """relative_depth anchors depth at the first matched literal."""

    def test_snippet_inside_block(self) -> None:
        source = "namespace n {\n  void f() { g(); }\n}\n"
        with pytest.raises(NoMatchFound):
            offsets(source, "... void f() { >>> g(); }")
        result = offsets(source, "... void f() { >>> g(); }", relative_depth=True)
        assert result.insertion_offset == source.index("g()")

    def test_depth_still_enforced_after_anchor(self) -> None:
        source = "{ f { a { b; } b; } }"
        result = offsets(source, "... f { ... b >>> ; }", relative_depth=True)
        assert result.insertion_offset == source.rindex(";")
