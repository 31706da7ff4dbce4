"""Tests for smartpatch.profiling: match profiling API."""

import pytest

from smartpatch import NoMatchFound, apply_patch
from smartpatch.matcher import Matcher
from smartpatch.pattern import lex_pattern
from smartpatch.profiling import (
    MatchAccumulator,
    get_match_accumulator,
    profiled_match,
)
from smartpatch.providers.builtin import BuiltinTokenProvider


class TestGetMatchAccumulator:
    def test_returns_none_when_disabled(self) -> None:
        assert get_match_accumulator() is None

    def test_returns_none_outside_context(self) -> None:
        with profiled_match():
            pass
        assert get_match_accumulator() is None


class TestProfiledMatch:
    def test_yields_accumulator(self) -> None:
        with profiled_match() as acc:
            assert isinstance(acc, MatchAccumulator)
            assert get_match_accumulator() is acc

    def test_records_match_call(self) -> None:
        with profiled_match() as acc:
            apply_patch("int a; int b;", "... int b >>> ;", "x")
        assert acc.match_calls == 1
        assert acc.steps > 0
        assert acc.wildcard_branches == 2

    def test_steps_match_matcher(self) -> None:
        source = "f(x, y); x;"
        tokens = BuiltinTokenProvider().tokenize(source)
        matcher = Matcher(tokens, lex_pattern("... x >>> ;"), len(source))
        with profiled_match() as acc:
            matcher.match()
        assert acc.steps == matcher.steps

    def test_records_failed_search(self) -> None:
        with profiled_match() as acc:
            with pytest.raises(NoMatchFound):
                apply_patch("a; b;", "... b ; a >>>", "x")
        assert acc.match_calls == 1

    def test_records_multiple_calls(self) -> None:
        with profiled_match() as acc:
            apply_patch("a;", "a; >>>", "b;")
            apply_patch("a;", "... >>>", "b;")
        assert acc.match_calls == 2

    def test_total_duration_positive(self) -> None:
        with profiled_match() as acc:
            apply_patch("a;", "a; >>>", "b;")
        assert acc.total_duration_ms > 0


class TestSummary:
    def test_empty_summary(self) -> None:
        summary = MatchAccumulator().summary()
        assert summary["match_calls"] == 0
        assert summary["steps"] == 0
        assert summary["wildcard_branches"] == 0

    def test_summary_keys(self) -> None:
        with profiled_match() as acc:
            apply_patch("a;", "a; >>>", "b;")
        assert set(acc.summary()) == {"total_ms", "match_calls", "steps", "wildcard_branches"}
