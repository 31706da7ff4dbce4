"""Tests for the smartpatch exception hierarchy."""

import pytest

from smartpatch.errors import (
    ExtractionError,
    MissingInserter,
    NoMatchFound,
    PatchIOError,
    SearchLimitExceeded,
    SmartPatchError,
    TokenNotFound,
)
from smartpatch.tokens import Token, TokenKind


class TestHierarchy:
    @pytest.mark.parametrize(
        "error",
        [
            ExtractionError(["match"]),
            NoMatchFound(),
            TokenNotFound(Token(TokenKind.IDENTIFIER, "x")),
            MissingInserter(),
            SearchLimitExceeded("max_steps", 10),
            PatchIOError("a.cpp", "No such file"),
        ],
    )
    def test_all_are_smartpatch_errors(self, error: SmartPatchError) -> None:
        assert isinstance(error, SmartPatchError)

    def test_token_not_found_is_no_match(self) -> None:
        with pytest.raises(NoMatchFound):
            raise TokenNotFound(Token(TokenKind.IDENTIFIER, "x"))


class TestMessages:
    """Errors format useful messages."""

    def test_extraction_single(self) -> None:
        err = ExtractionError(["patch"])
        assert str(err) == "could not extract 'patch' block from document"
        assert err.source_file is None

    def test_extraction_with_file(self) -> None:
        err = ExtractionError(["match", "patch"], "change.md")
        assert str(err) == "change.md: could not extract 'match' and 'patch' block from document"

    def test_no_match_default(self) -> None:
        assert str(NoMatchFound()) == "pattern does not match the source"

    def test_no_match_custom(self) -> None:
        assert str(NoMatchFound("nothing here")) == "nothing here"

    def test_token_not_found(self) -> None:
        err = TokenNotFound(Token(TokenKind.NUMBER, "42"))
        assert err.token.text == "42"
        assert "'42'" in str(err)
        assert "number" in str(err)

    def test_missing_inserter(self) -> None:
        assert "'>>>'" in str(MissingInserter())

    def test_search_limit(self) -> None:
        err = SearchLimitExceeded("max_wildcards", 256)
        assert (err.limit_name, err.limit) == ("max_wildcards", 256)
        assert str(err) == "pattern search exceeded max_wildcards=256"

    def test_io_error(self) -> None:
        err = PatchIOError("out/a.cpp", "Permission denied")
        assert (err.path, err.reason) == ("out/a.cpp", "Permission denied")
        assert str(err) == "out/a.cpp: Permission denied"
