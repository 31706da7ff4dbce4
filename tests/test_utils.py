"""Tests for smartpatch utility modules and SourceLocation."""


class TestLineColAt:
    """Tests for line_col_at."""

    def test_start(self) -> None:
        from smartpatch.utils.text import line_col_at

        assert line_col_at("abc", 0) == (1, 1)

    def test_after_newline(self) -> None:
        from smartpatch.utils.text import line_col_at

        assert line_col_at("a\nbc", 2) == (2, 1)
        assert line_col_at("a\nbc", 3) == (2, 2)

    def test_newline_belongs_to_its_line(self) -> None:
        from smartpatch.utils.text import line_col_at

        assert line_col_at("a\nb", 1) == (1, 2)

    def test_clamped(self) -> None:
        from smartpatch.utils.text import line_col_at

        assert line_col_at("ab", 99) == (1, 3)
        assert line_col_at("ab", -5) == (1, 1)

    def test_empty_text(self) -> None:
        from smartpatch.utils.text import line_col_at

        assert line_col_at("", 0) == (1, 1)


class TestSplitLines:
    """Tests for split_lines."""

    def test_trailing_newline_kept(self) -> None:
        from smartpatch.utils.text import split_lines

        assert split_lines("a\nb\n") == ["a", "b", ""]

    def test_crlf(self) -> None:
        from smartpatch.utils.text import split_lines

        assert split_lines("a\r\nb") == ["a", "b"]

    def test_empty(self) -> None:
        from smartpatch.utils.text import split_lines

        assert split_lines("") == [""]


class TestGetLogger:
    """Tests for get_logger namespacing."""

    def test_prefix_added(self) -> None:
        from smartpatch.utils.logger import get_logger

        assert get_logger("matcher").name == "smartpatch.matcher"

    def test_module_name_kept(self) -> None:
        from smartpatch.utils.logger import get_logger

        assert get_logger("smartpatch.cli").name == "smartpatch.cli"
        assert get_logger("smartpatch").name == "smartpatch"

    def test_similar_prefix_still_namespaced(self) -> None:
        from smartpatch.utils.logger import get_logger

        assert get_logger("smartpatcher").name == "smartpatch.smartpatcher"

    def test_bare_and_module_names_share_logger(self) -> None:
        from smartpatch.utils.logger import get_logger

        assert get_logger("matcher") is get_logger("smartpatch.matcher")
        assert get_logger("matcher").parent is get_logger("smartpatch")


class TestSourceLocation:
    """Tests for SourceLocation."""

    def test_from_offsets(self) -> None:
        from smartpatch.location import SourceLocation

        loc = SourceLocation.from_offsets("int x;\nint y;", 7, 13)
        assert (loc.lineno, loc.col_offset) == (2, 1)
        assert (loc.end_lineno, loc.end_col_offset) == (2, 7)
        assert (loc.offset, loc.end_offset) == (7, 13)

    def test_str(self) -> None:
        from smartpatch.location import SourceLocation

        loc = SourceLocation(lineno=3, col_offset=5)
        assert str(loc) == "3:5"
        assert str(loc.with_file("out.cpp")) == "out.cpp:3:5"

    def test_with_file_keeps_span(self) -> None:
        from smartpatch.location import SourceLocation

        loc = SourceLocation.from_offsets("a\nbc", 2, 4)
        attached = loc.with_file("x.cpp")
        assert attached.source_file == "x.cpp"
        assert (attached.offset, attached.end_offset, attached.end_col_offset) == (2, 4, 3)
        assert loc.source_file is None
