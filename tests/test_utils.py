"""Tests for utility modules."""

from mathflow.codes import (
    advance_column,
    indent_width,
    is_line_ending,
    is_line_ending_or_eof,
    is_space,
    preprocess,
)


class TestLogger:
    def test_get_logger(self) -> None:
        from mathflow.utils.logger import get_logger

        assert get_logger("mymodule").name == "mathflow.mymodule"

    def test_logger_with_prefix(self) -> None:
        from mathflow.utils.logger import get_logger

        assert get_logger("mathflow.engine").name == "mathflow.engine"

    def test_logger_name_starting_with_prefix_not_submodule(self) -> None:
        from mathflow.utils.logger import get_logger

        assert get_logger("mathflow_other").name == "mathflow.mathflow_other"

    def test_logger_exact_name(self) -> None:
        from mathflow.utils.logger import get_logger

        assert get_logger("mathflow").name == "mathflow"


class TestCodes:
    def test_preprocess_keeps_crlf_together(self) -> None:
        assert preprocess("a\r\nb\rc\n") == ["a", "\r\n", "b", "\r", "c", "\n"]

    def test_preprocess_lone_cr_at_end(self) -> None:
        assert preprocess("a\r") == ["a", "\r"]

    def test_preprocess_empty(self) -> None:
        assert preprocess("") == []

    def test_predicates(self) -> None:
        assert is_line_ending("\r\n")
        assert not is_line_ending(None)
        assert is_line_ending_or_eof(None)
        assert is_space("\t")
        assert not is_space("\n")
        assert not is_space(None)

    def test_advance_column_expands_tabs(self) -> None:
        assert advance_column(0, " ") == 1
        assert advance_column(0, "\t") == 4
        assert advance_column(1, "\t") == 4
        assert advance_column(3, "\t") == 4
        assert advance_column(4, "\t") == 8

    def test_indent_width(self) -> None:
        assert indent_width("") == 0
        assert indent_width("   ") == 3
        assert indent_width("\t") == 4
        assert indent_width(" \t") == 4
        assert indent_width("\t  \t") == 8
