"""Tests for the document host and the public parse()/recognize() API."""

import logging

import pytest

from mathflow import (
    LazyLines,
    SpanType,
    TokenizeConfig,
    parse,
    recognize,
    tokenize_config_context,
)


def _top_level(doc) -> list[tuple[str, str]]:
    return [(node.type.name, node.text(doc.source)) for node in doc.tree.children]


class TestParse:
    def test_text_and_block(self) -> None:
        doc = parse("Some text\n\n$$\nE = mc^2\n$$\n")
        assert [b.value for b in doc.math_blocks()] == ["E = mc^2"]
        assert _top_level(doc) == [
            ("DATA", "Some text"),
            ("LINE_ENDING", "\n"),
            ("LINE_ENDING", "\n"),
            ("MATH_FLOW", "$$\nE = mc^2\n$$"),
            ("LINE_ENDING", "\n"),
        ]

    def test_multiple_blocks(self) -> None:
        doc = parse("$$\na\n$$\n\n$$b$$\n\n$$\nc")
        blocks = doc.math_blocks()
        assert [b.value for b in blocks] == ["a", "b", "c"]
        assert [b.closed for b in blocks] == [True, True, False]
        assert [b.start.line for b in blocks] == [1, 5, 7]

    def test_tab_indented_fence_line_is_text(self) -> None:
        doc = parse("\t$$\nx\n\n$$\ny\n$$")
        assert _top_level(doc)[0] == ("DATA", "\t$$")
        blocks = doc.math_blocks()
        assert [b.start.line for b in blocks] == [4]
        assert [b.value for b in blocks] == ["y"]

    def test_text_after_midline_close(self) -> None:
        doc = parse("$$\nx$$ tail\nnext")
        assert _top_level(doc) == [
            ("MATH_FLOW", "$$\nx$$"),
            ("DATA", " tail"),
            ("LINE_ENDING", "\n"),
            ("DATA", "next"),
        ]

    def test_single_delimiter_is_text(self) -> None:
        doc = parse("$a$ and $b$")
        assert doc.math_blocks() == []
        assert _top_level(doc) == [("DATA", "$a$ and $b$")]

    def test_unclosed_block_runs_to_end(self) -> None:
        doc = parse("$$\na\n\nb")
        [block] = doc.math_blocks()
        assert block.value == "a\n\nb"
        assert not block.closed

    def test_indented_code_is_not_math(self) -> None:
        doc = parse("    $$\n    x\n    $$")
        assert doc.math_blocks() == []

    def test_indented_math_when_code_indented_disabled(self) -> None:
        config = TokenizeConfig(disabled_constructs=frozenset({"codeIndented"}))
        doc = parse("    $$\n    x\n    $$", config=config)
        [block] = doc.math_blocks()
        assert block.value == "x"
        assert block.closed

    def test_lazy_line_becomes_text(self) -> None:
        doc = parse("$$\nx\ny", lazy_lines={3})
        assert _top_level(doc) == [
            ("MATH_FLOW", "$$\nx"),
            ("LINE_ENDING", "\n"),
            ("DATA", "y"),
        ]

    def test_lazy_oracle_object(self) -> None:
        doc = parse("$$\nx\ny", lazy_lines=LazyLines([3]))
        assert doc.math_blocks()[0].value == "x"

    def test_empty_source(self) -> None:
        doc = parse("")
        assert doc.events == ()
        assert doc.tree.children == ()
        assert doc.end.offset == 0

    def test_end_point(self) -> None:
        doc = parse("a\r\nbc")
        assert (doc.end.line, doc.end.column, doc.end.offset) == (2, 3, 5)
        assert doc.tree.end == doc.end

    def test_source_file_kept(self) -> None:
        assert parse("x", source_file="doc.md").source_file == "doc.md"


class TestInterruptingText:
    """A math flow right after a text line interrupts it."""

    def test_block_after_text_line(self) -> None:
        doc = parse("text\n$$\nx\n$$")
        [block] = doc.math_blocks()
        assert block.value == "x"
        assert block.closed

    def test_single_delimiter_after_text_line(self) -> None:
        doc = parse("text\n$a")
        assert doc.math_blocks() == []
        assert _top_level(doc)[-1] == ("DATA", "$a")

    def test_content_on_opening_line_after_text(self) -> None:
        doc = parse("text\n$$x$$")
        assert [b.value for b in doc.math_blocks()] == ["x"]


class TestAmbientConfig:
    def test_ambient_config_is_used(self) -> None:
        with tokenize_config_context(TokenizeConfig(marker="%")):
            doc = parse("%%\nx\n%%")
        assert [b.value for b in doc.math_blocks()] == ["x"]

    def test_explicit_config_wins(self) -> None:
        with tokenize_config_context(TokenizeConfig(marker="%")):
            doc = parse("$$\nx\n$$", config=TokenizeConfig())
        assert len(doc.math_blocks()) == 1


class TestRecognize:
    def test_block_property(self) -> None:
        assert recognize("$$\nx\n$$").block.value == "x"

    def test_block_is_none_when_not_recognized(self) -> None:
        result = recognize("$x")
        assert not result.recognized
        assert result.block is None

    def test_leading_indent_recorded(self) -> None:
        result = recognize("  $$\nx\n$$")
        assert result.tree.children[0].type is SpanType.LINE_PREFIX
        assert result.recognized


class TestLogging:
    def test_debug_messages_namespaced(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="mathflow"):
            parse("$$\nx\ny", lazy_lines={3})
        names = {record.name for record in caplog.records}
        assert "mathflow.document" in names
        assert "mathflow.constructs.continuation" in names
