"""Property-based tests for tokenizer invariants using Hypothesis.

These tests verify that certain properties always hold regardless
of the input, helping catch edge cases that example-based tests miss.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from mathflow import TokenizeConfig, parse, recognize

FENCE_ALPHABET = "$ \t\n\rxa"

lines_without_marker = st.lists(
    st.text(alphabet=st.characters(exclude_characters="$\r\n", exclude_categories=("Cs",)), max_size=20),
    min_size=1,
    max_size=6,
)


class TestRoundTrip:
    """Concatenated leaf spans reproduce the input exactly."""

    @given(st.text(alphabet=FENCE_ALPHABET, max_size=200), st.sets(st.integers(1, 30), max_size=5))
    @settings(max_examples=300)
    def test_fence_heavy_input(self, source: str, lazy: set[int]) -> None:
        doc = parse(source, lazy_lines=lazy)
        assert "".join(leaf.text(source) for leaf in doc.tree.leaves()) == source

    @given(st.text(alphabet=st.characters(exclude_categories=("Cs",)), max_size=300))
    @settings(max_examples=100)
    def test_arbitrary_input(self, source: str) -> None:
        doc = parse(source)
        assert "".join(leaf.text(source) for leaf in doc.tree.leaves()) == source

    @given(st.text(alphabet=FENCE_ALPHABET, max_size=100))
    @settings(max_examples=100)
    def test_unbounded_indent(self, source: str) -> None:
        config = TokenizeConfig(disabled_constructs=frozenset({"codeIndented"}))
        doc = parse(source, config=config)
        assert "".join(leaf.text(source) for leaf in doc.tree.leaves()) == source

    @given(st.text(alphabet=FENCE_ALPHABET, max_size=100), st.booleans())
    @settings(max_examples=200)
    def test_recognized_prefix(self, source: str, interrupt: bool) -> None:
        result = recognize(source, interrupt=interrupt)
        leaves = "".join(leaf.text(source) for leaf in result.tree.leaves())
        assert leaves == source[: result.end.offset]


class TestRecognition:
    @given(st.text(alphabet=FENCE_ALPHABET, max_size=100))
    @settings(max_examples=200)
    def test_failed_recognition_leaves_no_spans(self, source: str) -> None:
        result = recognize(source)
        if not result.recognized:
            assert all(e.type.name == "LINE_PREFIX" for e in result.events)

    @given(st.text(alphabet=FENCE_ALPHABET.replace("$", ""), max_size=50))
    def test_single_delimiter_never_opens(self, rest: str) -> None:
        assert not recognize("$" + rest).recognized

    @given(st.integers(2, 8), st.integers(0, 10))
    def test_closing_must_be_at_least_opening(self, size_open: int, size_close: int) -> None:
        source = "$" * size_open + "\nx\n" + "$" * size_close
        block = recognize(source).block
        assert block is not None
        assert block.closed == (size_close >= size_open)
        assert block.fence_size == size_open

    @given(lines_without_marker)
    def test_well_formed_block_value(self, lines: list[str]) -> None:
        content = "\n".join(lines)
        block = recognize("$$\n" + content + "\n$$").block
        assert block is not None
        assert block.closed
        assert block.value == content

    @given(st.text(alphabet=st.characters(exclude_characters="$\r\n", exclude_categories=("Cs",)), max_size=30))
    def test_midline_close_ends_block(self, content: str) -> None:
        source = "$$\n" + content + "$$ trailing"
        result = recognize(source)
        assert source[result.end.offset :] == " trailing"


class TestDeterminism:
    @given(st.text(alphabet=FENCE_ALPHABET, max_size=150))
    @settings(max_examples=50)
    def test_repeated_parse_identical(self, source: str) -> None:
        assert parse(source).events == parse(source).events
