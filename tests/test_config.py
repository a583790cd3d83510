"""Tests for TokenizeConfig and the ContextVar-based ambient config."""

from threading import Thread

import pytest

from mathflow import (
    ConfigError,
    TokenizeConfig,
    get_tokenize_config,
    reset_tokenize_config,
    set_tokenize_config,
    tokenize_config_context,
)


class TestTokenizeConfigDataclass:
    def test_default_values(self) -> None:
        config = TokenizeConfig()
        assert config.marker == "$"
        assert config.disabled_constructs == frozenset()
        assert config.code_indented_disabled is False

    def test_source_file_is_not_config(self) -> None:
        with pytest.raises(TypeError):
            TokenizeConfig(source_file="doc.md")
        assert TokenizeConfig.from_dict({"source_file": "doc.md"}) == TokenizeConfig()

    def test_immutability(self) -> None:
        config = TokenizeConfig()
        with pytest.raises(AttributeError):
            config.marker = "%"  # type: ignore[misc]

    def test_disabled_constructs_normalized(self) -> None:
        config = TokenizeConfig(disabled_constructs={"codeIndented"})  # type: ignore[arg-type]
        assert isinstance(config.disabled_constructs, frozenset)
        assert config.code_indented_disabled is True

    @pytest.mark.parametrize("marker", ["", "$$", " ", "\t", "\n"])
    def test_invalid_marker(self, marker: str) -> None:
        with pytest.raises(ConfigError, match="marker"):
            TokenizeConfig(marker=marker)


class TestFromDict:
    def test_basic(self) -> None:
        config = TokenizeConfig.from_dict({"marker": "%"})
        assert config.marker == "%"

    def test_ignores_unknown_keys(self) -> None:
        config = TokenizeConfig.from_dict({"unknown_key": 1, "marker": "$"})
        assert config == TokenizeConfig()

    def test_disabled_constructs_from_list(self) -> None:
        config = TokenizeConfig.from_dict({"disabled_constructs": ["codeIndented"]})
        assert config.disabled_constructs == frozenset({"codeIndented"})

    def test_disabled_constructs_from_string(self) -> None:
        config = TokenizeConfig.from_dict({"disabled_constructs": "codeIndented"})
        assert config.code_indented_disabled is True

    def test_empty(self) -> None:
        assert TokenizeConfig.from_dict({}) == TokenizeConfig()


class TestContextVarFunctions:
    def setup_method(self) -> None:
        reset_tokenize_config()

    def teardown_method(self) -> None:
        reset_tokenize_config()

    def test_default(self) -> None:
        assert get_tokenize_config() == TokenizeConfig()

    def test_set_and_reset(self) -> None:
        set_tokenize_config(TokenizeConfig(marker="%"))
        assert get_tokenize_config().marker == "%"
        reset_tokenize_config()
        assert get_tokenize_config().marker == "$"

    def test_context_manager_restores(self) -> None:
        set_tokenize_config(TokenizeConfig(marker="%"))
        with tokenize_config_context(TokenizeConfig(marker="@")):
            assert get_tokenize_config().marker == "@"
        assert get_tokenize_config().marker == "%"

    def test_context_manager_restores_on_error(self) -> None:
        with pytest.raises(RuntimeError):
            with tokenize_config_context(TokenizeConfig(marker="@")):
                raise RuntimeError("boom")
        assert get_tokenize_config().marker == "$"

    def test_thread_isolation(self) -> None:
        seen: list[str] = []

        def worker() -> None:
            seen.append(get_tokenize_config().marker)

        with tokenize_config_context(TokenizeConfig(marker="@")):
            thread = Thread(target=worker)
            thread.start()
            thread.join()

        assert seen == ["$"]
