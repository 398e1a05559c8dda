"""Tests for ContextVar-based style configuration."""

from threading import Thread

import pytest

from chirp import annotate
from chirp.config import (
    StyleConfig,
    get_style_config,
    reset_style_config,
    set_style_config,
    style_config_context,
)
from chirp.errors import ChirpError, ConfigurationError


class TestStyleConfig:
    """Test StyleConfig dataclass."""

    def test_defaults(self) -> None:
        config = StyleConfig()
        assert config.url_class == "url"
        assert config.username_class == "username"
        assert config.list_class == "list"
        assert config.hashtag_class == "hashtag"
        assert config.cashtag_class == "cashtag"
        assert config.url_base_user == "https://twitter.com/"
        assert config.url_base_list == "https://twitter.com/"
        assert config.url_base_hash == "https://twitter.com/#!/search?q=%23"
        assert config.url_base_cash == "https://twitter.com/#!/search?q=%24"
        assert config.nofollow is True
        assert config.external is True
        assert config.target == "_blank"

    def test_frozen(self) -> None:
        """StyleConfig is immutable."""
        config = StyleConfig()
        with pytest.raises(AttributeError):
            config.target = "_self"  # type: ignore[misc]

    def test_strips_classes_and_target(self) -> None:
        config = StyleConfig(hashtag_class="  tag ", target=" _self ")
        assert config.hashtag_class == "tag"
        assert config.target == "_self"

    def test_empty_url_base_rejected(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            StyleConfig(url_base_hash="")
        assert exc_info.value.field == "url_base_hash"
        assert "StyleConfig.url_base_hash" in str(exc_info.value)

    def test_non_string_class_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            StyleConfig(url_class=None)  # type: ignore[arg-type]

    def test_configuration_error_is_chirp_error(self) -> None:
        with pytest.raises(ChirpError):
            StyleConfig(url_base_user="")

    def test_rel(self) -> None:
        assert StyleConfig().rel == "external nofollow"
        assert StyleConfig(external=False).rel == "nofollow"
        assert StyleConfig(nofollow=False).rel == "external"
        assert StyleConfig(external=False, nofollow=False).rel == ""

    def test_replace_validates(self) -> None:
        config = StyleConfig().replace(url_class=" link ")
        assert config.url_class == "link"
        with pytest.raises(ConfigurationError):
            config.replace(url_base_list="")


class TestStyleConfigFromDict:
    """Test StyleConfig.from_dict() factory method."""

    def test_from_dict_basic(self) -> None:
        config = StyleConfig.from_dict({"hashtag_class": "tag", "nofollow": False})
        assert config.hashtag_class == "tag"
        assert config.nofollow is False
        # Defaults still apply
        assert config.external is True

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = StyleConfig.from_dict({"target": "", "unknown_key": "ignored"})
        assert config.target == ""

    def test_from_dict_empty(self) -> None:
        assert StyleConfig.from_dict({}) == StyleConfig()

    def test_from_dict_validates(self) -> None:
        with pytest.raises(ConfigurationError):
            StyleConfig.from_dict({"url_base_cash": ""})


class TestContextVarFunctions:
    """Test get/set/reset functions."""

    def teardown_method(self) -> None:
        reset_style_config()

    def test_get_returns_default(self) -> None:
        assert get_style_config() == StyleConfig()

    def test_set_changes_config(self) -> None:
        set_style_config(StyleConfig(target=""))
        assert get_style_config().target == ""

    def test_reset_restores_default(self) -> None:
        set_style_config(StyleConfig(target=""))
        reset_style_config()
        assert get_style_config().target == "_blank"


class TestStyleConfigContext:
    """Test style_config_context context manager."""

    def test_context_sets_config(self) -> None:
        with style_config_context(StyleConfig(url_class="link")):
            assert get_style_config().url_class == "link"
        assert get_style_config().url_class == "url"

    def test_nested_contexts(self) -> None:
        with style_config_context(StyleConfig(url_class="outer")):
            with style_config_context(StyleConfig(url_class="inner")):
                assert get_style_config().url_class == "inner"
            assert get_style_config().url_class == "outer"
        assert get_style_config().url_class == "url"

    def test_context_restores_on_exception(self) -> None:
        with pytest.raises(ValueError, match="test"):
            with style_config_context(StyleConfig(url_class="link")):
                raise ValueError("test")
        assert get_style_config().url_class == "url"


class TestThreadIsolation:
    """Test thread-local configuration isolation."""

    def test_thread_isolation(self) -> None:
        """Each thread sees its own config."""
        results: dict[int, str] = {}

        def worker(thread_id: int, config: StyleConfig) -> None:
            set_style_config(config)
            results[thread_id] = annotate("@bob")

        configs = [StyleConfig(username_class=f"user{i}") for i in range(4)]
        threads = [Thread(target=worker, args=(i, c)) for i, c in enumerate(configs)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        for i in range(4):
            assert f'class="user{i}"' in results[i]
        # Main thread is untouched
        assert get_style_config().username_class == "username"
