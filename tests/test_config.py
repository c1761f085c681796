"""Tests for configuration models."""

import pytest
from docscope.models.config import (
    CONTAINER_SELECTORS,
    DEFAULT_USER_AGENT,
    MAX_SEARCH_DEPTH,
    ByteSize,
    CrawlConfig,
    DocscopeConfig,
    NetworkConfig,
)
from pydantic import ValidationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ["DOCSCOPE_TIMEOUT", "DOCSCOPE_USER_AGENT", "DOCSCOPE_VERBOSE", "DOCSCOPE_LOG_LEVEL"]:
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    """Tests for default values."""

    def test_network_defaults(self):
        config = DocscopeConfig()
        assert config.network.user_agent == DEFAULT_USER_AGENT
        assert "Chrome" in config.network.user_agent
        assert config.network.timeout == 30.0
        assert config.network.max_content_size == 50 * 1024 * 1024

    def test_crawl_defaults(self):
        config = DocscopeConfig()
        assert config.crawl.max_depth == 2
        assert config.crawl.fallback_max_depth == 1

    def test_extraction_defaults(self):
        config = DocscopeConfig()
        assert config.extraction.container_selectors == CONTAINER_SELECTORS
        assert config.extraction.max_search_depth == MAX_SEARCH_DEPTH == 3
        assert config.extraction.fallback is True
        assert config.extraction.include_title is True

    def test_selector_list_is_not_shared(self):
        first = DocscopeConfig()
        first.extraction.container_selectors.append(".extra")
        assert ".extra" not in DocscopeConfig().extraction.container_selectors


class TestValidation:
    """Tests for field validation."""

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            DocscopeConfig(network={"retries": 3})

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            NetworkConfig(timeout=0)

    @pytest.mark.parametrize("depth", [0, 3])
    def test_crawl_depth_bounds(self, depth):
        with pytest.raises(ValidationError):
            CrawlConfig(max_depth=depth)

    def test_log_level_literal(self):
        with pytest.raises(ValidationError):
            DocscopeConfig(log_level="LOUD")

    def test_byte_size_strings(self):
        assert NetworkConfig(max_content_size="5mb").max_content_size == 5 * 1024 * 1024
        assert ByteSize._parse("200kb") == 204800
        assert ByteSize._parse("1024") == 1024

    def test_bad_byte_size(self):
        with pytest.raises(ValidationError):
            NetworkConfig(max_content_size="lots")


class TestYaml:
    """Tests for YAML round trips."""

    def test_from_yaml(self):
        config = DocscopeConfig.from_yaml("network:\n  timeout: 5\nextraction:\n  fallback: false\n")
        assert config.network.timeout == 5.0
        assert config.extraction.fallback is False
        assert config.crawl.max_depth == 2

    def test_empty_yaml_gives_defaults(self):
        assert DocscopeConfig.from_yaml("") == DocscopeConfig()

    def test_yaml_round_trip(self):
        config = DocscopeConfig(network=NetworkConfig(timeout=12.5), verbose=True)
        assert DocscopeConfig.from_yaml(config.to_yaml()) == config

    def test_from_yaml_file(self, tmp_path):
        path = tmp_path / "docscope.yaml"
        path.write_text("crawl:\n  max_depth: 1\n")
        assert DocscopeConfig.from_yaml_file(path).crawl.max_depth == 1


class TestFromEnv:
    """Tests for environment overrides."""

    def test_no_env_keeps_base(self):
        base = DocscopeConfig(network=NetworkConfig(timeout=9))
        assert DocscopeConfig.from_env(base) == base

    def test_values_read(self, monkeypatch):
        monkeypatch.setenv("DOCSCOPE_TIMEOUT", "15")
        monkeypatch.setenv("DOCSCOPE_USER_AGENT", "docscope-test/1.0")
        monkeypatch.setenv("DOCSCOPE_VERBOSE", "yes")
        monkeypatch.setenv("DOCSCOPE_LOG_LEVEL", "debug")

        config = DocscopeConfig.from_env()

        assert config.network.timeout == 15.0
        assert config.network.user_agent == "docscope-test/1.0"
        assert config.verbose is True
        assert config.log_level == "DEBUG"

    def test_windows_line_endings_stripped(self, monkeypatch):
        monkeypatch.setenv("DOCSCOPE_TIMEOUT", "45\r")
        monkeypatch.setenv("DOCSCOPE_VERBOSE", "true\r\n")

        config = DocscopeConfig.from_env()

        assert config.network.timeout == 45.0
        assert config.verbose is True

    def test_false_values(self, monkeypatch):
        monkeypatch.setenv("DOCSCOPE_VERBOSE", "0")
        assert DocscopeConfig.from_env(DocscopeConfig(verbose=True)).verbose is False

    def test_blank_value_ignored(self, monkeypatch):
        monkeypatch.setenv("DOCSCOPE_TIMEOUT", "\r")
        assert DocscopeConfig.from_env().network.timeout == 30.0
