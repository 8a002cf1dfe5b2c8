"""Unit tests for parser settings."""

import pytest
from pydantic import ValidationError

from org_outline.config import ParserSettings, default_config_path, load_settings


class TestParserSettings:
    """Test ParserSettings model."""

    def test_defaults(self):
        settings = ParserSettings()

        assert settings.strict is False
        assert settings.encoding == "utf-8"
        assert settings.url_timeout == 10.0

    def test_immutable(self):
        settings = ParserSettings()
        with pytest.raises(Exception):  # Pydantic ValidationError
            settings.strict = True

    def test_unknown_encoding_rejected(self):
        with pytest.raises(ValidationError, match="Unknown text encoding"):
            ParserSettings(encoding="not-a-codec")

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(ValidationError):
            ParserSettings(url_timeout=0)


class TestLoadSettings:
    """Test loading settings from YAML and environment."""

    def test_defaults_when_no_file(self):
        assert not default_config_path().exists()
        assert load_settings() == ParserSettings()

    def test_default_path_is_read(self):
        path = default_config_path()
        path.parent.mkdir(parents=True)
        path.write_text("strict: true\n")

        assert load_settings().strict is True

    def test_explicit_file(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("encoding: latin-1\nurl_timeout: 2.5\n")

        settings = load_settings(config_file)

        assert settings.encoding == "latin-1"
        assert settings.url_timeout == 2.5
        assert settings.strict is False

    def test_explicit_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            load_settings(tmp_path / "missing.yaml")

    def test_empty_file_gives_defaults(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        assert load_settings(config_file) == ParserSettings()

    def test_non_mapping_file_raises(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- just\n- a list\n")

        with pytest.raises(ValueError, match="must contain a mapping"):
            load_settings(config_file)

    def test_invalid_value_raises(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("url_timeout: -1\n")

        with pytest.raises(ValidationError):
            load_settings(config_file)

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("strict: false\nencoding: utf-8\n")
        monkeypatch.setenv("ORG_OUTLINE_STRICT", "true")
        monkeypatch.setenv("ORG_OUTLINE_ENCODING", "latin-1")
        monkeypatch.setenv("ORG_OUTLINE_URL_TIMEOUT", "3")

        settings = load_settings(config_file)

        assert settings.strict is True
        assert settings.encoding == "latin-1"
        assert settings.url_timeout == 3.0

    def test_env_without_file(self, monkeypatch):
        monkeypatch.setenv("ORG_OUTLINE_STRICT", "1")
        assert load_settings().strict is True
