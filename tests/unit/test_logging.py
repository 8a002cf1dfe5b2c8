"""Unit tests for logging configuration."""

import json

import structlog

from org_outline.utils.logging import configure_logging, get_log_dir


class TestLogging:
    """Tests for structlog setup."""

    def teardown_method(self):
        structlog.reset_defaults()

    def test_log_dir_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("ORG_OUTLINE_LOG_DIR", str(tmp_path / "custom"))
        assert get_log_dir() == tmp_path / "custom"

    def test_log_dir_default(self, monkeypatch, tmp_path):
        monkeypatch.delenv("ORG_OUTLINE_LOG_DIR")
        assert get_log_dir() == tmp_path / "home" / ".cache" / "org-outline" / "logs"

    def test_writes_json_lines(self, tmp_path):
        configure_logging()
        structlog.get_logger("test").info("outline_parsed", node_count=3)

        log_file = tmp_path / "logs" / "org-outline.log"
        records = [json.loads(line) for line in log_file.read_text().splitlines()]

        assert records[-1]["event"] == "outline_parsed"
        assert records[-1]["node_count"] == 3
        assert records[-1]["level"] == "info"

    def test_level_filtering(self, tmp_path, monkeypatch):
        monkeypatch.setenv("ORG_OUTLINE_LOG_LEVEL", "warning")
        configure_logging()
        logger = structlog.get_logger("test")
        logger.info("hidden_event")
        logger.warning("shown_event")

        content = (tmp_path / "logs" / "org-outline.log").read_text()
        assert "hidden_event" not in content
        assert "shown_event" in content

    def test_invalid_level_falls_back_to_info(self, tmp_path, monkeypatch):
        monkeypatch.setenv("ORG_OUTLINE_LOG_LEVEL", "CHATTY")
        configure_logging()
        logger = structlog.get_logger("test")
        logger.debug("debug_event")
        logger.info("info_event")

        content = (tmp_path / "logs" / "org-outline.log").read_text()
        assert "debug_event" not in content
        assert "info_event" in content

    def test_non_ascii_and_utc_timestamp(self, tmp_path):
        """Test that headline text is logged verbatim with a UTC timestamp."""
        configure_logging()
        structlog.get_logger("test").info("section_seen", name="Café")

        raw = (tmp_path / "logs" / "org-outline.log").read_text(encoding="utf-8")
        record = json.loads(raw.splitlines()[-1])

        assert '"Café"' in raw
        assert record["timestamp"].endswith("Z")

    def test_exception_logged_as_structured_traceback(self, tmp_path):
        """Test that exc_info is rendered as a JSON traceback, not a string."""
        configure_logging()
        try:
            raise ValueError("bad marker")
        except ValueError:
            structlog.get_logger("test").error("structure_error", exc_info=True)

        log_file = tmp_path / "logs" / "org-outline.log"
        record = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])

        assert record["exception"][0]["exc_type"] == "ValueError"
        assert record["exception"][0]["exc_value"] == "bad marker"
