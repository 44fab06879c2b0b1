"""Tests for settings and structured logging."""

import logging

from tedos.core.config import Settings, get_settings
from tedos.core.logging import StructuredFormatter, get_logger, log_with_context


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("TEDOS_ENV", raising=False)
        monkeypatch.delenv("TEDOS_LOG_LEVEL", raising=False)
        monkeypatch.delenv("MERGE_LOG_CHUNK_KEYS", raising=False)
        settings = Settings(_env_file=None)
        assert settings.TEDOS_ENV == "dev"
        assert settings.TEDOS_LOG_LEVEL is None
        assert settings.MERGE_LOG_CHUNK_KEYS is True

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("MERGE_LOG_CHUNK_KEYS", "false")
        monkeypatch.setenv("TEDOS_ENV", "prod")
        settings = Settings(_env_file=None)
        assert settings.MERGE_LOG_CHUNK_KEYS is False
        assert settings.TEDOS_ENV == "prod"

    def test_test_env_applied(self):
        assert get_settings().TEDOS_ENV == "test"


class TestStructuredLogging:
    def _record(self, **extra) -> logging.LogRecord:
        record = logging.LogRecord("tedos.test", logging.INFO, __file__, 1, "Merged", None, None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_formatter_key_value_output(self):
        output = StructuredFormatter().format(
            self._record(section="vsl", extra_data={"fields": 38})
        )
        assert "level=INFO" in output
        assert "message=Merged" in output
        assert "section=vsl" in output
        assert "fields=38" in output

    def test_get_logger_configures_once(self):
        logger = get_logger("tedos.test.once")
        get_logger("tedos.test.once")
        assert len(logger.handlers) == 1

    def test_log_with_context(self, caplog):
        logger = get_logger("tedos.test.context")
        with caplog.at_level(logging.INFO, logger="tedos.test.context"):
            log_with_context(logger, logging.INFO, "Resolved", section="emails", count=3)

        record = caplog.records[-1]
        assert record.section == "emails"
        assert record.extra_data == {"count": 3}

    def test_chunk_context_and_quoting(self):
        record = self._record(section="emails", chunk=2, extra_data={"reason": "stray slots"})
        record.msg = "Chunk ignored"
        output = StructuredFormatter().format(record)
        assert 'message="Chunk ignored"' in output
        assert "section=emails chunk=2" in output
        assert 'reason="stray slots"' in output

    def test_unset_context_is_omitted(self):
        output = StructuredFormatter().format(self._record())
        assert "section=" not in output
        assert "chunk=" not in output

    def test_log_with_context_promotes_chunk(self, caplog):
        logger = get_logger("tedos.test.chunk")
        with caplog.at_level(logging.INFO, logger="tedos.test.chunk"):
            log_with_context(logger, logging.INFO, "Parsed", section="sms", chunk=1, shape="flat")

        record = caplog.records[-1]
        assert (record.section, record.chunk) == ("sms", 1)
        assert record.extra_data == {"shape": "flat"}
