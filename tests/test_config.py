"""Tests for environment configuration and logging setup."""

import json
import logging

import pytest

from vertica_adapter.core.config import AdapterConfig, JSONFormatter, configure_logging, load_config


class TestAdapterConfig:
    """Test configuration loading from environment variables."""

    def test_defaults(self, monkeypatch):
        for key in (
            "VERTICA_ADAPTER_LOG_LEVEL",
            "VERTICA_ADAPTER_POOL_SIZE",
            "VERTICA_ADAPTER_COPY_BUFFER_SIZE",
            "VERTICA_ADAPTER_COPY_ENCODING",
        ):
            monkeypatch.delenv(key, raising=False)

        cfg = load_config()
        assert cfg.log_level == "INFO"
        assert cfg.pool_size == 5
        assert cfg.copy_buffer_size == 131072
        assert cfg.copy_encoding == "utf-8"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("VERTICA_ADAPTER_LOG_LEVEL", "debug")
        monkeypatch.setenv("VERTICA_ADAPTER_POOL_SIZE", "2")
        monkeypatch.setenv("VERTICA_ADAPTER_LOG_FORMAT", "json")

        cfg = load_config()
        assert cfg.log_level == "DEBUG"
        assert cfg.pool_size == 2
        assert cfg.as_dict()["log_format"] == "json"

    def test_unparseable_integer_uses_default(self, monkeypatch):
        monkeypatch.setenv("VERTICA_ADAPTER_POOL_TIMEOUT", "soon")
        assert load_config().pool_timeout == 30

    @pytest.mark.parametrize(
        "key,value",
        [
            ("VERTICA_ADAPTER_LOG_LEVEL", "LOUD"),
            ("VERTICA_ADAPTER_LOG_FORMAT", "xml"),
            ("VERTICA_ADAPTER_POOL_SIZE", "0"),
            ("VERTICA_ADAPTER_COPY_ENCODING", "no-such-codec"),
        ],
    )
    def test_invalid_values(self, monkeypatch, key, value):
        monkeypatch.setenv(key, value)
        with pytest.raises(ValueError):
            load_config()


class TestLogging:
    """Test logging configuration."""

    def test_json_formatter(self):
        record = logging.LogRecord("vertica_adapter.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
        payload = json.loads(JSONFormatter().format(record))
        assert payload == {"level": "INFO", "logger": "vertica_adapter.test", "message": "hello world"}

    def test_configure_logging_replaces_handler(self):
        cfg = AdapterConfig(log_level="WARNING", log_format="json")
        logger = configure_logging(cfg)
        configure_logging(cfg)
        try:
            assert logger.level == logging.WARNING
            assert len(logger.handlers) == 1
            assert isinstance(logger.handlers[0].formatter, JSONFormatter)
        finally:
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
            logger.setLevel(logging.NOTSET)
