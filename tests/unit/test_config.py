"""Tests for settings and logging configuration."""

import importlib

import pytest
import structlog
from pydantic import ValidationError

from calcreducer import CalculatorSettings, configure_logging


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("CALC_HISTORY_LIMIT", "CALC_UNDO_DEPTH", "CALC_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        config = CalculatorSettings(_env_file=None)
        assert config.history_limit == 100
        assert config.undo_depth == 50
        assert config.log_level == "WARNING"

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("CALC_HISTORY_LIMIT", "5")
        monkeypatch.setenv("CALC_UNDO_DEPTH", "0")
        config = CalculatorSettings(_env_file=None)
        assert config.history_limit == 5
        assert config.undo_depth == 0

    def test_history_limit_must_be_positive(self):
        with pytest.raises(ValidationError):
            CalculatorSettings(history_limit=0)


class TestLogging:
    def test_unknown_level(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging("LOUD")

    def test_known_level(self):
        configure_logging("debug")
        configure_logging("WARNING")

    def test_import_leaves_structlog_unconfigured(self):
        import calcreducer

        structlog.reset_defaults()
        try:
            importlib.reload(calcreducer)
            assert not structlog.is_configured()
        finally:
            structlog.reset_defaults()
