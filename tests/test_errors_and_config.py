"""Unit tests for error mapping, settings and logging setup."""
import logging

import pytest
from pydantic import ValidationError

from scorecard.config import Settings, get_settings
from scorecard.core.errors import (
    ERROR_MESSAGES,
    ErrorCode,
    ScoringInputError,
    create_error_payload,
    get_error_code_for_exception,
    sanitize_error_message,
)
from scorecard.core.logging_config import configure_logging
from scorecard.scoring.portfolio import PortfolioAggregator
from scorecard.scoring.schemas import ScorecardInputs


class TestErrorMapping:
    """Test exception to error code mapping."""

    def test_scoring_input_error(self):
        exc = ScoringInputError("bad variance", ErrorCode.INVALID_VARIANCE)
        assert isinstance(exc, ValueError)
        assert get_error_code_for_exception(exc) == ErrorCode.INVALID_VARIANCE

    def test_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            ScorecardInputs(revenue_variance=500)
        assert get_error_code_for_exception(exc_info.value) == ErrorCode.VALIDATION_ERROR

    def test_unexpected_error(self):
        assert get_error_code_for_exception(RuntimeError("boom")) == ErrorCode.INTERNAL_ERROR

    def test_every_code_has_message(self):
        assert set(ERROR_MESSAGES) == set(ErrorCode)


class TestSanitize:
    """Test user-facing message sanitization."""

    def test_logs_details_returns_friendly_message(self, caplog):
        exc = ScoringInputError("max_score must not be negative, got -3", ErrorCode.INVALID_MAX_SCORE)
        with caplog.at_level(logging.ERROR):
            message = sanitize_error_message(exc)

        assert message == ERROR_MESSAGES[ErrorCode.INVALID_MAX_SCORE]
        assert "-3" not in message
        assert "got -3" in caplog.text

    def test_no_logging(self, caplog):
        with caplog.at_level(logging.ERROR):
            sanitize_error_message(RuntimeError("hidden"), log_details=False)
        assert "hidden" not in caplog.text

    def test_payload(self):
        assert create_error_payload(ErrorCode.INVALID_MONTH) == {
            "error_code": "invalid_month",
            "message": ERROR_MESSAGES[ErrorCode.INVALID_MONTH],
        }
        assert create_error_payload(ErrorCode.INTERNAL_ERROR, "custom")["message"] == "custom"


class TestSettings:
    """Test settings defaults and overrides."""

    def test_defaults(self):
        config = Settings()
        assert config.anomaly_drop_points == 10
        assert config.weak_section_pct == 50.0

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("SCORECARD_ANOMALY_DROP_POINTS", "15")
        assert Settings().anomaly_drop_points == 15

    def test_invalid_threshold(self):
        with pytest.raises(ValidationError):
            Settings(anomaly_drop_points=0)

    def test_effective_log_level(self):
        assert Settings(log_level="warning").effective_log_level == "WARNING"
        assert Settings(debug=True, log_level="warning").effective_log_level == "DEBUG"

    def test_cached(self):
        assert get_settings() is get_settings()

    def test_aggregator_defaults_to_cached_settings(self):
        assert PortfolioAggregator().config is get_settings()


class TestConfigureLogging:
    """Test root logging configuration."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        for handler in root.handlers[:]:
            root.removeHandler(handler)
        for handler in handlers:
            root.addHandler(handler)
        root.setLevel(level)

    def test_debug_mode(self):
        configure_logging(Settings(debug=True))
        assert logging.getLogger().level == logging.DEBUG

    def test_configured_level(self):
        configure_logging(Settings(log_level="WARNING"))
        assert logging.getLogger().level == logging.WARNING
