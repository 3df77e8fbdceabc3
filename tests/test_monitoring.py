"""Tests for Sentry setup (monitoring.py)."""

import pytest
from unittest.mock import patch

from platsec_slack import monitoring
from platsec_slack.monitoring import MonitoringConfig, capture_exception, init_sentry


@pytest.fixture(autouse=True)
def reset_sentry(monkeypatch):
    monkeypatch.setattr(monitoring, "_sentry_initialized", False)


class TestInitSentry:
    def test_disabled_without_dsn(self):
        with patch("platsec_slack.monitoring.sentry_sdk.init") as mock_init:
            assert init_sentry(MonitoringConfig()) is False
        mock_init.assert_not_called()

    def test_initializes_with_dsn(self):
        config = MonitoringConfig(
            sentry_dsn="https://key@sentry.example.com/1",
            sentry_environment="test",
            tags={"aws_account": "123456789"},
        )

        with patch("platsec_slack.monitoring.sentry_sdk.init") as mock_init, \
                patch("platsec_slack.monitoring.sentry_sdk.set_tag") as mock_tag:
            assert init_sentry(config) is True
            assert init_sentry(config) is True

        mock_init.assert_called_once()
        assert mock_init.call_args.kwargs["environment"] == "test"
        assert mock_init.call_args.kwargs["release"].startswith("platsec-slack@")
        mock_tag.assert_called_once_with("aws_account", "123456789")

    def test_config_from_env(self, monkeypatch, slack_env):
        monkeypatch.setenv("SENTRY_DSN", "https://key@sentry.example.com/1")
        monkeypatch.delenv("SENTRY_ENVIRONMENT", raising=False)

        config = MonitoringConfig.from_env()

        assert config.sentry_dsn == "https://key@sentry.example.com/1"
        assert config.sentry_environment == "production"
        assert config.tags == {
            "aws_account": "123456789",
            "ssm_role": slack_env["SSM_READ_ROLE"],
        }

    def test_blank_tags_dropped(self, clean_env):
        assert MonitoringConfig.from_env().tags == {}


class TestCaptureException:
    def test_noop_when_not_initialized(self):
        with patch("platsec_slack.monitoring.sentry_sdk.capture_exception") as mock_capture:
            assert capture_exception(RuntimeError("boom")) is None
        mock_capture.assert_not_called()

    def test_captures_when_initialized(self, monkeypatch):
        monkeypatch.setattr(monitoring, "_sentry_initialized", True)
        error = RuntimeError("boom")

        with patch("platsec_slack.monitoring.sentry_sdk.capture_exception", return_value="evt-1") as mock_capture:
            assert capture_exception(error, tags={"error_kind": "delivery"}) == "evt-1"
        mock_capture.assert_called_once_with(error)
