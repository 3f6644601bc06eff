"""Tests for settings loading."""

import json
import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml
from pydantic import ValidationError

from taskflow.core.settings.settings import TaskflowSettings, configure_logging, load_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for key in list(os.environ):
        if key.startswith("TASKFLOW_") or key == "GOOGLE_API_KEY":
            monkeypatch.delenv(key, raising=False)
    # Keep a stray .env in the working directory out of the tests
    monkeypatch.chdir(tmp_path)


class TestTaskflowSettings:
    def test_defaults(self):
        settings = TaskflowSettings()
        assert settings.environment == "development"
        assert settings.log_level == "INFO"
        assert settings.google_api_key == ""
        assert settings.notification_limit == 100
        assert settings.seed_new_users is True
        assert isinstance(settings.storage_dir, Path)

    def test_environment_variable_override(self):
        with patch.dict(
            os.environ,
            {
                "TASKFLOW_ENV": "production",
                "TASKFLOW_LOG_LEVEL": "debug",
                "TASKFLOW_NOTIFICATION_LIMIT": "20",
                "TASKFLOW_SEED_NEW_USERS": "false",
            },
        ):
            settings = TaskflowSettings()
        assert settings.environment == "production"
        assert settings.log_level == "DEBUG"
        assert settings.notification_limit == 20
        assert settings.seed_new_users is False

    def test_google_api_key_read_from_plain_variable(self):
        with patch.dict(os.environ, {"GOOGLE_API_KEY": "plain-key"}):
            assert TaskflowSettings().google_api_key == "plain-key"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            TaskflowSettings(log_level="LOUD")

    def test_temperature_range(self):
        with pytest.raises(ValidationError):
            TaskflowSettings(temperature=3.5)

    def test_notification_limit_must_be_positive(self):
        with pytest.raises(ValidationError):
            TaskflowSettings(notification_limit=0)


class TestLoadSettings:
    def test_yaml_file_with_section(self, tmp_path):
        config_file = tmp_path / "taskflow.yaml"
        config_file.write_text(yaml.safe_dump({"taskflow": {"text_model": "gemini-test", "notification_limit": 5}}))
        settings = load_settings(config_file)
        assert settings.text_model == "gemini-test"
        assert settings.notification_limit == 5

    def test_json_file(self, tmp_path):
        config_file = tmp_path / "taskflow.json"
        config_file.write_text(json.dumps({"environment": "staging"}))
        assert load_settings(config_file).environment == "staging"

    def test_overrides_win_over_file(self, tmp_path):
        config_file = tmp_path / "taskflow.yaml"
        config_file.write_text(yaml.safe_dump({"log_level": "WARNING"}))
        assert load_settings(config_file, log_level="ERROR").log_level == "ERROR"

    def test_missing_file_falls_back_to_environment(self, tmp_path):
        settings = load_settings(tmp_path / "absent.yaml")
        assert settings.environment == "development"

    def test_non_mapping_file_rejected(self, tmp_path):
        config_file = tmp_path / "taskflow.yaml"
        config_file.write_text("- just\n- a list\n")
        with pytest.raises(ValueError):
            load_settings(config_file)


def test_configure_logging_uses_settings_level():
    with patch("taskflow.core.settings.settings.logging.basicConfig") as basic_config:
        configure_logging(TaskflowSettings(log_level="WARNING"))
    basic_config.assert_called_once()
    assert basic_config.call_args.kwargs["level"] == logging.WARNING
