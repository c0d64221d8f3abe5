"""Tests for environment-driven settings."""

from pathlib import Path

import pytest

from printshop.infrastructure.config import DEFAULT_DATA_DIR, Settings


def test_defaults():
    settings = Settings.from_env({})
    assert settings.data_dir == DEFAULT_DATA_DIR
    assert settings.allow_status_override is False
    assert settings.log_level == "INFO"
    assert settings.log_json is False
    assert settings.currency == "XOF"


def test_overrides():
    settings = Settings.from_env(
        {
            "PRINTSHOP_DATA_DIR": "/srv/printshop",
            "PRINTSHOP_ALLOW_STATUS_OVERRIDE": "yes",
            "PRINTSHOP_LOG_LEVEL": "debug",
            "PRINTSHOP_LOG_JSON": "1",
            "PRINTSHOP_CURRENCY": "eur",
        }
    )
    assert settings.data_dir == Path("/srv/printshop")
    assert settings.allow_status_override is True
    assert settings.log_level == "DEBUG"
    assert settings.log_json is True
    assert settings.currency == "EUR"


def test_unrecognised_flag_value_is_false():
    assert Settings.from_env({"PRINTSHOP_ALLOW_STATUS_OVERRIDE": "maybe"}).allow_status_override is False


def test_unknown_log_level():
    with pytest.raises(ValueError, match="log level"):
        Settings.from_env({"PRINTSHOP_LOG_LEVEL": "LOUD"})
