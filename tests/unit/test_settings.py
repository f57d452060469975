"""
Unit tests for the settings module in the tmconvert package.
"""

import pytest
from pydantic import ValidationError

from tmconvert import settings as settings_module
from tmconvert.settings import (
    ConversionSettings,
    LoggingSettings,
    Settings,
    print_config,
    reload_settings,
)


@pytest.mark.smoke
def test_defaults():
    config = Settings()

    assert config.logging == LoggingSettings()
    assert config.conversion.input_suffix == ".in"
    assert config.conversion.output_suffix == ".out"
    assert config.conversion.default_input == "example.in"
    assert config.conversion.blank == "_"
    assert config.conversion.boundary_marker == "#"


@pytest.mark.sanity
def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("TMCONVERT__CONVERSION__BOUNDARY_MARKER", "@")
    monkeypatch.setenv("TMCONVERT__LOGGING__CONSOLE_LOG_LEVEL", "DEBUG")

    config = Settings()

    assert config.conversion.boundary_marker == "@"
    assert config.logging.console_log_level == "DEBUG"


@pytest.mark.sanity
@pytest.mark.parametrize("field", ["blank", "boundary_marker"])
def test_single_character_fields(field):
    with pytest.raises(ValidationError):
        ConversionSettings(**{field: "##"})


@pytest.mark.smoke
def test_generate_env_file():
    env_file = Settings().generate_env_file()

    assert 'TMCONVERT__CONVERSION__INPUT_SUFFIX=".in"' in env_file
    assert "TMCONVERT__CONVERSION__EXTRA_SYMBOLS=\n" in env_file
    assert "TMCONVERT__LOGGING__LOG_FILE=\n" in env_file


@pytest.mark.sanity
def test_reload_settings(monkeypatch):
    monkeypatch.setenv("TMCONVERT__CONVERSION__DEFAULT_INPUT", "other.in")
    reload_settings()
    try:
        assert settings_module.settings.conversion.default_input == "other.in"
    finally:
        monkeypatch.delenv("TMCONVERT__CONVERSION__DEFAULT_INPUT")
        reload_settings()

    assert settings_module.settings.conversion.default_input == "example.in"


@pytest.mark.smoke
def test_print_config(capsys):
    print_config()

    assert "TMCONVERT__CONVERSION__OUTPUT_SUFFIX" in capsys.readouterr().out


@pytest.mark.sanity
@pytest.mark.parametrize("extra_symbols", [";", "ab*", "a b"])
def test_extra_symbols_must_be_writable(extra_symbols):
    with pytest.raises(ValidationError, match="Extra symbols cannot contain"):
        ConversionSettings(extra_symbols=extra_symbols)


@pytest.mark.smoke
def test_extra_symbols_accepted():
    assert ConversionSettings(extra_symbols="abc").extra_symbols == "abc"
