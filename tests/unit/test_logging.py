"""
Unit tests for the logging setup of the tmconvert package.
"""

import json

import pytest

from tmconvert.logging import configure_logger, logger
from tmconvert.settings import LoggingSettings


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    configure_logger()


@pytest.mark.smoke
def test_default_configuration_adds_console_sink():
    handlers = configure_logger(LoggingSettings())

    assert len(handlers) == 1


@pytest.mark.sanity
def test_file_sink_writes_json(tmp_path):
    log_file = tmp_path / "conversion.log"
    handlers = configure_logger(
        LoggingSettings(console_log_level="ERROR", log_file=str(log_file))
    )
    assert len(handlers) == 2

    logger.info("converted machine")
    logger.remove(handlers[1])

    records = [
        json.loads(line)
        for line in log_file.read_text(encoding="utf-8").splitlines()
    ]
    assert [record["record"]["message"] for record in records] == [
        "converted machine"
    ]
    assert records[0]["record"]["level"]["name"] == "INFO"


@pytest.mark.sanity
def test_file_level_respected(tmp_path):
    log_file = tmp_path / "conversion.log"
    handlers = configure_logger(
        LoggingSettings(log_file=str(log_file), log_file_level="warning")
    )

    logger.info("skipped")
    logger.warning("kept")
    logger.remove(handlers[1])

    content = log_file.read_text(encoding="utf-8")
    assert "kept" in content
    assert "skipped" not in content


@pytest.mark.smoke
def test_disabled():
    assert configure_logger(LoggingSettings(disabled=True)) == []
