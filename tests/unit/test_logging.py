"""Unit tests for polyembed.utils.logging."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from polyembed.utils.logging import configure_logging, get_logger


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


def test_json_output_goes_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(log_level="INFO", json_output=True)
    structlog.get_logger(logger_name="test").info("provider_selected", provider="ollama")

    captured = capsys.readouterr()
    assert captured.out == ""
    record = json.loads(captured.err.strip().splitlines()[-1])
    assert record["event"] == "provider_selected"
    assert record["provider"] == "ollama"
    assert record["level"] == "info"


def test_level_filtering(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(log_level="WARNING", json_output=True)
    logger = structlog.get_logger()
    logger.info("hidden")
    logger.warning("shown")

    err = capsys.readouterr().err
    assert "hidden" not in err
    assert "shown" in err


def test_get_logger_configures_on_first_use() -> None:
    structlog.reset_defaults()
    assert not structlog.is_configured()
    get_logger(__name__)
    assert structlog.is_configured()
