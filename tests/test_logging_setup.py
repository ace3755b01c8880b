"""Tests for CLI logging configuration."""

import logging

import pytest
from pythonjsonlogger import jsonlogger

from ledgerkit.cli.logging_setup import setup_logging


@pytest.fixture
def restore_root_logger():
    handlers = logging.root.handlers[:]
    level = logging.root.level
    yield
    logging.root.handlers = handlers
    logging.root.setLevel(level)


def test_default_logging(restore_root_logger):
    """Test plain-text logging at WARNING."""
    setup_logging()

    assert logging.root.level == logging.WARNING
    assert len(logging.root.handlers) == 1
    assert not isinstance(logging.root.handlers[0].formatter, jsonlogger.JsonFormatter)


def test_verbose_json_logging(restore_root_logger):
    """Test JSON lines at DEBUG."""
    setup_logging(verbose=True, json_output=True)

    assert logging.root.level == logging.DEBUG
    assert isinstance(logging.root.handlers[0].formatter, jsonlogger.JsonFormatter)
