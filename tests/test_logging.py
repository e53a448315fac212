"""Tests for logging utilities."""

import logging
import sys
from io import StringIO

from boxjenkins.logging import (
    configure_logging,
    get_logger,
    set_log_level,
)
from boxjenkins.timeseries import Model


def test_get_logger_returns_logger():
    """Test that get_logger returns a namespaced logger instance."""
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name.startswith("boxjenkins.")


def test_get_logger_keeps_package_names():
    """Test that module names inside the package are not prefixed twice."""
    logger = get_logger("boxjenkins.timeseries.models")
    assert logger.name == "boxjenkins.timeseries.models"
    assert get_logger().name == "boxjenkins"


def test_get_logger_caching():
    """Test that get_logger caches loggers."""
    logger1 = get_logger("test_module")
    logger2 = get_logger("test_module")
    assert logger1 is logger2


def test_get_logger_different_modules():
    """Test that different modules get different loggers."""
    logger1 = get_logger("module1")
    logger2 = get_logger("module2")
    assert logger1 is not logger2
    assert logger1.name != logger2.name


def test_logger_output():
    """Test that logger outputs messages correctly."""
    old_stderr = sys.stderr
    sys.stderr = captured = StringIO()

    try:
        configure_logging(level=logging.INFO, stream=captured)
        logger = get_logger("test_module")
        logger.info("Test message")

        output = captured.getvalue()
        assert "Test message" in output
        assert "test_module" in output
    finally:
        sys.stderr = old_stderr
        configure_logging(level=logging.WARNING)


def test_set_log_level():
    """Test that set_log_level updates logger levels."""
    logger = get_logger("test_module")

    set_log_level(logging.INFO)
    assert logger.level <= logging.INFO

    set_log_level(logging.WARNING)
    assert logger.level <= logging.WARNING


def test_set_log_level_string():
    """Test that set_log_level accepts string levels."""
    logger = get_logger("test_module")

    try:
        set_log_level("DEBUG")
        assert logger.level == logging.DEBUG

        set_log_level("ERROR")
        assert logger.level == logging.ERROR
    finally:
        set_log_level(logging.WARNING)


def test_configure_logging():
    """Test configure_logging function."""
    stream = StringIO()
    try:
        configure_logging(level=logging.DEBUG, stream=stream)

        logger = get_logger("test_module")
        logger.debug("Debug message")

        assert "Debug message" in stream.getvalue()
    finally:
        configure_logging(level=logging.WARNING)


def test_configure_logging_format_string():
    """Test that a custom format string is applied."""
    stream = StringIO()
    try:
        configure_logging(level="INFO", format_string="%(levelname)s|%(message)s", stream=stream)
        get_logger("test_module").info("formatted")

        assert "INFO|formatted" in stream.getvalue()
    finally:
        configure_logging(level=logging.WARNING)


def test_fit_logs_at_info_level(ar2_series):
    """Test that fitting a model reports through the package loggers."""
    get_logger("boxjenkins.timeseries.models")
    stream = StringIO()
    try:
        configure_logging(level=logging.INFO, stream=stream)
        model = Model.autoregressive(2)
        model.fit(ar2_series[:180])
        model.predict(3)

        output = stream.getvalue()
        assert "fitted on 180 observation(s)" in output
        assert "predicted 3 step(s)" in output
    finally:
        configure_logging(level=logging.WARNING)


def test_logger_does_not_propagate():
    """Test that loggers don't propagate to root logger."""
    logger = get_logger("test_module")
    assert logger.propagate is False


def test_multiple_loggers_independent():
    """Test that multiple loggers work independently."""
    logger1 = get_logger("module1")
    logger2 = get_logger("module2")

    logger1.setLevel(logging.DEBUG)
    logger2.setLevel(logging.ERROR)

    assert logger1.level == logging.DEBUG
    assert logger2.level == logging.ERROR
