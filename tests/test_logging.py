"""Tests for logging utilities."""

import logging
from io import StringIO

import numpy as np
import pytest

from moltransport.integrate import IntegratorConfig, integrate
from moltransport.logging import (
    configure_logging,
    get_logger,
    set_log_level,
)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    configure_logging(level=logging.WARNING)


@pytest.fixture
def captured():
    """Route every moltransport logger to an in-memory stream."""
    stream = StringIO()
    configure_logging(level=logging.DEBUG, stream=stream)
    return stream


def test_loggers_are_namespaced_and_cached():
    logger = get_logger("bench")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "moltransport.bench"
    assert get_logger("bench") is logger
    assert get_logger("other") is not logger


def test_package_names_are_not_prefixed_twice():
    assert get_logger("moltransport.integrate").name == "moltransport.integrate"
    assert get_logger().name == "moltransport"


def test_loggers_do_not_propagate():
    assert get_logger("bench").propagate is False


def test_message_format(captured):
    get_logger("bench").info("sampled %d states", 31)
    assert captured.getvalue() == "[INFO] moltransport.bench: sampled 31 states\n"


def test_custom_format_string():
    stream = StringIO()
    configure_logging(level="INFO", format_string="%(levelname)s|%(message)s", stream=stream)
    get_logger("bench").warning("step floor reached")
    assert stream.getvalue() == "WARNING|step floor reached\n"


@pytest.mark.parametrize(
    "level, expected",
    [(logging.INFO, logging.INFO), ("debug", logging.DEBUG), ("ERROR", logging.ERROR), ("bogus", logging.WARNING)],
)
def test_set_log_level_accepts_names_and_constants(level, expected):
    logger = get_logger("bench")
    set_log_level(level)
    assert logger.level == expected
    assert all(handler.level == expected for handler in logger.handlers)


def test_level_filters_messages(captured):
    set_log_level("WARNING")
    logger = get_logger("bench")
    logger.info("hidden")
    logger.warning("shown")

    output = captured.getvalue()
    assert "hidden" not in output
    assert "shown" in output


def test_configure_logging_applies_to_new_loggers(captured):
    get_logger("created_after_configure").debug("late logger")
    assert "late logger" in captured.getvalue()


def test_integrator_reports_summary_at_info_level(captured):
    set_log_level("INFO")
    integrate(lambda t, y: -y, np.ones(2), 0.0, 1.0)

    output = captured.getvalue()
    assert "moltransport.integrate.adaptive" in output
    assert "accepted" in output
    assert "step rejected" not in output


def test_integrator_logs_rejections_at_debug_level(captured):
    integrate(
        lambda t, y: -y,
        np.ones(2),
        0.0,
        5.0,
        atol=1e-10,
        rtol=1e-8,
        config=IntegratorConfig(first_step=5.0),
    )
    assert "[DEBUG] moltransport.integrate.adaptive: step rejected" in captured.getvalue()
