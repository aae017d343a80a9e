"""Tests for logging configuration."""

import logging

from nutrition_coach.app_logging import LOGGER_NAME, configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging(logging.DEBUG)
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1
    assert logger.level == logging.DEBUG


def test_service_loggers_propagate_to_package_logger() -> None:
    package_logger = logging.getLogger(LOGGER_NAME)
    logger = logging.getLogger("nutrition_coach.services.streaks")

    assert logger.parent is package_logger
