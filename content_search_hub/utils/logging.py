"""Logging configuration."""

import logging
import sys
from typing import Any

ROOT_LOGGER_NAME = "content_search_hub"


def configure_logging(log_level: str = "INFO") -> logging.Logger:
    """
    Configure logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger instance
    """
    # Convert string log level to logging constant
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    # Configure root logger
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(numeric_level)

    # Configure handler
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)

    # Configure formatter
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)

    # Replace handlers from an earlier call instead of stacking them
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a module logger that lives under the application logger."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def log_query(
    logger: logging.Logger,
    query: dict[str, Any],
    policy: dict[str, Any] | None = None,
):
    """
    Log query information.

    Args:
        logger: Logger instance
        query: Query information
        policy: Optional merge policy in effect
    """
    logger.info(f"Query: {query}")
    if policy:
        logger.debug(f"Merge policy: {policy}")


def log_results(logger: logging.Logger, results: dict[str, Any]):
    """
    Log result information.

    Args:
        logger: Logger instance
        results: Result information
    """
    logger.info(f"Total results: {results.get('total_results', 0)}")
    logger.debug(f"Results: {results}")
