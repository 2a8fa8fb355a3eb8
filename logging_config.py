"""
Logging configuration for the handover service.

This module provides a centralized configuration for all loggers in the application.
It allows setting different log levels for different components and configuring
formatters and handlers.
"""

import os
import logging
from typing import Dict

_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"

_COMPONENT_LOGGERS = [
    "services.application",
    "repositories",
    "routes",
    "handover.startup",
    "sqlalchemy.engine",
]


def configure_logging():
    """Configure logging for the application."""
    # Get log level from environment variable
    log_level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_name, logging.INFO)

    # Configure root logger
    logging.basicConfig(level=log_level, format=_FORMAT)

    # Configure specific loggers
    loggers_config = {
        # Handover services and data access
        "services.application": os.getenv("LOG_LEVEL_HANDOVER", log_level_name).upper(),
        "repositories": os.getenv("LOG_LEVEL_HANDOVER", log_level_name).upper(),
        "routes": os.getenv("LOG_LEVEL_HANDOVER", log_level_name).upper(),

        # SQL statements - WARNING unless explicitly raised
        "sqlalchemy.engine": os.getenv("LOG_LEVEL_SQL", "WARNING").upper(),

        # Startup loggers
        "handover.startup": os.getenv("LOG_LEVEL_STARTUP", "INFO").upper(),
    }

    # Apply configuration to loggers
    for logger_name, level_name in loggers_config.items():
        logger = logging.getLogger(logger_name)
        level = getattr(logging, level_name, log_level)
        logger.setLevel(level)


def get_logger_levels() -> Dict[str, str]:
    """Get current log levels for all configured loggers."""
    result = {}

    # Add root logger
    result["root"] = logging.getLevelName(logging.getLogger().level)

    # Add specific loggers
    for logger_name in _COMPONENT_LOGGERS:
        logger = logging.getLogger(logger_name)
        result[logger_name] = logging.getLevelName(logger.level)

    return result
