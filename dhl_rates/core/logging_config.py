# dhl_rates/core/logging_config.py
"""
Centralized logging configuration for the rate quoting package.

Keeps quote pipeline logs visible while quieting the HTTP client libraries,
which log every request at INFO.
"""

import logging

from dhl_rates.core.config import get_settings


def configure_logging(log_level: str = None):
    """
    Configure logging for the application.

    Sets appropriate log levels for different modules:
    - Package code: INFO (or whatever LOG_LEVEL says)
    - HTTP clients (httpx, httpcore): WARNING only
    """
    log_level = (log_level or get_settings().LOG_LEVEL).upper()
    level = getattr(logging, log_level, logging.INFO)

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )

    # Quiet noisy HTTP client loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logging.getLogger("dhl_rates").setLevel(level)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured at level: {log_level}")
