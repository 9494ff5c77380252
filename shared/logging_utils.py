"""
Logging utilities for the clock service.
"""
import logging

from shared.config import config


def setup_logging(service_name: str, log_level: str | None = None) -> logging.Logger:
    """
    Setup logging configuration for a component.

    Args:
        service_name: Name of the component for log identification
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Falls back to the LOG_LEVEL setting.

    Returns:
        Configured logger instance
    """
    level_name = (log_level or config.get("log_level", "INFO")).upper()
    logger = logging.getLogger(service_name)
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            f'%(asctime)s - {service_name} - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
