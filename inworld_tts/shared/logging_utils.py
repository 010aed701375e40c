"""
Logging utilities for the client and CLI.
"""
import logging


def setup_logging(service_name: str, log_level: str = "INFO") -> logging.Logger:
    """
    Setup logging configuration for a component.

    Args:
        service_name: Name of the component for log identification
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(service_name)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            f'%(asctime)s - {service_name} - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def set_log_level(log_level: str, *service_names: str) -> None:
    """Change the level of already configured component loggers."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    for name in service_names:
        logging.getLogger(name).setLevel(level)
