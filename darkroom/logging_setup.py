"""
Logging configuration for the darkroom tool.
"""

import logging
import os
import sys
from .config import AppConfig


def setup_logging(config: AppConfig) -> None:
    """
    Configure logging based on settings.

    Args:
        config: Application configuration
    """
    log_level = logging.DEBUG if config.debug_mode else getattr(logging, config.log_level)
    log_format = '%(asctime)s - %(levelname)s - %(message)s'

    log_file = config.log_file

    if log_file:
        # Create directory for log file if it doesn't exist
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)

        logging.basicConfig(
            filename=log_file,
            level=log_level,
            format=log_format
        )

        # Also log to console if debug mode is enabled
        if config.debug_mode:
            console = logging.StreamHandler(sys.stderr)
            console.setLevel(log_level)
            console.setFormatter(logging.Formatter(log_format))
            logging.getLogger('').addHandler(console)
    else:
        logging.basicConfig(
            level=log_level,
            format=log_format
        )

    # Pillow logs every plugin it probes at DEBUG
    logging.getLogger('PIL').setLevel(logging.WARNING)

    if config.debug_mode:
        logging.debug("Debug mode enabled")
        logging.debug(f"Python version: {sys.version}")
        logging.debug(f"Platform: {sys.platform}")
        logging.debug(f"Configuration summary:")
        logging.debug(f"  ImageMagick binary: {config.magick_binary}")
        logging.debug(f"  Border: {config.border_percent}% {config.border_color}")
        logging.debug(f"  Fill color: {config.fill_color}")
        logging.debug(f"  Keep intermediates: {config.keep_intermediates}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name.

    Args:
        name: Name for the logger

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
