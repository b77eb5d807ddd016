"""
Configuration handling for the darkroom tool.
"""

import json
import os
from dataclasses import dataclass, fields
from typing import Optional, Dict, Any


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class AppConfig:
    """Main application configuration."""
    magick_binary: str = "magick"
    fill_color: str = "white"
    border_color: str = "white"
    border_percent: float = 5.0  # Percent of the longer canvas side
    caption_background: str = "white"
    caption_color: str = "grey25"
    caption_font: Optional[str] = None
    caption_kerning: int = 1
    caption_interline_spacing: int = 5
    caption_delimiter: str = " · "
    require_metadata: bool = False  # Fail instead of skipping an empty caption
    keep_intermediates: bool = False
    show_progress: bool = False
    log_level: str = "INFO"
    log_file: Optional[str] = None
    debug_mode: bool = False


def validate_config(config: AppConfig) -> AppConfig:
    """
    Check configuration values that cannot be expressed through types alone.

    Args:
        config: Configuration to validate

    Returns:
        The same configuration, for chaining

    Raises:
        ValueError: If a value is out of range
    """
    config.log_level = str(config.log_level).upper()
    if config.log_level not in LOG_LEVELS:
        raise ValueError(f"Unsupported log level: {config.log_level}")
    if config.border_percent < 0:
        raise ValueError(f"border_percent must not be negative, got {config.border_percent}")
    if not config.magick_binary:
        raise ValueError("magick_binary must not be empty")
    return config


def load_config(config_path: str) -> AppConfig:
    """
    Load and validate configuration from a JSON file.

    The file is only read; nothing is ever written back.

    Args:
        config_path: Path to the configuration JSON file

    Returns:
        AppConfig object

    Raises:
        ValueError: If the configuration is invalid
        RuntimeError: If the configuration file cannot be loaded
    """
    config_path = os.path.abspath(os.path.expanduser(config_path))

    try:
        with open(config_path, 'r') as cfg:
            config_dict = json.load(cfg)
    except (json.JSONDecodeError, IOError) as e:
        raise RuntimeError(f"Failed to load configuration from {config_path}: {str(e)}")

    if not isinstance(config_dict, dict):
        raise ValueError(f"Configuration in {config_path} must be a JSON object")

    return validate_config(config_from_dict(config_dict))


def config_from_dict(config_dict: Dict[str, Any]) -> AppConfig:
    """Build an AppConfig, rejecting keys it does not know about."""
    known = {f.name for f in fields(AppConfig)}
    unknown = sorted(set(config_dict) - known)
    if unknown:
        raise ValueError(f"Unknown configuration field(s): {', '.join(unknown)}")
    return AppConfig(**config_dict)
