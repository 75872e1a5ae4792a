"""Utility functions for iconx"""

import logging
import os


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def get_int_env(key: str) -> int:
    """Get integer value from environment variable, return 0 if not set or invalid."""
    val = os.getenv(key)
    if val is None:
        return 0
    try:
        return int(val)
    except ValueError:
        return 0


def get_str_env(key: str, default: str) -> str:
    """
    Get string from environment variable, return default if not set.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        String value or default
    """
    return os.getenv(key, default)


def setup_logging(level_name: str | None = None) -> int:
    """Configure root logging from ICONX_LOG_LEVEL (or an explicit level name).

    Returns:
        The numeric level that was applied
    """
    if level_name is None:
        level_name = get_str_env('ICONX_LOG_LEVEL', 'INFO')
    log_level = getattr(logging, level_name.upper(), logging.INFO)
    if not isinstance(log_level, int):
        log_level = logging.INFO
    logging.basicConfig(level=log_level, format=LOG_FORMAT)
    logging.getLogger('sh').setLevel(logging.WARNING)
    return log_level


def human_readable_size(size_bytes: int) -> str:
    """Convert bytes to human-readable format."""
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size_bytes < 1024:
            return f'{size_bytes:.2f} {unit}'
        size_bytes /= 1024
    return f'{size_bytes:.2f} PB'
