"""
Configuration package.

This module provides:
- load_config() for reading YAML files with environment overrides
- ProcessOptions describing per-process spawn and teardown behavior
"""

from .config import collect_env_overrides, load_config
from .constants import (
    DEFAULT_ENV_PREFIX,
    DEFAULT_EXEC_FAILURE_STATUS,
    MAX_CONFIG_SIZE_BYTES,
)
from .options import ProcessOptions, resolve_signal

__all__ = [
    "load_config",
    "collect_env_overrides",
    "ProcessOptions",
    "resolve_signal",
    "DEFAULT_ENV_PREFIX",
    "DEFAULT_EXEC_FAILURE_STATUS",
    "MAX_CONFIG_SIZE_BYTES",
]
