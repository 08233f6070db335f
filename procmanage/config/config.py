"""
Loading of YAML configuration files with environment variable overrides.

Environment Variable Override Format:
    PROCMANAGE_<SECTION>_<KEY>=value

Examples:
    PROCMANAGE_LOGGING_LEVEL=debug
    PROCMANAGE_PROCESS_KILL_SIGNAL=SIGTERM

Keys are split on the first underscore after the section, so a key may itself
contain underscores (kill_signal, insert_path_as_argv0).
"""

import os
from pathlib import Path
from typing import Any

import yaml

from ..exceptions import ConfigError
from .constants import DEFAULT_ENV_PREFIX, MAX_CONFIG_SIZE_BYTES


def _check_file_size(fname_path: Path) -> None:
    """Reject configuration files above MAX_CONFIG_SIZE_BYTES."""
    file_size = os.path.getsize(fname_path)
    if file_size > MAX_CONFIG_SIZE_BYTES:
        raise ConfigError(
            "configuration file too large",
            path=str(fname_path),
            size=file_size,
            limit=MAX_CONFIG_SIZE_BYTES,
        )


def _convert_env_value(value: str) -> bool | int | float | str | list | None:
    """
    Convert an environment variable string to an appropriate type.

    null/none/empty become None, true/false become bool, comma-separated values
    become lists, numeric strings become int or float.
    """
    if value.lower() in ("null", "none", ""):
        return None

    if value.lower() in ("true", "false"):
        return value.lower() == "true"

    if "," in value:
        return [_convert_env_value(v.strip()) for v in value.split(",")]

    try:
        if "." in value:
            return float(value)
        return int(value)
    except ValueError:
        pass

    return value


def _env_key_to_path(env_key: str, env_prefix: str) -> list[str]:
    """
    Convert an environment variable key to a configuration path.

    PROCMANAGE_PROCESS_KILL_SIGNAL -> ['process', 'kill_signal']
    """
    rest = env_key[len(env_prefix) :].lower()
    section, _, key = rest.partition("_")
    return [section, key] if key else [section]


def _set_nested_value(data: dict, path: list[str], value: Any) -> None:
    current = data
    for part in path[:-1]:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]
    current[path[-1]] = value


def collect_env_overrides(env_prefix: str = DEFAULT_ENV_PREFIX) -> dict[str, Any]:
    """
    Environment overrides that load_config() would apply, keyed by dotted path.

    Only <PREFIX><SECTION>_<KEY> variables count; a bare section is ignored.

    Example:
        >>> os.environ["PROCMANAGE_LOGGING_LEVEL"] = "debug"
        >>> collect_env_overrides()
        {'logging.level': 'debug'}
    """
    overrides = {}
    for key, value in os.environ.items():
        if key.startswith(env_prefix) and len(key) > len(env_prefix):
            path = _env_key_to_path(key, env_prefix)
            if len(path) < 2:
                continue
            overrides[".".join(path)] = _convert_env_value(value)
    return overrides


def load_config(
    fname: str | Path,
    enable_env_overrides: bool = True,
    env_prefix: str = DEFAULT_ENV_PREFIX,
) -> dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        fname: Path to the YAML configuration file
        enable_env_overrides: Whether to apply environment variable overrides
        env_prefix: Prefix for environment variables (default: 'PROCMANAGE_')

    Returns:
        Configuration dictionary (empty when the file is empty)

    Raises:
        ConfigError: If the file is missing, too large, malformed, or its top
            level is not a mapping
    """
    fname_path = Path(fname).resolve()
    if not fname_path.is_file():
        raise ConfigError("configuration file not found", path=str(fname_path))
    _check_file_size(fname_path)

    with open(fname_path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(
                "invalid YAML in configuration file", path=str(fname_path)
            ) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(
            "configuration root must be a mapping",
            path=str(fname_path),
            type=type(data).__name__,
        )

    if enable_env_overrides:
        for dotted, value in collect_env_overrides(env_prefix).items():
            _set_nested_value(data, dotted.split("."), value)

    return data
