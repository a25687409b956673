"""
Configuration helpers: prefixed environment variables and JSON/YAML files.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_ENV_PREFIX = "GEARS_"

_TRUE_VALUES = ('true', '1', 'yes', 'on')


def load_config_from_env(prefix: str = DEFAULT_ENV_PREFIX) -> Dict[str, str]:
    """
    Collect the environment variables starting with prefix.

    Keys lose the prefix and are lowercased, so GEARS_SQL_DIALECT becomes
    sql_dialect. Values stay strings; see cast_value().
    """
    return {
        key[len(prefix):].lower(): value
        for key, value in os.environ.items()
        if key.startswith(prefix)
    }


def cast_value(value: Any, cast_type: Optional[type], default: Any = None) -> Any:
    """Cast a raw setting to cast_type, or return default when it can not be cast."""
    if value is None or cast_type is None:
        return value

    try:
        if cast_type is bool:
            if isinstance(value, str):
                return value.lower() in _TRUE_VALUES
            return bool(value)
        return cast_type(value)
    except (ValueError, TypeError):
        return default


def get_config_value(key: str, default: Any = None,
                     cast_type: Optional[type] = None,
                     env_prefix: str = DEFAULT_ENV_PREFIX) -> Any:
    """Read one prefixed environment variable, cast to cast_type."""
    value = os.environ.get(f"{env_prefix}{key.upper()}", default)
    return cast_value(value, cast_type, default)


def get_bool_config(key: str, default: bool = False,
                    env_prefix: str = DEFAULT_ENV_PREFIX) -> bool:
    return get_config_value(key, default, bool, env_prefix)


def get_int_config(key: str, default: int = 0,
                   env_prefix: str = DEFAULT_ENV_PREFIX) -> int:
    return get_config_value(key, default, int, env_prefix)


def merge_configs(*configs: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Merge configuration dicts; later ones win and None is skipped."""
    result: Dict[str, Any] = {}
    for config in configs:
        if config:
            result.update(config)
    return result


def load_config_file(file_path: str) -> Dict[str, Any]:
    """Load a JSON or YAML configuration file (chosen by extension)."""
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    suffix = path.suffix.lower()
    with path.open('r', encoding='utf-8') as f:
        if suffix == '.json':
            return json.load(f)
        if suffix in ('.yaml', '.yml'):
            return yaml.safe_load(f) or {}

    raise ValueError(f"Unsupported configuration file format: {suffix}")
