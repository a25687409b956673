"""
Configuration module for Gears.
"""

import logging
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict

from ..util.config import (
    DEFAULT_ENV_PREFIX, cast_value, load_config_file, load_config_from_env, merge_configs,
)

SUPPORTED_DIALECTS = ("sqlite", "mysql")


@dataclass
class Config:
    """Configuration for the Gears services (crypto, event store, helpers)"""
    secret: str = ""
    event_store_table: str = "events"
    event_store_use_binary: bool = False
    sql_dialect: str = "sqlite"
    directory_separator: str = "/"
    json_depth: int = 512
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, prefix: str = DEFAULT_ENV_PREFIX) -> "Config":
        """Create configuration from environment variables, e.g. GEARS_SQL_DIALECT=mysql"""
        defaults = asdict(cls())
        overrides = {
            key: cast_value(value, type(defaults[key]), defaults[key])
            for key, value in load_config_from_env(prefix).items()
            if key in defaults
        }
        return cls.from_dict(merge_configs(defaults, overrides))

    @classmethod
    def from_file(cls, file_path: str) -> "Config":
        """Create configuration from a JSON or YAML file, unknown keys are ignored"""
        return cls.from_dict(load_config_file(file_path))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    def validate(self) -> bool:
        """Validate the configuration"""
        if not self.event_store_table:
            raise ValueError("event_store_table is required")
        if self.sql_dialect not in SUPPORTED_DIALECTS:
            raise ValueError(f"sql_dialect must be one of: {SUPPORTED_DIALECTS}")
        if not self.directory_separator:
            raise ValueError("directory_separator is required")
        if self.json_depth < 1:
            raise ValueError("json_depth must be >= 1")
        if logging.getLevelName(self.log_level.upper()) == f"Level {self.log_level.upper()}":
            raise ValueError(f"Unknown log_level: {self.log_level}")
        return True

    def configure_logging(self) -> logging.Logger:
        """Apply log_level to the library logger"""
        logger = logging.getLogger("gears")
        logger.setLevel(self.log_level.upper())
        return logger
