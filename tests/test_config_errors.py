"""
Tests for configuration loading and the error hierarchy.
"""

import json
import logging

import pytest

from gears import Config, ErrorCode, GearsError
from gears.errors import (
    AccessError, DuplicatePlayheadError, HandlerFailedError, InvalidArgumentError,
    JsonParseError, NoSuchPropertyError, StorageError, wrap_exception,
)
from gears.util.config import (
    cast_value, get_bool_config, get_config_value, get_int_config,
    load_config_file, load_config_from_env, merge_configs,
)


class TestConfig:
    """Test the Config dataclass."""

    def test_defaults(self):
        """Test default configuration values."""
        config = Config()
        assert config.secret == ""
        assert config.event_store_table == "events"
        assert config.event_store_use_binary is False
        assert config.sql_dialect == "sqlite"
        assert config.json_depth == 512
        assert config.validate()

    def test_from_env(self, monkeypatch):
        """Test reading configuration from prefixed environment variables."""
        monkeypatch.setenv("GEARS_SECRET", "s3cr3t")
        monkeypatch.setenv("GEARS_EVENT_STORE_USE_BINARY", "yes")
        monkeypatch.setenv("GEARS_JSON_DEPTH", "16")
        monkeypatch.setenv("GEARS_SQL_DIALECT", "mysql")

        config = Config.from_env()

        assert config.secret == "s3cr3t"
        assert config.event_store_use_binary is True
        assert config.json_depth == 16
        assert config.sql_dialect == "mysql"

    def test_from_env_invalid_int_falls_back(self, monkeypatch):
        """Test that a malformed integer keeps the default."""
        monkeypatch.setenv("GEARS_JSON_DEPTH", "deep")
        assert Config.from_env().json_depth == 512

    def test_from_env_ignores_unknown_keys(self, monkeypatch):
        """Test that prefixed variables without a matching setting are skipped."""
        monkeypatch.setenv("GEARS_UNKNOWN", "1")
        monkeypatch.setenv("GEARS_EVENT_STORE_TABLE", "domain_events")

        config = Config.from_env()

        assert config.event_store_table == "domain_events"
        assert not hasattr(config, "unknown")

    def test_from_yaml_file(self, tmp_path):
        """Test loading configuration from a YAML file."""
        path = tmp_path / "gears.yaml"
        path.write_text("secret: abc\nevent_store_table: domain_events\nunknown: 1\n")

        config = Config.from_file(str(path))

        assert config.secret == "abc"
        assert config.event_store_table == "domain_events"

    def test_from_json_file(self, tmp_path):
        """Test loading configuration from a JSON file."""
        path = tmp_path / "gears.json"
        path.write_text(json.dumps({"sql_dialect": "mysql"}))

        assert Config.from_file(str(path)).sql_dialect == "mysql"

    @pytest.mark.parametrize("field,value", [
        ("event_store_table", ""),
        ("sql_dialect", "oracle"),
        ("directory_separator", ""),
        ("json_depth", 0),
        ("log_level", "LOUD"),
    ])
    def test_validate_rejects(self, field, value):
        """Test that validate() rejects invalid values."""
        config = Config(**{field: value})
        with pytest.raises(ValueError):
            config.validate()

    def test_configure_logging(self):
        """Test that the log level is applied to the library logger."""
        logger = Config(log_level="debug").configure_logging()
        assert logger.name == "gears"
        assert logger.level == logging.DEBUG


class TestConfigUtils:
    """Test the configuration helpers."""

    def test_load_config_from_env(self, monkeypatch):
        monkeypatch.setenv("GEARS_FOO", "bar")
        assert load_config_from_env()["foo"] == "bar"

    def test_typed_values(self, monkeypatch):
        monkeypatch.setenv("GEARS_FLAG", "on")
        monkeypatch.setenv("GEARS_COUNT", "3")

        assert get_bool_config("flag") is True
        assert get_int_config("count") == 3
        assert get_config_value("missing", "default") == "default"

    def test_cast_value(self):
        assert cast_value("off", bool) is False
        assert cast_value("7", int) == 7
        assert cast_value("seven", int, 3) == 3
        assert cast_value("raw", None) == "raw"

    def test_merge_configs(self):
        assert merge_configs({"a": 1, "b": 1}, None, {"b": 2}) == {"a": 1, "b": 2}

    def test_load_config_file_errors(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config_file(str(tmp_path / "missing.yaml"))

        path = tmp_path / "config.ini"
        path.write_text("[section]")
        with pytest.raises(ValueError):
            load_config_file(str(path))


class TestErrors:
    """Test the error hierarchy."""

    def test_codes_and_builtin_families(self):
        """Test that errors carry their code and builtin base class."""
        error = InvalidArgumentError("bad")
        assert error.code == ErrorCode.INVALID_ARGUMENT
        assert isinstance(error, ValueError)
        assert isinstance(error, GearsError)

        assert isinstance(NoSuchPropertyError("x", path="a.b"), LookupError)
        assert isinstance(DuplicatePlayheadError("dup"), StorageError)

    def test_to_dict(self):
        """Test the dictionary representation."""
        cause = KeyError("id")
        error = AccessError("Cannot read", path="order.id", cause=cause)

        result = error.to_dict()

        assert result["error"] == "no_such_property"
        assert result["error_description"] == "Cannot read"
        assert result["metadata"] == {"path": "order.id"}
        assert "caused_by" in result
        assert error.__cause__ is cause

    def test_json_parse_error_message(self):
        assert str(JsonParseError()) == "Unable to parse response as JSON"
        assert str(JsonParseError("Syntax error")) == "Unable to parse response as JSON: Syntax error"

    def test_wrap_exception(self):
        original = OSError("disk full")
        wrapped = wrap_exception(original, ErrorCode.STORAGE_ERROR, "Unable to store")

        assert wrapped.code == ErrorCode.STORAGE_ERROR
        assert wrapped.cause is original

    def test_handler_failed_error(self):
        """Test that the first handler exception is exposed."""
        class Envelope:
            message = object()

        first, second = RuntimeError("first"), RuntimeError("second")
        error = HandlerFailedError(Envelope(), [first, second])

        assert error.get_previous() is first
        assert error.exceptions == [first, second]
        assert "first" in str(error)
