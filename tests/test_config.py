import json
from datetime import timedelta

import pytest

from kafka_console.config import ConsoleConfig, load_config
from kafka_console.errors import ConfigurationError


@pytest.fixture
def settings_file(tmp_path):
    def _write(settings):
        path = tmp_path / "appsettings.json"
        path.write_text(json.dumps(settings))
        return str(path)

    return _write


def test_loads_settings_file(settings_file):
    path = settings_file({"bootstrapServer": "broker:9092", "timeout": 10})

    config = load_config(path, environ={})

    assert config.bootstrap_server == "broker:9092"
    assert config.timeout == 10.0
    assert config.timeout_delta == timedelta(seconds=10)
    assert config.log_level == "WARNING"


def test_timeout_accepts_numeric_string(settings_file):
    path = settings_file({"bootstrapServer": "broker:9092", "timeout": "2.5"})

    assert load_config(path, environ={}).timeout == 2.5


def test_environment_overrides_file(settings_file):
    path = settings_file({"bootstrapServer": "broker:9092", "timeout": 10})
    environ = {
        "KAFKA_BOOTSTRAP_SERVER": "other:9093",
        "KAFKA_TIMEOUT": "3",
        "KAFKA_CONSOLE_LOG_LEVEL": "debug",
    }

    config = load_config(path, environ=environ)

    assert config.bootstrap_server == "other:9093"
    assert config.timeout == 3.0
    assert config.log_level == "DEBUG"


def test_missing_file_uses_environment(tmp_path):
    environ = {"KAFKA_BOOTSTRAP_SERVER": "broker:9092", "KAFKA_TIMEOUT": "5"}

    config = load_config(str(tmp_path / "absent.json"), environ=environ)

    assert config.bootstrap_server == "broker:9092"


def test_settings_path_from_environment(settings_file):
    path = settings_file({"bootstrapServer": "broker:9092", "timeout": 1})

    config = load_config(environ={"KAFKA_CONSOLE_SETTINGS": path})

    assert config.timeout == 1.0


def test_broker_address_is_not_interpreted(settings_file):
    path = settings_file({"bootstrapServer": "not a host at all", "timeout": 1})

    assert load_config(path, environ={}).bootstrap_server == "not a host at all"


@pytest.mark.parametrize("timeout", ["ten", "", None, 0, -1, True, [5]])
def test_invalid_timeout_fails(settings_file, timeout):
    settings = {"bootstrapServer": "broker:9092"}
    if timeout is not None:
        settings["timeout"] = timeout
    path = settings_file(settings)

    with pytest.raises(ConfigurationError):
        load_config(path, environ={})


def test_missing_bootstrap_server_fails(settings_file):
    path = settings_file({"timeout": 10})

    with pytest.raises(ConfigurationError, match="bootstrapServer"):
        load_config(path, environ={})


def test_malformed_settings_file_fails(tmp_path):
    path = tmp_path / "appsettings.json"
    path.write_text("{not json")

    with pytest.raises(ConfigurationError, match="Invalid JSON"):
        load_config(str(path), environ={})


def test_config_is_read_only():
    config = ConsoleConfig(bootstrap_server="broker:9092", timeout=1.0)

    with pytest.raises(AttributeError):
        config.timeout = 2.0


def test_client_config():
    config = ConsoleConfig(bootstrap_server="broker:9092", timeout=1.0)

    assert config.client_config() == {
        "bootstrap.servers": "broker:9092",
        "client.id": "kafka-console",
    }


def test_unknown_log_level_fails(settings_file):
    path = settings_file({"bootstrapServer": "broker:9092", "timeout": 1, "logLevel": "chatty"})

    with pytest.raises(ConfigurationError, match="log level"):
        load_config(path, environ={})
