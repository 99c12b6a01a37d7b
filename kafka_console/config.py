"""
Configuration classes for the Kafka console
"""
import json
import logging
import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigurationError

DEFAULT_SETTINGS_FILE = 'appsettings.json'

# Environment variable -> settings file key
ENV_OVERRIDES = {
    'KAFKA_BOOTSTRAP_SERVER': 'bootstrapServer',
    'KAFKA_TIMEOUT': 'timeout',
    'KAFKA_CONSOLE_LOG_LEVEL': 'logLevel',
    'KAFKA_CLIENT_ID': 'clientId',
}


@dataclass(frozen=True)
class ConsoleConfig:
    """Connection settings shared by the producer and admin sessions"""

    # Connection
    bootstrap_server: str

    # Bound for every broker call, in seconds
    timeout: float

    log_level: str = 'WARNING'
    client_id: str = 'kafka-console'

    @property
    def timeout_delta(self) -> timedelta:
        return timedelta(seconds=self.timeout)

    def client_config(self) -> Dict[str, Any]:
        """Convert config to confluent-kafka client config dict"""
        return {
            'bootstrap.servers': self.bootstrap_server,
            'client.id': self.client_id,
        }


def _read_settings_file(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        return {}

    try:
        with open(path, 'r', encoding='utf-8') as f:
            settings = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in settings file {path}: {e}")
    except OSError as e:
        raise ConfigurationError(f"Cannot read settings file {path}: {e}")

    if not isinstance(settings, dict):
        raise ConfigurationError(f"Settings file {path} must contain a JSON object")
    return settings


def _parse_timeout(raw: Any) -> float:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise ConfigurationError("'timeout' is required")
    if isinstance(raw, bool):
        raise ConfigurationError(f"'timeout' must be numeric seconds, got {raw!r}")

    try:
        seconds = float(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"'timeout' must be numeric seconds, got {raw!r}")

    if not 0 < seconds < float('inf'):
        raise ConfigurationError(f"'timeout' must be positive, got {raw!r}")
    return seconds


def load_config(
        path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None
) -> ConsoleConfig:
    """
    Load the console configuration

    Values come from a JSON settings file (optional, ``appsettings.json`` by
    default or ``KAFKA_CONSOLE_SETTINGS``), then environment overrides.

    Args:
        path: Settings file path
        environ: Environment mapping, ``os.environ`` when omitted

    Raises:
        ConfigurationError: If the broker address or timeout is missing or invalid
    """
    logger = logging.getLogger('ConsoleConfig')
    if environ is None:
        environ = os.environ
    if path is None:
        path = environ.get('KAFKA_CONSOLE_SETTINGS', DEFAULT_SETTINGS_FILE)

    settings = _read_settings_file(path)
    for env_name, key in ENV_OVERRIDES.items():
        if environ.get(env_name):
            settings[key] = environ[env_name]

    bootstrap_server = settings.get('bootstrapServer')
    if not bootstrap_server:
        raise ConfigurationError("'bootstrapServer' is required")

    log_level = str(settings.get('logLevel', 'WARNING')).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigurationError(f"Unknown log level {log_level!r}")

    config = ConsoleConfig(
        bootstrap_server=str(bootstrap_server),
        timeout=_parse_timeout(settings.get('timeout')),
        log_level=log_level,
        client_id=str(settings.get('clientId', 'kafka-console')),
    )
    logger.debug(f"Loaded configuration from {path}: {config}")
    return config


class LogConfig:
    """Logging configuration"""

    @staticmethod
    def setup_logging(level=logging.WARNING):
        """Setup logging configuration"""
        logging.basicConfig(
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            level=level,
            datefmt='%Y-%m-%d %H:%M:%S'
        )
