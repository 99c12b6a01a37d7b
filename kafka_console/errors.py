"""
Error types raised by the console and its client wrappers
"""
from dataclasses import dataclass
from typing import Optional

from confluent_kafka import KafkaError, KafkaException


class ConsoleError(Exception):
    """Base class for kafka-console errors"""


class ConfigurationError(ConsoleError):
    """Settings are missing or invalid"""


class DeliveryError(ConsoleError):
    """A message could not be delivered to the broker"""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


@dataclass
class TopicResult:
    """Outcome of a batch admin operation for a single topic"""
    topic: str
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def error_reason(error) -> str:
    """Human-readable reason for a KafkaError or KafkaException"""
    if isinstance(error, KafkaException) and error.args:
        error = error.args[0]
    if isinstance(error, KafkaError):
        return error.str()
    return str(error)
