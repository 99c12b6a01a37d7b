"""
Interactive Kafka console
Produce messages and administer a cluster from a numbered menu
"""

__version__ = "1.0.0"

from .config import ConsoleConfig, LogConfig, load_config
from .errors import ConfigurationError, ConsoleError, DeliveryError, TopicResult
from .admin import KafkaAdmin
from .producer import DeliveryReport, MessageProducer
from .dispatcher import ConsoleDispatcher, Outcome

__all__ = [
    'ConsoleConfig',
    'LogConfig',
    'load_config',
    'ConsoleError',
    'ConfigurationError',
    'DeliveryError',
    'TopicResult',
    'KafkaAdmin',
    'MessageProducer',
    'DeliveryReport',
    'ConsoleDispatcher',
    'Outcome'
]
