"""
Scoped Kafka producer session for the console
"""
import logging
from dataclasses import dataclass

from confluent_kafka import KafkaException, Producer

from .config import ConsoleConfig
from .errors import DeliveryError, error_reason


@dataclass(frozen=True)
class DeliveryReport:
    """Where a message ended up"""
    topic: str
    partition: int
    offset: int
    value: str

    @property
    def location(self) -> str:
        return f"{self.topic} [[{self.partition}]] @{self.offset}"


class MessageProducer:
    """Kafka producer that waits for each message's delivery report"""

    def __init__(self, config: ConsoleConfig):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.config = config

        # Statistics
        self.success_count = 0
        self.error_count = 0

        try:
            self.producer = Producer(config.client_config())
            self.logger.info(f"Producer initialized for {config.bootstrap_server}")
        except Exception as e:
            self.logger.error(f"Failed to initialize producer: {e}")
            raise

    def __enter__(self) -> 'MessageProducer':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def send(self, topic: str, value: str) -> DeliveryReport:
        """
        Publish a single message and wait for its delivery report

        Raises:
            DeliveryError: If the client or broker rejects the message or no
                report arrives within the configured timeout
        """
        outcome = {}

        def on_delivery(err, msg):
            outcome['err'] = err
            outcome['msg'] = msg

        try:
            self.producer.produce(
                topic,
                value=value.encode('utf-8'),
                on_delivery=on_delivery
            )
        except (KafkaException, BufferError) as e:
            self.error_count += 1
            reason = error_reason(e)
            self.logger.error(f"Failed to send message: {reason}")
            raise DeliveryError(reason)

        self.producer.flush(self.config.timeout)

        if 'err' not in outcome:
            self.error_count += 1
            self.logger.error(f"No delivery report for topic '{topic}' within {self.config.timeout}s")
            raise DeliveryError(f"Message to '{topic}' timed out after {self.config.timeout}s")

        err = outcome['err']
        if err is not None:
            self.error_count += 1
            reason = error_reason(err)
            self.logger.error(f"Delivery failed: {reason}")
            raise DeliveryError(reason)

        msg = outcome['msg']
        self.success_count += 1
        return DeliveryReport(
            topic=msg.topic(),
            partition=msg.partition(),
            offset=msg.offset(),
            value=value
        )

    def close(self) -> None:
        """Flush pending messages and release the producer"""
        pending = self.producer.flush(self.config.timeout)
        if pending > 0:
            self.logger.warning(f"{pending} messages still pending after flush")

        self.logger.info(
            f"Producer closed: "
            f"Success={self.success_count:,}, "
            f"Errors={self.error_count:,}"
        )
