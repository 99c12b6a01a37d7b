"""
Kafka cluster administration
"""
import concurrent.futures
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from confluent_kafka import KafkaException
from confluent_kafka.admin import AdminClient, ConfigResource, NewPartitions, NewTopic

from .commands import ResourceKind
from .config import ConsoleConfig
from .errors import TopicResult, error_reason


@dataclass
class GroupListing:
    """Described consumer groups and the errors met while listing them"""
    groups: list = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


class KafkaAdmin:
    """Admin session scoped to one visit of the admin menu"""

    def __init__(self, config: ConsoleConfig):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.config = config

        try:
            self.admin_client = AdminClient(config.client_config())
            self.logger.info("AdminClient initialized successfully")
        except Exception as e:
            self.logger.error(f"Failed to initialize AdminClient: {e}")
            raise

    def __enter__(self) -> 'KafkaAdmin':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        # AdminClient has no close(); dropping the reference releases librdkafka's handle
        self.admin_client = None
        self.logger.info("AdminClient released")

    def cluster_metadata(self, topic: Optional[str] = None):
        """Cluster metadata, limited to one topic when ``topic`` is given"""
        try:
            return self.admin_client.list_topics(topic=topic, timeout=self.config.timeout)
        except KafkaException as e:
            self.logger.error(f"Error fetching metadata: {e}")
            raise

    def list_brokers(self) -> list:
        """Brokers in the cluster, ordered by id"""
        metadata = self.cluster_metadata()
        return [metadata.brokers[b] for b in sorted(metadata.brokers)]

    def list_topics(self) -> list:
        """Topic metadata for every topic, ordered by name"""
        metadata = self.cluster_metadata()
        return [metadata.topics[t] for t in sorted(metadata.topics)]

    def list_groups(self) -> GroupListing:
        """Consumer groups with their members, plus any per-group errors"""
        try:
            listing = self.admin_client.list_consumer_groups(
                request_timeout=self.config.timeout
            ).result(timeout=self.config.timeout)
        except KafkaException as e:
            self.logger.error(f"Error listing consumer groups: {e}")
            raise

        result = GroupListing()
        for error in listing.errors:
            reason = error_reason(error)
            self.logger.warning(f"Consumer group listing error: {reason}")
            result.errors.append(reason)

        group_ids = sorted(g.group_id for g in listing.valid)
        if not group_ids:
            return result

        fs = self.admin_client.describe_consumer_groups(
            group_ids, request_timeout=self.config.timeout
        )
        for group_id in group_ids:
            try:
                result.groups.append(fs[group_id].result(timeout=self.config.timeout))
            except KafkaException as e:
                reason = error_reason(e)
                self.logger.error(f"Error describing group '{group_id}': {reason}")
                result.errors.append(f"{group_id}: {reason}")
        return result

    def create_topics(
            self,
            topic_names: Iterable[str],
            num_partitions: int,
            replication_factor: int = 1
    ) -> List[TopicResult]:
        """Create topics, one result per topic"""
        names = _unique(topic_names)
        if not names:
            return []

        new_topics = [
            NewTopic(
                name,
                num_partitions=num_partitions,
                replication_factor=replication_factor
            )
            for name in names
        ]
        fs = self.admin_client.create_topics(
            new_topics, operation_timeout=self.config.timeout
        )
        results = self._collect(fs, names, 'create topic')

        for r in results:
            if r.ok:
                self.logger.info(
                    f"Topic '{r.topic}' created successfully "
                    f"(partitions={num_partitions}, "
                    f"replication={replication_factor})"
                )
        return results

    def delete_topics(self, topic_names: Iterable[str]) -> List[TopicResult]:
        """Delete topics, one result per topic"""
        names = _unique(topic_names)
        if not names:
            return []

        fs = self.admin_client.delete_topics(
            names, operation_timeout=self.config.timeout
        )
        return self._collect(fs, names, 'delete topic')

    def increase_partitions(self, topic_names: Iterable[str], increase_to: int) -> List[TopicResult]:
        """Raise the partition count of each topic to ``increase_to``"""
        names = _unique(topic_names)
        if not names:
            return []

        fs = self.admin_client.create_partitions(
            [NewPartitions(name, increase_to) for name in names],
            operation_timeout=self.config.timeout
        )
        return self._collect(fs, names, 'increase partitions of')

    def describe_config(self, name: str, kind: ResourceKind) -> list:
        """Config entries of a topic, group or broker, ordered by name"""
        resource = ConfigResource(kind.resource_type, name)
        fs = self.admin_client.describe_configs(
            [resource], request_timeout=self.config.timeout
        )

        try:
            entries: Dict = next(iter(fs.values())).result(timeout=self.config.timeout)
        except KafkaException as e:
            self.logger.error(f"Error describing {kind.name.lower()} config '{name}': {e}")
            raise

        return [entries[key] for key in sorted(entries)]

    def _collect(self, fs: Dict, names: List[str], action: str) -> List[TopicResult]:
        results = []
        for name in names:
            try:
                fs[name].result(timeout=self.config.timeout)
                results.append(TopicResult(name))
            except (KafkaException, concurrent.futures.TimeoutError) as e:
                reason = error_reason(e) or type(e).__name__
                self.logger.error(f"Failed to {action} '{name}': {reason}")
                results.append(TopicResult(name, reason))
        return results


def _unique(names: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(names))
