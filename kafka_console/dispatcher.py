"""
Interactive menu dispatcher
"""
import logging
from enum import Enum
from typing import Callable, Dict, List, Optional

from .admin import KafkaAdmin
from .commands import (
    ADMIN_MENU,
    CONFIG_TYPE_MENU,
    MAIN_MENU,
    AdminCommand,
    MainCommand,
    is_back,
    parse_admin_command,
    parse_main_command,
    parse_resource_kind,
    parse_topics,
)
from .config import ConsoleConfig
from .console import Console
from .errors import DeliveryError, TopicResult, error_reason
from .producer import MessageProducer

MESSAGE_PROMPT = "message ([9] for back):"


class Outcome(Enum):
    """What the enclosing loop should do after an operation"""
    CONTINUE = 'continue'
    EXIT = 'exit'
    FAILED = 'failed'


class ConsoleDispatcher:
    """
    Main menu / admin menu state machine

    Every operation returns an Outcome. Expected failures (a rejected
    message, a topic that could not be created) are reported by the
    operation itself and come back as ``Outcome.FAILED``, which ends the
    run. Anything else propagates to ``run()`` and is reported there.
    """

    def __init__(
            self,
            config: ConsoleConfig,
            console: Optional[Console] = None,
            producer_factory: Callable[[ConsoleConfig], MessageProducer] = MessageProducer,
            admin_factory: Callable[[ConsoleConfig], KafkaAdmin] = KafkaAdmin
    ):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.config = config
        self.console = console or Console()
        self.producer_factory = producer_factory
        self.admin_factory = admin_factory

        self.main_handlers: Dict[MainCommand, Callable[[], Outcome]] = {
            MainCommand.ADD_MESSAGES: self.add_messages,
            MainCommand.ADMIN: self.admin_menu,
        }
        self.admin_handlers: Dict[AdminCommand, Callable[[KafkaAdmin], Outcome]] = {
            AdminCommand.LIST_BROKERS: self.list_brokers,
            AdminCommand.LIST_TOPICS: self.list_topics,
            AdminCommand.LIST_GROUPS: self.list_groups,
            AdminCommand.TOPIC_METADATA: self.topic_metadata,
            AdminCommand.CREATE_TOPICS: self.create_topics,
            AdminCommand.DELETE_TOPICS: self.delete_topics,
            AdminCommand.DESCRIBE_CONFIG: self.describe_config,
            AdminCommand.INCREASE_PARTITIONS: self.increase_partitions,
        }

    def run(self) -> Outcome:
        """Run the main menu until exit, a failed operation or an error"""
        try:
            outcome = self.main_menu()
        except EOFError:
            self.logger.info("End of input, leaving")
            return Outcome.EXIT
        except Exception as e:
            self.logger.error(f"Unhandled error: {e}", exc_info=True)
            self.console.write(f"Error: {error_reason(e)}")
            outcome = Outcome.FAILED

        self.console.write("press any key to exit...")
        self.console.read_line()
        return outcome

    def _read(self) -> str:
        line = self.console.read_line()
        if line is None:
            raise EOFError("end of input")
        return line

    def _ask(self, label: str) -> str:
        self.console.write(f"{label}:")
        return self._read()

    def _ask_topics(self) -> List[str]:
        self.console.write("topics (comma separated):")
        return parse_topics(self._read())

    # Main menu

    def main_menu(self) -> Outcome:
        self.console.write_lines(MAIN_MENU)
        while True:
            command = parse_main_command(self._read())
            if command is MainCommand.EXIT:
                return Outcome.EXIT

            handler = self.main_handlers.get(command)
            if handler is not None:
                outcome = handler()
                if outcome is not Outcome.CONTINUE:
                    return outcome

            self.console.write_lines(MAIN_MENU)

    def add_messages(self) -> Outcome:
        """Publish console lines to one topic until the back input"""
        topic = self._ask("topic")
        self.console.write(MESSAGE_PROMPT)

        with self.producer_factory(self.config) as producer:
            while True:
                line = self._read()
                if is_back(line):
                    return Outcome.CONTINUE

                try:
                    report = producer.send(topic, line)
                except DeliveryError as e:
                    self.console.write(f"Delivery failed: {e.reason}")
                    return Outcome.FAILED

                self.console.write(f"Delivered '{report.value}' to '{report.location}'")
                self.console.write(MESSAGE_PROMPT)

    # Admin menu

    def admin_menu(self) -> Outcome:
        self.console.write_lines(ADMIN_MENU)
        with self.admin_factory(self.config) as admin:
            while True:
                command = parse_admin_command(self._read())
                if command is AdminCommand.BACK:
                    return Outcome.CONTINUE

                handler = self.admin_handlers.get(command)
                if handler is not None:
                    outcome = handler(admin)
                    if outcome is not Outcome.CONTINUE:
                        return outcome

                self.console.write_lines(ADMIN_MENU)

    def list_brokers(self, admin: KafkaAdmin) -> Outcome:
        self.console.write("Brokers:")
        for broker in admin.list_brokers():
            self.console.write(f"{broker.host}:{broker.port}/{broker.id}")
        return Outcome.CONTINUE

    def list_topics(self, admin: KafkaAdmin) -> Outcome:
        self.console.write("Topics:")
        for topic in admin.list_topics():
            self.console.write(f"{topic.topic} ({len(topic.partitions)} partitions)")
        return Outcome.CONTINUE

    def list_groups(self, admin: KafkaAdmin) -> Outcome:
        self.console.write("Consumer Groups:")
        listing = admin.list_groups()
        for group in listing.groups:
            coordinator = group.coordinator
            self.console.write(f"Group: {group.group_id} {_name(group.state)}")
            if coordinator is not None:
                self.console.write(f"Broker: {coordinator.id} {coordinator.host}:{coordinator.port}")
            kind = "simple" if group.is_simple_consumer_group else "consumer"
            self.console.write(f"Protocol: {kind} {group.partition_assignor}")

            self.console.write("Members:")
            for member in group.members:
                self.console.write(f"{member.member_id} {member.client_id} {member.host}")
                partitions = member.assignment.topic_partitions if member.assignment else []
                assigned = ", ".join(f"{tp.topic}[{tp.partition}]" for tp in partitions)
                self.console.write(f"Assignment: {assigned or '-'}")

        if listing.errors:
            self.console.write("Errors:")
            for error in listing.errors:
                self.console.write(error)
        return Outcome.CONTINUE

    def topic_metadata(self, admin: KafkaAdmin) -> Outcome:
        topic = self._ask("topic")
        self.console.write(f"Metadata for: {topic}")

        cluster = admin.cluster_metadata(topic)
        self.console.write(f"Originating broker: {cluster.orig_broker_id} {cluster.orig_broker_name}")
        self.console.write("Brokers:")
        for broker_id in sorted(cluster.brokers):
            broker = cluster.brokers[broker_id]
            self.console.write(f"  {broker.host}:{broker.port}/{broker.id}")

        metadata = cluster.topics.get(topic)
        if metadata is None:
            self.console.write(f"Topic '{topic}' not found")
            return Outcome.CONTINUE
        if metadata.error is not None:
            self.console.write(f"Topic '{topic}' error: {error_reason(metadata.error)}")
            return Outcome.CONTINUE

        self.console.write(f"Topic: {metadata.topic} with {len(metadata.partitions)} partition(s)")
        for partition_id in sorted(metadata.partitions):
            p = metadata.partitions[partition_id]
            self.console.write(
                f"  partition {p.id}: leader={p.leader} "
                f"replicas={p.replicas} isrs={p.isrs}"
            )
        return Outcome.CONTINUE

    def create_topics(self, admin: KafkaAdmin) -> Outcome:
        topics = self._ask_topics()
        num_partitions = int(self._ask("numPartitions"))

        results = admin.create_topics(topics, num_partitions, replication_factor=1)
        return self._report(
            results,
            lambda r: f"{r.topic} created successfully with {num_partitions} partitions",
            "created"
        )

    def delete_topics(self, admin: KafkaAdmin) -> Outcome:
        results = admin.delete_topics(self._ask_topics())
        return self._report(results, lambda r: f"{r.topic} deleted successfully", "deleted")

    def increase_partitions(self, admin: KafkaAdmin) -> Outcome:
        topics = self._ask_topics()
        increase_to = int(self._ask("increaseTo"))

        results = admin.increase_partitions(topics, increase_to)
        return self._report(
            results,
            lambda r: f"Partitions in topic: {r.topic} are successfully increased to: {increase_to}",
            "increased"
        )

    def describe_config(self, admin: KafkaAdmin) -> Outcome:
        self.console.write_lines(CONFIG_TYPE_MENU)
        kind = parse_resource_kind(self._read())
        name = self._ask("name/id")

        for entry in admin.describe_config(name, kind):
            self.console.write(f"{entry.name}: {entry.value}")
        return Outcome.CONTINUE

    def _report(
            self,
            results: List[TopicResult],
            success: Callable[[TopicResult], str],
            verb: str
    ) -> Outcome:
        """Print one line per topic; any failure fails the operation"""
        for r in results:
            if r.ok:
                self.console.write(success(r))
            else:
                self.console.write(f"Topic: {r.topic} was not {verb} - reason: {r.error}")

        if all(r.ok for r in results):
            return Outcome.CONTINUE
        return Outcome.FAILED


def _name(value) -> str:
    return getattr(value, 'name', None) or str(value)
