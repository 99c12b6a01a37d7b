"""
Menu commands, transition tables and input parsers
"""
from enum import Enum, IntEnum
from typing import Dict, List, Optional

from confluent_kafka.admin import ResourceType


class MainCommand(Enum):
    ADD_MESSAGES = '1'
    ADMIN = '2'
    EXIT = '9'


class AdminCommand(Enum):
    LIST_BROKERS = '1'
    LIST_TOPICS = '2'
    LIST_GROUPS = '3'
    TOPIC_METADATA = '4'
    CREATE_TOPICS = '5'
    DELETE_TOPICS = '6'
    DESCRIBE_CONFIG = '7'
    INCREASE_PARTITIONS = '8'
    BACK = '9'


class ResourceKind(IntEnum):
    """Config resource kinds, numbered like confluent_kafka's ResourceType"""
    TOPIC = ResourceType.TOPIC.value
    GROUP = ResourceType.GROUP.value
    BROKER = ResourceType.BROKER.value

    @property
    def resource_type(self) -> ResourceType:
        return ResourceType[self.name]


# Line that leaves the message loop
BACK_INPUT = '9'

MAIN_TRANSITIONS: Dict[str, MainCommand] = {c.value: c for c in MainCommand}
ADMIN_TRANSITIONS: Dict[str, AdminCommand] = {c.value: c for c in AdminCommand}

MAIN_MENU = [
    "---",
    "[1] add message",
    "[2] show more admin commands",
    "[9] exit",
    "---",
]

ADMIN_MENU = [
    "---",
    "[1] show all kafka brokers",
    "[2] show all kafka topics",
    "[3] show all consumer groups",
    "[4] show full metadata",
    "[5] create new topics",
    "[6] delete existing topics",
    "[7] show config details",
    "[8] increase partitions in topic",
    "[9] back",
    "---",
]

CONFIG_TYPE_MENU = [
    "--",
    "select config type",
    f"[{ResourceKind.TOPIC.value}] topic config",
    f"[{ResourceKind.GROUP.value}] group config",
    f"[{ResourceKind.BROKER.value}] broker config",
    "--",
]


def parse_main_command(line: Optional[str]) -> Optional[MainCommand]:
    """Map a main menu selection to its command, None if unrecognized"""
    if line is None:
        return None
    return MAIN_TRANSITIONS.get(line.strip())


def parse_admin_command(line: Optional[str]) -> Optional[AdminCommand]:
    """Map an admin menu selection to its command, None if unrecognized"""
    if line is None:
        return None
    return ADMIN_TRANSITIONS.get(line.strip())


def is_back(line: str) -> bool:
    """True for the line that leaves the message loop, ignoring surrounding whitespace"""
    return line.strip() == BACK_INPUT


def parse_topics(line: str) -> List[str]:
    """Split a comma separated topic list, trimming whitespace and dropping empties"""
    return [t.strip() for t in line.split(',') if t.strip()]


def parse_resource_kind(line: str) -> ResourceKind:
    """
    Parse a numeric config type selection

    Raises:
        ValueError: If the input is not one of the listed codes
    """
    return ResourceKind(int(line))
