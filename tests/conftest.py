from collections import deque
from typing import Iterable, List, Optional
from unittest.mock import MagicMock

import pytest

from kafka_console.admin import KafkaAdmin
from kafka_console.config import ConsoleConfig
from kafka_console.dispatcher import ConsoleDispatcher
from kafka_console.producer import MessageProducer


class ScriptedConsole:
    """Console double fed with a fixed list of input lines"""

    def __init__(self, lines: Iterable[str] = ()):
        self.inputs = deque(lines)
        self.output: List[str] = []

    def write(self, line: str = "") -> None:
        self.output.append(line)

    def write_lines(self, lines) -> None:
        self.output.extend(lines)

    def read_line(self) -> Optional[str]:
        if not self.inputs:
            return None
        return self.inputs.popleft()


class FakeFuture:
    """Stands in for the concurrent futures returned by AdminClient"""

    def __init__(self, value=None, error: Optional[Exception] = None):
        self.value = value
        self.error = error

    def result(self, timeout=None):
        if self.error is not None:
            raise self.error
        return self.value


@pytest.fixture
def config():
    return ConsoleConfig(bootstrap_server="localhost:9092", timeout=5.0)


@pytest.fixture
def admin():
    session = MagicMock(spec=KafkaAdmin)
    session.__enter__.return_value = session
    return session


@pytest.fixture
def producer():
    session = MagicMock(spec=MessageProducer)
    session.__enter__.return_value = session
    return session


@pytest.fixture
def make_dispatcher(config, admin, producer):
    """Build a dispatcher over a scripted console and mocked sessions"""

    def _make(*lines: str):
        console = ScriptedConsole(lines)
        dispatcher = ConsoleDispatcher(
            config,
            console=console,
            producer_factory=MagicMock(return_value=producer),
            admin_factory=MagicMock(return_value=admin),
        )
        return dispatcher, console

    return _make
