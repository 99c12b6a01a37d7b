import json
from unittest.mock import patch

from conftest import ScriptedConsole
from kafka_console.dispatcher import Outcome
from kafka_console.main import main


def test_invalid_timeout_never_reaches_dispatcher(tmp_path, monkeypatch):
    settings = tmp_path / "appsettings.json"
    settings.write_text(json.dumps({"bootstrapServer": "localhost:9092", "timeout": "soon"}))
    monkeypatch.delenv("KAFKA_TIMEOUT", raising=False)
    console = ScriptedConsole(["9"])

    with patch("kafka_console.main.ConsoleDispatcher") as dispatcher_cls:
        assert main(str(settings), console=console) == 1

    dispatcher_cls.assert_not_called()
    assert console.output[0].startswith("Configuration error:")


def test_runs_dispatcher_with_loaded_config(tmp_path, monkeypatch):
    settings = tmp_path / "appsettings.json"
    settings.write_text(json.dumps({"bootstrapServer": "localhost:9092", "timeout": 10}))
    for name in ("KAFKA_BOOTSTRAP_SERVER", "KAFKA_TIMEOUT", "KAFKA_CONSOLE_LOG_LEVEL", "KAFKA_CLIENT_ID"):
        monkeypatch.delenv(name, raising=False)
    console = ScriptedConsole(["9"])

    with patch("kafka_console.main.ConsoleDispatcher") as dispatcher_cls:
        dispatcher_cls.return_value.run.return_value = Outcome.EXIT
        assert main(str(settings), console=console) == 0

    config = dispatcher_cls.call_args.args[0]
    assert config.bootstrap_server == "localhost:9092"
    assert config.timeout == 10.0
    assert dispatcher_cls.call_args.kwargs == {"console": console}
