import os

import pytest

from debuglog import cli
from debuglog.handler.error_handler import NoPortAvailable
from debuglog.server.runner import ServerRunner
from debuglog.utils.helper import parse_port


@pytest.fixture
def captured_runs(monkeypatch):
    runs = []

    def fake_run(self, banner):
        runs.append((self, banner))
        return 0

    monkeypatch.setattr(ServerRunner, "run", fake_run)
    return runs


@pytest.mark.parametrize("raw, expected", [
    (None, 9876),
    ("", 9876),
    ("abc", 9876),
    ("0", 9876),
    ("9999", 9999),
    ("9999abc", 9999),
    (" 8080 ", 8080),
    ("²", 9876),
    ("٣٤", 9876),
    ("12²", 12),
])
def test_parse_port_falls_back_to_default(raw, expected):
    assert parse_port(raw, 9876) == expected


@pytest.mark.parametrize("main, usage", [
    (cli.server_main, "Usage: debuglog-server <port> <log-file-path>"),
    (cli.viewer_main, "Usage: debuglog-viewer <port> <log-file-path>"),
])
@pytest.mark.parametrize("argv", [[], ["9876"]])
def test_missing_log_file_is_a_usage_error(main, usage, argv, capsys, captured_runs):
    assert main(argv) == 1
    assert usage in capsys.readouterr().err
    assert captured_runs == []


def test_server_main_starts_with_defaults(tmp_path, captured_runs):
    log_file = str(tmp_path / "deep" / "d.log")

    assert cli.server_main(["not-a-port", log_file]) == 0

    runner, banner = captured_runs[0]
    assert runner.settings.port == 9876
    assert runner.settings.host == "127.0.0.1"
    assert runner.settings.log_file == log_file
    assert banner[0] == "Debug log server running at http://127.0.0.1:9876"
    assert banner[1] == f"Log file: {log_file}"
    assert banner[2] == f"PID: {os.getpid()}"
    assert os.path.isdir(tmp_path / "deep")


def test_viewer_main_uses_viewer_default_port(tmp_path, captured_runs):
    log_file = str(tmp_path / "d.log")

    assert cli.viewer_main(["x", log_file, "--poll-interval", "250"]) == 0

    runner, banner = captured_runs[0]
    assert runner.settings.port == 9877
    assert runner.settings.poll_interval_ms == 250
    assert banner[1] == f"Watching: {log_file}"
    assert not os.path.exists(log_file)


def test_out_of_range_port_is_a_configuration_error(tmp_path, capsys, captured_runs):
    assert cli.server_main(["70000", str(tmp_path / "d.log")]) == 1
    assert "Usage: debuglog-server" in capsys.readouterr().err


def test_find_port_prints_port_only(monkeypatch, capsys):
    monkeypatch.setattr(cli, "find_available_port", lambda start: start + 5)

    assert cli.find_port_main(["9000"]) == 0

    out = capsys.readouterr()
    assert out.out == "9005\n"


def test_find_port_default_start(monkeypatch, capsys):
    seen = []
    monkeypatch.setattr(cli, "find_available_port", lambda start: seen.append(start) or start)

    cli.find_port_main([])

    assert seen == [9876]


def test_find_port_exhausted_exits_non_zero(monkeypatch, capsys):
    def exhausted(start):
        raise NoPortAvailable(start, 100)

    monkeypatch.setattr(cli, "find_available_port", exhausted)

    assert cli.find_port_main(["9876"]) == 1
    out = capsys.readouterr()
    assert out.out == ""
    assert "No available port found" in out.err
