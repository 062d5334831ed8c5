import json

import pytest
from fastapi.testclient import TestClient

from debuglog.models.models import LogLine
from debuglog.server.ingest import create_ingest_app
from debuglog.server.viewer import create_viewer_app
from debuglog.store.log_store import LINE_PATTERN


@pytest.fixture
def log_file(tmp_path):
    return str(tmp_path / "nested" / "dir" / "d.log")


@pytest.fixture
def ingest_client(log_file):
    with TestClient(create_ingest_app(log_file)) as client:
        yield client


@pytest.fixture
def viewer_client(log_file):
    with TestClient(create_viewer_app(log_file)) as client:
        yield client


def read_lines(path):
    with open(path, "r", encoding="utf-8", newline="") as f:
        return [line for line in f.read().split("\n") if line]


def parse_record(line: str) -> LogLine:
    """Split a stored line back into its timestamp and JSON payload."""
    match = LINE_PATTERN.match(line.rstrip("\n"))
    assert match, f"Not a log line: {line!r}"
    return LogLine(received_at=match.group(1), payload=json.loads(match.group(2)))
