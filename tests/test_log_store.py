import json
import re
import threading
from datetime import datetime, timezone

import pytest

from debuglog.handler.error_handler import MalformedPayload, StoreReadFailure, StoreWriteFailure
from debuglog.store.log_store import (
    LogStore,
    format_line,
    loads_payload,
    parse_content,
    parse_line,
    utc_timestamp,
)
from tests.conftest import parse_record, read_lines

LINE_RE = re.compile(r"^\[(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z)\] (.*)$")


def test_utc_timestamp_has_millis_and_z_suffix():
    ts = utc_timestamp(datetime(2026, 10, 19, 8, 15, 30, 123456, tzinfo=timezone.utc))
    assert ts == "2026-10-19T08:15:30.123Z"


def test_format_line_is_compact_and_newline_terminated():
    line = format_line({"level": "info", "msg": "hi"}, received_at="2026-10-19T00:00:00.000Z")
    assert line == '[2026-10-19T00:00:00.000Z] {"level":"info","msg":"hi"}\n'


def test_format_line_keeps_non_ascii():
    line = format_line({"msg": "héllo ✓"}, received_at="t")
    assert "héllo ✓" in line


def test_append_creates_file_and_parents_lazily(tmp_path):
    path = tmp_path / "a" / "b" / "events.log"
    store = LogStore(str(path))
    assert not path.exists()

    store.append({"n": 1})

    lines = read_lines(path)
    assert len(lines) == 1
    assert LINE_RE.match(lines[0])


def test_appends_keep_submission_order(tmp_path):
    store = LogStore(str(tmp_path / "x.log"))
    store.append({"n": 1})
    store.append({"n": 2})

    records = [parse_record(line) for line in read_lines(store.path)]
    assert [r.payload for r in records] == [{"n": 1}, {"n": 2}]


def test_concurrent_appends_never_interleave(tmp_path):
    store = LogStore(str(tmp_path / "x.log"))
    big = "x" * 20000

    def writer(worker):
        for i in range(10):
            store.append({"worker": worker, "i": i, "pad": big})

    threads = [threading.Thread(target=writer, args=(w,)) for w in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    lines = read_lines(store.path)
    assert len(lines) == 80
    for line in lines:
        assert parse_record(line).payload["pad"] == big


@pytest.mark.parametrize("body, expected", [
    (b'{"a": [1, 2, {"b": null}]}', {"a": [1, 2, {"b": None}]}),
    (b"[1, 2, 3]", [1, 2, 3]),
    (b'"just a string"', "just a string"),
    (b"42", 42),
    (b"null", None),
    (b"  true  ", True),
])
def test_loads_payload_accepts_any_json(body, expected):
    assert loads_payload(body) == expected


@pytest.mark.parametrize("body", [
    b"not-json",
    b"",
    b"{",
    b'{"a": 1} trailing',
    b"NaN",
    b'{"x": Infinity}',
    b"1e400",
    b"\xff\xfe",
])
def test_loads_payload_rejects_invalid_json(body):
    with pytest.raises(MalformedPayload):
        loads_payload(body)


def test_parse_line_splits_time_and_data():
    entry = parse_line('[2026-10-19T00:00:00.000Z] {"a":1}')
    assert entry.time == "2026-10-19T00:00:00.000Z"
    assert entry.data == '{"a":1}'


def test_parse_line_without_brackets_is_all_data():
    entry = parse_line("something else entirely")
    assert entry.time == ""
    assert entry.data == "something else entirely"


def test_parse_content_drops_blank_lines():
    content = "\n[t1] {\"a\":1}\n\n[t2] {\"a\":2}\n"
    entries = parse_content(content)
    assert [(e.time, e.data) for e in entries] == [("t1", '{"a":1}'), ("t2", '{"a":2}')]


def test_parse_content_of_empty_file():
    assert parse_content("") == []


def test_read_text_of_missing_file_is_empty(tmp_path):
    assert LogStore(str(tmp_path / "missing.log")).read_text() == ""


def test_read_text_failure_is_raised_as_store_read_failure(tmp_path):
    with pytest.raises(StoreReadFailure):
        LogStore(str(tmp_path)).read_text()


def test_append_failure_is_raised_as_store_write_failure(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")
    store = LogStore(str(blocker / "x.log"))

    with pytest.raises(StoreWriteFailure):
        store.append({"a": 1})


def test_entries_round_trip_through_the_file(tmp_path):
    store = LogStore(str(tmp_path / "x.log"))
    store.append({"level": "warn"})
    entries = store.entries()
    assert len(entries) == 1
    assert json.loads(entries[0].data) == {"level": "warn"}


def test_append_returns_the_stored_record(tmp_path):
    store = LogStore(str(tmp_path / "x.log"))
    record = store.append({"n": 1})

    assert record.payload == {"n": 1}
    assert parse_record(read_lines(store.path)[0]) == record


def test_unencodable_payload_leaves_store_untouched(tmp_path):
    store = LogStore(str(tmp_path / "x.log"))
    payload = []
    for _ in range(100000):
        payload = [payload]

    with pytest.raises(MalformedPayload):
        store.append(payload)
    assert not store.path.exists()


def test_loads_payload_rejects_excessive_nesting():
    with pytest.raises(MalformedPayload):
        loads_payload(b"[" * 100000 + b"]" * 100000)
