"""
Append-only, file-backed log store.

One record per line, ``[<ISO-8601 UTC>] <compact JSON>\n``. The file is only
ever appended to, so every line already written stays parseable while the
Ingestion Service keeps writing and any number of viewers keep reading.
"""
import json
import math
import re
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional

from debuglog.handler.error_handler import MalformedPayload, StoreReadFailure, StoreWriteFailure
from debuglog.models.models import LogLine, ViewerEntry
from debuglog.utils.logger import LoggerMixin

LINE_PATTERN = re.compile(r"^\[([^\]]+)\]\s*(.*)$")


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _reject_constant(name: str):
    raise MalformedPayload(f"Unexpected token {name} in JSON")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise MalformedPayload(f"Number out of range in JSON: {text}")
    return value


def loads_payload(body: bytes) -> Any:
    """
    Parse a request body as strict JSON.

    ``NaN``/``Infinity`` literals and numbers that overflow to infinity are
    rejected so that every stored line stays valid JSON.
    Raises MalformedPayload for anything that is not a single JSON value.
    """
    try:
        text = body.decode("utf-8")
        return json.loads(
            text,
            parse_constant=_reject_constant,
            parse_float=_parse_finite_float,
        )
    except MalformedPayload:
        raise
    except (UnicodeDecodeError, ValueError) as e:
        raise MalformedPayload(str(e)) from e
    except RecursionError as e:
        raise MalformedPayload("JSON nested too deeply") from e


def dumps_payload(payload: Any) -> str:
    """Compact JSON; raises MalformedPayload when the value cannot be encoded."""
    try:
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except RecursionError as e:
        raise MalformedPayload("JSON nested too deeply") from e
    except (TypeError, ValueError) as e:
        raise MalformedPayload(str(e)) from e


def format_line(payload: Any, received_at: Optional[str] = None) -> str:
    return f"[{received_at or utc_timestamp()}] {dumps_payload(payload)}\n"


def parse_line(line: str) -> ViewerEntry:
    match = LINE_PATTERN.match(line)
    if match:
        return ViewerEntry(time=match.group(1), data=match.group(2))
    return ViewerEntry(time="", data=line)


def parse_content(content: str) -> List[ViewerEntry]:
    """Rebuild the whole entry list from the full file content."""
    lines = [line for line in content.strip().split("\n") if line]
    return [parse_line(line) for line in lines]


class LogStore(LoggerMixin):
    """
    The store file shared by one Ingestion Service (writer) and any number
    of Viewer Services (readers).
    """

    def __init__(self, log_file: str):
        super().__init__("LogStore")
        self.log_file = log_file
        self.path = Path(log_file)
        # single writer point; one append per line
        self._write_lock = threading.Lock()

    def ensure_parent(self) -> Path:
        parent = self.path.parent
        if not parent.exists():
            parent.mkdir(parents=True, exist_ok=True)
            self.info(f"Created log directory {parent}")
        return parent

    def append(self, payload: Any) -> LogLine:
        """Append one record; the file is not touched if the payload cannot be encoded."""
        record = LogLine(received_at=utc_timestamp(), payload=payload)
        line = format_line(record.payload, record.received_at)
        with self._write_lock:
            try:
                self.ensure_parent()
                with open(self.path, "a", encoding="utf-8", newline="") as f:
                    f.write(line)
            except OSError as e:
                raise StoreWriteFailure(f"Cannot append to {self.log_file}: {e}") from e
        self.debug(f"[APPEND] {line.rstrip()}")
        return record

    def read_text(self) -> str:
        """
        Return the whole file. A missing file reads as empty; any other
        failure is raised as StoreReadFailure.
        """
        if not self.path.exists():
            return ""
        try:
            with open(self.path, "r", encoding="utf-8", newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise StoreReadFailure(f"Cannot read {self.log_file}: {e}") from e

    def entries(self) -> List[ViewerEntry]:
        return parse_content(self.read_text())
