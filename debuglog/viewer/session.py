"""
Python side of the viewer's polling contract.

``ViewerSession`` holds what one browser tab holds: the last content seen and
the entries parsed from it. Feeding it a freshly fetched body either changes
nothing (same text) or rebuilds the whole entry list.
"""
import json
from typing import List

from debuglog.models.models import ViewerEntry
from debuglog.store.log_store import parse_content

LEVEL_ERROR = "error"
LEVEL_WARN = "warn"
LEVEL_INFO = "info"
LEVEL_NONE = ""


def classify_level(data) -> str:
    """
    Severity by keyword, case-insensitive, in fixed precedence:
    error/fail > warn > info > none.

    This is a known approximation: any "info" inside an unrelated string
    counts as info.
    """
    text = data if isinstance(data, str) else json.dumps(data)
    text = text.lower()
    if "error" in text or "fail" in text:
        return LEVEL_ERROR
    if "warn" in text:
        return LEVEL_WARN
    if "info" in text:
        return LEVEL_INFO
    return LEVEL_NONE


def format_data(data: str, pretty: bool = True) -> str:
    """Re-indent JSON text; anything else is returned verbatim."""
    if not pretty:
        return data
    try:
        parsed = json.loads(data)
    except ValueError:
        return data
    return json.dumps(parsed, indent=2, ensure_ascii=False)


class ViewerSession:

    def __init__(self, pretty: bool = True):
        self.pretty = pretty
        self.last_content = ""
        self.entries: List[ViewerEntry] = []

    def update(self, content: str) -> bool:
        """
        Take one fetched ``/logs`` body. Returns True when the entry list was
        rebuilt, False when the content is byte-identical to the last one.
        """
        if content == self.last_content:
            return False
        self.last_content = content
        self.entries = parse_content(content)
        return True

    def clear(self):
        """Empty the displayed list until the file changes again."""
        self.entries = []

    def render(self) -> List[str]:
        lines = []
        for entry in self.entries:
            level = classify_level(entry.data)
            tag = f"[{level.upper()}] " if level else ""
            time = f"{entry.time} " if entry.time else ""
            lines.append(f"{time}{tag}{format_data(entry.data, self.pretty)}")
        return lines
