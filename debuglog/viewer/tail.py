"""
Terminal tail for a running Viewer Service.

Polls ``<url>/logs`` at a fixed interval with the same rules as the browser
page and prints entries as the list grows.
"""
import time
from typing import Callable, Optional

import requests

from debuglog.constants.constants import EMPTY_LOG_MESSAGE, POLL_INTERVAL_MS
from debuglog.utils.logger import LoggerMixin
from debuglog.viewer.session import ViewerSession


class LogTail(LoggerMixin):

    def __init__(
        self,
        base_url: str,
        poll_interval_ms: int = POLL_INTERVAL_MS,
        pretty: bool = True,
        out: Callable[[str], None] = print,
        http: Optional[requests.Session] = None,
    ):
        super().__init__("LogTail")
        self.logs_url = base_url.rstrip("/") + "/logs"
        self.interval = poll_interval_ms / 1000.0
        self.session = ViewerSession(pretty=pretty)
        self.out = out
        self.http = http or requests.Session()
        self._printed = 0

    def fetch(self) -> Optional[str]:
        try:
            response = self.http.get(self.logs_url, timeout=5)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            self.debug(f"Poll failed: {e}")
            return None
        response.encoding = "utf-8"
        return response.text

    def poll_once(self) -> bool:
        """One tick. Network failures are ignored; the next tick tries again."""
        content = self.fetch()
        if content is None or not self.session.update(content):
            return False

        rendered = self.session.render()
        if len(rendered) < self._printed:
            # the file was replaced underneath us; start over
            self.out("-" * 40)
            self._printed = 0
        if not rendered:
            self.out(EMPTY_LOG_MESSAGE)
        for line in rendered[self._printed:]:
            self.out(line)
        self._printed = len(rendered)
        return True

    def run(self, max_polls: Optional[int] = None) -> None:
        polls = 0
        while max_polls is None or polls < max_polls:
            self.poll_once()
            polls += 1
            if max_polls is None or polls < max_polls:
                time.sleep(self.interval)
