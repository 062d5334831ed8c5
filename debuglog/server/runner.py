import os
import signal
from typing import List

import uvicorn
from fastapi import FastAPI

from debuglog.models.models import ServerSettings
from debuglog.utils.logger import LoggerMixin


def _exit_cleanly(signum, frame):
    raise SystemExit(0)


class ServerRunner(LoggerMixin):
    """
    Runs one app on a single uvicorn worker bound to loopback.

    uvicorn drains in-flight requests on SIGINT/SIGTERM; both signals then
    end the process with exit code 0.
    """

    def __init__(self, app: FastAPI, settings: ServerSettings, name: str):
        super().__init__(name)
        self.app = app
        self.settings = settings

    def banner(self, title: str, file_label: str) -> List[str]:
        return [
            f"{title} running at http://{self.settings.host}:{self.settings.port}",
            f"{file_label}: {self.settings.log_file}",
            f"PID: {os.getpid()}",
        ]

    def run(self, banner: List[str]) -> int:
        config = uvicorn.Config(
            self.app,
            host=self.settings.host,
            port=self.settings.port,
            log_level="warning",
            access_log=False,
            lifespan="off",
        )
        server = uvicorn.Server(config)

        # uvicorn re-raises the captured signal once shutdown is complete
        signal.signal(signal.SIGTERM, _exit_cleanly)

        for line in banner:
            print(line, flush=True)

        try:
            server.run()
        except KeyboardInterrupt:
            pass
        self.info("Server stopped")
        return 0
