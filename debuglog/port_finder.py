"""
Find a free loopback TCP port before the servers start.

Ports are probed one at a time, each socket bound and released before the
next probe, so the finder never competes with itself.
"""
import socket
from typing import Callable

from debuglog.constants.constants import DEFAULT_PROBE_START, LOOPBACK_HOST, PORT_PROBE_ATTEMPTS
from debuglog.handler.error_handler import NoPortAvailable
from debuglog.utils.logger import LoggerMixin


def is_port_available(port: int, host: str = LOOPBACK_HOST) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        # exclusive bind; SO_REUSEADDR is deliberately left off
        if hasattr(socket, "SO_EXCLUSIVEADDRUSE"):
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_EXCLUSIVEADDRUSE, 1)
        try:
            sock.bind((host, port))
            sock.listen(1)
        except (OSError, OverflowError):
            return False
    return True


class PortFinder(LoggerMixin):

    def __init__(
        self,
        attempts: int = PORT_PROBE_ATTEMPTS,
        host: str = LOOPBACK_HOST,
        probe: Callable[[int, str], bool] = is_port_available,
    ):
        super().__init__("PortFinder")
        self.attempts = attempts
        self.host = host
        self.probe = probe

    def find(self, start: int = DEFAULT_PROBE_START) -> int:
        """Return the first free port in ``start .. start + attempts - 1``."""
        for port in range(start, start + self.attempts):
            if self.probe(port, self.host):
                self.debug(f"Port {port} is available")
                return port
            self.debug(f"Port {port} is taken")
        raise NoPortAvailable(start, self.attempts)


def find_available_port(start: int = DEFAULT_PROBE_START, attempts: int = PORT_PROBE_ATTEMPTS) -> int:
    return PortFinder(attempts=attempts).find(start)
