"""
Command line entry points.

    debuglog-server    [port] <log-file-path>   (default port 9876)
    debuglog-viewer    [port] <log-file-path>   (default port 9877)
    debuglog-find-port [start]                  (default 9876)
    debuglog-tail      [url]
"""
import argparse
import sys
from typing import List, Optional

from pydantic import ValidationError

from debuglog.constants.constants import (
    DEFAULT_INGEST_PORT,
    DEFAULT_PROBE_START,
    DEFAULT_VIEWER_PORT,
    POLL_INTERVAL_MS,
    SERVER_USAGE,
    VIEWER_USAGE,
)
from debuglog.handler.error_handler import ConfigurationError, DebugLogError, ErrorHandler
from debuglog.models.models import ServerSettings
from debuglog.port_finder import find_available_port
from debuglog.utils.helper import parse_port


def _server_parser(prog: str, description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog, description=description)
    # optional so a missing path exits 1 with the one-line usage
    parser.add_argument("port", nargs="?", help="Port to listen on (non-numeric falls back to the default)")
    parser.add_argument("log_file", nargs="?", help="Path of the append-only log file")
    return parser


def load_settings(args, default_port: int, usage: str, **extra) -> ServerSettings:
    if not args.log_file:
        raise ConfigurationError("Missing log file path", usage=usage)
    try:
        return ServerSettings(port=parse_port(args.port, default_port), log_file=args.log_file, **extra)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid arguments: {e.errors()[0]['msg']}", usage=usage) from e


def _fail(errors: ErrorHandler, exc: Exception, source: str) -> int:
    error = errors.handle_exception(exc, source)
    usage = getattr(exc, "usage", None)
    print(usage or error.message, file=sys.stderr)
    return 1 if errors.is_fatal(error) else 0


def server_main(argv: Optional[List[str]] = None) -> int:
    from debuglog.server.ingest import create_ingest_app
    from debuglog.server.runner import ServerRunner

    errors = ErrorHandler()
    args = _server_parser("debuglog-server", "Append JSON log events to a file over HTTP").parse_args(argv)
    try:
        settings = load_settings(args, DEFAULT_INGEST_PORT, SERVER_USAGE)
        app = create_ingest_app(settings.log_file)
    except DebugLogError as e:
        return _fail(errors, e, "debuglog-server")
    except OSError as e:
        return _fail(errors, ConfigurationError(f"Cannot create log directory: {e}"), "debuglog-server")

    runner = ServerRunner(app, settings, "IngestServer")
    return runner.run(runner.banner("Debug log server", "Log file"))


def viewer_main(argv: Optional[List[str]] = None) -> int:
    from debuglog.server.runner import ServerRunner
    from debuglog.server.viewer import create_viewer_app

    errors = ErrorHandler()
    parser = _server_parser("debuglog-viewer", "Serve a live browser view of a debuglog file")
    parser.add_argument("--poll-interval", type=int, default=POLL_INTERVAL_MS, help="Browser poll interval in ms (default: 500)")
    args = parser.parse_args(argv)
    try:
        settings = load_settings(args, DEFAULT_VIEWER_PORT, VIEWER_USAGE, poll_interval_ms=args.poll_interval)
    except DebugLogError as e:
        return _fail(errors, e, "debuglog-viewer")

    app = create_viewer_app(settings.log_file, poll_interval_ms=settings.poll_interval_ms)
    runner = ServerRunner(app, settings, "ViewerServer")
    return runner.run(runner.banner("Log viewer", "Watching"))


def find_port_main(argv: Optional[List[str]] = None) -> int:
    errors = ErrorHandler()
    parser = argparse.ArgumentParser(prog="debuglog-find-port", description="Print the first free loopback port")
    parser.add_argument("start", nargs="?", help=f"First port to try (default: {DEFAULT_PROBE_START})")
    args = parser.parse_args(argv)

    try:
        port = find_available_port(parse_port(args.start, DEFAULT_PROBE_START))
    except DebugLogError as e:
        return _fail(errors, e, "debuglog-find-port")
    print(port)
    return 0


def tail_main(argv: Optional[List[str]] = None) -> int:
    from debuglog.viewer.tail import LogTail

    parser = argparse.ArgumentParser(prog="debuglog-tail", description="Follow a running debuglog viewer in the terminal")
    parser.add_argument("url", nargs="?", default=f"http://127.0.0.1:{DEFAULT_VIEWER_PORT}", help="Viewer base URL")
    parser.add_argument("--poll-interval", type=int, default=POLL_INTERVAL_MS, help="Poll interval in ms (default: 500)")
    parser.add_argument("--raw", action="store_true", help="Print JSON payloads without re-indenting")
    args = parser.parse_args(argv)

    tail = LogTail(args.url, poll_interval_ms=args.poll_interval, pretty=not args.raw)
    try:
        tail.run()
    except KeyboardInterrupt:
        pass
    return 0

