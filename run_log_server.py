#!/usr/bin/env python
"""
Run the Debug Log Server (ingestion endpoint).
Usage: python run_log_server.py [port] <log-file-path>
"""
import sys

from debuglog.cli import server_main


if __name__ == "__main__":
    sys.exit(server_main())
