#!/usr/bin/env python
"""
Run the Debug Log Viewer.
Usage: python run_log_viewer.py [port] <log-file-path> [--poll-interval 500]
"""
import sys

from debuglog.cli import viewer_main


if __name__ == "__main__":
    sys.exit(viewer_main())
