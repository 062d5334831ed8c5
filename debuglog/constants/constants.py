LOOPBACK_HOST = "127.0.0.1"

DEFAULT_INGEST_PORT = 9876
DEFAULT_VIEWER_PORT = 9877
DEFAULT_PROBE_START = DEFAULT_INGEST_PORT
PORT_PROBE_ATTEMPTS = 100

POLL_INTERVAL_MS = 500

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

SERVER_USAGE = "Usage: debuglog-server <port> <log-file-path>"
VIEWER_USAGE = "Usage: debuglog-viewer <port> <log-file-path>"
EMPTY_LOG_MESSAGE = "Waiting for log entries..."
