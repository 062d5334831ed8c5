import sys
import time

import requests

from debuglog.constants.constants import DEFAULT_INGEST_PORT

if __name__ == "__main__":
    port = int(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_INGEST_PORT
    url = f"http://127.0.0.1:{port}/log"

    events = [
        {"level": "info", "msg": "worker started", "pid": 4242},
        {"level": "warn", "msg": "cache miss ratio high", "ratio": 0.71},
        {"level": "error", "msg": "upload failed", "retry": 3},
        {"step": 4, "detail": {"rows": 120, "skipped": 0}},
        "plain string events are fine too",
    ]

    for event in events:
        response = requests.post(url, json=event, timeout=5)
        print(response.status_code, response.json())
        time.sleep(0.2)

    bad = requests.post(url, data="not-json", timeout=5)
    print("malformed:", bad.status_code, bad.json())
