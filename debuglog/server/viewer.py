"""
Viewer Service: serves the live viewer page and the raw store content.

    GET /      -> 200 text/html (static page, same for every log state)
    GET /logs  -> 200 text/plain (whole file; empty when missing or unreadable)
"""
from fastapi import FastAPI
from fastapi.responses import HTMLResponse, PlainTextResponse

from debuglog.constants.constants import POLL_INTERVAL_MS
from debuglog.handler.error_handler import ErrorHandler, StoreReadFailure
from debuglog.server.common import bare_app, install_not_found_handler
from debuglog.store.log_store import LogStore
from debuglog.viewer.page import render_viewer_page


def create_viewer_app(log_file: str, poll_interval_ms: int = POLL_INTERVAL_MS) -> FastAPI:
    # read-only: the viewer never creates the file or its directory
    store = LogStore(log_file)
    errors = ErrorHandler()
    page = render_viewer_page(poll_interval_ms)

    app = bare_app("Debug Log Viewer")
    app.state.store = store
    install_not_found_handler(app)

    @app.get("/", response_class=HTMLResponse)
    async def index():
        return HTMLResponse(page)

    @app.get("/logs", response_class=PlainTextResponse)
    async def logs():
        """Whole store file; a failed read looks like "no data yet"."""
        try:
            content = store.read_text()
        except StoreReadFailure as e:
            errors.handle_exception(e, "GET /logs")
            content = ""
        return PlainTextResponse(content)

    return app
