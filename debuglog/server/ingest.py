"""
Ingestion Service: accepts JSON log events over HTTP and appends them to
the store file.

    OPTIONS *     -> 204 (CORS preflight, any path)
    POST /log     -> 200 {"ok": true} | 400 {"error": "..."}
    GET  /health  -> 200 {"ok": true, "logFile": "<path>"}
"""
from fastapi import FastAPI, Request, Response

from debuglog.constants.constants import CORS_HEADERS
from debuglog.handler.error_handler import ErrorHandler, MalformedPayload, StoreWriteFailure
from debuglog.models.models import HealthResponse, OkResponse
from debuglog.server.common import bare_app, error_response, install_not_found_handler
from debuglog.store.log_store import LogStore, loads_payload


def create_ingest_app(log_file: str) -> FastAPI:
    store = LogStore(log_file)
    store.ensure_parent()
    errors = ErrorHandler()

    app = bare_app("Debug Log Server")
    app.state.store = store
    install_not_found_handler(app)

    @app.middleware("http")
    async def cors(request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=CORS_HEADERS)
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    @app.exception_handler(MalformedPayload)
    async def malformed_payload_handler(request: Request, exc: MalformedPayload):
        error = errors.handle_exception(exc, f"{request.method} {request.url.path}")
        return error_response(400, error.message)

    @app.exception_handler(StoreWriteFailure)
    async def store_write_failure_handler(request: Request, exc: StoreWriteFailure):
        error = errors.handle_exception(exc, f"{request.method} {request.url.path}")
        return error_response(500, error.message)

    @app.post("/log", response_model=OkResponse)
    async def ingest(request: Request):
        """Append one event; the body must be a single JSON value of any shape."""
        body = await request.body()
        payload = loads_payload(body)
        store.append(payload)
        return OkResponse()

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(log_file=store.log_file)

    return app
