from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from debuglog.models.models import ErrorResponse


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


def install_not_found_handler(app: FastAPI) -> None:
    """
    Unknown paths and known paths hit with the wrong method are both
    answered with 404 ``{"error": "Not found"}``.
    """

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            return error_response(404, "Not found")
        return error_response(exc.status_code, str(exc.detail))


def bare_app(title: str) -> FastAPI:
    # no docs/openapi routes: the HTTP surface is exactly what the service declares
    return FastAPI(title=title, docs_url=None, redoc_url=None, openapi_url=None)
