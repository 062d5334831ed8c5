from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from debuglog.constants.constants import LOOPBACK_HOST, POLL_INTERVAL_MS


class ServerSettings(BaseModel):
    """Runtime settings of one Ingestion or Viewer Service process."""

    host: str = Field(LOOPBACK_HOST, description="Always loopback; the tool is local-only.")
    port: int = Field(..., ge=1, le=65535)
    log_file: str = Field(..., min_length=1, description="Store file path, exactly as given.")
    poll_interval_ms: int = Field(POLL_INTERVAL_MS, ge=50)


class LogLine(BaseModel):
    """One persisted record: ``[<received_at>] <payload-json>``."""

    received_at: str
    payload: Any


class ViewerEntry(BaseModel):
    """A ``{time, data}`` pair parsed from one line of the store file."""

    time: str = ""
    data: str


class OkResponse(BaseModel):
    ok: bool = True


class HealthResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    log_file: str = Field(..., alias="logFile")


class ErrorResponse(BaseModel):
    error: str
