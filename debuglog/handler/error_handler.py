from dataclasses import dataclass
from enum import Enum
from json import JSONDecodeError
from typing import Optional

from debuglog.utils.logger import LoggerMixin


class ErrorType(str, Enum):
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    PORT_UNAVAILABLE = "PORT_UNAVAILABLE"
    MALFORMED_PAYLOAD = "MALFORMED_PAYLOAD"
    STORE_READ_FAILURE = "STORE_READ_FAILURE"
    STORE_WRITE_FAILURE = "STORE_WRITE_FAILURE"
    SYSTEM_ERROR = "SYSTEM_ERROR"


class ErrorSeverity(str, Enum):
    RECOVERABLE = "RECOVERABLE"
    FATAL = "FATAL"


class DebugLogError(Exception):
    """Base class for every error raised by debuglog itself."""


class ConfigurationError(DebugLogError):
    def __init__(self, message: str, usage: Optional[str] = None):
        super().__init__(message)
        self.usage = usage


class NoPortAvailable(DebugLogError):
    def __init__(self, start: int, attempts: int):
        super().__init__(
            f"No available port found in {start}-{start + attempts - 1}"
        )
        self.start = start
        self.attempts = attempts


class MalformedPayload(DebugLogError):
    pass


class StoreReadFailure(DebugLogError):
    pass


class StoreWriteFailure(DebugLogError):
    pass


@dataclass
class ServiceError:
    error_type: ErrorType
    severity: ErrorSeverity
    message: str
    source: str
    raw_exception: Optional[Exception] = None


class ErrorHandler(LoggerMixin):
    """
    Process-level error handler.

    Responsibilities:
    - Normalize configuration / port / payload / store errors
    - Attach semantic meaning (type + severity)
    - Tell the CLI whether an error ends the process
    """

    def __init__(self):
        super().__init__("ErrorHandler")

    # ---------- Exception normalization ----------

    def handle_exception(self, exc: Exception, source: str) -> ServiceError:
        """
        Normalize a raised Exception into ServiceError.
        """
        # fatal startup errors are printed by the CLI itself
        if isinstance(exc, ConfigurationError):
            self.debug(f"[{source}] {exc}")
            return ServiceError(
                error_type=ErrorType.CONFIGURATION_ERROR,
                severity=ErrorSeverity.FATAL,
                message=str(exc),
                source=source,
                raw_exception=exc
            )

        if isinstance(exc, NoPortAvailable):
            self.debug(f"[{source}] {exc}")
            return ServiceError(
                error_type=ErrorType.PORT_UNAVAILABLE,
                severity=ErrorSeverity.FATAL,
                message=str(exc),
                source=source,
                raw_exception=exc
            )

        # ---- Per-request errors stay inside the request ----
        if isinstance(exc, (MalformedPayload, JSONDecodeError, UnicodeDecodeError)):
            self.warning(f"[{source}] Malformed payload: {exc}")
            return ServiceError(
                error_type=ErrorType.MALFORMED_PAYLOAD,
                severity=ErrorSeverity.RECOVERABLE,
                message=str(exc),
                source=source,
                raw_exception=exc
            )

        if isinstance(exc, StoreWriteFailure):
            self.error(f"[{source}] Store write failed: {exc}")
            return ServiceError(
                error_type=ErrorType.STORE_WRITE_FAILURE,
                severity=ErrorSeverity.RECOVERABLE,
                message=str(exc),
                source=source,
                raw_exception=exc
            )

        if isinstance(exc, (StoreReadFailure, OSError)):
            self.warning(f"[{source}] Store read failed: {exc}")
            return ServiceError(
                error_type=ErrorType.STORE_READ_FAILURE,
                severity=ErrorSeverity.RECOVERABLE,
                message=str(exc),
                source=source,
                raw_exception=exc
            )

        # ---- Fallback (unknown) ----
        self.error(f"[{source}] Exception: {exc}")
        return ServiceError(
            error_type=ErrorType.SYSTEM_ERROR,
            severity=ErrorSeverity.FATAL,
            message=str(exc),
            source=source,
            raw_exception=exc
        )

    def is_fatal(self, error: ServiceError) -> bool:
        return error.severity == ErrorSeverity.FATAL
