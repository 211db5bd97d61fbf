"""Error types raised by the document store and service layer."""

from enum import Enum

from pydantic import BaseModel


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCode:
    """Error codes for specific error conditions."""

    # Caller errors
    ERR_VALIDATION = "ERR_VALIDATION"
    ERR_NOT_FOUND = "ERR_NOT_FOUND"
    ERR_CONFLICT = "ERR_CONFLICT"

    # Storage errors
    ERR_INTEGRITY = "ERR_INTEGRITY"
    ERR_STORAGE = "ERR_STORAGE"
    ERR_DOCUMENT_FORMAT = "ERR_DOCUMENT_FORMAT"

    # Generic errors
    ERR_UNKNOWN = "ERR_UNKNOWN"


class ChoreTallyError(Exception):
    """Base class for every error the core raises on purpose."""

    code: str = ErrorCode.ERR_UNKNOWN
    severity: ErrorSeverity = ErrorSeverity.MEDIUM
    http_status: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ChoreTallyError):
    """A required argument is missing or malformed."""

    code = ErrorCode.ERR_VALIDATION
    severity = ErrorSeverity.LOW
    http_status = 400


class NotFoundError(ChoreTallyError):
    """A household, user, category or share code does not resolve."""

    code = ErrorCode.ERR_NOT_FOUND
    severity = ErrorSeverity.LOW
    http_status = 404


class ConflictError(ChoreTallyError):
    """The mutation would break a uniqueness rule."""

    code = ErrorCode.ERR_CONFLICT
    severity = ErrorSeverity.LOW
    http_status = 409


class IntegrityError(ChoreTallyError):
    """Authentication tag verification failed while decrypting."""

    code = ErrorCode.ERR_INTEGRITY
    severity = ErrorSeverity.CRITICAL


class StorageError(ChoreTallyError):
    """Reading or writing the backing file failed."""

    code = ErrorCode.ERR_STORAGE
    severity = ErrorSeverity.CRITICAL


class DocumentFormatError(ChoreTallyError):
    """The backing file decrypted (or failed to) but is not a valid document record."""

    code = ErrorCode.ERR_DOCUMENT_FORMAT
    severity = ErrorSeverity.CRITICAL


class ErrorResponse(BaseModel):
    """Structured error response for callers of the core."""

    code: str
    message: str
    severity: ErrorSeverity
    http_status: int


def to_error_response(exception: Exception) -> ErrorResponse:
    """Convert an exception into a structured response.

    Caller errors keep their message. Storage and integrity failures are
    reported with a generic message so file paths and cipher details do not
    leak to clients.

    Args:
        exception: The exception raised during execution

    Returns:
        ErrorResponse with code, message, severity and HTTP status
    """
    if isinstance(exception, ValidationError | NotFoundError | ConflictError):
        return ErrorResponse(
            code=exception.code,
            message=exception.message,
            severity=exception.severity,
            http_status=exception.http_status,
        )

    if isinstance(exception, ChoreTallyError):
        return ErrorResponse(
            code=exception.code,
            message="The data store is unavailable.",
            severity=exception.severity,
            http_status=exception.http_status,
        )

    return ErrorResponse(
        code=ErrorCode.ERR_UNKNOWN,
        message="An unexpected error occurred.",
        severity=ErrorSeverity.MEDIUM,
        http_status=500,
    )
