"""Service Errors — exceptions raised by the server shell (not tool-level domain errors).

Invariants:
    - Every ServiceError has a code (str), severity (ErrorSeverity) and http_status
    - to_response() produces the REST envelope and never includes the underlying cause
    - Tool-level failures never use these: they travel as OperationFailed / cause trees

Design Decisions:
    - Separate from domain_errors: HTTP-level failures (DB down, bad envelope) answer
      with an HTTP status, tool failures answer 200 with isError
"""

from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ServiceError(Exception):
    """Base exception for server-shell failures."""

    def __init__(
        self,
        message: str,
        code: str,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.severity = severity
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "severity": self.severity.value,
            }
        }


class DatabaseError(ServiceError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorSeverity.CRITICAL, 503,
        )
        self.operation = operation
