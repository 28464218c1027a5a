"""Error Hierarchy — operational errors carrying an HTTP status code and label.

Invariants:
    - Every AppError resolves to exactly one (status_code, status, message) triple
    - Unset status_code resolves to 500; unset status label resolves to "error"
    - Resolution never writes back to the instance (to_response() is read-only)
    - is_operational marks expected failures; anything else is masked by the catch-all

Design Decisions:
    - Single hierarchy with AppError base: one global handler catches all
    - Defaults resolved at read time rather than in __init__: "unset" stays observable
      so the error middleware is the one place defaults are applied
"""

DEFAULT_STATUS_CODE = 500
DEFAULT_STATUS = "error"
FAIL_STATUS = "fail"


class AppError(Exception):
    """Base exception for every failure a handler can signal."""

    is_operational = True

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        status: str | None = None,
        code: str = "APP_ERROR",
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.status = status
        self.code = code

    def resolved_status_code(self) -> int:
        return self.status_code or DEFAULT_STATUS_CODE

    def resolved_status(self) -> str:
        return self.status or DEFAULT_STATUS

    def to_response(self) -> dict:
        """Convert to the {status, message} error envelope."""
        return {
            "status": self.resolved_status(),
            "message": self.message,
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class BadRequestError(AppError):
    """Request is well-formed JSON but semantically invalid."""
    def __init__(self, message: str):
        super().__init__(message, 400, FAIL_STATUS, "BAD_REQUEST")


class InvalidIdentifierError(AppError):
    """Path parameter cannot be parsed as an identifier."""
    def __init__(self, field: str, value: str):
        super().__init__(
            f"Invalid {field}: {value}", 400, FAIL_STATUS, "INVALID_ID",
        )
        self.field = field
        self.value = value


class DuplicateResourceError(AppError):
    """Unique field collides with an existing row."""
    def __init__(self, resource_type: str, field: str, value: str):
        super().__init__(
            f"{resource_type} with {value} {field} already exists in database",
            400, FAIL_STATUS, "DUPLICATE_RESOURCE",
        )
        self.field = field
        self.value = value


class NotFoundError(AppError):
    """Requested resource does not exist."""
    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"No {resource_type.lower()} found with id {resource_id}",
            404, FAIL_STATUS, "RESOURCE_NOT_FOUND",
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(AppError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Database {operation} failed: {message}",
            503, DEFAULT_STATUS, "DATABASE_ERROR",
        )
        self.operation = operation
