"""Error Hierarchy — typed exceptions for every Users API failure mode.

Invariants:
    - Every error has a code (str), an http_status and a user-facing message
    - to_response() produces the wire envelope {"error": str, "details"?: str}
    - details carries the underlying parser or driver message, when there is one

Design Decisions:
    - Single hierarchy with UsersApiError base: FastAPI global handler catches all
    - InvalidIdentifierError is a 500: malformed path ids are reported as server faults
"""

from typing import Any


class UsersApiError(Exception):
    """Base exception for all Users API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        http_status: int = 500,
        details: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status
        self.details = details

    def to_response(self) -> dict[str, Any]:
        """Convert to the REST error envelope."""
        body: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


# ─── Client Errors (400-level) ──────────────────────────────────

class MissingFieldsError(UsersApiError):
    """One or more required fields are absent or empty."""
    def __init__(self, missing_fields: list[str]):
        super().__init__(
            f"Missing required fields: {', '.join(missing_fields)}",
            "MISSING_FIELDS", 400,
        )
        self.missing_fields = missing_fields


class MalformedBodyError(UsersApiError):
    """Request body is not a JSON object."""
    def __init__(self, details: str):
        super().__init__(
            "Malformed request body", "MALFORMED_BODY", 400, details,
        )


class UserNotFoundError(UsersApiError):
    """No user document matched the identifier."""
    def __init__(self, user_id: str):
        super().__init__("User not found", "USER_NOT_FOUND", 404)
        self.user_id = user_id


# ─── Server Errors (500-level) ──────────────────────────────────

class InvalidIdentifierError(UsersApiError):
    """Path identifier is not a valid ObjectId."""
    def __init__(self, raw_id: str, message: str, details: str):
        super().__init__(message, "INVALID_IDENTIFIER", 500, details)
        self.raw_id = raw_id


class DatabaseError(UsersApiError):
    """Document store operation failed."""
    def __init__(
        self, message: str, operation: str, details: str | None = None,
        code: str = "DATABASE_ERROR",
    ):
        super().__init__(message, code, 500, details)
        self.operation = operation


class DatabaseConnectionError(DatabaseError):
    """Establishing the database connection failed."""
    def __init__(self, details: str):
        super().__init__(
            "Could not connect to the database", "connect", details,
            code="DATABASE_CONNECTION_ERROR",
        )
