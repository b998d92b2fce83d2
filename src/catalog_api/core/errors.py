"""Error kinds raised during request handling and their HTTP mapping."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Failure categories; each maps to a fixed HTTP status code."""

    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    VALIDATION_FAILED = "validation_failed"
    INTERNAL = "internal"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]

    @classmethod
    def from_status(cls, status_code: int) -> ErrorKind:
        """Best-effort reverse lookup used for framework-raised HTTP errors."""
        for kind, code in _STATUS_CODES.items():
            if code == status_code:
                return kind
        if 400 <= status_code < 500:
            return cls.BAD_REQUEST
        return cls.INTERNAL


_STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.VALIDATION_FAILED: 422,
    ErrorKind.INTERNAL: 500,
}


class ApiError(Exception):
    """A request failure tagged with its kind.

    Args:
        kind: Category of the failure
        message: Human readable summary returned to the client
        errors: Optional list of detail messages (field violations)
    """

    def __init__(
        self, kind: ErrorKind, message: str, errors: list[str] | None = None
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.errors = errors

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_envelope(self) -> dict[str, Any]:
        """Serialize into the failure envelope."""
        body: dict[str, Any] = {
            "success": False,
            "status": self.status_code,
            "message": self.message,
        }
        if self.errors:
            body["errors"] = list(self.errors)
        return body

    @classmethod
    def bad_request(cls, message: str) -> ApiError:
        return cls(ErrorKind.BAD_REQUEST, message)

    @classmethod
    def unauthorized(cls, message: str) -> ApiError:
        return cls(ErrorKind.UNAUTHORIZED, message)

    @classmethod
    def forbidden(cls, message: str) -> ApiError:
        return cls(ErrorKind.FORBIDDEN, message)

    @classmethod
    def not_found(cls, message: str) -> ApiError:
        return cls(ErrorKind.NOT_FOUND, message)

    @classmethod
    def conflict(cls, message: str) -> ApiError:
        return cls(ErrorKind.CONFLICT, message)

    @classmethod
    def validation_failed(cls, errors: list[str]) -> ApiError:
        return cls(ErrorKind.VALIDATION_FAILED, "Validation failed", errors)

    @classmethod
    def internal(cls, message: str = "Internal Server Error") -> ApiError:
        return cls(ErrorKind.INTERNAL, message)

    def __repr__(self) -> str:
        return f"ApiError(kind={self.kind.value!r}, message={self.message!r})"
