from typing import Any

from fastapi import status


class AppError(Exception):
    code: str = "APP_ERROR"
    message: str = "Application error"
    status_code: int = status.HTTP_400_BAD_REQUEST
    details: Any | None = None

    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        status_code: int | None = None,
        details: Any | None = None,
    ):
        if message is not None:
            self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        if details is not None:
            self.details = details

        super().__init__(self.message)


class ValidationError(AppError):
    """Rejected input. ``details`` is a list of ``{"field", "reason"}`` entries."""

    code = "VALIDATION_ERROR"
    message = "Validation error"
    status_code = status.HTTP_400_BAD_REQUEST

    @classmethod
    def for_field(cls, field: str, reason: str) -> "ValidationError":
        return cls(details=[{"field": field, "reason": reason}])

    @property
    def fields(self) -> list[str]:
        return [entry["field"] for entry in self.details or []]


class UniquenessConflict(AppError):
    code = "UNIQUENESS_CONFLICT"
    message = "Value is already in use"
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, field: str, value: Any, message: str | None = None):
        self.field = field
        self.value = value
        super().__init__(
            message or f"{field} '{value}' is already in use",
            details={"field": field, "value": value},
        )


class NotFoundError(AppError):
    code = "NOT_FOUND"
    message = "Resource not found"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str | None = None, entity_id: Any | None = None):
        self.entity = entity
        self.entity_id = entity_id
        if entity is None:
            super().__init__()
            return
        super().__init__(
            f"{entity} {entity_id} not found",
            details={"entity": entity, "id": entity_id},
        )


class AuthError(AppError):
    code = "AUTH_ERROR"
    message = "Authentication failed"
    status_code = status.HTTP_401_UNAUTHORIZED


class PermissionError(AppError):  # type: ignore[override]
    code = "PERMISSION_DENIED"
    message = "Insufficient permissions"
    status_code = status.HTTP_403_FORBIDDEN


class RateLimitedError(AppError):
    code = "RATE_LIMITED"
    message = "Too many attempts, try again later"
    status_code = status.HTTP_429_TOO_MANY_REQUESTS


class PersistenceError(AppError):
    """Fatal storage failure for the current request; never retried."""

    code = "PERSISTENCE_ERROR"
    message = "Storage failure"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str | None = None, *, cause: BaseException | None = None):
        self.cause = cause
        super().__init__(message)


class InternalError(AppError):
    code = "INTERNAL_ERROR"
    message = "Internal server error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


ERROR_CODE_BY_STATUS: dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: ValidationError.code,
    status.HTTP_401_UNAUTHORIZED: AuthError.code,
    status.HTTP_403_FORBIDDEN: PermissionError.code,
    status.HTTP_404_NOT_FOUND: NotFoundError.code,
    status.HTTP_409_CONFLICT: UniquenessConflict.code,
    status.HTTP_429_TOO_MANY_REQUESTS: RateLimitedError.code,
}


def error_payload(
    code: str,
    message: str,
    details: Any | None = None,
) -> dict[str, Any]:
    return {"error": {"code": code, "message": message, "details": details}}


def resolve_error_code(status_code: int) -> str:
    if status_code in ERROR_CODE_BY_STATUS:
        return ERROR_CODE_BY_STATUS[status_code]
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        return InternalError.code
    return "UNKNOWN_ERROR"
