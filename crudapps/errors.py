from __future__ import annotations

from typing import Any


class AppError(Exception):
    """Base error: carries a machine code, a message and the HTTP status to answer with."""

    code = "app_error"
    status_code = 500

    def __init__(self, message: str, *, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        error: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details is not None:
            error["details"] = self.details
        return {"ok": False, "error": error}


class NotFoundError(AppError):
    code = "not_found"
    status_code = 404

    @classmethod
    def for_entity(cls, entity: str, entity_id: Any) -> "NotFoundError":
        return cls(f"{entity} {entity_id} not found.")


class ValidationError(AppError):
    code = "validation_error"
    status_code = 422


class ConflictError(AppError):
    code = "conflict"
    status_code = 409


class DatabaseUnavailableError(AppError):
    code = "db_unavailable"
    status_code = 503
