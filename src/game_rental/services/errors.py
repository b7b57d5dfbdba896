"""Custom service layer errors."""

from __future__ import annotations

from typing import Any, Optional


class ServiceError(Exception):
    """Base error for service-layer failures."""

    code = "service_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message}


class ValidationError(ServiceError):
    """Raised when an argument is malformed or out of range."""

    code = "invalid_input"

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if self.field:
            data["field"] = self.field
        return data


class NotFoundError(ServiceError):
    """Raised when an entity is not found."""

    code = "not_found"

    def __init__(self, entity: str, entity_id: object, message: str) -> None:
        super().__init__(message)
        self.entity = entity
        self.entity_id = entity_id

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["entity"] = self.entity
        return data


class ConflictError(ServiceError):
    """Raised when a request is incompatible with the current state."""

    code = "conflict"


class DuplicateError(ConflictError):
    """Raised when a unique field is already taken."""

    code = "duplicate"


class AlreadyReturnedError(ConflictError):
    """Raised when returning a rental that is already closed."""

    code = "already_returned"


class StockExhaustedError(ConflictError):
    """Raised when every copy of a game is out on an open rental."""

    code = "stock_exhausted"


class IncompleteRentalError(ServiceError):
    """Raised when deleting a rental that has not been returned yet."""

    code = "incomplete_rental"
