from dataclasses import dataclass
from typing import Any, Dict, Iterable, List


class UserdeskException(Exception):
    """Base exception for all userdesk errors."""

    pass


class ConfigurationException(UserdeskException):
    """Raised when configuration is missing or invalid."""

    pass


@dataclass(frozen=True)
class FieldError:
    """A single violated constraint on an input field."""

    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}


class RequestValidationException(UserdeskException):
    """
    Raised when a request payload fails validation.

    Carries every violated field, not just the first one.
    """

    def __init__(self, errors: Iterable[FieldError], message: str = "Validation failed"):
        self.errors: List[FieldError] = list(errors)
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": str(self),
            "errors": [error.to_dict() for error in self.errors],
        }


class NotFoundException(UserdeskException):
    """Raised when no record matches the requested id or email."""

    pass


class DataAccessException(UserdeskException):
    """Raised when the underlying store fails."""

    pass


class ConstraintViolationException(DataAccessException):
    """Raised when the store rejects a write on an integrity constraint."""

    pass
