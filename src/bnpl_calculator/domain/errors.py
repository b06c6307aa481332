"""Domain error classes.

Expected bad input is reported as an error set on the calculation outcome.
These exceptions are for callers that prefer raising, and for collaborators
that break the engine's contracts.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all calculator errors."""

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "code": self.error_code, **self.context}


class ValidationError(DomainError):
    """One or more form fields failed validation.

    Args:
        errors: One entry per field, each with 'field', 'message' and 'code'
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(self, errors: list[dict[str, str]], message: str = "Validation failed") -> None:
        self.errors = errors
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "errors": self.errors}


class InternalError(DomainError):
    """A collaborator broke a contract the engine relies on.

    E.g. a rate resolver quoting a non-positive tenure.
    """

    error_code: str = "INTERNAL_ERROR"
