"""Structured outcomes for write use cases.

NotFound and Validation failures are expected business outcomes, so
handlers return them as values.  Conflicts and unexpected persistence
errors are exceptions and propagate to the caller instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from bookstore.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    ValidationError,
)


class ErrorCategory(Enum):
    NOT_FOUND = "NOT_FOUND"
    VALIDATION = "VALIDATION"


@dataclass(frozen=True)
class OperationResult:

    success: bool
    error: ErrorCategory | None = None
    message: str | None = None

    @staticmethod
    def ok() -> OperationResult:
        return OperationResult(success=True)

    @staticmethod
    def not_found(message: str) -> OperationResult:
        return OperationResult(False, ErrorCategory.NOT_FOUND, message)

    @staticmethod
    def invalid(message: str) -> OperationResult:
        return OperationResult(False, ErrorCategory.VALIDATION, message)

    @staticmethod
    def from_exception(exc: DomainException) -> OperationResult:
        """Map a terminal domain error onto a result.

        Anything other than NotFound/Validation is not an expected outcome
        and is re-raised.
        """
        if isinstance(exc, EntityNotFoundError):
            return OperationResult.not_found(str(exc))
        if isinstance(exc, ValidationError):
            return OperationResult.invalid(str(exc))
        raise exc
