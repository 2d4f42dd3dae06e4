"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the application layer can translate them uniformly into results and the
CLI can display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ConcurrencyConflictError(DomainException):
    """A concurrent transaction modified the same rows first.

    Retryable: the caller may re-fetch and apply the whole operation again.
    """


class OperationCancelledError(DomainException):
    """The caller cancelled the operation before it was committed."""
