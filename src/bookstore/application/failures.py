"""Logging for failures that escape a use case.

Expected outcomes (not found, validation) are returned as results and are
not logged here.  Anything else that escapes is logged with the
operation's context and re-raised unchanged.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from bookstore.domain.exceptions import (
    ConcurrencyConflictError,
    DomainException,
    OperationCancelledError,
)


@contextmanager
def logged_failures(log, operation: str) -> Iterator[None]:
    try:
        yield
    except ConcurrencyConflictError:
        log.warning(f"{operation}_conflict")
        raise
    except OperationCancelledError:
        log.info(f"{operation}_cancelled")
        raise
    except DomainException:
        raise
    except Exception:
        log.exception(f"{operation}_failed")
        raise
