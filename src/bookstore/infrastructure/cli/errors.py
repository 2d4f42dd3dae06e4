"""Translation of use-case outcomes into click errors."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import click
import structlog
from sqlalchemy.exc import SQLAlchemyError

from bookstore.application.results import ErrorCategory, OperationResult
from bookstore.domain.exceptions import ConcurrencyConflictError, DomainException

logger = structlog.get_logger(__name__)


@contextmanager
def cli_errors() -> Iterator[None]:
    try:
        yield
    except ConcurrencyConflictError as exc:
        raise click.ClickException(f"{exc} Retry the command.")
    except DomainException as exc:
        raise click.ClickException(str(exc))
    except SQLAlchemyError:
        logger.exception("storage_failure")
        raise click.ClickException("The operation failed due to a storage error.")


def raise_for_result(result: OperationResult) -> None:
    if result.success:
        return
    if result.error is ErrorCategory.NOT_FOUND:
        raise click.ClickException(f"Not found: {result.message}")
    raise click.ClickException(f"Invalid request: {result.message}")
