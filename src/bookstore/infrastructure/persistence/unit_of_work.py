"""SQLAlchemy unit of work: one session, one transaction per ``with`` block."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from bookstore.application.cancellation import CancellationToken
from bookstore.application.unit_of_work import UnitOfWork
from bookstore.domain.exceptions import ConcurrencyConflictError
from bookstore.infrastructure.persistence.sqlalchemy_book_repository import (
    SqlAlchemyBookRepository,
)
from bookstore.infrastructure.persistence.sqlalchemy_order_repository import (
    SqlAlchemyOrderRepository,
)

CONFLICT_MESSAGE = (
    "The record was modified by another user. Please refresh and try again."
)


class SqlAlchemyUnitOfWork(UnitOfWork):

    session: Session

    def __init__(
        self,
        session_factory: sessionmaker,
        cancel_token: CancellationToken | None = None,
    ) -> None:
        super().__init__(cancel_token)
        self._session_factory = session_factory

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        super().__enter__()
        self.session = self._session_factory()
        self.books = SqlAlchemyBookRepository(self.session, self.cancel_token)
        self.orders = SqlAlchemyOrderRepository(self.session, self.cancel_token)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        super().__exit__(exc_type, exc, tb)
        self.session.close()
        # A stale version or a duplicate key at flush time means another
        # transaction got there first.  Other integrity errors propagate.
        if isinstance(exc, StaleDataError) or _is_duplicate_key(exc):
            raise ConcurrencyConflictError(CONFLICT_MESSAGE) from exc

    def save_changes(self) -> None:
        self.cancel_token.raise_if_cancelled()
        self.session.flush()

    def _commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


def _is_duplicate_key(exc: BaseException | None) -> bool:
    """True for unique / primary key violations, across SQLite, PostgreSQL and MySQL."""
    if not isinstance(exc, IntegrityError):
        return False
    message = str(exc.orig).lower()
    return "unique" in message or "duplicate" in message
