"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import structlog
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import sessionmaker

from bookstore.application.cancellation import CancellationToken
from bookstore.application.events import OrderChanged, OrderEvents
from bookstore.infrastructure.config import Settings, load_settings
from bookstore.infrastructure.persistence.orm import metadata, start_mappers
from bookstore.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork

logger = structlog.get_logger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@lru_cache(maxsize=None)
def engine(database_url: str) -> Engine:
    """Create the engine for *database_url* and make sure the schema exists."""
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    db_engine = create_engine(url)
    if url.get_backend_name() == "sqlite":
        event.listen(db_engine, "connect", _enable_sqlite_foreign_keys)

    start_mappers()
    metadata.create_all(db_engine)
    return db_engine


def session_factory(settings: Settings | None = None) -> sessionmaker:
    settings = settings or load_settings()
    return sessionmaker(
        bind=engine(settings.database_url),
        expire_on_commit=False,
    )


def unit_of_work(
    settings: Settings | None = None,
    cancel_token: CancellationToken | None = None,
) -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(session_factory(settings), cancel_token)


def order_events() -> OrderEvents:
    events = OrderEvents()
    events.subscribe(_log_order_changed)
    return events


def _log_order_changed(event: OrderChanged) -> None:
    logger.info("order_changed", order_id=str(event.order_id))
