"""Application service: Import Books use case.

Pulls catalog records published by the external book feed into the local
catalog.  The import is keyed on the external catalog number, so running
it again only inserts books that are not stored yet.  New books arrive
with no copies in stock and a price of zero; stock and price are set
afterwards through the catalog update use cases.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

import structlog

from bookstore.application.dto import ExternalBookRecord
from bookstore.application.failures import logged_failures
from bookstore.application.unit_of_work import UnitOfWork
from bookstore.domain.model.book import Book
from bookstore.domain.model.value_objects import Money

logger = structlog.get_logger(__name__)

# Feed dates look like "Jun 26, 1997" or "Jul 8, 1999".
RELEASE_DATE_FORMAT = "%b %d, %Y"


def parse_release_date(raw: str) -> datetime | None:
    """Parse a feed release date; anything unparsable yields None."""
    if not raw:
        return None
    try:
        return datetime.strptime(raw.strip(), RELEASE_DATE_FORMAT)
    except ValueError:
        return None


class ImportBooksHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, records: Iterable[ExternalBookRecord]) -> int:
        """Insert every record whose number is not in the catalog yet.

        Returns the number of books inserted.
        """
        with logged_failures(logger, "import_books"), self._uow:
            known = self._uow.books.existing_numbers()
            imported = 0
            for record in records:
                if record.number in known:
                    continue
                self._uow.books.add(self._to_book(record))
                known.add(record.number)
                imported += 1

            if imported:
                self._uow.commit()

        logger.info("books_imported", imported=imported)
        return imported

    @staticmethod
    def _to_book(record: ExternalBookRecord) -> Book:
        return Book(
            number=record.number,
            title=record.title,
            original_title=record.original_title,
            release_date=parse_release_date(record.release_date),
            description=record.description,
            pages=record.pages,
            cover=record.cover,
            index=record.index,
            number_of_copies=0,
            price=Money.zero(),
        )
