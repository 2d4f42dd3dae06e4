"""End-to-end tests for the click CLI against a temporary SQLite file."""

import json
import logging
import uuid

import pytest
import structlog
from click.testing import CliRunner

from bookstore.infrastructure import bootstrap
from bookstore.infrastructure.cli.main import cli


@pytest.fixture
def runner(settings, monkeypatch):
    monkeypatch.setenv("BOOKSTORE_DATABASE_URL", settings.database_url)
    monkeypatch.setenv("BOOKSTORE_LOG_LEVEL", "ERROR")
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield CliRunner()
    root.handlers, root.level = handlers, level
    structlog.reset_defaults()


@pytest.fixture
def feed(tmp_path):
    path = tmp_path / "books.json"
    path.write_text(
        json.dumps(
            [
                {
                    "number": 1,
                    "title": "Philosopher's Stone",
                    "originalTitle": "Harry Potter and the Philosopher's Stone",
                    "releaseDate": "Jun 26, 1997",
                    "pages": 223,
                    "index": 0,
                },
                {"number": 2, "title": "Chamber of Secrets", "releaseDate": "Jul 2, 1998"},
            ]
        ),
        encoding="utf-8",
    )
    return path


def _book_id(settings, number: int) -> uuid.UUID:
    with bootstrap.unit_of_work(settings) as uow:
        return uow.books.get_by_number(number).id


class TestBookCommands:

    def test_import_is_idempotent(self, runner, feed):
        first = runner.invoke(cli, ["book", "import", str(feed)])
        second = runner.invoke(cli, ["book", "import", str(feed)])

        assert first.exit_code == 0, first.output
        assert "Imported 2 new book(s)." in first.output
        assert "Imported 0 new book(s)." in second.output

    def test_list_and_show(self, runner, feed, settings):
        runner.invoke(cli, ["book", "import", str(feed)])
        book_id = _book_id(settings, 1)

        listing = runner.invoke(cli, ["book", "list"])
        shown = runner.invoke(cli, ["book", "show", "--id", str(book_id)])

        assert "Philosopher's Stone" in listing.output
        assert "Chamber of Secrets" in listing.output
        assert "Released:       Jun 26, 1997" in shown.output

    def test_invalid_price_is_reported(self, runner, feed, settings):
        runner.invoke(cli, ["book", "import", str(feed)])
        book_id = _book_id(settings, 1)

        result = runner.invoke(
            cli, ["book", "update-price", "--id", str(book_id), "--price", "1.999"]
        )

        assert result.exit_code == 1
        assert "at most 2 decimal places" in result.output

    def test_unknown_book(self, runner):
        result = runner.invoke(cli, ["book", "delete", "--id", str(uuid.uuid4())])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_delete_all_asks_for_confirmation(self, runner, feed):
        runner.invoke(cli, ["book", "import", str(feed)])

        declined = runner.invoke(cli, ["book", "delete-all"], input="n\n")
        assert declined.exit_code == 1
        assert "Philosopher's Stone" in runner.invoke(cli, ["book", "list"]).output

        confirmed = runner.invoke(cli, ["book", "delete-all", "--yes"])
        assert confirmed.exit_code == 0, confirmed.output
        assert "Deleted 2 book(s)." in confirmed.output
        assert "No books found." in runner.invoke(cli, ["book", "list"]).output


class TestOrderCommands:

    def _stock_book(self, runner, feed, settings) -> uuid.UUID:
        runner.invoke(cli, ["book", "import", str(feed)])
        book_id = _book_id(settings, 1)
        runner.invoke(cli, ["book", "update-copies", "--id", str(book_id), "--copies", "10"])
        runner.invoke(cli, ["book", "update-price", "--id", str(book_id), "--price", "15.00"])
        return book_id

    def test_full_order_flow(self, runner, feed, settings):
        book_id = self._stock_book(runner, feed, settings)
        order_id = uuid.uuid4()

        created = runner.invoke(
            cli, ["order", "create", "--address", "Main St 1", "--id", str(order_id)]
        )
        added = runner.invoke(
            cli,
            ["order", "add-book", "--id", str(order_id), "--book", str(book_id), "--quantity", "3"],
        )
        lines = runner.invoke(cli, ["order", "lines", "--id", str(order_id)])
        shown = runner.invoke(cli, ["order", "show", "--id", str(order_id)])

        assert created.exit_code == 0, created.output
        assert added.exit_code == 0, added.output
        assert "Philosopher's Stone" in lines.output
        assert "$45.00" in lines.output
        assert "Total:   $45.00" in shown.output

        deleted = runner.invoke(cli, ["order", "delete", "--id", str(order_id)])
        assert deleted.exit_code == 0
        with bootstrap.unit_of_work(settings) as uow:
            assert uow.books.get_by_id(book_id).number_of_copies == 10

    def test_insufficient_stock_is_reported(self, runner, feed, settings):
        book_id = self._stock_book(runner, feed, settings)
        order_id = uuid.uuid4()
        runner.invoke(cli, ["order", "create", "--address", "Main St 1", "--id", str(order_id)])

        result = runner.invoke(
            cli,
            ["order", "add-book", "--id", str(order_id), "--book", str(book_id), "--quantity", "11"],
        )

        assert result.exit_code == 1
        assert "Invalid request" in result.output
        assert "(11)" in result.output

    def test_remove_book_not_in_order(self, runner, feed, settings):
        book_id = self._stock_book(runner, feed, settings)
        order_id = uuid.uuid4()
        runner.invoke(cli, ["order", "create", "--address", "Main St 1", "--id", str(order_id)])

        result = runner.invoke(
            cli, ["order", "remove-book", "--id", str(order_id), "--book", str(book_id)]
        )

        assert result.exit_code == 1
        assert "Not found" in result.output

    def test_blank_address_rejected(self, runner):
        result = runner.invoke(cli, ["order", "create", "--address", " "])
        assert result.exit_code == 1
        assert "Address is required" in result.output

    def test_empty_order_list(self, runner):
        result = runner.invoke(cli, ["order", "list"])
        assert "No orders found." in result.output

    def test_restock_above_ceiling_with_reservations_is_rejected(self, runner, feed, settings):
        book_id = self._stock_book(runner, feed, settings)
        order_id = uuid.uuid4()
        runner.invoke(cli, ["order", "create", "--address", "Main St 1", "--id", str(order_id)])
        runner.invoke(
            cli,
            ["order", "add-book", "--id", str(order_id), "--book", str(book_id), "--quantity", "5"],
        )

        result = runner.invoke(
            cli, ["book", "update-copies", "--id", str(book_id), "--copies", "100000"]
        )
        assert result.exit_code == 1
        assert "5 copies are reserved" in result.output

        deleted = runner.invoke(cli, ["order", "delete", "--id", str(order_id)])
        assert deleted.exit_code == 0, deleted.output
        with bootstrap.unit_of_work(settings) as uow:
            assert uow.books.get_by_id(book_id).number_of_copies == 10
