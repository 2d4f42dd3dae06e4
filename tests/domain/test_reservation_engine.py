"""Unit tests for the ReservationEngine domain service."""

import uuid

import pytest

from bookstore.domain.exceptions import EntityNotFoundError, ValidationError
from bookstore.domain.model.book import Book
from bookstore.domain.model.order import Order
from bookstore.domain.model.value_objects import Money, Quantity
from bookstore.domain.service.reservation_engine import ReservationEngine
from tests.fakes import FakeBookRepository, FakeOrderRepository


def _setup(
    *books: Book,
) -> tuple[ReservationEngine, Order, FakeBookRepository, FakeOrderRepository]:
    book_repo = FakeBookRepository(list(books))
    order = Order.create("Main St 1")
    order_repo = FakeOrderRepository([order])
    return ReservationEngine(book_repo, order_repo), order, book_repo, order_repo


def _book(title: str = "Dune", copies: int = 10, price: str = "15.00", number: int = 1) -> Book:
    return Book(number=number, title=title, price=Money.of(price), number_of_copies=copies)


class TestAddLine:

    def test_new_line_reserves_stock_and_snapshots_price(self):
        book = _book(copies=10, price="15.00")
        engine, order, _, _ = _setup(book)

        line = engine.add_line(order, book, 3)

        assert book.number_of_copies == 7
        assert line.quantity == Quantity(3)
        assert line.price_at_purchase == Money.of("15.00")
        assert order.total_cost == Money.of("45.00")

    def test_existing_line_grows_and_keeps_snapshot(self):
        book = _book(copies=10, price="15.00")
        engine, order, _, _ = _setup(book)
        engine.add_line(order, book, 3)

        book.update_price(Money.of("20.00"))
        line = engine.add_line(order, book, 2)

        assert len(order.lines) == 1
        assert line.quantity == Quantity(5)
        assert line.price_at_purchase == Money.of("15.00")
        assert book.number_of_copies == 5
        assert order.total_cost == Money.of("75.00")

    def test_quantity_equal_to_stock_accepted(self):
        book = _book(copies=4)
        engine, order, _, _ = _setup(book)
        engine.add_line(order, book, 4)
        assert book.number_of_copies == 0

    def test_quantity_above_stock_rejected_without_side_effects(self):
        book = _book(copies=4)
        engine, order, _, _ = _setup(book)

        with pytest.raises(ValidationError, match=r"\(5\).*\(4\)"):
            engine.add_line(order, book, 5)

        assert book.number_of_copies == 4
        assert order.lines == []
        assert order.total_cost == Money.zero()

    def test_non_positive_quantity_rejected(self):
        book = _book()
        engine, order, _, _ = _setup(book)
        with pytest.raises(ValidationError, match="must be positive"):
            engine.add_line(order, book, 0)
        assert book.number_of_copies == 10

    def test_growth_past_line_bound_rejected_before_reserving(self):
        book = _book(copies=20_000)
        engine, order, _, _ = _setup(book)
        engine.add_line(order, book, 9_999)

        with pytest.raises(ValidationError, match="must not exceed 10000"):
            engine.add_line(order, book, 2)

        assert book.number_of_copies == 20_000 - 9_999
        assert order.line_for(book.id).quantity == Quantity(9_999)

    def test_second_add_checks_remaining_stock_only(self):
        book = _book(copies=5)
        engine, order, _, _ = _setup(book)
        engine.add_line(order, book, 3)

        with pytest.raises(ValidationError, match=r"\(3\).*\(2\)"):
            engine.add_line(order, book, 3)
        engine.add_line(order, book, 2)

        assert book.number_of_copies == 0
        assert order.line_for(book.id).quantity == Quantity(5)


class TestRemoveLine:

    def test_releases_full_quantity_and_drops_line(self):
        book = _book(copies=10)
        engine, order, _, _ = _setup(book)
        engine.add_line(order, book, 3)
        engine.add_line(order, book, 2)

        engine.remove_line(order, book.id)

        assert book.number_of_copies == 10
        assert order.lines == []
        assert order.total_cost == Money.zero()

    def test_missing_line_is_not_found(self):
        book = _book()
        engine, order, _, _ = _setup(book)
        with pytest.raises(EntityNotFoundError, match="not found in order"):
            engine.remove_line(order, book.id)
        assert book.number_of_copies == 10

    def test_other_lines_are_kept(self):
        dune = _book("Dune", copies=10, price="15.00", number=1)
        emma = _book("Emma", copies=10, price="5.00", number=2)
        engine, order, _, _ = _setup(dune, emma)
        engine.add_line(order, dune, 1)
        engine.add_line(order, emma, 2)

        engine.remove_line(order, dune.id)

        assert [line.book_id for line in order.lines] == [emma.id]
        assert order.total_cost == Money.of("10.00")


class TestReleaseOrder:

    def test_every_line_goes_back_to_stock(self):
        dune = _book("Dune", copies=10, number=1)
        emma = _book("Emma", copies=6, number=2)
        engine, order, _, _ = _setup(dune, emma)
        engine.add_line(order, dune, 4)
        engine.add_line(order, emma, 6)

        released = engine.release_order(order)

        assert released == 10
        assert dune.number_of_copies == 10
        assert emma.number_of_copies == 6
        assert order.lines == []
        assert order.total_cost == Money.zero()


class TestDetachBook:

    def test_removes_book_from_every_order_and_recomputes_totals(self):
        dune = _book("Dune", copies=10, price="15.00", number=1)
        emma = _book("Emma", copies=10, price="5.00", number=2)
        book_repo = FakeBookRepository([dune, emma])
        first = Order.create("Main St 1")
        second = Order.create("Elm St 2")
        order_repo = FakeOrderRepository([first, second])
        engine = ReservationEngine(book_repo, order_repo)
        engine.add_line(first, dune, 2)
        engine.add_line(first, emma, 1)
        engine.add_line(second, dune, 3)

        affected = engine.detach_book(dune)

        assert set(affected) == {first.id, second.id}
        assert book_repo.get_by_id(dune.id) is None
        assert first.line_for(dune.id) is None
        assert second.lines == []
        assert first.total_cost == Money.of("5.00")
        assert second.total_cost == Money.zero()
        assert first.is_total_consistent and second.is_total_consistent

    def test_book_without_lines_is_just_deleted(self):
        book = _book()
        engine, _, book_repo, _ = _setup(book)
        assert engine.detach_book(book) == []
        assert book_repo.get_by_id(book.id) is None


class TestEndToEndScenario:

    def test_add_add_remove(self):
        book = _book(copies=10, price="15.00")
        engine, order, _, _ = _setup(book)

        engine.add_line(order, book, 3)
        assert (book.number_of_copies, order.line_for(book.id).quantity.value) == (7, 3)
        assert order.total_cost == Money.of("45.00")

        engine.add_line(order, book, 2)
        assert (book.number_of_copies, order.line_for(book.id).quantity.value) == (5, 5)
        assert order.total_cost == Money.of("75.00")

        engine.remove_line(order, book.id)
        assert book.number_of_copies == 10
        assert order.line_for(book.id) is None
        assert order.total_cost == Money.zero()

    def test_stock_is_conserved(self):
        books = [_book(f"B{i}", copies=10, number=i) for i in range(3)]
        engine, order, _, _ = _setup(*books)
        initial = sum(b.number_of_copies for b in books)

        engine.add_line(order, books[0], 4)
        engine.add_line(order, books[1], 10)
        engine.add_line(order, books[0], 1)
        engine.remove_line(order, books[1].id)
        engine.add_line(order, books[2], 7)

        reserved = sum(line.quantity.value for line in order.lines)
        assert sum(b.number_of_copies for b in books) + reserved == initial
        assert order.is_total_consistent

    def test_unknown_book_id_for_removal(self):
        engine, order, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            engine.remove_line(order, uuid.uuid4())
