"""CLI commands for the book catalog."""

from __future__ import annotations

import json
import uuid

import click

from bookstore.application.delete_book import DeleteAllBooksHandler, DeleteBookHandler
from bookstore.application.dto import ExternalBookRecord
from bookstore.application.import_books import ImportBooksHandler
from bookstore.application.list_books import ListBooksHandler
from bookstore.application.show_book import ShowBookHandler
from bookstore.application.update_book import (
    UpdateBookCopiesHandler,
    UpdateBookPriceHandler,
)
from bookstore.infrastructure.bootstrap import order_events, unit_of_work
from bookstore.infrastructure.cli.errors import cli_errors


@click.command("list")
def book_list() -> None:
    """List all books in the catalog."""
    with cli_errors():
        books = ListBooksHandler(uow=unit_of_work()).handle()

    if not books:
        click.echo("No books found.")
        return

    click.echo(f"{'ID':<36}  {'No.':>4}  {'Title':<30} {'Copies':>7} {'Price':>10}")
    click.echo("-" * 94)
    for b in books:
        click.echo(
            f"{str(b.id):<36}  {b.number:>4}  {b.title[:30]:<30} "
            f"{b.number_of_copies:>7} {'$' + format(b.price, '.2f'):>10}"
        )


@click.command("show")
@click.option("--id", "book_id", required=True, type=click.UUID, help="Book ID.")
def book_show(book_id: uuid.UUID) -> None:
    """Show a single book."""
    with cli_errors():
        dto = ShowBookHandler(uow=unit_of_work()).handle(book_id)

    if dto is None:
        raise click.ClickException(f"Book with ID '{book_id}' not found.")

    click.echo(f"Book {dto.id}  (#{dto.number})")
    click.echo(f"Title:          {dto.title}")
    if dto.original_title:
        click.echo(f"Original title: {dto.original_title}")
    if dto.release_date is not None:
        click.echo(f"Released:       {dto.release_date.strftime('%b %d, %Y')}")
    click.echo(f"Pages:          {dto.pages}")
    click.echo(f"Copies:         {dto.number_of_copies}")
    click.echo(f"Price:          ${dto.price:.2f}")


@click.command("import")
@click.argument("source", type=click.File("r", encoding="utf-8"))
def book_import(source) -> None:
    """Import catalog records from a JSON file (a list of feed records)."""
    try:
        raw = json.load(source)
        records = [ExternalBookRecord.from_json(item) for item in raw]
    except (ValueError, KeyError, TypeError) as exc:
        raise click.ClickException(f"Invalid book feed: {exc}")

    with cli_errors():
        imported = ImportBooksHandler(uow=unit_of_work()).handle(records)

    click.echo(f"Imported {imported} new book(s).")


@click.command("update-price")
@click.option("--id", "book_id", required=True, type=click.UUID, help="Book ID.")
@click.option("--price", required=True, help="New price (e.g. 15.00).")
def book_update_price(book_id: uuid.UUID, price: str) -> None:
    """Change a book's catalog price (existing order lines keep theirs)."""
    with cli_errors():
        updated = UpdateBookPriceHandler(uow=unit_of_work()).handle(book_id, price)

    if not updated:
        raise click.ClickException(f"Book with ID '{book_id}' not found.")
    click.echo(f"Book {book_id} price updated to ${price}")


@click.command("update-copies")
@click.option("--id", "book_id", required=True, type=click.UUID, help="Book ID.")
@click.option("--copies", required=True, type=int, help="Copies available for sale.")
def book_update_copies(book_id: uuid.UUID, copies: int) -> None:
    """Set the number of copies available for a book."""
    with cli_errors():
        updated = UpdateBookCopiesHandler(uow=unit_of_work()).handle(book_id, copies)

    if not updated:
        raise click.ClickException(f"Book with ID '{book_id}' not found.")
    click.echo(f"Book {book_id} now has {copies} copies available.")


@click.command("delete")
@click.option("--id", "book_id", required=True, type=click.UUID, help="Book ID.")
def book_delete(book_id: uuid.UUID) -> None:
    """Delete a book, dropping it from every order that holds it."""
    handler = DeleteBookHandler(uow=unit_of_work(), events=order_events())

    with cli_errors():
        deleted = handler.handle(book_id)

    if not deleted:
        raise click.ClickException(f"Book with ID '{book_id}' not found.")
    click.echo(f"Book {book_id} deleted.")


@click.command("delete-all")
@click.confirmation_option(prompt="Delete every book and drop it from all orders?")
def book_delete_all() -> None:
    """Delete the whole catalog (development reset)."""
    handler = DeleteAllBooksHandler(uow=unit_of_work(), events=order_events())

    with cli_errors():
        deleted = handler.handle()

    click.echo(f"Deleted {deleted} book(s).")
