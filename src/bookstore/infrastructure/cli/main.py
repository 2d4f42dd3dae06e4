import click

from bookstore.infrastructure.cli.book_commands import (
    book_delete,
    book_delete_all,
    book_import,
    book_list,
    book_show,
    book_update_copies,
    book_update_price,
)
from bookstore.infrastructure.cli.order_commands import (
    order_add_book,
    order_create,
    order_delete,
    order_lines,
    order_list,
    order_remove_book,
    order_show,
)
from bookstore.infrastructure.config import load_settings
from bookstore.infrastructure.logging import configure_logging


@click.group()
def cli() -> None:
    """Bookstore: catalog, stock and orders."""
    configure_logging(load_settings())


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def book() -> None:
    """Manage the book catalog."""


# Register subcommands
order.add_command(order_add_book)
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_lines)
order.add_command(order_list)
order.add_command(order_remove_book)
order.add_command(order_show)
book.add_command(book_delete)
book.add_command(book_delete_all)
book.add_command(book_import)
book.add_command(book_list)
book.add_command(book_show)
book.add_command(book_update_copies)
book.add_command(book_update_price)
