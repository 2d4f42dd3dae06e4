"""CLI commands for the Order aggregate."""

from __future__ import annotations

import uuid

import click

from bookstore.application.add_book_to_order import AddBookToOrderHandler
from bookstore.application.create_order import CreateOrderHandler
from bookstore.application.delete_order import DeleteOrderHandler
from bookstore.application.dto import OrderDTO
from bookstore.application.list_orders import ListOrdersHandler
from bookstore.application.remove_book_from_order import RemoveBookFromOrderHandler
from bookstore.application.show_order import ShowOrderHandler
from bookstore.application.show_order_lines import ShowOrderLinesHandler
from bookstore.infrastructure.bootstrap import order_events, unit_of_work
from bookstore.infrastructure.cli.errors import cli_errors, raise_for_result


def _display_order(dto: OrderDTO) -> None:
    click.echo(f"Order {dto.id}")
    click.echo(f"Address: {dto.address}")
    click.echo(f"Created: {dto.created_at.strftime('%Y-%m-%d %H:%M')}")
    click.echo(f"Total:   ${dto.total_cost:.2f}")


@click.command("create")
@click.option("--address", required=True, help="Delivery address.")
@click.option(
    "--id",
    "order_id",
    type=click.UUID,
    default=None,
    help="Client-generated order ID; repeating it returns the same order.",
)
def order_create(address: str, order_id: uuid.UUID | None) -> None:
    """Create a new empty order."""
    handler = CreateOrderHandler(uow=unit_of_work())

    with cli_errors():
        dto = handler.handle(address=address, order_id=order_id)

    click.echo(f"Order {dto.id} created.")


@click.command("list")
def order_list() -> None:
    """List all orders, newest first."""
    with cli_errors():
        orders = ListOrdersHandler(uow=unit_of_work()).handle()

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<36}  {'Created':<16}  {'Total':>10}  Address")
    click.echo("-" * 80)
    for o in orders:
        click.echo(
            f"{str(o.id):<36}  {o.created_at.strftime('%Y-%m-%d %H:%M'):<16}  "
            f"{'$' + format(o.total_cost, '.2f'):>10}  {o.address}"
        )


@click.command("show")
@click.option("--id", "order_id", required=True, type=click.UUID, help="Order ID to display.")
def order_show(order_id: uuid.UUID) -> None:
    """Show an order and its lines."""
    with cli_errors():
        dto = ShowOrderHandler(uow=unit_of_work()).handle(order_id)
        if dto is None:
            raise click.ClickException(f"Order with ID '{order_id}' not found.")
        lines = ShowOrderLinesHandler(uow=unit_of_work()).handle(order_id)

    _display_order(dto)
    click.echo()
    _display_lines(lines)


@click.command("lines")
@click.option("--id", "order_id", required=True, type=click.UUID, help="Order ID.")
def order_lines(order_id: uuid.UUID) -> None:
    """Show the books in an order."""
    with cli_errors():
        lines = ShowOrderLinesHandler(uow=unit_of_work()).handle(order_id)

    _display_lines(lines)


def _display_lines(lines) -> None:
    if not lines:
        click.echo("  (no books)")
        return
    click.echo(f"  {'Title':<30} {'Qty':>5} {'Price':>10} {'Subtotal':>10}")
    click.echo(f"  {'-'*58}")
    for line in lines:
        click.echo(
            f"  {line.title[:30]:<30} {line.quantity:>5} "
            f"{'$' + format(line.price_at_purchase, '.2f'):>10} "
            f"{'$' + format(line.subtotal, '.2f'):>10}"
        )


@click.command("add-book")
@click.option("--id", "order_id", required=True, type=click.UUID, help="Order ID.")
@click.option("--book", "book_id", required=True, type=click.UUID, help="Book ID.")
@click.option("--quantity", required=True, type=int, help="Number of copies to reserve.")
def order_add_book(order_id: uuid.UUID, book_id: uuid.UUID, quantity: int) -> None:
    """Reserve copies of a book into an order."""
    handler = AddBookToOrderHandler(uow=unit_of_work(), events=order_events())

    with cli_errors():
        result = handler.handle(order_id, book_id, quantity)
    raise_for_result(result)

    click.echo(f"Added {quantity} copies of book {book_id} to order {order_id}.")


@click.command("remove-book")
@click.option("--id", "order_id", required=True, type=click.UUID, help="Order ID.")
@click.option("--book", "book_id", required=True, type=click.UUID, help="Book ID.")
def order_remove_book(order_id: uuid.UUID, book_id: uuid.UUID) -> None:
    """Remove a book from an order, returning its copies to stock."""
    handler = RemoveBookFromOrderHandler(uow=unit_of_work(), events=order_events())

    with cli_errors():
        result = handler.handle(order_id, book_id)
    raise_for_result(result)

    click.echo(f"Removed book {book_id} from order {order_id}.")


@click.command("delete")
@click.option("--id", "order_id", required=True, type=click.UUID, help="Order ID to delete.")
def order_delete(order_id: uuid.UUID) -> None:
    """Delete an order, returning all reserved copies to stock."""
    handler = DeleteOrderHandler(uow=unit_of_work(), events=order_events())

    with cli_errors():
        deleted = handler.handle(order_id)

    if not deleted:
        raise click.ClickException(f"Order with ID '{order_id}' not found.")
    click.echo(f"Order {order_id} deleted.")
