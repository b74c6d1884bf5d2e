"""CLI commands for the signed-in customer's cart."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from storefront_client.commands.common import (
    BackendOpt,
    OutputOpt,
    VerboseOpt,
    build_client,
    confirm_or_abort,
    run,
)
from storefront_client.errors import ApiError
from storefront_client.models.cart import AddToCartPayload, UpdateCartItemPayload
from storefront_client.services.cart import CartService, cart_total
from storefront_client.utils.errors import handle_error
from storefront_client.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="cart", help="View and change the cart, and check out.")

COLUMNS = ["product_id", "product_name", "price", "quantity"]


def _build_client(backend: str | None = None, verbose: bool = False):
    client = build_client(backend, verbose)
    return client, CartService(client)


@app.command("show")
def show_cart(
    backend: BackendOpt = None,
    output: OutputOpt = OutputFormat.TABLE,
    verbose: VerboseOpt = False,
) -> None:
    """Show the items in the cart."""
    try:
        client, service = _build_client(backend, verbose)
        items = run(client, service.items())
    except (ApiError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)

    if not items:
        console.print("[dim]Your cart is empty.[/dim]")
        raise typer.Exit(0)

    print_output(items, output, columns=COLUMNS, title="Cart")
    if output == OutputFormat.TABLE:
        console.print(f"Total: [bold]{cart_total(items):.2f}[/bold]")


@app.command("count")
def count_items(
    backend: BackendOpt = None,
    output: OutputOpt = OutputFormat.TABLE,
    verbose: VerboseOpt = False,
) -> None:
    """Show how many items are in the cart."""
    try:
        client, service = _build_client(backend, verbose)
        count = run(client, service.count())
    except (ApiError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)

    print_output({"count": count}, output, title="Cart Items")


@app.command("add")
def add_item(
    product_id: Annotated[str, typer.Argument(help="Product ID")],
    quantity: Annotated[int, typer.Option("--quantity", "-q", min=1, help="How many to add")] = 1,
    backend: BackendOpt = None,
    output: OutputOpt = OutputFormat.TABLE,
    verbose: VerboseOpt = False,
) -> None:
    """Add a product to the cart."""
    try:
        client, service = _build_client(backend, verbose)
        run(client, service.add(AddToCartPayload(product_id=product_id, quantity=quantity)))
    except (ApiError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)

    print_output({"status": "added", "product_id": product_id, "quantity": quantity}, output, title="Cart")


@app.command("update")
def update_item(
    product_id: Annotated[str, typer.Argument(help="Product ID")],
    quantity: Annotated[int, typer.Option("--quantity", "-q", min=1, help="New quantity")],
    backend: BackendOpt = None,
    output: OutputOpt = OutputFormat.TABLE,
    verbose: VerboseOpt = False,
) -> None:
    """Change the quantity of a cart item."""
    try:
        client, service = _build_client(backend, verbose)
        run(client, service.update_quantity(UpdateCartItemPayload(product_id=product_id, quantity=quantity)))
    except (ApiError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)

    print_output({"status": "updated", "product_id": product_id, "quantity": quantity}, output, title="Cart")


@app.command("checkout")
def checkout(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
    backend: BackendOpt = None,
    output: OutputOpt = OutputFormat.TABLE,
    verbose: VerboseOpt = False,
) -> None:
    """Check out the current cart."""
    try:
        client, service = _build_client(backend, verbose)
        if not yes:
            confirm_or_abort(client, "Place the order for everything in your cart?")
        result = run(client, service.checkout())
    except (ApiError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)

    print_output(result or {"status": "checked_out"}, output, title="Checkout")
