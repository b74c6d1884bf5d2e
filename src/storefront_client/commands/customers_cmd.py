"""CLI commands for customer administration."""

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
    require_admin,
    run,
)
from storefront_client.errors import ApiError
from storefront_client.services.customers import CustomerService
from storefront_client.utils.errors import handle_error
from storefront_client.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="customers", help="Manage customer accounts (admin).")

COLUMNS = ["id", "email", "first_name", "last_name", "role", "active"]


def _build_client(backend: str | None = None, verbose: bool = False):
    client = build_client(backend, verbose)
    return client, CustomerService(client)


@app.command("list")
def list_customers(
    page: Annotated[int, typer.Option("--page", min=0, help="Page number, from 0")] = 0,
    size: Annotated[int, typer.Option("--size", min=1, help="Page size")] = 10,
    all_pages: Annotated[bool, typer.Option("--all", help="Fetch every page")] = False,
    backend: BackendOpt = None,
    output: OutputOpt = OutputFormat.TABLE,
    verbose: VerboseOpt = False,
) -> None:
    """List customers one page at a time, or all of them with --all."""
    try:
        client, service = _build_client(backend, verbose)
        require_admin(client)
        if all_pages:
            customers = run(client, service.list_all(size=size))
            footer = f"{len(customers)} customers"
        else:
            result = run(client, service.list(page, size))
            customers = result.content
            footer = (
                f"Page {result.current_page + 1} of {max(result.total_pages, 1)} "
                f"({result.total_elements} customers)"
            )
    except (ApiError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)

    if not customers:
        console.print("[dim]No customers found.[/dim]")
        raise typer.Exit(0)

    print_output(customers, output, columns=COLUMNS, title="Customers")
    if output == OutputFormat.TABLE:
        console.print(f"[dim]{footer}[/dim]")


@app.command("delete")
def delete_customer(
    customer_id: Annotated[str, typer.Argument(help="Customer ID")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
    backend: BackendOpt = None,
    output: OutputOpt = OutputFormat.TABLE,
    verbose: VerboseOpt = False,
) -> None:
    """Delete a customer account."""
    try:
        client, service = _build_client(backend, verbose)
        require_admin(client)
        if not yes:
            confirm_or_abort(client, f"Delete customer {customer_id}?")
        run(client, service.delete(customer_id))
    except (ApiError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)

    print_output({"status": "deleted", "id": customer_id}, output, title="Customer Deleted")


@app.command("status")
def set_status(
    customer_id: Annotated[str, typer.Argument(help="Customer ID")],
    active: Annotated[bool, typer.Option("--active/--inactive", help="Enable or disable the account")],
    backend: BackendOpt = None,
    output: OutputOpt = OutputFormat.TABLE,
    verbose: VerboseOpt = False,
) -> None:
    """Enable or disable a customer account."""
    try:
        client, service = _build_client(backend, verbose)
        require_admin(client)
        run(client, service.update_status(customer_id, active))
    except (ApiError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)

    print_output({"id": customer_id, "active": active}, output, title="Customer Status")
