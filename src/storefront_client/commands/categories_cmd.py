"""CLI commands for category management."""

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
from storefront_client.models.catalog import CreateCategoryPayload, UpdateCategoryPayload
from storefront_client.services.catalog import CategoryService
from storefront_client.utils.errors import handle_error
from storefront_client.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="categories", help="Browse and manage product categories.")

COLUMNS = ["id", "name", "description", "updated_at"]


def _build_client(backend: str | None = None, verbose: bool = False):
    client = build_client(backend, verbose)
    return client, CategoryService(client)


@app.command("list")
def list_categories(
    backend: BackendOpt = None,
    output: OutputOpt = OutputFormat.TABLE,
    verbose: VerboseOpt = False,
) -> None:
    """List all categories."""
    try:
        client, service = _build_client(backend, verbose)
        categories = run(client, service.list())
    except (ApiError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)

    if not categories:
        console.print("[dim]No categories found.[/dim]")
        raise typer.Exit(0)
    print_output(categories, output, columns=COLUMNS, title="Categories")


@app.command("create")
def create_category(
    name: Annotated[str, typer.Option("--name", "-n", help="Category name")],
    backend: BackendOpt = None,
    output: OutputOpt = OutputFormat.TABLE,
    verbose: VerboseOpt = False,
) -> None:
    """Create a category (admin)."""
    try:
        client, service = _build_client(backend, verbose)
        require_admin(client)
        result = run(client, service.create(CreateCategoryPayload(name=name)))
    except (ApiError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)

    print_output(result or {"status": "created", "name": name}, output, title="Category Created")


@app.command("update")
def update_category(
    category_id: Annotated[str, typer.Argument(help="Category ID")],
    name: Annotated[str, typer.Option("--name", "-n", help="New category name")],
    backend: BackendOpt = None,
    output: OutputOpt = OutputFormat.TABLE,
    verbose: VerboseOpt = False,
) -> None:
    """Rename a category (admin)."""
    try:
        client, service = _build_client(backend, verbose)
        require_admin(client)
        result = run(client, service.update(category_id, UpdateCategoryPayload(name=name)))
    except (ApiError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)

    print_output(result or {"status": "updated", "id": category_id}, output, title="Category Updated")


@app.command("delete")
def delete_category(
    category_id: Annotated[str, typer.Argument(help="Category ID")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
    backend: BackendOpt = None,
    output: OutputOpt = OutputFormat.TABLE,
    verbose: VerboseOpt = False,
) -> None:
    """Delete a category (admin)."""
    try:
        client, service = _build_client(backend, verbose)
        require_admin(client)
        if not yes:
            confirm_or_abort(client, f"Delete category {category_id}?")
        run(client, service.delete(category_id))
    except (ApiError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)

    print_output({"status": "deleted", "id": category_id}, output, title="Category Deleted")
