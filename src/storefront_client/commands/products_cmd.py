"""CLI commands for browsing products, reviews, and admin product management."""

from __future__ import annotations

from typing import Annotated

import typer
from pydantic import ValidationError
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
from storefront_client.models.catalog import CreateRatingPayload, ProductFilter, ProductPayload
from storefront_client.services.catalog import ProductService
from storefront_client.utils.errors import handle_error
from storefront_client.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="products", help="Browse products and reviews; manage products as admin.")

COLUMNS = ["id", "name", "category.name", "price", "average_rating", "is_featured"]
RATING_COLUMNS = ["id", "user_id", "rating", "comment", "created_at"]


def _build_client(backend: str | None = None, verbose: bool = False):
    client = build_client(backend, verbose)
    return client, ProductService(client)


@app.command("list")
def list_products(
    category_id: Annotated[str | None, typer.Option("--category", "-c", help="Filter by category ID")] = None,
    search: Annotated[str | None, typer.Option("--search", "-s", help="Search in name and description")] = None,
    min_price: Annotated[float | None, typer.Option("--min-price", help="Minimum price")] = None,
    max_price: Annotated[float | None, typer.Option("--max-price", help="Maximum price")] = None,
    featured: Annotated[bool | None, typer.Option("--featured/--not-featured", help="Filter by featured flag")] = None,
    backend: BackendOpt = None,
    output: OutputOpt = OutputFormat.TABLE,
    verbose: VerboseOpt = False,
) -> None:
    """List products with optional filters."""
    product_filter = ProductFilter(
        category_id=category_id,
        search_term=search,
        min_price=min_price,
        max_price=max_price,
        featured=featured,
    )

    try:
        client, service = _build_client(backend, verbose)
        products = run(client, service.list(product_filter))
    except (ApiError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)

    if not products:
        console.print("[dim]No products found.[/dim]")
        raise typer.Exit(0)
    print_output(products, output, columns=COLUMNS, title="Products")


@app.command("show")
def show_product(
    product_id: Annotated[str, typer.Argument(help="Product ID")],
    backend: BackendOpt = None,
    output: OutputOpt = OutputFormat.TABLE,
    verbose: VerboseOpt = False,
) -> None:
    """Show one product."""
    try:
        client, service = _build_client(backend, verbose)
        product = run(client, service.get(product_id))
    except (ApiError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)

    print_output(product, output, title=product.name)


@app.command("featured")
def featured_products(
    backend: BackendOpt = None,
    output: OutputOpt = OutputFormat.TABLE,
    verbose: VerboseOpt = False,
) -> None:
    """List featured products."""
    try:
        client, service = _build_client(backend, verbose)
        products = run(client, service.featured())
    except (ApiError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)

    print_output(products, output, columns=COLUMNS, title="Featured Products")


@app.command("reviews")
def list_reviews(
    product_id: Annotated[str, typer.Argument(help="Product ID")],
    backend: BackendOpt = None,
    output: OutputOpt = OutputFormat.TABLE,
    verbose: VerboseOpt = False,
) -> None:
    """List the reviews of a product."""
    try:
        client, service = _build_client(backend, verbose)
        ratings = run(client, service.ratings(product_id))
    except (ApiError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)

    print_output(ratings, output, columns=RATING_COLUMNS, title="Reviews")


@app.command("review")
def add_review(
    product_id: Annotated[str, typer.Argument(help="Product ID")],
    rating: Annotated[int, typer.Option("--rating", "-r", min=1, max=5, help="Stars, 1 to 5")],
    comment: Annotated[str | None, typer.Option("--comment", "-m", help="Review text")] = None,
    backend: BackendOpt = None,
    output: OutputOpt = OutputFormat.TABLE,
    verbose: VerboseOpt = False,
) -> None:
    """Review a product as the signed-in customer."""
    try:
        client, service = _build_client(backend, verbose)
        created = run(client, service.add_rating(product_id, CreateRatingPayload(rating=rating, comment=comment)))
    except (ApiError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)

    print_output(created, output, title="Review Posted")


def _product_payload(
    name: str,
    category_id: str,
    price: float,
    description: str,
    image_url: str | None,
    featured: bool,
) -> ProductPayload:
    try:
        return ProductPayload(
            name=name,
            category_id=category_id,
            price=price,
            description=description,
            image_url=image_url,
            is_featured=featured,
        )
    except ValidationError as e:
        handle_error(ValueError(f"Invalid product: {e.errors()[0]['msg']}"))
        raise typer.Exit(1)


@app.command("create")
def create_product(
    name: Annotated[str, typer.Option("--name", "-n", help="Product name")],
    category_id: Annotated[str, typer.Option("--category", "-c", help="Category ID")],
    price: Annotated[float, typer.Option("--price", help="Unit price")],
    description: Annotated[str, typer.Option("--description", "-d", help="Description")] = "",
    image_url: Annotated[str | None, typer.Option("--image-url", help="Image URL")] = None,
    featured: Annotated[bool, typer.Option("--featured", help="Mark as featured")] = False,
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Preview without creating")] = False,
    backend: BackendOpt = None,
    output: OutputOpt = OutputFormat.TABLE,
    verbose: VerboseOpt = False,
) -> None:
    """Create a product (admin)."""
    payload = _product_payload(name, category_id, price, description, image_url, featured)

    if dry_run:
        console.print("[yellow]DRY RUN: would create[/yellow]")
        print_output(payload.model_dump(by_alias=True, exclude_none=True), output, title="Product Preview")
        return

    try:
        client, service = _build_client(backend, verbose)
        require_admin(client)
        result = run(client, service.create(payload))
    except (ApiError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)

    print_output(result or {"status": "created", "name": name}, output, title="Product Created")


@app.command("update")
def update_product(
    product_id: Annotated[str, typer.Argument(help="Product ID")],
    name: Annotated[str, typer.Option("--name", "-n", help="Product name")],
    category_id: Annotated[str, typer.Option("--category", "-c", help="Category ID")],
    price: Annotated[float, typer.Option("--price", help="Unit price")],
    description: Annotated[str, typer.Option("--description", "-d", help="Description")] = "",
    image_url: Annotated[str | None, typer.Option("--image-url", help="Image URL")] = None,
    featured: Annotated[bool, typer.Option("--featured", help="Mark as featured")] = False,
    backend: BackendOpt = None,
    output: OutputOpt = OutputFormat.TABLE,
    verbose: VerboseOpt = False,
) -> None:
    """Replace a product's details (admin)."""
    payload = _product_payload(name, category_id, price, description, image_url, featured)
    try:
        client, service = _build_client(backend, verbose)
        require_admin(client)
        result = run(client, service.update(product_id, payload))
    except (ApiError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)

    print_output(result or {"status": "updated", "id": product_id}, output, title="Product Updated")


@app.command("delete")
def delete_product(
    product_id: Annotated[str, typer.Argument(help="Product ID")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
    backend: BackendOpt = None,
    output: OutputOpt = OutputFormat.TABLE,
    verbose: VerboseOpt = False,
) -> None:
    """Delete a product (admin)."""
    try:
        client, service = _build_client(backend, verbose)
        require_admin(client)
        if not yes:
            confirm_or_abort(client, f"Delete product {product_id}?")
        run(client, service.delete(product_id))
    except (ApiError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)

    print_output({"status": "deleted", "id": product_id}, output, title="Product Deleted")
