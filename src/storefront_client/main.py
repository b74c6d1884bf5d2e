"""Storefront CLI entry point.

Command-line client for the storefront and admin back-office API.
"""

from __future__ import annotations

import logging

import typer

from storefront_client.commands.auth_cmd import app as auth_app
from storefront_client.commands.categories_cmd import app as categories_app
from storefront_client.commands.products_cmd import app as products_app
from storefront_client.commands.cart_cmd import app as cart_app
from storefront_client.commands.customers_cmd import app as customers_app

app = typer.Typer(
    name="storefront",
    help="CLI for browsing the storefront catalog, managing the cart, and store administration.",
    no_args_is_help=True,
)

# Register command groups
app.add_typer(auth_app, name="auth")
app.add_typer(categories_app, name="categories")
app.add_typer(products_app, name="products")
app.add_typer(cart_app, name="cart")
app.add_typer(customers_app, name="customers")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Storefront CLI: catalog, cart, and admin tools."""
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


if __name__ == "__main__":
    app()
