"""Shared plumbing for CLI command groups."""

from __future__ import annotations

import asyncio
from typing import Annotated, Any, Coroutine, TypeVar

import typer
from rich.console import Console

from storefront_client.client import StorefrontClient
from storefront_client.config import get_config
from storefront_client.errors import ForbiddenError
from storefront_client.store import SessionStore
from storefront_client.utils.errors import handle_error
from storefront_client.utils.output import OutputFormat

T = TypeVar("T")

console = Console(stderr=True)

BackendOpt = Annotated[str | None, typer.Option("--backend", "-b", help="Backend profile from config/backends.yaml")]
OutputOpt = Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")]
VerboseOpt = Annotated[bool, typer.Option("--verbose", "-v", help="Show request details")]


def announce_logout(login_path: str) -> None:
    """Stand-in for redirecting to the login page."""
    console.print(
        f"[yellow]Session expired.[/yellow] Please log in again ({login_path}): "
        "run [bold]storefront auth login[/bold]"
    )


def build_client(backend: str | None = None, verbose: bool = False) -> StorefrontClient:
    config = get_config()
    return StorefrontClient(
        config.get_backend(backend),
        SessionStore(config.settings.session_file),
        timeout=config.settings.timeout,
        on_logout=announce_logout,
        verbose=verbose,
    )


def run(client: Any, coro: Coroutine[Any, Any, T]) -> T:
    """Run one command coroutine to completion and close the client."""

    async def _main() -> T:
        try:
            return await coro
        finally:
            await client.aclose()

    return asyncio.run(_main())


def require_admin(client: Any) -> None:
    """Refuse admin-only commands unless the stored user is an admin."""
    user = client.store.load_user()
    if user is None or not user.is_admin:
        asyncio.run(client.aclose())
        handle_error(ForbiddenError("Admin account required. Sign in as an admin first."))
        raise typer.Exit(1)


def confirm_or_abort(client: Any, text: str) -> None:
    """Ask before a destructive command; close the client if the answer is no."""
    if not typer.confirm(text):
        asyncio.run(client.aclose())
        raise typer.Abort()
