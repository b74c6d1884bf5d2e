"""CLI commands for authentication and session management."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from storefront_client.auth import AuthManager
from storefront_client.commands.common import BackendOpt, OutputOpt, VerboseOpt, build_client, run
from storefront_client.config import get_config
from storefront_client.errors import ApiError
from storefront_client.models.auth import SignInPayload, SignUpPayload
from storefront_client.store import SessionStore
from storefront_client.utils.errors import handle_error
from storefront_client.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="auth", help="Sign in, sign up, and manage the stored session.")


def _build_client(backend: str | None = None, verbose: bool = False):
    client = build_client(backend, verbose)
    return client, AuthManager(client)


@app.command()
def login(
    email: Annotated[str, typer.Option("--email", "-e", prompt=True, help="Account email")],
    password: Annotated[str, typer.Option("--password", "-p", prompt=True, hide_input=True, help="Account password")],
    backend: BackendOpt = None,
    output: OutputOpt = OutputFormat.TABLE,
    verbose: VerboseOpt = False,
) -> None:
    """Sign in and store the session tokens."""
    try:
        client, auth = _build_client(backend, verbose)
        console.print(f"Signing in as [bold]{email}[/bold]...", style="yellow")
        result = run(client, auth.sign_in(SignInPayload(email=email, password=password)))
    except (ApiError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)

    user = result.user
    print_output(
        {
            "status": "authenticated",
            "email": user.email if user else email,
            "role": user.role.value if user else "",
        },
        output,
        title="Signed In",
    )


@app.command()
def register(
    email: Annotated[str, typer.Option("--email", "-e", prompt=True, help="Account email")],
    password: Annotated[str, typer.Option("--password", "-p", prompt=True, hide_input=True, confirmation_prompt=True, help="Account password")],
    first_name: Annotated[str, typer.Option("--first-name", prompt=True, help="First name")],
    last_name: Annotated[str, typer.Option("--last-name", prompt=True, help="Last name")],
    address: Annotated[str, typer.Option("--address", help="Shipping address")] = "",
    phone: Annotated[str, typer.Option("--phone", help="Phone number")] = "",
    backend: BackendOpt = None,
    output: OutputOpt = OutputFormat.TABLE,
    verbose: VerboseOpt = False,
) -> None:
    """Create a customer account."""
    payload = SignUpPayload(
        email=email,
        password=password,
        first_name=first_name,
        last_name=last_name,
        address=address,
        phone_number=phone,
    )

    try:
        client, auth = _build_client(backend, verbose)
        run(client, auth.sign_up(payload))
    except (ApiError, ValueError) as e:
        handle_error(e)
        raise typer.Exit(1)

    print_output({"status": "registered", "email": email}, output, title="Account Created")


@app.command()
def logout(
    backend: BackendOpt = None,
    output: OutputOpt = OutputFormat.TABLE,
    verbose: VerboseOpt = False,
) -> None:
    """Log out and forget the stored session."""
    try:
        client, auth = _build_client(backend, verbose)
    except ValueError as e:
        handle_error(e)
        raise typer.Exit(1)

    try:
        run(client, auth.logout())
    except ApiError as e:
        # The local session is gone regardless
        console.print(f"[dim]Server logout failed: {e.message}[/dim]")

    print_output({"status": "logged_out"}, output, title="Logout")


@app.command()
def status(
    output: OutputOpt = OutputFormat.TABLE,
) -> None:
    """Show the stored session."""
    session = SessionStore(get_config().settings.session_file).load_session()

    user = session.user
    result = {
        "authenticated": session.is_authenticated,
        "has_refresh_token": bool(session.refresh_token),
        "email": user.email if user else "N/A",
        "role": user.role.value if user else "N/A",
    }
    print_output(result, output, title="Session Status")
