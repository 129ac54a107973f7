"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of Zendesk2, licensed under the MIT License.
See LICENSE file for details.
"""

import json
import time

import typer
from rich.console import Console
from rich.table import Table

from zendesk2 import __version__
from zendesk2.client import ZendeskClient
from zendesk2.core.config import ZendeskConfig, init_app_config
from zendesk2.exceptions import ZendeskError
from zendesk2.models import User

# Initialize console for rich output
console = Console()

# Initialize the CLI app
app = typer.Typer(help="Zendesk2 - Zendesk support API client")

URL_OPTION = typer.Option(None, "--url", envvar="ZENDESK_URL", help="Zendesk account URL")
USERNAME_OPTION = typer.Option(None, "--username", envvar="ZENDESK_USERNAME", help="Agent email address")
TOKEN_OPTION = typer.Option(None, "--token", envvar="ZENDESK_TOKEN", help="Zendesk API token")
MOCK_OPTION = typer.Option(False, "--mock", help="Serve the command from an in-memory mock")
JSON_OPTION = typer.Option(False, "--json", help="Print the raw record as JSON")


def configure_app(debug: bool = False):
    """
    Configure the application with the specified settings.

    Args:
    ----
        debug: Whether to enable debug mode

    """
    config = init_app_config(debug=debug, app_version=__version__)
    config.configure_logging()
    return config


@app.callback(invoke_without_command=True)
def callback(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Enable debug mode with verbose logging"),
    version: bool = typer.Option(False, "--version", help="Show the application version and exit"),
):
    """
    Zendesk2 - manage Zendesk users and content, or build single sign-on URLs.

    Use --debug to enable verbose logging.
    """
    if version:
        console.print(f"Zendesk2 version: {__version__}")
        raise typer.Exit()

    configure_app(debug=debug)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def build_client(url: str | None, username: str | None, token: str | None, mock: bool) -> ZendeskClient:
    """Create a client from options, falling back to ZENDESK_* environment variables."""
    config = ZendeskConfig.from_env(url=url, username=username, token=token, mock=mock or None)
    return ZendeskClient(config)


def print_user(user: User, as_json: bool) -> None:
    if as_json:
        console.print_json(json.dumps(user.attributes()))
        return

    table = Table(title=f"User {user.id}")
    table.add_column("Attribute")
    table.add_column("Value")
    for key, value in user.attributes().items():
        table.add_row(key, str(value))
    console.print(table)


@app.command("login-url")
def login_url(
    name: str = typer.Argument(..., help="Name of the user signing in"),
    email: str = typer.Argument(..., help="Email of the user signing in"),
    timestamp: int | None = typer.Option(None, help="Handshake timestamp (defaults to now)"),
    return_to: str | None = typer.Option(None, help="URL to return to after sign-in"),
    url: str | None = URL_OPTION,
    username: str | None = USERNAME_OPTION,
    token: str | None = TOKEN_OPTION,
):
    """
    Print a remote authentication login URL.
    """
    try:
        client = build_client(url, username, token, mock=True)
        user = client.users().new(name=name, email=email)
        console.print(
            user.login_url(timestamp if timestamp is not None else int(time.time()), return_to=return_to),
            soft_wrap=True,
        )
    except (ZendeskError, ValueError) as e:
        console.print(f"Error: {e}", style="red")
        raise typer.Exit(code=1)


@app.command("jwt-login-url")
def jwt_login_url(
    name: str = typer.Argument(..., help="Name of the user signing in"),
    email: str = typer.Argument(..., help="Email of the user signing in"),
    return_to: str | None = typer.Option(None, help="URL to return to after sign-in"),
    jwt_token: str | None = typer.Option(None, envvar="ZENDESK_JWT_TOKEN", help="JWT shared secret"),
    url: str | None = URL_OPTION,
    username: str | None = USERNAME_OPTION,
):
    """
    Print a JWT single sign-on URL.
    """
    try:
        client = build_client(url, username, None, mock=True)
        user = client.users().new(name=name, email=email)
        console.print(user.jwt_login_url(return_to=return_to, jwt_token=jwt_token), soft_wrap=True)
    except (ZendeskError, ValueError) as e:
        console.print(f"Error: {e}", style="red")
        raise typer.Exit(code=1)


@app.command("create-user")
def create_user(
    name: str = typer.Argument(..., help="Name of the new user"),
    email: str = typer.Argument(..., help="Primary email of the new user"),
    role: str = typer.Option("end-user", help="end-user, agent or admin"),
    url: str | None = URL_OPTION,
    username: str | None = USERNAME_OPTION,
    token: str | None = TOKEN_OPTION,
    mock: bool = MOCK_OPTION,
    as_json: bool = JSON_OPTION,
):
    """
    Create a user.
    """
    try:
        client = build_client(url, username, token, mock)
        user = client.users().create(name=name, email=email, role=role)
        console.print(f"Created user {user.id}", style="green")
        print_user(user, as_json)
    except (ZendeskError, ValueError) as e:
        console.print(f"Error: {e}", style="red")
        raise typer.Exit(code=1)


@app.command("show-user")
def show_user(
    user_id: str = typer.Argument(..., help="User id, or 'me' for the session user"),
    url: str | None = URL_OPTION,
    username: str | None = USERNAME_OPTION,
    token: str | None = TOKEN_OPTION,
    mock: bool = MOCK_OPTION,
    as_json: bool = JSON_OPTION,
):
    """
    Show one user.
    """
    try:
        client = build_client(url, username, token, mock)
        user = client.current_user() if user_id == "me" else client.users().get(user_id)
        if user is None:
            console.print(f"User {user_id} not found", style="red")
            raise typer.Exit(code=1)
        print_user(user, as_json)
    except (ZendeskError, ValueError) as e:
        console.print(f"Error: {e}", style="red")
        raise typer.Exit(code=1)


@app.command("list-users")
def list_users(
    page: int = typer.Option(1, help="Page number"),
    per_page: int = typer.Option(100, help="Users per page"),
    url: str | None = URL_OPTION,
    username: str | None = USERNAME_OPTION,
    token: str | None = TOKEN_OPTION,
    mock: bool = MOCK_OPTION,
):
    """
    List users.
    """
    try:
        client = build_client(url, username, token, mock)
        users = client.users()
        records = users.all(page=page, per_page=per_page)

        table = Table(title=f"Zendesk Users ({users.count} total)")
        table.add_column("ID")
        table.add_column("Name")
        table.add_column("Email")
        table.add_column("Role")
        for user in records:
            table.add_row(str(user.id), user.name or "", user.email or "", user.role or "")
        console.print(table)
    except (ZendeskError, ValueError) as e:
        console.print(f"Error: {e}", style="red")
        raise typer.Exit(code=1)


@app.command("create-category")
def create_category(
    name: str = typer.Argument(..., help="Category name"),
    description: str | None = typer.Option(None, help="Category description"),
    position: int | None = typer.Option(None, help="Sort position"),
    url: str | None = URL_OPTION,
    username: str | None = USERNAME_OPTION,
    token: str | None = TOKEN_OPTION,
    mock: bool = MOCK_OPTION,
):
    """
    Create a forum category.
    """
    try:
        client = build_client(url, username, token, mock)
        category = client.categories().create(name=name, description=description, position=position)
        console.print(f"Created category {category.id}: {category.name}", style="green")
        console.print(category.url)
    except (ZendeskError, ValueError) as e:
        console.print(f"Error: {e}", style="red")
        raise typer.Exit(code=1)


def main():
    app()


if __name__ == "__main__":
    main()
