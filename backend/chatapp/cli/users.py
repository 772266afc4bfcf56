"""Flask CLI commands for bootstrapping user accounts."""

from __future__ import annotations

import click
from flask.cli import with_appcontext

from chatapp.services._shared.errors import ServiceError
from chatapp.services.users.dto import UserCreateIn
from chatapp.services.users.service import UserService


@click.group("users")
def users_cli() -> None:
    """Manage user accounts."""


@users_cli.command("create")
@click.option("--name", required=True, help="Display name.")
@click.option("--email", required=True, help="Login email.")
@click.option(
    "--password",
    required=True,
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Initial password.",
)
@with_appcontext
def create_user_command(name: str, email: str, password: str) -> None:
    """Create an account able to log in and call the protected endpoints."""
    try:
        user = UserService().create_user(UserCreateIn(name=name, email=email, password=password))
    except ServiceError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Created user {user.id} <{user.email}>")
