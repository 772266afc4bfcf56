"""Command-line interface registration for the Flask application."""

from __future__ import annotations

from flask import Flask

from .db import init_db_command
from .users import users_cli


def init_app(app: Flask) -> None:
    """Register application-specific CLI commands.

    Parameters
    ----------
    app:
        Flask application instance whose CLI registry receives ``init-db``
        and the ``users`` command group.
    """
    app.cli.add_command(init_db_command)
    app.cli.add_command(users_cli)
