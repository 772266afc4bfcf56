"""Flask CLI command creating the database schema."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext

from chatapp.core.extensions import db

LOGGER = logging.getLogger(__name__)


@click.command("init-db")
@click.option("--drop", is_flag=True, help="Drop existing tables before creating them.")
@with_appcontext
def init_db_command(drop: bool) -> None:
    """Create all tables known to the SQLAlchemy metadata."""
    if drop:
        db.drop_all()
        LOGGER.info("Dropped all tables")
    db.create_all()
    click.echo("Database schema created.")
