"""Pytest fixtures building an isolated application per test.

Each test gets a fresh app (and therefore a fresh token registry) backed by an
in-memory SQLite database whose tables are created and dropped around it.
"""

from __future__ import annotations

import os

import pytest
from freezegun import freeze_time

from chatapp.core.config import TestingConfig
from chatapp.core.extensions import db as _db
from chatapp.core.extensions import get_token_authenticator, get_token_registry, get_token_signer
from chatapp.factory import create_app


@pytest.fixture()
def app():
    """Create a Flask application configured for testing.

    Yields
    ------
    flask.Flask
        Application with :class:`TestingConfig` applied, an app context pushed
        and the schema created.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestingConfig)
    app.logger.setLevel("WARNING")
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def db(app):
    """Database extension bound to the testing application."""
    return _db


@pytest.fixture()
def session(db):
    """Flask-scoped SQLAlchemy session shared with the code under test."""
    return db.session


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def runner(app):
    return app.test_cli_runner()


@pytest.fixture()
def registry(app):
    """The token registry owned by the application under test."""
    return get_token_registry()


@pytest.fixture()
def signer(app):
    return get_token_signer()


@pytest.fixture()
def authenticator(app):
    return get_token_authenticator()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


@pytest.fixture()
def frozen():
    """Freeze the clock at a fixed instant; ``frozen.tick(...)``/``move_to`` advance it."""
    with freeze_time("2024-05-01 12:00:00", tz_offset=0) as frozen_time:
        yield frozen_time


# -- Hook up Factory Boy to the Flask-SQLAlchemy session ------------------------
@pytest.fixture(autouse=True)
def _factories_session(request):
    """Wire Factory Boy's session helper to the app's session when one exists."""
    from tests.factories import SQLAlchemySession

    if "app" in request.fixturenames:
        SQLAlchemySession.set(_db.session)
    yield
    SQLAlchemySession.set(None)
