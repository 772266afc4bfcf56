"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, current_app
from flask_jwt_extended import JWTManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData

log = logging.getLogger(__name__)

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe). Per-process token state is NOT kept here:
# the registry is built per application in ``init_app``.
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
jwt = JWTManager()
limiter = Limiter(key_func=get_remote_address)

REGISTRY_KEY = "token_registry"
SIGNER_KEY = "token_signer"
AUTHENTICATOR_KEY = "token_authenticator"
SWEEPER_KEY = "token_sweeper"


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, JWT, rate limiting, and the token components.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`chatapp.models` package so SQLAlchemy metadata is complete before
        ``create_all`` runs.

    Notes
    -----
    The token registry, signer, and authenticator are constructed once per
    application and stored in ``app.extensions``; services receive them by
    reference through :func:`get_token_registry` and friends.
    """
    db.init_app(app)

    # Ensure models are imported so the metadata is populated
    from chatapp import models as _models  # noqa: F401

    jwt.init_app(app)
    limiter.init_app(app)

    from chatapp.infra.jwt.flask_jwt_token_signer import JWTTokenSigner
    from chatapp.infra.memory.sweeper import RegistrySweeper
    from chatapp.infra.memory.token_registry import InMemoryTokenRegistry
    from chatapp.services.auth.authenticator import TokenAuthenticator

    registry = InMemoryTokenRegistry()
    signer = JWTTokenSigner()
    app.extensions[REGISTRY_KEY] = registry
    app.extensions[SIGNER_KEY] = signer
    app.extensions[AUTHENTICATOR_KEY] = TokenAuthenticator(
        signer=signer,
        registry=registry,
        header_type=app.config.get("JWT_HEADER_TYPE", "Bearer"),
    )

    interval = int(app.config.get("TOKEN_SWEEP_INTERVAL", 0))
    if interval > 0:
        sweeper = RegistrySweeper(registry, interval=timedelta(seconds=interval))
        sweeper.start()
        app.extensions[SWEEPER_KEY] = sweeper
    else:
        log.info("Token registry sweeper disabled", extra={"event": "registry.sweeper_disabled"})


def get_token_registry():
    """Return the token registry bound to the current application."""
    return current_app.extensions[REGISTRY_KEY]


def get_token_signer():
    """Return the token signer bound to the current application."""
    return current_app.extensions[SIGNER_KEY]


def get_token_authenticator():
    """Return the request authenticator bound to the current application."""
    return current_app.extensions[AUTHENTICATOR_KEY]
