"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request

from chatapp.core.extensions import get_token_authenticator
from chatapp.repositories.base import Pagination
from chatapp.schemas.common import PaginationQuerySchema
from chatapp.services._shared.base import BaseService
from chatapp.services._shared.errors import ServiceError
from chatapp.services.auth.authenticator import AuthenticatedToken
from chatapp.services.auth.policy import ensure_kind
from chatapp.services.auth.tokens import Token, TokenKind

F = TypeVar("F", bound=Callable[..., Any])

_AUTH_ATTR = "auth_token"


def parse_pagination(default_limit: int = 20, max_limit: int = 200) -> Pagination:
    """Parse pagination parameters from ``request.args`` using Marshmallow."""

    schema = PaginationQuerySchema(default_limit=default_limit, max_limit=max_limit)
    data = schema.load(request.args)
    return Pagination(page=data["page"], limit=data["limit"], sort=data["sort"])


def translate_service_errors(func: F) -> F:
    """Re-raise service-layer errors as their HTTP counterparts."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        try:
            return func(*args, **kwargs)
        except ServiceError as exc:
            raise BaseService.translate_exceptions(exc) from exc

    return wrapper  # type: ignore[return-value]


def require_token(kind: TokenKind = TokenKind.ACCESS) -> Callable[[F], F]:
    """Authenticate the bearer token and enforce its kind before the handler runs.

    The registry's canonical record is stored on ``flask.g`` and exposed via
    :func:`current_token` and :func:`current_subject`.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            try:
                authenticated = get_token_authenticator().authenticate(
                    request.headers.get("Authorization")
                )
                ensure_kind(authenticated.token, kind)
            except ServiceError as exc:
                raise BaseService.translate_exceptions(exc) from exc
            setattr(g, _AUTH_ATTR, authenticated)
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


def current_authentication() -> AuthenticatedToken:
    """Return the authentication result of the current request."""

    authenticated = getattr(g, _AUTH_ATTR, None)
    if authenticated is None:
        raise RuntimeError("No authenticated token on this request; use @require_token.")
    return authenticated


def current_token() -> Token:
    return current_authentication().token


def current_subject() -> str:
    return current_token().subject


def current_user_id() -> int:
    """Return the caller's user id parsed from the token subject."""

    return int(current_subject())


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
