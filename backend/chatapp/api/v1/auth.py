"""Authentication endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from chatapp.api.deps import (
    current_subject,
    json_response,
    require_token,
    timing,
    translate_service_errors,
)
from chatapp.core.extensions import get_token_registry, get_token_signer, limiter
from chatapp.schemas import LoginResponseSchema, LoginSchema, RegisterSchema, UserSchema
from chatapp.services.auth.dto import AuthTokenConfig, LoginIn, RegisterIn
from chatapp.services.auth.service import AuthService
from chatapp.services.auth.tokens import TokenKind

bp = Blueprint("auth", __name__, url_prefix="/auth")

register_schema = RegisterSchema()
login_schema = LoginSchema()
login_response_schema = LoginResponseSchema()
user_schema = UserSchema()


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "5 per minute"))


def _auth_service() -> AuthService:
    return AuthService(
        registry=get_token_registry(),
        signer=get_token_signer(),
        token_cfg=AuthTokenConfig.from_app(),
    )


@bp.post("/register")
@timing
@translate_service_errors
def register():
    """Register a new user and return the created representation."""

    payload = register_schema.load(request.get_json(silent=True) or {})
    user = _auth_service().register(RegisterIn(**payload))
    return json_response({"data": user_schema.dump(user)}, status=201)


@bp.post("/login")
@limiter.limit(_login_rate_limit)
@timing
@translate_service_errors
def login():
    """Authenticate credentials and issue an access/refresh token pair."""

    data = login_schema.load(request.get_json(silent=True) or {})
    result = _auth_service().login(LoginIn(email=data["email"], password=data["password"]))
    return json_response(login_response_schema.dump(result))


@bp.get("/whoami")
@require_token(TokenKind.ACCESS)
@timing
@translate_service_errors
def whoami():
    """Return the authenticated user profile."""

    user = _auth_service().whoami(current_subject())
    return json_response({"data": user_schema.dump(user)})
