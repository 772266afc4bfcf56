"""User endpoints. Every route requires an access token."""

from __future__ import annotations

from flask import Blueprint, request

from chatapp.api.deps import (
    current_user_id,
    json_response,
    parse_pagination,
    require_token,
    timing,
    translate_service_errors,
)
from chatapp.schemas import (
    UserCreateSchema,
    UserFilterSchema,
    UserSchema,
    UserUpdateSchema,
    build_meta,
)
from chatapp.services.auth.tokens import TokenKind
from chatapp.services.users.dto import UserCreateIn, UserUpdateIn
from chatapp.services.users.service import UserService

bp = Blueprint("users", __name__, url_prefix="/users")

user_schema = UserSchema()
user_list_schema = UserSchema(many=True)
user_create_schema = UserCreateSchema()
user_update_schema = UserUpdateSchema()
user_filter_schema = UserFilterSchema()


@bp.get("")
@require_token(TokenKind.ACCESS)
@timing
@translate_service_errors
def list_users():
    """Return paginated users."""

    filters = user_filter_schema.load(request.args)
    pagination = parse_pagination()
    items, total = UserService().list_users(filters, pagination)
    data = user_list_schema.dump(items)
    meta = build_meta(total=total, page=pagination.page, limit=pagination.limit)
    return json_response({"data": data, "meta": meta})


@bp.post("")
@require_token(TokenKind.ACCESS)
@timing
@translate_service_errors
def create_user():
    """Create a new user."""

    payload = user_create_schema.load(request.get_json(silent=True) or {})
    user = UserService().create_user(UserCreateIn(**payload))
    return json_response({"data": user_schema.dump(user)}, status=201)


@bp.put("")
@require_token(TokenKind.ACCESS)
@timing
@translate_service_errors
def update_user():
    """Update the caller's own account."""

    payload = user_update_schema.load(request.get_json(silent=True) or {})
    user = UserService().update_user(current_user_id(), UserUpdateIn(**payload))
    return json_response({"data": user_schema.dump(user)})


@bp.delete("")
@require_token(TokenKind.ACCESS)
@timing
@translate_service_errors
def delete_user():
    """Delete the caller's own account."""

    UserService().delete_user(current_user_id())
    return "", 204
