"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import LoginResponseSchema, LoginSchema, RegisterSchema
from .common import MetaSchema, PaginationQuerySchema, build_meta
from .user import UserCreateSchema, UserFilterSchema, UserSchema, UserUpdateSchema

__all__ = [
    "LoginSchema",
    "LoginResponseSchema",
    "RegisterSchema",
    "PaginationQuerySchema",
    "MetaSchema",
    "build_meta",
    "UserSchema",
    "UserCreateSchema",
    "UserUpdateSchema",
    "UserFilterSchema",
]
