"""User resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class UserCreateSchema(Schema):
    """Payload for creating a new user."""

    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=8, max=128))


class UserUpdateSchema(Schema):
    """Payload for updating the caller's account. Blank values are ignored."""

    name = fields.String(load_default=None, validate=validate.Length(max=100))
    email = fields.String(load_default=None, validate=validate.Length(max=254))
    password = fields.String(load_default=None, validate=validate.Length(max=128))


class UserFilterSchema(Schema):
    """Supported query parameters for listing users."""

    class Meta:
        unknown = EXCLUDE

    email = fields.String(load_default=None, validate=validate.Length(min=1, max=254))
    name = fields.String(load_default=None, validate=validate.Length(min=1, max=100))


class UserSchema(Schema):
    """Public representation of a user entity."""

    id = fields.Integer(required=True)
    name = fields.String(required=True)
    email = fields.Email(required=True)
    created_at = fields.DateTime(allow_none=True)
    updated_at = fields.DateTime(allow_none=True)
