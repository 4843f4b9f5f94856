"""Schemas for player profiles."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class ProfileSchema(Schema):
    id = fields.Str(required=True)
    email = fields.Str(required=True)
    display_name = fields.Str(allow_none=True)
    credits = fields.Int(required=True)
    created_at = fields.DateTime()
    updated_at = fields.DateTime()


class ProfileCreateSchema(Schema):
    email = fields.Email(required=True)
    display_name = fields.Str(
        required=False,
        load_default=None,
        allow_none=True,
        data_key="displayName",
        validate=validate.Length(max=200),
    )


class AddCreditsSchema(Schema):
    user_id = fields.Str(required=True, data_key="userId", validate=validate.Length(min=1))
    amount = fields.Int(required=True, validate=validate.Range(min=1))
