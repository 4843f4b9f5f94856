"""Schemas for cards and purchases."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from bingo.repositories.records import CELL_COUNT
from bingo.schemas.profile import ProfileSchema


class CardSchema(Schema):
    """Serialize a card record."""

    id = fields.Str(required=True)
    game_id = fields.Str(required=True)
    user_id = fields.Str(required=True)
    card_number = fields.Int(required=True)
    numbers = fields.List(fields.Int())
    marked_positions = fields.List(fields.Bool())
    is_winner = fields.Bool()
    created_at = fields.DateTime()


class PurchaseSchema(Schema):
    card = fields.Nested(CardSchema)
    profile = fields.Nested(ProfileSchema)
    card_count = fields.Int()


class PurchaseRequestSchema(Schema):
    game_id = fields.Str(required=True, data_key="gameId", validate=validate.Length(min=1))
    user_id = fields.Str(required=True, data_key="userId", validate=validate.Length(min=1))


class MarkCellRequestSchema(Schema):
    user_id = fields.Str(required=True, data_key="userId", validate=validate.Length(min=1))
    position = fields.Int(required=True, validate=validate.Range(min=0, max=CELL_COUNT - 1))
    marked = fields.Bool(required=False, load_default=True)
