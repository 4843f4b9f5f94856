"""Schemas for game lifecycle endpoints."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class GameSchema(Schema):
    """Serialize a game record."""

    id = fields.Str(required=True)
    name = fields.Str(required=True)
    max_cards = fields.Int(required=True)
    card_price = fields.Int(required=True)
    status = fields.Str(required=True)
    current_number = fields.Int(allow_none=True)
    numbers_called = fields.List(fields.Int())
    winner_id = fields.Str(allow_none=True)
    created_at = fields.DateTime()
    started_at = fields.DateTime(allow_none=True)
    finished_at = fields.DateTime(allow_none=True)


class GameStateSchema(Schema):
    game = fields.Nested(GameSchema)
    card_count = fields.Int()


class WinnerSchema(Schema):
    card_id = fields.Str()
    user_id = fields.Str()
    card_number = fields.Int()


class DrawOutcomeSchema(Schema):
    number = fields.Int(required=True)
    numbers_called = fields.List(fields.Int())
    status = fields.Str()
    winners = fields.List(fields.Nested(WinnerSchema))


class GameCreateSchema(Schema):
    """Validate create game payload; omitted limits fall back to config defaults."""

    name = fields.Str(required=True, validate=validate.Length(min=1, max=200))
    max_cards = fields.Int(
        required=False,
        load_default=None,
        data_key="maxCards",
        validate=validate.Range(min=1),
    )
    card_price = fields.Int(
        required=False,
        load_default=None,
        data_key="cardPrice",
        validate=validate.Range(min=0),
    )


class GameCommandSchema(Schema):
    """Body of start / draw-number / reset."""

    game_id = fields.Str(required=True, data_key="gameId", validate=validate.Length(min=1))
