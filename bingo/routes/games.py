"""Game routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from bingo.routes._deps import game_engine, locked_game
from bingo.schemas.card import CardSchema
from bingo.schemas.game import (
    DrawOutcomeSchema,
    GameCommandSchema,
    GameCreateSchema,
    GameSchema,
    GameStateSchema,
)
from bingo.utils.responses import ok

games_bp = Blueprint("games", __name__)

_game_schema = GameSchema()
_games_schema = GameSchema(many=True)
_state_schema = GameStateSchema()
_draw_schema = DrawOutcomeSchema()
_cards_schema = CardSchema(many=True)
_create_schema = GameCreateSchema()
_command_schema = GameCommandSchema()


@games_bp.get("/games")
def list_open_games():
    """Games that are waiting for players or in progress."""

    games = game_engine().list_open_games().unwrap()
    return ok(_games_schema.dump(games))


@games_bp.post("/game/create")
def create_game():
    payload = request.get_json(silent=True) or {}
    data = _create_schema.load(payload)

    game = game_engine().create_game(
        data["name"],
        max_cards=data.get("max_cards"),
        card_price=data.get("card_price"),
    ).unwrap()
    return ok(_game_schema.dump(game), status_code=201)


@games_bp.get("/game/<game_id>")
def get_game_state(game_id: str):
    state = game_engine().get_game_state(game_id).unwrap()
    return ok(_state_schema.dump(state))


@games_bp.get("/game/<game_id>/cards")
def list_cards(game_id: str):
    """Cards sold for a game, optionally filtered by ?user_id=."""

    user_id = request.args.get("user_id") or None
    cards = game_engine().list_cards(game_id, user_id=user_id).unwrap()
    return ok(_cards_schema.dump(cards))


@games_bp.post("/game/start")
def start_game():
    data = _command_schema.load(request.get_json(silent=True) or {})
    game_id = data["game_id"]

    with locked_game(game_id):
        game = game_engine().start_game(game_id).unwrap()
    return ok(_game_schema.dump(game))


@games_bp.post("/game/draw-number")
def draw_number():
    data = _command_schema.load(request.get_json(silent=True) or {})
    game_id = data["game_id"]

    with locked_game(game_id):
        outcome = game_engine().draw_next_number(game_id).unwrap()
    return ok(_draw_schema.dump(outcome))


@games_bp.post("/game/reset")
def reset_game():
    data = _command_schema.load(request.get_json(silent=True) or {})
    game_id = data["game_id"]

    with locked_game(game_id):
        game = game_engine().reset_game(game_id).unwrap()
    return ok(_game_schema.dump(game))
