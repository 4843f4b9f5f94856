"""Card purchase and marking routes."""

from __future__ import annotations

from flask import Blueprint, request

from bingo.routes._deps import game_engine, locked_card, locked_game
from bingo.schemas.card import CardSchema, MarkCellRequestSchema, PurchaseRequestSchema, PurchaseSchema
from bingo.utils.responses import ok

cards_bp = Blueprint("cards", __name__)

_card_schema = CardSchema()
_purchase_schema = PurchaseSchema()
_purchase_request_schema = PurchaseRequestSchema()
_mark_request_schema = MarkCellRequestSchema()


@cards_bp.post("/purchase-card")
def purchase_card():
    """Buy one card for a waiting game, debiting the card price."""

    data = _purchase_request_schema.load(request.get_json(silent=True) or {})
    game_id = data["game_id"]

    # Purchase takes the game lock so the sold-out check and insert don't interleave.
    with locked_game(game_id):
        purchase = game_engine().purchase_card(game_id, data["user_id"]).unwrap()
    return ok(_purchase_schema.dump(purchase), status_code=201)


@cards_bp.post("/cards/<card_id>/mark")
def mark_cell(card_id: str):
    data = _mark_request_schema.load(request.get_json(silent=True) or {})

    with locked_card(card_id):
        card = game_engine().mark_cell(
            card_id,
            data["user_id"],
            int(data["position"]),
            marked=bool(data["marked"]),
        ).unwrap()
    return ok(_card_schema.dump(card))
