"""Profile and credit routes."""

from __future__ import annotations

from flask import Blueprint, request

from bingo.routes._deps import profile_service
from bingo.schemas.profile import AddCreditsSchema, ProfileCreateSchema, ProfileSchema
from bingo.utils.responses import ok

profiles_bp = Blueprint("profiles", __name__)

_profile_schema = ProfileSchema()
_create_schema = ProfileCreateSchema()
_add_credits_schema = AddCreditsSchema()


@profiles_bp.post("/profiles")
def register():
    data = _create_schema.load(request.get_json(silent=True) or {})

    profile = profile_service().register(data["email"], display_name=data.get("display_name")).unwrap()
    return ok(_profile_schema.dump(profile), status_code=201)


@profiles_bp.get("/profiles/<user_id>")
def get_profile(user_id: str):
    profile = profile_service().get_profile(user_id).unwrap()
    return ok(_profile_schema.dump(profile))


@profiles_bp.post("/add-credits")
def add_credits():
    data = _add_credits_schema.load(request.get_json(silent=True) or {})

    profile = profile_service().add_credits(data["user_id"], int(data["amount"])).unwrap()
    return ok(_profile_schema.dump(profile))
