"""Flask application package for the bingo hall."""

from __future__ import annotations

from typing import Any, Mapping

from dotenv import load_dotenv
from flask import Flask


def create_app(overrides: Mapping[str, Any] | None = None) -> Flask:
    """Application factory.

    Args:
        overrides: Config values applied after the environment config
            (used by tests to pick a backend or a fixed RNG seed).

    Returns:
        Configured Flask application.
    """
    load_dotenv()

    from bingo.config import get_config
    from bingo.db import init_db
    from bingo.error_handlers import register_error_handlers
    from bingo.locks import GameLocks
    from bingo.logging_config import configure_logging
    from bingo.rng import create_rng
    from bingo.routes.cards import cards_bp
    from bingo.routes.games import games_bp
    from bingo.routes.health import health_bp
    from bingo.routes.profiles import profiles_bp

    app = Flask(__name__)
    app.config.from_object(get_config())
    if overrides:
        app.config.update(overrides)

    configure_logging(app)
    init_db(app)
    register_error_handlers(app)

    app.extensions["rng"] = create_rng(app.config.get("RNG_SEED"))
    app.extensions["game_locks"] = GameLocks()

    app.register_blueprint(health_bp)
    app.register_blueprint(games_bp, url_prefix="/api")
    app.register_blueprint(cards_bp, url_prefix="/api")
    app.register_blueprint(profiles_bp, url_prefix="/api")

    return app
