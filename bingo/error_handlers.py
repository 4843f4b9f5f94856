"""Centralized error handlers."""

from __future__ import annotations

import logging

from flask import Flask, g
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException

from bingo.errors import AppError, ConflictError, ValidationError
from bingo.utils.responses import fail, fail_from

logger = logging.getLogger(__name__)


def _rollback_request() -> None:
    # Read by the session teardown in bingo.db.
    g.rollback = True


def register_error_handlers(app: Flask) -> None:
    """Register error handlers for the Flask app."""

    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        _rollback_request()
        if exc.status_code >= 500:
            logger.error("%s: %s", exc.code, exc.message, exc_info=exc)
        return fail_from(exc)

    @app.errorhandler(MarshmallowValidationError)
    def _handle_schema_error(exc: MarshmallowValidationError):
        _rollback_request()
        # exc.messages is a dict of field -> list[str]
        return fail_from(ValidationError(details=exc.messages))

    @app.errorhandler(IntegrityError)
    def _handle_integrity_error(exc: IntegrityError):
        _rollback_request()
        logger.info("Integrity error", exc_info=exc)
        return fail_from(ConflictError(details=str(exc.orig) if exc.orig else str(exc)))

    @app.errorhandler(HTTPException)
    def _handle_http_exception(exc: HTTPException):
        status = int(getattr(exc, "code", 500) or 500)
        if status == 404:
            return fail("not_found", "Not found", 404)

        return fail(
            "http_error",
            getattr(exc, "description", "HTTP error"),
            status,
            details={"name": getattr(exc, "name", "HTTPException")},
        )

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        _rollback_request()
        logger.exception("Unhandled exception")
        return fail("internal_error", "Internal server error", 500)
