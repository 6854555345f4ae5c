"""Centralized error handlers."""

from __future__ import annotations

import logging

from flask import Flask
from marshmallow import ValidationError as MarshmallowValidationError
from werkzeug.exceptions import HTTPException

from kqxs.errors import AppError, ValidationError
from kqxs.utils.responses import fail, fail_from

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    """Map engine, schema and HTTP errors onto the JSON envelope."""

    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        if exc.status_code >= 500:
            logger.error("%s: %s (%s)", exc.code, exc.message, exc.details)
        return fail_from(exc)

    @app.errorhandler(MarshmallowValidationError)
    def _handle_schema_error(exc: MarshmallowValidationError):
        # exc.messages is a dict of field -> list[str]
        return fail_from(ValidationError("Invalid request body", details=exc.messages))

    @app.errorhandler(HTTPException)
    def _handle_http_exception(exc: HTTPException):
        status = int(exc.code or 500)
        if status == 404:
            return fail("not_found", "Not found", 404)
        if status == 405:
            return fail("method_not_allowed", "Method not allowed", 405)

        return fail("http_error", exc.description or "HTTP error", status, details={"name": exc.name})

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        logger.exception("Unhandled exception")
        return fail("internal_error", "Internal server error", 500)
