from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

from flask import Flask, jsonify, request

from ..core.exceptions import ConflictError, RetryExhaustedError, StorageUnavailableError, ValidationError
from .logger import get_logger

logger = get_logger(__name__)


def iso(value: Optional[Union[datetime, date]]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def query_bool(name: str) -> Optional[bool]:
    raw = request.args.get(name)
    if raw is None or raw == "" or raw == "all":
        return None
    return raw.strip().lower() in {"1", "true", "yes", "posted"}


def register_error_handlers(app: Flask) -> None:
    """Map domain errors to JSON responses; stack traces never reach clients."""

    @app.errorhandler(ValidationError)
    def _validation(exc: ValidationError):
        return jsonify({"success": False, "message": str(exc)}), 400

    @app.errorhandler(ConflictError)
    @app.errorhandler(RetryExhaustedError)
    def _conflict(exc):
        logger.warning("Write did not go through: %s", exc)
        return jsonify({"success": False, "message": "Please try again", "retryable": True}), 409

    @app.errorhandler(StorageUnavailableError)
    def _storage(exc: StorageUnavailableError):
        logger.error("Storage unavailable: %s", exc)
        return jsonify({"success": False, "message": "Storage unavailable, please try again", "retryable": True}), 503
