"""Helpers shared by the JSON blueprints."""

from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime
from enum import Enum
from typing import Any

from flask import Flask, jsonify, request
from sqlmodel import SQLModel

from ..errors import RecordNotFoundError, StoreError, ValidationError

logger = logging.getLogger(__name__)


def to_jsonable(value: Any) -> Any:
    """Convert records, view dataclasses and enums into JSON-ready values."""

    if isinstance(value, SQLModel):
        return {key: to_jsonable(item) for key, item in value.model_dump().items()}
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            field.name: to_jsonable(getattr(value, field.name))
            for field in dataclasses.fields(value)
        }
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(key): to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value


def request_payload() -> dict[str, Any]:
    """Return submitted fields from a JSON body or a form post."""

    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def register_error_handlers(app: Flask) -> None:
    """Map service errors onto JSON error responses."""

    @app.errorhandler(ValidationError)
    def _validation_error(exc: ValidationError):
        logger.info("Request rejected", extra={"path": request.path, "reason": exc.message})
        body: dict[str, Any] = {"error": exc.message}
        if exc.errors:
            body["errors"] = exc.errors
        return jsonify(body), 400

    @app.errorhandler(RecordNotFoundError)
    def _not_found(exc: RecordNotFoundError):
        return jsonify({"error": str(exc)}), 404

    @app.errorhandler(StoreError)
    def _store_error(exc: StoreError):
        logger.warning("Store unavailable", extra={"path": request.path, "operation": exc.operation})
        return jsonify({"error": str(exc)}), 503
