"""Validation of product payloads.

Violations are collected for every field and reported together rather than
stopping at the first one.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from src.catalog_api.core.errors import ApiError
from src.catalog_api.entities.service.product import ProductCreate, ProductUpdate

M = TypeVar("M", bound=BaseModel)


def format_errors(exc: ValidationError) -> list[str]:
    """Flatten pydantic errors into ``"<field>: <message>"`` strings."""
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "body"
        message = error["msg"].removeprefix("Value error, ")
        messages.append(f"{field}: {message}")
    return messages


def _check(model: type[M], payload: Any) -> tuple[M | None, list[str]]:
    if not isinstance(payload, dict):
        return None, ["body: must be a JSON object"]
    try:
        return model.model_validate(payload), []
    except ValidationError as exc:
        return None, format_errors(exc)


def validate_product_create(payload: Any) -> ProductCreate:
    """Return the validated, trimmed create payload.

    Raises:
        ApiError: ValidationFailed carrying all violations.
    """
    model, errors = _check(ProductCreate, payload)
    if errors or model is None:
        raise ApiError.validation_failed(errors)
    return model


def validate_product_update(payload: Any) -> ProductUpdate:
    """Return the validated partial payload; ``{}`` is a valid no-op.

    Raises:
        ApiError: ValidationFailed carrying all violations.
    """
    model, errors = _check(ProductUpdate, payload)
    if errors or model is None:
        raise ApiError.validation_failed(errors)
    return model
