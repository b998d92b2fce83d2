"""FastAPI dependency implementations."""

from __future__ import annotations

from json import JSONDecodeError
from typing import Any

from fastapi import Depends, Request

from src.catalog_api.api.http.app_data import ApplicationDependencies
from src.catalog_api.core.errors import ApiError
from src.catalog_api.core.security import verify_api_key
from src.catalog_api.entities.service.product import ProductStore
from src.catalog_api.runtime.config.config_data import ConfigData


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_app_config(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> ConfigData:
    """Get the configuration the application was built with."""
    return app_deps.config


def get_product_store(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> ProductStore:
    """Get the product store instance."""
    return app_deps.product_store


def require_api_key(
    request: Request, config: ConfigData = Depends(get_app_config)
) -> str:
    """Auth gate: reject the request unless it carries an allowed API key."""
    header_name = config.security.api_key_header
    api_key = verify_api_key(
        request.headers.get(header_name),
        config.security.api_keys,
        header_name=header_name,
    )
    request.state.api_key = api_key
    return api_key


async def read_json_object(request: Request) -> dict[str, Any]:
    """Parse the request body as a JSON object.

    Read inside the handler rather than through a body parameter so the
    auth gate always runs before the payload is looked at.
    """
    try:
        payload = await request.json()
    except (JSONDecodeError, UnicodeDecodeError) as exc:
        raise ApiError.bad_request("Request body must be valid JSON") from exc
    if not isinstance(payload, dict):
        raise ApiError.bad_request("Request body must be a JSON object")
    return payload


def parse_product_id(raw_id: str) -> int:
    """Convert the ``{product_id}`` path segment to an integer.

    Only plain ASCII digits are accepted; ``int()`` alone would also take
    ``0_1``, padded text and non-ASCII digits.
    """
    if not (raw_id.isascii() and raw_id.isdigit()):
        raise ApiError.bad_request("Product ID must be a valid number")
    return int(raw_id)
