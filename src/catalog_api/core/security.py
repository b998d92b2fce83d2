"""API-key checks for the auth gate."""

import hmac
from collections.abc import Iterable

from src.catalog_api.core.errors import ApiError


def is_valid_api_key(candidate: str, allowed_keys: Iterable[str]) -> bool:
    """Constant-time membership test of ``candidate`` in ``allowed_keys``.

    Every key is compared so the timing does not reveal which one matched.
    """
    candidate_bytes = candidate.encode("utf-8")
    matched = False
    for key in allowed_keys:
        if hmac.compare_digest(candidate_bytes, key.encode("utf-8")):
            matched = True
    return matched


def verify_api_key(
    candidate: str | None, allowed_keys: Iterable[str], header_name: str = "x-api-key"
) -> str:
    """Return the key when it is allowed.

    Raises:
        ApiError: Unauthorized when no key was sent, Forbidden when the key
            is not in the allow-list.
    """
    if candidate is None or not candidate.strip():
        raise ApiError.unauthorized(
            f"API key is missing. Please provide a valid API key in the {header_name} header"
        )
    if not is_valid_api_key(candidate.strip(), allowed_keys):
        raise ApiError.forbidden("Invalid API key")
    return candidate.strip()


def mask_key(key: str, visible: int = 4) -> str:
    """Hide all but the last ``visible`` characters of a key for display."""
    if len(key) <= visible:
        return "*" * len(key)
    return "*" * (len(key) - visible) + key[-visible:]
