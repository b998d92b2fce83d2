"""Unit tests for API-key verification."""

import pytest

from src.catalog_api.core.errors import ApiError, ErrorKind
from src.catalog_api.core.security import is_valid_api_key, mask_key, verify_api_key

ALLOWED = ["key-one", "key-two"]


class TestVerifyApiKey:
    """Test the auth gate decision."""

    def test_allowed_key_is_returned(self):
        assert verify_api_key("key-two", ALLOWED) == "key-two"

    @pytest.mark.parametrize("candidate", [None, "", "   "])
    def test_missing_key_is_unauthorized(self, candidate):
        with pytest.raises(ApiError) as exc_info:
            verify_api_key(candidate, ALLOWED)
        assert exc_info.value.kind is ErrorKind.UNAUTHORIZED
        assert "x-api-key" in exc_info.value.message

    def test_unknown_key_is_forbidden(self):
        with pytest.raises(ApiError) as exc_info:
            verify_api_key("key-three", ALLOWED)
        assert exc_info.value.kind is ErrorKind.FORBIDDEN

    def test_header_name_appears_in_message(self):
        with pytest.raises(ApiError) as exc_info:
            verify_api_key(None, ALLOWED, header_name="x-token")
        assert "x-token" in exc_info.value.message

    def test_empty_allow_list_rejects_everything(self):
        assert is_valid_api_key("key-one", []) is False

    def test_prefix_is_not_a_match(self):
        assert is_valid_api_key("key-on", ALLOWED) is False


class TestMaskKey:
    def test_keeps_last_characters(self):
        assert mask_key("abcdefgh") == "****efgh"

    def test_short_key_fully_masked(self):
        assert mask_key("abc") == "***"
