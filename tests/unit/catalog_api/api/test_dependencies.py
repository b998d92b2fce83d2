"""Unit tests for FastAPI dependency functions."""

from collections.abc import Callable

import pytest
from starlette.requests import Request

from src.catalog_api.api.http.deps import parse_product_id, require_api_key
from src.catalog_api.core.errors import ApiError, ErrorKind
from src.catalog_api.runtime.config.config_data import ConfigData, SecurityConfig


@pytest.fixture
def request_factory() -> Callable[[dict[str, str]], Request]:
    def _make_request(headers: dict[str, str]) -> Request:
        scope = {
            "type": "http",
            "headers": [
                (name.lower().encode("ascii"), value.encode("latin-1"))
                for name, value in headers.items()
            ],
            "method": "GET",
            "path": "/api/products",
            "query_string": b"",
        }
        return Request(scope)

    return _make_request


class TestRequireApiKey:
    """Test the auth gate dependency."""

    def test_valid_key_is_stored_on_request(self, request_factory, test_config, api_key):
        request = request_factory({"x-api-key": api_key})
        assert require_api_key(request, test_config) == api_key
        assert request.state.api_key == api_key

    def test_header_lookup_is_case_insensitive(self, request_factory, test_config, api_key):
        request = request_factory({"X-API-KEY": api_key})
        assert require_api_key(request, test_config) == api_key

    def test_missing_header(self, request_factory, test_config):
        with pytest.raises(ApiError) as exc_info:
            require_api_key(request_factory({}), test_config)
        assert exc_info.value.kind is ErrorKind.UNAUTHORIZED

    def test_wrong_key(self, request_factory, test_config):
        with pytest.raises(ApiError) as exc_info:
            require_api_key(request_factory({"x-api-key": "nope"}), test_config)
        assert exc_info.value.kind is ErrorKind.FORBIDDEN

    def test_custom_header_name(self, request_factory):
        config = ConfigData(
            security=SecurityConfig(api_key_header="x-catalog-key", api_keys=["k1"])
        )
        assert require_api_key(request_factory({"x-catalog-key": "k1"}), config) == "k1"
        with pytest.raises(ApiError):
            require_api_key(request_factory({"x-api-key": "k1"}), config)


class TestParseProductId:
    @pytest.mark.parametrize(("raw", "expected"), [("1", 1), ("42", 42), ("007", 7)])
    def test_valid_ids(self, raw, expected):
        assert parse_product_id(raw) == expected

    @pytest.mark.parametrize(
        "raw", ["abc", "1.5", "", "12abc", "0_1", " 7 ", "-1", "\u0661", "\uff11"]
    )
    def test_invalid_ids(self, raw):
        with pytest.raises(ApiError) as exc_info:
            parse_product_id(raw)
        assert exc_info.value.kind is ErrorKind.BAD_REQUEST
        assert exc_info.value.message == "Product ID must be a valid number"
