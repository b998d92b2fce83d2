"""Unit tests for error kinds and the failure envelope."""

import pytest

from src.catalog_api.core.errors import ApiError, ErrorKind


class TestErrorKind:
    @pytest.mark.parametrize(
        ("kind", "status"),
        [
            (ErrorKind.BAD_REQUEST, 400),
            (ErrorKind.UNAUTHORIZED, 401),
            (ErrorKind.FORBIDDEN, 403),
            (ErrorKind.NOT_FOUND, 404),
            (ErrorKind.CONFLICT, 409),
            (ErrorKind.VALIDATION_FAILED, 422),
            (ErrorKind.INTERNAL, 500),
        ],
    )
    def test_status_codes(self, kind, status):
        assert kind.status_code == status
        assert ErrorKind.from_status(status) is kind

    def test_unknown_client_status_maps_to_bad_request(self):
        assert ErrorKind.from_status(418) is ErrorKind.BAD_REQUEST

    def test_unknown_server_status_maps_to_internal(self):
        assert ErrorKind.from_status(503) is ErrorKind.INTERNAL


class TestApiError:
    def test_envelope_without_details(self):
        error = ApiError.not_found("Product with ID 9 not found")
        assert error.to_envelope() == {
            "success": False,
            "status": 404,
            "message": "Product with ID 9 not found",
        }

    def test_envelope_with_details(self):
        error = ApiError.validation_failed(["name: Field required"])
        envelope = error.to_envelope()
        assert envelope["status"] == 422
        assert envelope["message"] == "Validation failed"
        assert envelope["errors"] == ["name: Field required"]

    def test_internal_message_is_generic(self):
        assert ApiError.internal().message == "Internal Server Error"
