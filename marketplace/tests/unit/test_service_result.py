import pytest

from marketplace.api.serializers.response_serializers import ErrorResponseSerializer, error_payload
from marketplace.services.base import ErrorCodes, service_err, service_ok


@pytest.mark.unit
class TestServiceResultUnit:
    def test_service_ok_carries_value(self):
        result = service_ok({"fee": "5.99"})

        assert result.ok is True
        assert result.value == {"fee": "5.99"}
        assert result.error is None
        assert result.error_detail is None

    def test_service_err_carries_code_and_detail(self):
        result = service_err(ErrorCodes.UNSERVICEABLE_DESTINATION, "No shipping to country 'ZZ'")

        assert result.ok is False
        assert result.value is None
        assert result.error == "unserviceable_destination"
        assert result.error_detail == "No shipping to country 'ZZ'"

    def test_result_has_no_envelope_serializer(self):
        assert not hasattr(service_ok(1), "to_dict")


@pytest.mark.unit
class TestErrorPayloadUnit:
    def test_error_payload_shape(self):
        result = service_err(ErrorCodes.STORE_NOT_FOUND, "Store acme not found")

        assert error_payload(result) == {"error": "store_not_found", "detail": "Store acme not found"}

    def test_error_payload_renders_through_serializer(self):
        payload = error_payload(service_err(ErrorCodes.INVALID_INPUT, "page must be a positive integer"))

        data = ErrorResponseSerializer(payload).data

        assert data["error"] == "invalid_input"
        assert data["detail"] == "page must be a positive integer"
