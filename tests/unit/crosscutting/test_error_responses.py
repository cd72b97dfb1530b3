"""Unit tests for error_responses module."""

import pytest

from hrms.crosscutting.error_responses import (
    Envelope,
    ErrorCode,
    bad_request,
    envelope_for_path,
    forbidden,
    internal_error,
    not_found,
    payload_too_large,
    render_error_body,
    unauthorized,
    validation_error,
)

pytestmark = pytest.mark.unit


class TestErrorFactories:
    """Test error factory functions."""

    def test_validation_error(self):
        exc = validation_error(
            "Validation failed", [{"field": "email", "message": "required"}]
        )
        assert exc.status_code == 400
        assert exc.code == ErrorCode.VALIDATION_ERROR
        assert exc.errors == [{"field": "email", "message": "required"}]

    def test_bad_request_defaults_to_business_rule(self):
        exc = bad_request("Already checked in today")
        assert exc.status_code == 400
        assert exc.code == ErrorCode.BUSINESS_RULE

    def test_unauthorized_always_uses_status_envelope(self):
        exc = unauthorized()
        assert exc.status_code == 401
        assert exc.envelope is Envelope.STATUS
        assert exc.detail == "Access token required"

    def test_forbidden(self):
        exc = forbidden()
        assert exc.status_code == 403
        assert exc.detail == "Access denied"
        assert exc.envelope is Envelope.SUCCESS

    def test_not_found_with_status_envelope(self):
        exc = not_found("Employee not found", envelope=Envelope.STATUS)
        assert exc.status_code == 404
        assert exc.envelope is Envelope.STATUS

    def test_payload_too_large(self):
        exc = payload_too_large("10 bytes")
        assert exc.status_code == 413
        assert "10 bytes" in exc.detail

    def test_internal_error(self):
        exc = internal_error()
        assert exc.status_code == 500
        assert exc.code == ErrorCode.INTERNAL_ERROR


class TestRenderErrorBody:
    def test_status_envelope(self):
        body = render_error_body("Invalid token", Envelope.STATUS)
        assert body == {"message": "Invalid token", "status": "error"}

    def test_status_envelope_with_errors(self):
        errors = [{"field": "password", "message": "Password is required"}]
        body = render_error_body("Validation failed", Envelope.STATUS, errors=errors)
        assert body["errors"] == errors

    def test_success_envelope(self):
        body = render_error_body("Access denied", Envelope.SUCCESS)
        assert body == {"success": False, "message": "Access denied"}

    def test_extra_keys(self):
        body = render_error_body(
            "Internal server error", Envelope.SUCCESS, extra={"error_id": "abc"}
        )
        assert body["error_id"] == "abc"


@pytest.mark.parametrize(
    "path,expected",
    [
        ("/api/auth/login", Envelope.STATUS),
        ("/api/auth", Envelope.STATUS),
        ("/api/performance/3", Envelope.STATUS),
        ("/api/reports/payroll", Envelope.STATUS),
        ("/api/db-test", Envelope.STATUS),
        ("/api/authority", Envelope.SUCCESS),
        ("/api/attendance/check", Envelope.SUCCESS),
        ("/api/leaves/1", Envelope.SUCCESS),
        ("/api/employees", Envelope.SUCCESS),
        ("/unknown", Envelope.SUCCESS),
    ],
)
def test_envelope_for_path(path, expected):
    assert envelope_for_path(path) is expected
