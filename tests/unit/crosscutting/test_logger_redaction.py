"""
Name: JSON Logger Tests

Responsibilities:
  - Claves sensibles (password, token, authorization) nunca llegan al log
  - Strings enormes se truncan; bytes se resumen
  - Un LogRecord se serializa como JSON de una línea con sus extras
  - El filtro de texto plano agrega request_id del contexto
"""

import json
import logging
import sys

import pytest

from hrms.context import clear_context, set_request_context
from hrms.crosscutting.logger import (
    REDACTED,
    JSONFormatter,
    RequestContextFilter,
    _Redactor,
)

pytestmark = pytest.mark.unit


def test_sensitive_keys_are_redacted():
    redactor = _Redactor()

    clean = redactor.sanitize(
        {
            "email": "ana@example.com",
            "password": "secret123",
            "Authorization": "Bearer abc",
            "nested": {"token": "xyz", "ok": 1},
        }
    )

    assert clean["email"] == "ana@example.com"
    assert clean["password"] == REDACTED
    assert clean["Authorization"] == REDACTED
    assert clean["nested"] == {"token": REDACTED, "ok": 1}


def test_large_values_are_trimmed():
    redactor = _Redactor(max_str=10)

    assert redactor.sanitize("x" * 50).startswith("x" * 10)
    assert len(redactor.sanitize("x" * 50)) < 50
    assert redactor.sanitize(b"\x00" * 8) == "<bytes 8B>"


def test_non_serializable_values_become_strings():
    assert _Redactor().sanitize(object).startswith("<class")


def test_formatter_emits_single_line_json():
    record = logging.LogRecord(
        name="hrms-api",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="User logged in",
        args=(),
        exc_info=None,
    )
    record.user_id = 7
    record.password = "secret123"

    line = JSONFormatter().format(record)
    payload = json.loads(line)

    assert "\n" not in line
    assert payload["message"] == "User logged in"
    assert payload["level"] == "INFO"
    assert payload["user_id"] == 7
    assert payload["password"] == REDACTED


def _record(msg="boom", **attrs):
    record = logging.LogRecord(
        name="hrms-api",
        level=logging.ERROR,
        pathname=__file__,
        lineno=42,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in attrs.items():
        setattr(record, key, value)
    return record


def test_formatter_skips_standard_record_attributes():
    payload = json.loads(JSONFormatter().format(_record(error_message="pool timeout")))

    assert payload["error_message"] == "pool timeout"
    assert "args" not in payload
    assert "levelno" not in payload
    assert payload["source"].endswith(":42")


def test_formatter_includes_exception_details():
    try:
        raise ValueError("bad row")
    except ValueError:
        record = _record()
        record.exc_info = sys.exc_info()

    payload = json.loads(JSONFormatter().format(record))

    assert payload["exception"]["type"] == "ValueError"
    assert payload["exception"]["message"] == "bad row"
    assert payload["exception"]["stacktrace"]


def test_text_filter_fills_request_context():
    set_request_context(request_id="req-1", method="GET", path="/api/test")
    try:
        record = _record()
        assert RequestContextFilter().filter(record) is True
    finally:
        clear_context()

    assert record.request_id == "req-1"
    assert record.user_id == "-"
