"""
Name: HRMS HTTP Client Tests

Responsibilities:
  - login/register guardan el token; los requests siguientes lo adjuntan
  - Un 401 descarta el token y dispara on_unauthorized
  - Respuestas no-2xx => HRMSAPIError con el mensaje del server

Notes:
  - httpx.MockTransport: sin red.
"""

from datetime import date

import httpx
import pytest

from hrms.client import HRMSAPIError, HRMSClient, InMemoryTokenStore

pytestmark = pytest.mark.unit


class _Recorder:
    """MockTransport handler que guarda los requests recibidos."""

    def __init__(self, responder):
        self.requests: list[httpx.Request] = []
        self._responder = responder

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)


def _client(responder, **kwargs):
    recorder = _Recorder(responder)
    client = HRMSClient(
        "http://hrms.test/", transport=httpx.MockTransport(recorder), **kwargs
    )
    return client, recorder


def test_login_stores_token_and_attaches_it():
    def responder(request):
        if request.url.path == "/api/auth/login":
            return httpx.Response(
                200, json={"status": "success", "token": "tok-1", "user": {"id": 1}}
            )
        return httpx.Response(200, json={"success": True, "status": "Checked In"})

    client, recorder = _client(responder)
    with client:
        client.login("ana@example.com", "secret123")
        status = client.attendance_status()

    assert client.token == "tok-1"
    assert status == "Checked In"
    assert "Authorization" not in recorder.requests[0].headers
    assert recorder.requests[1].headers["Authorization"] == "Bearer tok-1"


def test_unauthorized_clears_token_and_notifies():
    seen = []
    store = InMemoryTokenStore("stale-token")

    def responder(request):
        return httpx.Response(401, json={"message": "Invalid token", "status": "error"})

    client, _ = _client(responder, token_store=store, on_unauthorized=seen.append)

    with pytest.raises(HRMSAPIError) as exc_info:
        client.validate()

    assert exc_info.value.status_code == 401
    assert exc_info.value.message == "Invalid token"
    assert store.get() is None
    assert len(seen) == 1
    assert seen[0].status_code == 401


def test_error_message_from_success_envelope():
    def responder(request):
        return httpx.Response(
            400, json={"success": False, "message": "Already checked in today"}
        )

    client, _ = _client(responder, token_store=InMemoryTokenStore("tok"))

    with pytest.raises(HRMSAPIError, match="Already checked in today"):
        client.check_in()

    assert client.token == "tok"


def test_non_json_error_falls_back_to_text():
    client, _ = _client(lambda request: httpx.Response(502, text="Bad Gateway"))

    with pytest.raises(HRMSAPIError) as exc_info:
        client.list_leaves()

    assert exc_info.value.message == "Bad Gateway"


def test_create_leave_serializes_dates():
    def responder(request):
        return httpx.Response(201, json={"success": True, "data": {"id": 5}})

    client, recorder = _client(responder)

    data = client.create_leave(
        leave_type="Vacation",
        start_date=date(2030, 1, 2),
        end_date=date(2030, 1, 4),
    )

    assert data == {"id": 5}
    body = recorder.requests[0].read().decode()
    assert '"start_date":"2030-01-02"' in body.replace(" ", "")


def test_logout_forgets_token():
    client, _ = _client(lambda request: httpx.Response(200, json={}))
    client._tokens.set("tok")

    client.logout()

    assert client.token is None
