import json

import httpx
import pytest

from rentwise.adapters.clients.api_client import ApiClient, clean_params
from rentwise.adapters.clients.errors import (
    ApiAuthError,
    ApiHttpError,
    ApiMalformedResponse,
    ApiNetworkError,
)
from rentwise.adapters.clients.session import Session

from conftest import BASE_URL, FakeApi


async def test_bearer_header_attached_when_session_has_token(client, fake_api):
    fake_api.on("GET", "/properties", json={"properties": []})

    await client.get("/properties")

    req = fake_api.requests[0]
    assert req.headers["authorization"] == "Bearer tok-123"
    assert str(req.url) == f"{BASE_URL}/properties"


async def test_no_auth_header_without_token():
    fake = FakeApi()
    fake.on("GET", "/properties", json={"properties": []})
    anon = ApiClient(session=Session(), base_url=BASE_URL, transport=httpx.MockTransport(fake))

    await anon.get("/properties")

    assert "authorization" not in fake.requests[0].headers


async def test_session_token_change_is_seen_by_next_request(fake_api):
    session = Session()
    c = ApiClient(session=session, base_url=BASE_URL, transport=httpx.MockTransport(fake_api))
    fake_api.on("GET", "/auth/profile", json={"ok": True})

    await c.get("/auth/profile")
    session.sign_in("fresh", role="renter")
    await c.get("/auth/profile")

    assert "authorization" not in fake_api.requests[0].headers
    assert fake_api.requests[1].headers["authorization"] == "Bearer fresh"


async def test_json_body_is_serialized(client, fake_api):
    fake_api.on("POST", "/rental-applications/a1/messages", json={"application": {"_id": "a1"}})

    await client.post("/rental-applications/a1/messages", json={"message": "hi"})

    req = fake_api.requests[0]
    assert req.headers["content-type"] == "application/json"
    assert json.loads(req.content) == {"message": "hi"}


async def test_error_payload_message_is_raised(client, fake_api):
    fake_api.on("POST", "/rental-applications/p1", status=400, json={"success": False, "message": "You have already applied for this property"})

    with pytest.raises(ApiHttpError) as exc:
        await client.post("/rental-applications/p1", json={})

    assert exc.value.status_code == 400
    assert exc.value.message == "You have already applied for this property"
    assert exc.value.server_message == "You have already applied for this property"


async def test_error_key_used_when_no_message(client, fake_api):
    fake_api.on("DELETE", "/properties/x", status=403, json={"error": "Not authorized to delete this property."})

    with pytest.raises(ApiHttpError) as exc:
        await client.delete("/properties/x")

    assert exc.value.message == "Not authorized to delete this property."


async def test_unparsable_error_body_falls_back_to_status(client, fake_api):
    fake_api.on("GET", "/properties", status=502, content=b"<html>bad gateway</html>")

    with pytest.raises(ApiHttpError) as exc:
        await client.get("/properties")

    assert exc.value.payload == {}
    assert exc.value.server_message is None
    assert exc.value.message == "HTTP error! status: 502"


async def test_401_is_auth_error(client, fake_api):
    fake_api.on("GET", "/rental-applications/applicant", status=401, json={"message": "Access denied. No token provided."})

    with pytest.raises(ApiAuthError) as exc:
        await client.get("/rental-applications/applicant")

    assert exc.value.requires_login is True
    assert isinstance(exc.value, ApiHttpError)


async def test_malformed_success_body(client, fake_api):
    fake_api.on("GET", "/properties/1", status=200, content=b"{not json")

    with pytest.raises(ApiMalformedResponse) as exc:
        await client.get("/properties/1")

    assert exc.value.status_code == 200
    assert exc.value.payload == {}


async def test_empty_success_body_returns_none(client, fake_api):
    fake_api.on("DELETE", "/properties/1", status=204, content=b"")

    assert await client.delete("/properties/1") is None


async def test_network_failure_is_network_error(session):
    def boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    c = ApiClient(session=session, base_url=BASE_URL, transport=httpx.MockTransport(boom))

    with pytest.raises(ApiNetworkError) as exc:
        await c.get("/properties")

    assert "connection refused" in exc.value.message
    assert exc.value.server_message is None


async def test_empty_params_never_sent(client, fake_api):
    fake_api.on("GET", "/properties", json={"properties": []})

    await client.get("/properties", params={"propertyType": "house", "city": "", "minPrice": None, "page": 1})

    assert dict(fake_api.requests[0].url.params) == {"propertyType": "house", "page": "1"}


def test_clean_params_keeps_zero_and_false():
    assert clean_params({"a": 0, "b": False, "c": "", "d": None}) == {"a": 0, "b": False}
