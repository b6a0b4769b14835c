"""Unit tests for CLI HTTP client."""

import json
from typing import Any

import httpx
import pytest

from mizban.cli.client import APIClient, extract
from mizban.core.config import Config
from mizban.core.exceptions import (
    APIError,
    BuildError,
    DecodeError,
    MalformedResponseError,
    RateLimitedError,
    TransportError,
    UnauthorizedError,
)
from mizban.schemas.base import Envelope
from mizban.schemas.cloud import Server
from mizban.schemas.ticket import Ticket


def make_client(handler, token: str = "tok", base_url: str = "http://test/api") -> APIClient:
    config = Config(token=token, base_url=base_url)
    return APIClient(config, transport=httpx.MockTransport(handler))


def respond(status: int = 200, body: Any = None, content: bytes | None = None):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if content is not None:
            return httpx.Response(status, content=content)
        return httpx.Response(status, json=body)

    return handler, seen


class TestAPIClient:
    """Tests for APIClient request handling."""

    def test_client_initialization(self):
        client = APIClient(Config())
        assert client.timeout == 30.0
        assert client._client is None

    def test_get_returns_envelope(self):
        handler, seen = respond(body={"success": True, "message": "ok", "data": [{"id": 1}]})
        with make_client(handler) as client:
            envelope = client.get("/v1/cloud/servers")

        assert envelope.success is True
        assert envelope.data == [{"id": 1}]
        assert str(seen[0].url) == "http://test/api/v1/cloud/servers"
        assert seen[0].method == "GET"

    def test_sends_headers(self):
        handler, seen = respond(body={"success": True})
        with make_client(handler, token="abc") as client:
            client.get("/x")

        headers = seen[0].headers
        assert headers["Authorization"] == "Bearer abc"
        assert headers["Content-Type"] == "application/json"
        assert headers["Accept"] == "application/json"
        assert headers["User-Agent"].startswith("mizban-cli/")

    def test_no_authorization_without_token(self):
        handler, seen = respond(body={"success": True})
        with make_client(handler, token="") as client:
            client.get("/x")

        assert "Authorization" not in seen[0].headers

    def test_post_encodes_model_without_nulls(self):
        from mizban.schemas.cloud import ServerCreateRequest

        handler, seen = respond(body={"success": True})
        body = ServerCreateRequest(name="web", os="ubuntu", cpu=1, ram=1024, storage=20, datacenter_id=1)
        with make_client(handler) as client:
            client.post("/v1/cloud/servers", body)

        sent = json.loads(seen[0].content)
        assert sent == {
            "name": "web",
            "os": "ubuntu",
            "cpu": 1,
            "ram": 1024,
            "storage": 20,
            "datacenter_id": 1,
        }

    def test_post_encodes_plain_dict(self):
        handler, seen = respond(body={"success": True})
        with make_client(handler) as client:
            client.post("/x", {"a": [1, 2]})

        assert json.loads(seen[0].content) == {"a": [1, 2]}

    def test_get_and_delete_send_no_body(self):
        handler, seen = respond(body={"success": True})
        with make_client(handler) as client:
            client.get("/x")
            client.delete("/x/1")

        assert seen[0].content == b""
        assert seen[1].method == "DELETE"
        assert seen[1].content == b""

    def test_put_without_body(self):
        handler, seen = respond(body={"success": True})
        with make_client(handler) as client:
            client.put("/v1/cloud/servers/1/power/on")

        assert seen[0].method == "PUT"
        assert seen[0].content == b""

    def test_close_client(self):
        handler, _ = respond(body={"success": True})
        client = make_client(handler)
        client.get("/x")
        assert client._client is not None
        client.close()
        assert client._client is None


class TestResponseClassification:
    """Tests for mapping responses onto errors."""

    @pytest.mark.parametrize(
        "body",
        [
            {"success": True, "message": "ok"},
            {"success": False, "message": "bad token"},
            None,
        ],
    )
    def test_401_wins_over_body(self, body):
        handler, _ = respond(401, body=body)
        with make_client(handler) as client, pytest.raises(UnauthorizedError) as exc_info:
            client.get("/x")

        assert "mizban login" in exc_info.value.message

    def test_401_with_unparseable_body(self):
        handler, _ = respond(401, content=b"<html>nope</html>")
        with make_client(handler) as client, pytest.raises(UnauthorizedError):
            client.get("/x")

    def test_429(self):
        handler, _ = respond(429, content=b"slow down")
        with make_client(handler) as client, pytest.raises(RateLimitedError):
            client.get("/x")

    @pytest.mark.parametrize("content", [b"<html>gateway</html>", b"", b'{"success": "yes"}'])
    def test_malformed_body(self, content):
        handler, _ = respond(502, content=content)
        with make_client(handler) as client, pytest.raises(MalformedResponseError) as exc_info:
            client.get("/x")

        assert exc_info.value.message.startswith("error parsing response")

    def test_success_false_uses_server_message(self):
        handler, _ = respond(422, body={
            "success": False,
            "message": "Validation failed",
            "errors": {"name": ["required"]},
        })
        with make_client(handler) as client, pytest.raises(APIError) as exc_info:
            client.post("/x", {})

        assert exc_info.value.message == "Validation failed"
        assert exc_info.value.errors == {"name": ["required"]}
        assert exc_info.value.status_code == 422

    def test_success_false_with_200(self):
        handler, _ = respond(200, body={"success": False, "message": "Quota exceeded"})
        with make_client(handler) as client, pytest.raises(APIError, match="Quota exceeded"):
            client.get("/x")

    def test_null_success_is_api_error(self):
        handler, _ = respond(200, body={"success": None, "message": "Access denied"})
        with make_client(handler) as client, pytest.raises(APIError, match="Access denied"):
            client.get("/x")

    def test_follows_redirects(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if request.url.host == "test":
                return httpx.Response(301, headers={"Location": "http://new/api/x"})
            return httpx.Response(200, json={"success": True, "message": "", "data": 1})

        with make_client(handler) as client:
            assert client.get("/x").data == 1

        assert [str(r.url) for r in seen] == ["http://test/api/x", "http://new/api/x"]

    def test_non_2xx_with_success_true_is_success(self):
        handler, _ = respond(500, body={"success": True, "message": "", "data": 1})
        with make_client(handler) as client:
            assert client.get("/x").data == 1

    def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with make_client(handler) as client, pytest.raises(TransportError) as exc_info:
            client.get("/x")

        assert "connection refused" in exc_info.value.message

    def test_timeout_is_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with make_client(handler) as client, pytest.raises(TransportError):
            client.get("/x")

    def test_invalid_url_is_build_error(self):
        handler, seen = respond(body={"success": True})
        with make_client(handler, base_url="http://test:notaport/api") as client, pytest.raises(BuildError):
            client.get("/x")

        assert seen == []

    def test_unserializable_body_is_build_error(self):
        handler, seen = respond(body={"success": True})
        with make_client(handler) as client, pytest.raises(BuildError, match="marshaling"):
            client.post("/x", {"bad": object()})

        assert seen == []


class TestExtract:
    """Tests for decoding envelope data."""

    def test_decodes_model(self):
        envelope = Envelope(success=True, data={"id": 42, "subject": "Billing"})
        ticket = extract(envelope, Ticket)
        assert ticket.id == 42
        assert ticket.subject == "Billing"

    def test_decodes_list(self):
        envelope = Envelope(success=True, data=[{"id": 1, "name": "a"}, {"id": 2, "name": "b"}])
        servers = extract(envelope, list[Server])
        assert [s.name for s in servers] == ["a", "b"]

    def test_null_data_decodes_to_empty_list(self):
        assert extract(Envelope(success=True, data=None), list[Server]) == []

    def test_null_data_decodes_to_default_model(self):
        ticket = extract(Envelope(success=True, data=None), Ticket)
        assert ticket.id == 0
        assert ticket.subject == ""

    def test_null_data_decodes_to_empty_dict(self):
        assert extract(Envelope(success=True, data=None), dict[str, Any]) == {}

    def test_wrong_shape_fails(self):
        with pytest.raises(DecodeError) as exc_info:
            extract(Envelope(success=True, data={"id": "not-a-number"}), Server)

        assert exc_info.value.message.startswith("error parsing data: id")

    def test_strict_mode_rejects_tolerated_values(self):
        envelope = Envelope(success=True, data={"is_closed": "maybe"})
        assert extract(envelope, Ticket).is_closed is False
        with pytest.raises(DecodeError):
            extract(envelope, Ticket, strict=True)
