"""
Unit Test Fixtures.

`api` replaces the network with an httpx.MockTransport. Register the
responses a command needs with `api.add(...)`, invoke the command through
`runner`, then inspect `api.requests`.

Usage:
    def test_list(api, runner):
        api.add("GET", "/v1/cloud/servers", [{"id": 1, "name": "web"}])
        result = runner.invoke(app, ["server", "list"])
        assert "web" in result.output
"""

import json
from collections.abc import Generator
from functools import partial
from pathlib import Path
from typing import Any
from unittest.mock import patch

import httpx
import pytest
import yaml
from typer.testing import CliRunner

from mizban.cli.client import APIClient
from mizban.core.config import DEFAULT_BASE_URL, Config

BASE_PATH = httpx.URL(DEFAULT_BASE_URL).path


class FakeAPI:
    """Route table served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, Any]] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        data: Any = None,
        *,
        status: int = 200,
        success: bool = True,
        message: str = "ok",
        body: Any = None,
    ) -> None:
        """
        Register a response.

        `data` is wrapped in a success envelope. Pass `body` (dict or bytes)
        to send something other than a standard envelope.
        """
        payload = body if body is not None else {"success": success, "message": message, "data": data}
        self.routes[(method, path)] = (status, payload)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix(BASE_PATH)
        if request.url.query:
            path = f"{path}?{request.url.query.decode()}"

        route = self.routes.get((request.method, path))
        if route is None:
            return httpx.Response(
                404, json={"success": False, "message": f"no route for {request.method} {path}"},
            )

        status, payload = route
        if isinstance(payload, bytes):
            return httpx.Response(status, content=payload)
        return httpx.Response(status, json=payload)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)

    def calls(self) -> list[tuple[str, str]]:
        return [(r.method, r.url.path.removeprefix(BASE_PATH)) for r in self.requests]


@pytest.fixture
def api() -> Generator[FakeAPI, None, None]:
    """Serve API calls made by commands from a FakeAPI."""
    fake = FakeAPI()
    transport = httpx.MockTransport(fake.handler)
    with patch("mizban.cli.context.APIClient", partial(APIClient, transport=transport)):
        yield fake


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def logged_in(config_path: Path) -> Config:
    """Write a config file holding a token."""
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(yaml.safe_dump({"token": "secret-token", "base_url": DEFAULT_BASE_URL}))
    return Config.load(config_path)
