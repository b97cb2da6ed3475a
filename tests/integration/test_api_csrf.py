"""Integration tests for the demo token and echo endpoints."""

from unittest.mock import MagicMock

import pytest

from xsrf_guard.dependencies import get_csrf_token
from xsrf_guard.errors import MisconfiguredError
from xsrf_guard.services.tokens import Tokens


class TestCsrfToken:
    async def test_token_for_new_visitor(self, test_client):
        resp = await test_client.get("/api/csrf-token")
        assert resp.status_code == 200
        secret = resp.cookies.get("XSRF-TOKEN")
        assert Tokens().verify(secret, resp.json()["token"])

    async def test_token_for_existing_secret(self, test_client):
        resp = await test_client.get("/api/csrf-token", headers={"cookie": "XSRF-TOKEN=abc123"})
        assert Tokens().verify("abc123", resp.json()["token"])
        assert "set-cookie" not in resp.headers


class TestEcho:
    async def test_echo_with_token(self, test_client):
        token_resp = await test_client.get("/api/csrf-token")
        secret = token_resp.cookies.get("XSRF-TOKEN")
        token = token_resp.json()["token"]

        resp = await test_client.post(
            "/api/echo",
            json={"greeting": "hello"},
            headers={"cookie": f"XSRF-TOKEN={secret}", "X-XSRF-TOKEN": token},
        )
        assert resp.status_code == 200
        assert resp.json() == {"received": {"greeting": "hello"}}

    async def test_echo_without_token(self, test_client):
        resp = await test_client.post(
            "/api/echo",
            json={"greeting": "hello"},
            headers={"cookie": "XSRF-TOKEN=abc123"},
        )
        assert resp.status_code == 403


class TestDependency:
    def test_requires_middleware(self):
        request = MagicMock()
        request.state = MagicMock(spec=[])
        with pytest.raises(MisconfiguredError):
            get_csrf_token(request)

    def test_calls_accessor(self):
        request = MagicMock()
        request.state.csrf_token = MagicMock(return_value="salt-digest")
        assert get_csrf_token(request) == "salt-digest"
