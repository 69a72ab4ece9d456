"""Tests for clients/_base.py -- BaseSFClient construction and transport behaviour."""

from __future__ import annotations

import json
from collections.abc import AsyncGenerator

import httpx
import pytest
import pytest_asyncio
import respx

from clients._base import BaseSFClient
from config import PlatformConfig

# =========================================================================
# Fixtures
# =========================================================================

BASE_URL = "https://sf.example.com/odata/v2"
API_KEY = "secret-key"


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[BaseSFClient, None]:
    c = BaseSFClient(PlatformConfig(base_url=BASE_URL, api_key=API_KEY))
    yield c
    await c.close()


# =========================================================================
# Construction
# =========================================================================


class TestBaseSFClientConstruction:
    """Startup URL scheme checks."""

    def test_https_remote_allowed(self) -> None:
        client = BaseSFClient(PlatformConfig("https://sf.example.com/odata/v2/", "k"))
        assert client.base_url == "https://sf.example.com/odata/v2"

    def test_http_localhost_allowed(self) -> None:
        client = BaseSFClient(PlatformConfig("http://localhost:9999/odata/v2", "k"))
        assert "localhost" in client.base_url

    def test_http_127_allowed(self) -> None:
        BaseSFClient(PlatformConfig("http://127.0.0.1:8000/odata/v2", "k"))

    def test_http_ipv6_loopback_allowed(self) -> None:
        BaseSFClient(PlatformConfig("http://[::1]:8000/odata/v2", "k"))

    def test_http_remote_rejected(self) -> None:
        with pytest.raises(ValueError, match="Non-HTTPS"):
            BaseSFClient(PlatformConfig("http://remote-host:9999/odata/v2", "k"))

    def test_http_remote_ip_rejected(self) -> None:
        with pytest.raises(ValueError, match="Non-HTTPS"):
            BaseSFClient(PlatformConfig("http://10.0.0.5:8000/odata/v2", "k"))

    def test_follow_redirects_disabled(self) -> None:
        client = BaseSFClient(PlatformConfig(BASE_URL, API_KEY))
        assert client._http.follow_redirects is False

    async def test_async_context_manager_closes(self) -> None:
        async with BaseSFClient(PlatformConfig(BASE_URL, API_KEY)) as client:
            assert client._http.is_closed is False
        assert client._http.is_closed is True


# =========================================================================
# _request
# =========================================================================


class TestRequest:
    @respx.mock
    async def test_sends_apikey_header(self, client: BaseSFClient) -> None:
        route = respx.get(f"{BASE_URL}/EmployeeTime").mock(
            return_value=httpx.Response(200, json={"d": {"results": []}})
        )
        await client._request("GET", f"{BASE_URL}/EmployeeTime")
        request = route.calls.last.request
        assert request.headers["apikey"] == API_KEY
        assert request.headers["accept"] == "application/json"

    @respx.mock
    async def test_success_outcome(self, client: BaseSFClient) -> None:
        respx.get(f"{BASE_URL}/EmployeeTime").mock(
            return_value=httpx.Response(200, text='{"d": {}}')
        )
        outcome = await client._request("GET", f"{BASE_URL}/EmployeeTime")
        assert outcome.status_code == 200
        assert outcome.is_success is True
        assert outcome.text == '{"d": {}}'
        assert outcome.error is None

    @respx.mock
    async def test_json_body_sent(self, client: BaseSFClient) -> None:
        route = respx.post(f"{BASE_URL}/upsert").mock(return_value=httpx.Response(200, json={}))
        await client._request("POST", f"{BASE_URL}/upsert", data={"userId": "U1"})
        request = route.calls.last.request
        assert request.headers["content-type"] == "application/json"
        assert json.loads(request.content) == {"userId": "U1"}

    @pytest.mark.parametrize("status", [400, 401, 404, 500, 503])
    @respx.mock
    async def test_http_error_returned_not_raised(self, client: BaseSFClient, status: int) -> None:
        respx.get(f"{BASE_URL}/EmployeeTime").mock(
            return_value=httpx.Response(status, text="boom")
        )
        outcome = await client._request("GET", f"{BASE_URL}/EmployeeTime")
        assert outcome.status_code == status
        assert outcome.is_success is False
        assert outcome.text == "boom"

    @respx.mock
    async def test_transport_error_returned_not_raised(self, client: BaseSFClient) -> None:
        respx.get(f"{BASE_URL}/EmployeeTime").mock(side_effect=httpx.ConnectError("refused"))
        outcome = await client._request("GET", f"{BASE_URL}/EmployeeTime")
        assert outcome.status_code == 0
        assert outcome.is_success is False
        assert outcome.error

    @respx.mock
    async def test_redirect_not_followed(self, client: BaseSFClient) -> None:
        respx.get(f"{BASE_URL}/EmployeeTime").mock(
            return_value=httpx.Response(302, headers={"Location": "https://evil.example.com/"})
        )
        outcome = await client._request("GET", f"{BASE_URL}/EmployeeTime")
        assert outcome.status_code == 302
        assert outcome.is_success is False
        assert len(respx.calls) == 1

    @respx.mock
    async def test_api_key_not_logged(
        self, client: BaseSFClient, caplog: pytest.LogCaptureFixture
    ) -> None:
        respx.get(f"{BASE_URL}/EmployeeTime").mock(return_value=httpx.Response(500))
        with caplog.at_level("DEBUG", logger="sf_mcp.client"):
            await client._request("GET", f"{BASE_URL}/EmployeeTime?$filter=x")
        assert API_KEY not in caplog.text
        assert "status=500" in caplog.text
