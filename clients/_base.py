"""Base SuccessFactors client: HTTP transport with static API-key auth.

Provides ``BaseSFClient`` -- a thin async wrapper around a shared
``httpx.AsyncClient``.  Every request carries the configured key as the
``apikey`` header.

Transport guarantees:
    - ``_request`` returns an :class:`~models.HttpOutcome` for 4xx/5xx and for
      transport failures -- it never raises.
    - One outbound request per call; no retries.
    - ``follow_redirects=False`` so the key is never replayed to another host.
    - Constructor rejects non-HTTPS base URLs for non-localhost targets.
"""

from __future__ import annotations

import ipaddress
import logging
from typing import Any
from urllib.parse import urlparse

import httpx

from config import PlatformConfig
from models import HttpOutcome

__all__ = ["BaseSFClient"]

logger = logging.getLogger("sf_mcp.client")


class BaseSFClient:
    """Stateless async HTTP client for the SuccessFactors OData API."""

    # -- construction -------------------------------------------------------

    def __init__(self, config: PlatformConfig) -> None:
        parsed = urlparse(config.base_url)
        host = (parsed.hostname or "").lower()

        if parsed.scheme != "https" and not self._is_loopback(host):
            raise ValueError(
                f"Non-HTTPS base_url is only permitted for localhost. Got: {config.base_url}"
            )

        self._config = config
        self._http: httpx.AsyncClient = httpx.AsyncClient(
            follow_redirects=False,
            timeout=httpx.Timeout(connect=5.0, read=30.0, write=30.0, pool=5.0),
            verify=True,
        )

    @property
    def base_url(self) -> str:
        return self._config.base_url

    async def close(self) -> None:
        """Close the underlying httpx client."""
        await self._http.aclose()

    async def __aenter__(self) -> BaseSFClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    @staticmethod
    def _is_loopback(host: str) -> bool:
        """Check if host is a loopback address (localhost, 127.x.x.x, ::1, etc.)."""
        if host in ("localhost",):
            return True
        stripped = host.strip("[]")
        try:
            return ipaddress.ip_address(stripped).is_loopback
        except ValueError:
            return False

    # -- generic request helper ---------------------------------------------

    async def _request(
        self,
        method: str,
        url: str,
        *,
        data: dict[str, Any] | None = None,
    ) -> HttpOutcome:
        """Send one authenticated request to *url* (already absolute).

        The query string must already be encoded: OData keys such as
        ``$filter`` are passed through verbatim.
        """
        headers: dict[str, str] = {
            "Accept": "application/json",
            "apikey": self._config.api_key,
        }
        if data is not None:
            headers["Content-Type"] = "application/json"

        try:
            response = await self._http.request(method, url, json=data, headers=headers)
        except httpx.TransportError as exc:
            logger.warning("SF API %s %s transport error: %s", method, _strip_query(url), exc)
            return HttpOutcome(
                status_code=0,
                is_success=False,
                error="SuccessFactors service temporarily unavailable.",
            )

        if not response.is_success:
            logger.warning(
                "SF API %s %s returned status=%d",
                method,
                _strip_query(url),
                response.status_code,
            )
        else:
            logger.debug(
                "SF API %s %s returned status=%d", method, _strip_query(url), response.status_code
            )

        return HttpOutcome(
            status_code=response.status_code,
            is_success=response.is_success,
            text=response.text,
        )


def _strip_query(url: str) -> str:
    return url.split("?", 1)[0]
