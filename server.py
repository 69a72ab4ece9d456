"""SuccessFactors Time-Off MCP Server -- FastMCP v3.

Exposes tools to book, list and delete employee time-off requests via the
Model Context Protocol.  Each tool call becomes a single authenticated
request against the SuccessFactors OData API.
"""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from clients import SFClientRegistry, set_registry
from clients._base import BaseSFClient
from config import PlatformConfig
from tools import load_domains

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logger = logging.getLogger("sf_mcp.server")

# LOG_LEVEL env var overrides the default INFO level.
logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

# ---------------------------------------------------------------------------
# Lifespan + FastMCP instance
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(server: FastMCP) -> AsyncIterator[None]:
    """Build the client registry from the environment for the server lifetime."""
    try:
        config = PlatformConfig.from_env()
        registry = SFClientRegistry(base=BaseSFClient(config))
    except ValueError as exc:
        logger.critical("Invalid SuccessFactors configuration: %s", exc)
        raise SystemExit(1) from exc

    set_registry(registry)
    logger.info("SF time-off MCP server starting up (base_url=%s)", config.base_url)
    try:
        yield
    finally:
        logger.info("SF time-off MCP server shutting down")
        set_registry(None)
        await registry.close()


mcp = FastMCP(name="sf-timeoff-mcp", lifespan=_lifespan)

loaded_domains: list[str] = load_domains(mcp)


# ---------------------------------------------------------------------------
# Security headers middleware
# ---------------------------------------------------------------------------


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject hardening headers into every HTTP response."""

    async def dispatch(self, request: Request, call_next: Any) -> Response:
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Cache-Control"] = "no-store"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


_security_middleware = Middleware(SecurityHeadersMiddleware)


# ---------------------------------------------------------------------------
# Health check endpoint
# ---------------------------------------------------------------------------


@mcp.custom_route("/health", methods=["GET"])
async def health_check(request: Request) -> JSONResponse:
    """Return 200 OK for container health checks and load balancers."""
    return JSONResponse({"status": "ok"})


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    mcp.run(
        transport="http",
        host=os.environ.get("MCP_HOST", "127.0.0.1"),
        port=int(os.environ.get("MCP_PORT", "8100")),
        stateless_http=True,
        middleware=[_security_middleware],
    )


if __name__ == "__main__":
    main()
