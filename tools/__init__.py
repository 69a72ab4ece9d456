"""Feature flag loader for tool modules.

Reads ENABLED_DOMAINS env var (comma-separated) and imports only those
tool modules. Each module must expose a register(mcp) function.
"""

from __future__ import annotations

import importlib
import logging
import os

from fastmcp import FastMCP

logger = logging.getLogger("sf_mcp.server")

__all__ = ["load_domains"]

# Map domain name -> module path.
AVAILABLE_DOMAINS: dict[str, str] = {
    "timeoff": "tools.timeoff",
    "timeoff_data": "tools.timeoff_data",
}


def load_domains(mcp: FastMCP) -> list[str]:
    """Import and register tool modules for each enabled domain.

    Reads ENABLED_DOMAINS env var (comma-separated, default "timeoff").
    Raises SystemExit if no valid domains are enabled.

    Returns list of loaded domain names.
    """
    raw = os.environ.get("ENABLED_DOMAINS", "timeoff")
    requested = [d.strip().lower() for d in raw.split(",") if d.strip()]

    if not requested:
        logger.critical("ENABLED_DOMAINS is empty, at least one domain must be enabled")
        raise SystemExit(1)

    loaded: list[str] = []
    for domain in requested:
        if domain in loaded:
            continue
        module_path = AVAILABLE_DOMAINS.get(domain)
        if module_path is None:
            logger.warning(
                "Unknown domain '%s' in ENABLED_DOMAINS, skipping. Available: %s",
                domain,
                sorted(AVAILABLE_DOMAINS.keys()),
            )
            continue

        module = importlib.import_module(module_path)
        module.register(mcp)
        loaded.append(domain)
        logger.info("Loaded domain: %s", domain)

    if not loaded:
        logger.critical("No valid domains loaded from ENABLED_DOMAINS=%r", raw)
        raise SystemExit(1)

    return loaded
