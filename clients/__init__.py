"""Client registry for the SuccessFactors domain clients.

Provides get_registry() / set_registry() so tools never reach for a
module-level client directly.  Tests inject mocks via set_registry().
"""

from __future__ import annotations

from dataclasses import dataclass, field

from clients._base import BaseSFClient
from clients.timeoff import TimeOffClient

__all__ = ["SFClientRegistry", "get_registry", "set_registry"]


@dataclass
class SFClientRegistry:
    """Holds domain client instances. One registry per server lifecycle."""

    base: BaseSFClient
    timeoff: TimeOffClient = field(init=False)

    def __post_init__(self) -> None:
        self.timeoff = TimeOffClient(self.base)

    async def close(self) -> None:
        await self.base.close()


_registry: SFClientRegistry | None = None


def get_registry() -> SFClientRegistry:
    """Return the active registry, or raise if not initialized."""
    if _registry is None:
        raise RuntimeError("SFClientRegistry not initialized. Server lifespan has not started.")
    return _registry


def set_registry(registry: SFClientRegistry | None) -> None:
    """Set (or clear) the global registry. Used by lifespan and tests."""
    global _registry
    _registry = registry
