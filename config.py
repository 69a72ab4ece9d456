"""Platform configuration, read once from the environment at startup."""

from __future__ import annotations

import os
from dataclasses import dataclass

__all__ = ["PlatformConfig"]


@dataclass(frozen=True, slots=True)
class PlatformConfig:
    """Base URL and static API key for the SuccessFactors OData API."""

    base_url: str
    api_key: str

    def __post_init__(self) -> None:
        if not self.base_url or not self.base_url.strip():
            raise ValueError("base_url must not be empty")
        if not self.api_key or not self.api_key.strip():
            raise ValueError("api_key must not be empty")
        # frozen: bypass __setattr__ to normalise the trailing slash.
        object.__setattr__(self, "base_url", self.base_url.strip().rstrip("/"))

    @classmethod
    def from_env(cls) -> PlatformConfig:
        """Build from ``SF_API_BASE_URL`` / ``SF_API_KEY``.

        Raises:
            ValueError: If either variable is missing or empty.
        """
        base_url = os.environ.get("SF_API_BASE_URL", "")
        api_key = os.environ.get("SF_API_KEY", "")
        if not base_url.strip():
            raise ValueError("SF_API_BASE_URL environment variable is required")
        if not api_key.strip():
            raise ValueError("SF_API_KEY environment variable is required")
        return cls(base_url=base_url, api_key=api_key)

    def __repr__(self) -> str:
        return f"PlatformConfig(base_url={self.base_url!r}, api_key='***')"
