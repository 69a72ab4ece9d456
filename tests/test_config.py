"""Tests for config.py -- PlatformConfig."""

from __future__ import annotations

import dataclasses
import os
from unittest.mock import patch

import pytest

from config import PlatformConfig


class TestPlatformConfig:
    def test_trailing_slash_stripped(self) -> None:
        cfg = PlatformConfig(base_url="https://sf.example.com/odata/v2/", api_key="k")
        assert cfg.base_url == "https://sf.example.com/odata/v2"

    def test_immutable(self) -> None:
        cfg = PlatformConfig(base_url="https://sf.example.com", api_key="k")
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.api_key = "other"  # type: ignore[misc]

    @pytest.mark.parametrize("base_url,api_key", [("", "k"), ("https://x", ""), ("  ", "k")])
    def test_empty_values_rejected(self, base_url: str, api_key: str) -> None:
        with pytest.raises(ValueError, match="must not be empty"):
            PlatformConfig(base_url=base_url, api_key=api_key)

    def test_repr_hides_api_key(self) -> None:
        cfg = PlatformConfig(base_url="https://sf.example.com", api_key="super-secret")
        assert "super-secret" not in repr(cfg)


class TestFromEnv:
    def test_reads_environment(self) -> None:
        with patch.dict(
            os.environ,
            {"SF_API_BASE_URL": "https://sf.example.com/odata/v2/", "SF_API_KEY": "abc"},
        ):
            cfg = PlatformConfig.from_env()
        assert cfg.base_url == "https://sf.example.com/odata/v2"
        assert cfg.api_key == "abc"

    def test_missing_base_url(self) -> None:
        env = {k: v for k, v in os.environ.items() if k != "SF_API_BASE_URL"}
        with patch.dict(os.environ, env, clear=True):
            with pytest.raises(ValueError, match="SF_API_BASE_URL"):
                PlatformConfig.from_env()

    def test_missing_api_key(self) -> None:
        with patch.dict(os.environ, {"SF_API_KEY": ""}):
            with pytest.raises(ValueError, match="SF_API_KEY"):
                PlatformConfig.from_env()
