"""Shared error-handling and argument validation helpers for MCP tools."""

from __future__ import annotations

import functools
import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import ParamSpec, TypeVar

from fastmcp.exceptions import ToolError

logger = logging.getLogger("sf_mcp.server")

P = ParamSpec("P")
R = TypeVar("R")


def tool_error_handler(
    error_message: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Decorator that wraps MCP tool functions with standard error handling.

    Converts ValueError to ToolError (preserving message) and catches all
    other exceptions with a generic message.
    """

    def decorator(fn: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(fn)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return await fn(*args, **kwargs)
            except ToolError:
                raise
            except ValueError as exc:
                raise ToolError(str(exc)) from exc
            except Exception:
                logger.exception("%s failed", fn.__name__)
                raise ToolError(error_message) from None

        return wrapper

    return decorator


def validate_key(value: str, name: str, max_len: int) -> str:
    """Validate an identifier that is embedded in an OData key or literal.

    Returns the stripped value.
    """
    value = value.strip()
    if not value:
        raise ToolError(f"{name} must not be empty.")
    if len(value) > max_len:
        raise ToolError(f"{name} too long (max {max_len} characters).")
    if "'" in value:
        raise ToolError(f"{name} must not contain a single quote.")
    return value


def validate_date_range(
    start: datetime | None,
    end: datetime | None,
    *,
    start_name: str = "start_date",
    end_name: str = "end_date",
    max_days: int | None = None,
) -> None:
    """Check ordering (and optionally span) of two dates.  ``None`` skips the check."""
    if start is None or end is None:
        return
    start_utc, end_utc = _naive_utc(start), _naive_utc(end)
    if end_utc < start_utc:
        raise ValueError(f"{end_name} must be on or after {start_name}.")
    if max_days is not None:
        day_span = (end_utc.date() - start_utc.date()).days + 1
        if day_span > max_days:
            raise ValueError(
                f"Date range spans {day_span} days, exceeding the maximum of {max_days} days."
            )


def _naive_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC, matching the wire encoding."""
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)
