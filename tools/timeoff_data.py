"""Time-off MCP tools -- structured results for programmatic clients."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from fastmcp import FastMCP

from _constants import MAX_BOOKING_DAYS, MAX_EXTERNAL_CODE_LEN, MAX_USER_ID_LEN
from _errors import tool_error_handler, validate_date_range, validate_key
from clients import get_registry

logger = logging.getLogger("sf_mcp.server")

__all__ = ["register"]


def register(mcp: FastMCP) -> None:
    """Register the structured time-off tools on the given FastMCP instance."""

    @mcp.tool
    @tool_error_handler("Failed to list time off requests. Please try again.")
    async def timeoff_data_list(
        user_id: str,
        start_date_filter: datetime | None = None,
        end_date_filter: datetime | None = None,
    ) -> dict[str, Any]:
        """List all time off requests for an employee as structured records.

        Args:
            user_id: Employee ID.
            start_date_filter: Optional. Only show requests starting on or after this date.
            end_date_filter: Optional. Only show requests ending on or before this date.
        """
        user_id = validate_key(user_id, "user_id", MAX_USER_ID_LEN)
        validate_date_range(
            start_date_filter,
            end_date_filter,
            start_name="start_date_filter",
            end_name="end_date_filter",
        )
        result = await get_registry().timeoff.list_requests(
            user_id, start_date_filter, end_date_filter
        )
        return result.to_dict()

    @mcp.tool
    @tool_error_handler("Failed to book time off. Please try again.")
    async def timeoff_data_book(
        user_id: str, start_date: datetime, end_date: datetime
    ) -> dict[str, Any]:
        """Book time off for an employee and return the raw platform response.

        Args:
            user_id: Employee ID.
            start_date: Start date of time off.
            end_date: End date of time off.
        """
        user_id = validate_key(user_id, "user_id", MAX_USER_ID_LEN)
        validate_date_range(start_date, end_date, max_days=MAX_BOOKING_DAYS)

        result = await get_registry().timeoff.book(user_id, start_date, end_date)
        logger.info(
            "WRITE_OP tool=timeoff_data_book user_id=%s external_code=%s status=%s",
            user_id,
            result.external_code,
            result.status_code,
        )
        return result.to_dict()

    @mcp.tool
    @tool_error_handler("Failed to delete time off request. Please try again.")
    async def timeoff_data_delete(external_code: str) -> dict[str, Any]:
        """Delete a time off request by external code.

        Args:
            external_code: External code of the time off request to delete.
        """
        external_code = validate_key(external_code, "external_code", MAX_EXTERNAL_CODE_LEN)

        result = await get_registry().timeoff.delete(external_code)
        logger.info(
            "WRITE_OP tool=timeoff_data_delete external_code=%s status=%s",
            external_code,
            result.status_code,
        )
        return result.to_dict()
