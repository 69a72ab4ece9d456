"""Domain client for SuccessFactors ``EmployeeTime`` (time-off) operations.

Uses composition: holds a reference to :class:`BaseSFClient` for HTTP
transport and delegates all network I/O through ``self._base._request()``.
Each public method issues exactly one request and returns a result record;
failures are returned as data, never raised.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from urllib.parse import quote

from _constants import LIST_ORDER_BY, LIST_SELECT_FIELDS
from clients._base import BaseSFClient
from clients.codec import build_booking_payload, decode_time_off_records, generate_external_code
from models import (
    BookTimeOffResult,
    DeleteTimeOffResult,
    ListTimeOffResult,
    TimeOffBookingRequest,
)

__all__ = ["TimeOffClient", "build_filter"]

logger = logging.getLogger("sf_mcp.client")


def build_filter(
    user_id: str,
    start_date_filter: datetime | None = None,
    end_date_filter: datetime | None = None,
) -> str:
    """Build the OData ``$filter`` expression for a list query."""
    parts = [f"userId eq '{user_id}'"]
    if start_date_filter is not None:
        parts.append(f"startDate ge '{start_date_filter:%Y-%m-%d}'")
    if end_date_filter is not None:
        parts.append(f"endDate le '{end_date_filter:%Y-%m-%d}'")
    return " and ".join(parts)


class TimeOffClient:
    """Book, list and delete employee time-off on SuccessFactors."""

    def __init__(self, base: BaseSFClient) -> None:
        self._base = base

    # -- read methods -------------------------------------------------------

    async def list_requests(
        self,
        user_id: str,
        start_date_filter: datetime | None = None,
        end_date_filter: datetime | None = None,
    ) -> ListTimeOffResult:
        """List time-off requests for *user_id*, newest start date first."""
        filter_query = build_filter(user_id, start_date_filter, end_date_filter)
        url = (
            f"{self._base.base_url}/EmployeeTime"
            f"?$filter={quote(filter_query, safe='')}"
            f"&$select={LIST_SELECT_FIELDS}"
            f"&$orderby={quote(LIST_ORDER_BY, safe='')}"
            f"&$format=json"
        )
        outcome = await self._base._request("GET", url)

        if not outcome.is_success:
            return ListTimeOffResult(
                status_code=outcome.status_code,
                call_successful=False,
                error_message=outcome.error,
            )

        if not outcome.text:
            return ListTimeOffResult(status_code=outcome.status_code, call_successful=True)

        try:
            records = decode_time_off_records(outcome.text)
        except (json.JSONDecodeError, RecursionError) as exc:
            logger.warning(
                "SF API list response for status=%d is not valid JSON: %s",
                outcome.status_code,
                exc,
            )
            return ListTimeOffResult(
                status_code=outcome.status_code,
                call_successful=False,
                error_message=f"Failed to parse JSON response: {exc}",
            )

        return ListTimeOffResult(
            status_code=outcome.status_code,
            call_successful=True,
            requests=records,
        )

    # -- write methods ------------------------------------------------------

    async def book(
        self,
        user_id: str,
        start_date: datetime,
        end_date: datetime,
    ) -> BookTimeOffResult:
        """Upsert a pending vacation booking.

        A fresh external code is generated on every call and returned even
        when the call fails, so a failed attempt can still be correlated.
        """
        request = TimeOffBookingRequest(
            user_id=user_id,
            start_date=start_date,
            end_date=end_date,
            external_code=generate_external_code(),
        )
        payload = build_booking_payload(self._base.base_url, request)
        outcome = await self._base._request(
            "POST",
            f"{self._base.base_url}/upsert?workflowConfirmed=true&$format=json",
            data=payload,
        )
        return BookTimeOffResult(
            status_code=outcome.status_code,
            call_successful=outcome.is_success,
            content=outcome.text,
            external_code=request.external_code,
            error_message=outcome.error,
        )

    async def delete(self, external_code: str) -> DeleteTimeOffResult:
        """Delete the ``EmployeeTime`` entity keyed by *external_code*."""
        outcome = await self._base._request(
            "DELETE",
            f"{self._base.base_url}/EmployeeTime('{quote(external_code, safe='')}')",
        )
        return DeleteTimeOffResult(
            status_code=outcome.status_code,
            call_successful=outcome.is_success,
            content=outcome.text,
            external_code=external_code,
            error_message=outcome.error,
        )
