"""Text views of time-off results, as shown to MCP clients."""

from __future__ import annotations

import os
from datetime import datetime
from decimal import Decimal

from clients.codec import decode_status_entry
from models import BookTimeOffResult, DeleteTimeOffResult, ListTimeOffResult, TimeOffRecord

__all__ = ["render_book_view", "render_delete_view", "render_list_view"]


def _fmt(value: datetime | Decimal | None) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def render_book_view(result: BookTimeOffResult) -> str:
    if not result.call_successful:
        return f"Failed to call the API, StatusCode: {result.status_code}"

    entry = decode_status_entry(result.content)
    if entry is None:
        return "No valid response found."
    status, edit_status, message = entry
    return f"Status: {status} / EditStatus: {edit_status} / Message: {message}"


def render_delete_view(result: DeleteTimeOffResult) -> str:
    if not result.call_successful:
        return f"Failed to call the Delete Time Off endpoint, StatusCode: {result.status_code}"
    return f"Successfully deleted Time Off with ExternalCode: {result.external_code}"


def _record_line(record: TimeOffRecord) -> str:
    return " / ".join(
        [
            f"ExternalCode: {record.external_code}",
            f"UserId: {record.user_id}",
            f"TimeType: {record.time_type}",
            f"StartDate: {_fmt(record.start_date)}",
            f"EndDate: {_fmt(record.end_date)}",
            f"ApprovalStatus: {record.approval_status}",
            f"Comment: {record.comment}",
            f"QuantityInDays: {_fmt(record.quantity_in_days)}",
            f"QuantityInHours: {_fmt(record.quantity_in_hours)}",
        ]
    )


def render_list_view(result: ListTimeOffResult) -> str:
    """One line per record, or a fixed message for failure / no records."""
    if not result.call_successful:
        line = f"Failed to call the List Time Off endpoint, StatusCode: {result.status_code}"
        if result.error_message:
            line += f" ({result.error_message})"
        return line

    if not result.requests:
        return "No Time Off Requests found."

    return os.linesep.join(_record_line(r) for r in result.requests)
