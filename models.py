"""Value records produced per tool call.

Nothing here is cached or shared between calls.  Results are plain frozen
dataclasses; ``to_dict()`` gives the JSON-friendly shape returned by the
structured tool surface.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any

from _constants import APPROVAL_STATUS_PENDING, TIME_TYPE_VACATION

__all__ = [
    "BookTimeOffResult",
    "DeleteTimeOffResult",
    "HttpOutcome",
    "ListTimeOffResult",
    "TimeOffBookingRequest",
    "TimeOffRecord",
]


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _dec(value: Decimal | None) -> str | None:
    return str(value) if value is not None else None


@dataclass(frozen=True, slots=True)
class HttpOutcome:
    """What the transport saw for one request.

    ``status_code`` is 0 when no response was received at all.
    """

    status_code: int
    is_success: bool
    text: str = ""
    error: str | None = None


@dataclass(frozen=True, slots=True)
class TimeOffBookingRequest:
    user_id: str
    start_date: datetime
    end_date: datetime
    external_code: str
    time_type: str = TIME_TYPE_VACATION
    approval_status: str = APPROVAL_STATUS_PENDING


@dataclass(frozen=True, slots=True)
class TimeOffRecord:
    """One ``EmployeeTime`` entity decoded from a list response."""

    external_code: str = ""
    user_id: str = ""
    time_type: str = ""
    start_date: datetime | None = None
    end_date: datetime | None = None
    approval_status: str = ""
    comment: str = ""
    quantity_in_days: Decimal | None = None
    quantity_in_hours: Decimal | None = None
    created_date: datetime | None = None
    last_modified_date: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "external_code": self.external_code,
            "user_id": self.user_id,
            "time_type": self.time_type,
            "start_date": _iso(self.start_date),
            "end_date": _iso(self.end_date),
            "approval_status": self.approval_status,
            "comment": self.comment,
            "quantity_in_days": _dec(self.quantity_in_days),
            "quantity_in_hours": _dec(self.quantity_in_hours),
            "created_date": _iso(self.created_date),
            "last_modified_date": _iso(self.last_modified_date),
        }


@dataclass(frozen=True, slots=True)
class BookTimeOffResult:
    status_code: int
    call_successful: bool
    content: str
    external_code: str
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "status_code": self.status_code,
            "call_successful": self.call_successful,
            "content": self.content,
            "external_code": self.external_code,
            "error_message": self.error_message,
        }


@dataclass(frozen=True, slots=True)
class DeleteTimeOffResult:
    status_code: int
    call_successful: bool
    content: str
    external_code: str
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "status_code": self.status_code,
            "call_successful": self.call_successful,
            "content": self.content,
            "external_code": self.external_code,
            "error_message": self.error_message,
        }


@dataclass(frozen=True, slots=True)
class ListTimeOffResult:
    """Decoded list response.

    ``error_message`` is set when the HTTP call succeeded but the body could
    not be parsed, or when the transport failed outright.
    """

    status_code: int
    call_successful: bool
    requests: tuple[TimeOffRecord, ...] = field(default_factory=tuple)
    error_message: str | None = None

    @property
    def request_count(self) -> int:
        return len(self.requests)

    def to_dict(self) -> dict[str, Any]:
        return {
            "status_code": self.status_code,
            "call_successful": self.call_successful,
            "request_count": self.request_count,
            "requests": [r.to_dict() for r in self.requests],
            "error_message": self.error_message,
        }
