"""Wire codec for the SuccessFactors OData API.

Encodes booking payloads into the OData upsert shape and decodes the
platform's untyped JSON into :mod:`models` records.  Field accessors are
total: a missing, null, or wrongly-typed field yields ``""`` / ``None``
rather than an exception, so one bad field never aborts a whole record.
"""

from __future__ import annotations

import json
import re
import uuid
from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any

from _constants import EXTERNAL_CODE_LENGTH, EXTERNAL_CODE_PREFIX
from models import TimeOffBookingRequest, TimeOffRecord

__all__ = [
    "build_booking_payload",
    "decode_status_entry",
    "decode_time_off_records",
    "generate_external_code",
    "get_decimal_field",
    "get_string_field",
    "parse_sap_date",
    "to_sap_date",
]

# Millis are UTC; a DateTimeOffset suffix such as "+0000" is display-only.
_SAP_DATE_RE = re.compile(r"/Date\((-?\d+)(?:[+-]\d{4})?\)/")
_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


# ---------------------------------------------------------------------------
# SAP dates
# ---------------------------------------------------------------------------


def _as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def to_sap_date(value: datetime) -> str:
    """Format *value* as ``/Date(<epoch millis>)/``."""
    delta = _as_utc(value) - _EPOCH
    millis = (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000
    return f"/Date({millis})/"


def parse_sap_date(text: str | None) -> datetime | None:
    """Parse ``/Date(<millis>[+hhmm])/`` or an ISO-8601 string to a UTC datetime.

    Returns ``None`` if *text* is empty or matches neither form.
    """
    if not text:
        return None

    match = _SAP_DATE_RE.search(text)
    if match is not None:
        try:
            return _EPOCH + timedelta(milliseconds=int(match.group(1)))
        except OverflowError:
            return None

    try:
        return _as_utc(datetime.fromisoformat(text.strip()))
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Total field accessors
# ---------------------------------------------------------------------------


def get_string_field(obj: Any, name: str) -> str:
    """Return ``obj[name]`` if it is a string, else ``""``."""
    if not isinstance(obj, Mapping):
        return ""
    value = obj.get(name)
    return value if isinstance(value, str) else ""


def get_decimal_field(obj: Any, name: str) -> Decimal | None:
    """Parse a string-encoded number (SAP convention) from ``obj[name]``.

    Returns ``None`` if the field is missing, null, not a string, or not a
    finite number.
    """
    if not isinstance(obj, Mapping):
        return None
    value = obj.get(name)
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        result = Decimal(value.strip())
    except InvalidOperation:
        return None
    if not result.is_finite():
        return None
    return result


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def generate_external_code() -> str:
    """Return a fresh correlation code, e.g. ``REQ_3f9a0c1b2d4e``."""
    return f"{EXTERNAL_CODE_PREFIX}{uuid.uuid4().hex}"[:EXTERNAL_CODE_LENGTH]


def _metadata(uri: str, type_name: str) -> dict[str, str]:
    return {"uri": uri, "type": type_name}


def build_booking_payload(base_url: str, request: TimeOffBookingRequest) -> dict[str, Any]:
    """Build the ``EmployeeTime`` upsert document for *request*."""
    base = base_url.rstrip("/")
    return {
        "__metadata": _metadata(
            f"{base}/EmployeeTime('{request.external_code}')", "SFOData.EmployeeTime"
        ),
        "userId": request.user_id,
        "timeType": request.time_type,
        "startDate": to_sap_date(request.start_date),
        "endDate": to_sap_date(request.end_date),
        "approvalStatus": request.approval_status,
        "externalCode": request.external_code,
        "userIdNav": {
            "__metadata": _metadata(f"{base}/User('{request.user_id}')", "SFOData.User"),
        },
        "timeTypeNav": {
            "__metadata": _metadata(
                f"{base}/TimeType('{request.time_type}')", "SFOData.TimeType"
            ),
        },
    }


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def _decode_record(item: Mapping[str, Any]) -> TimeOffRecord:
    return TimeOffRecord(
        external_code=get_string_field(item, "externalCode"),
        user_id=get_string_field(item, "userId"),
        time_type=get_string_field(item, "timeType"),
        start_date=parse_sap_date(get_string_field(item, "startDate")),
        end_date=parse_sap_date(get_string_field(item, "endDate")),
        approval_status=get_string_field(item, "approvalStatus"),
        comment=get_string_field(item, "comment"),
        quantity_in_days=get_decimal_field(item, "quantityInDays"),
        quantity_in_hours=get_decimal_field(item, "quantityInHours"),
        created_date=parse_sap_date(get_string_field(item, "createdDate")),
        last_modified_date=parse_sap_date(get_string_field(item, "lastModifiedDate")),
    )


def decode_time_off_records(body: str) -> tuple[TimeOffRecord, ...]:
    """Decode the ``d.results`` array of a list response.

    An unexpected shape yields an empty tuple.

    Raises:
        json.JSONDecodeError: If *body* is not valid JSON.
        RecursionError: If *body* nests too deeply to parse.
    """
    data = json.loads(body)
    d = data.get("d") if isinstance(data, dict) else None
    results = d.get("results") if isinstance(d, dict) else None
    if not isinstance(results, list):
        return ()
    return tuple(_decode_record(item) for item in results if isinstance(item, dict))


def decode_status_entry(body: str) -> tuple[str, str, str] | None:
    """Return ``(status, editStatus, message)`` from ``d[0]`` of an upsert response.

    Returns ``None`` if the body is not JSON or ``d`` is absent or empty.
    """
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, TypeError, RecursionError):
        return None
    d = data.get("d") if isinstance(data, dict) else None
    if not isinstance(d, list) or not d:
        return None
    entry = d[0]
    return (
        get_string_field(entry, "status"),
        get_string_field(entry, "editStatus"),
        get_string_field(entry, "message"),
    )
