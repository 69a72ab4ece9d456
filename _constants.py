"""Shared constants for the SuccessFactors time-off MCP server."""

from __future__ import annotations

TIME_TYPE_VACATION: str = "TT_VAC_REC"
APPROVAL_STATUS_PENDING: str = "PENDING"

EXTERNAL_CODE_PREFIX: str = "REQ_"
EXTERNAL_CODE_LENGTH: int = 15
MAX_EXTERNAL_CODE_LEN: int = 128

MAX_BOOKING_DAYS: int = 366
MAX_USER_ID_LEN: int = 100

LIST_SELECT_FIELDS: str = (
    "externalCode,userId,timeType,startDate,endDate,approvalStatus,comment,"
    "quantityInDays,quantityInHours,createdDate,lastModifiedDate"
)
LIST_ORDER_BY: str = "startDate desc"
