"""
API schemas package.
"""

from .booking import (
    AcceptJobResponse,
    BookingConfirmRequest,
    BookingCreatedResponse,
    BookingCreateRequest,
    BookingUpdatedResponse,
    BookingUpdateRequest,
    CancelJobResponse,
    DispatchResponse,
    DistanceResponse,
    DistanceUpdateRequest,
    JobResponse,
    ReopenJobResponse,
    SessionClosedResponse,
    SmsResponse,
)
from .common import BaseResponse, ErrorResponse, YesNo, parse_yes_no

__all__ = [
    "AcceptJobResponse",
    "BookingConfirmRequest",
    "BookingCreatedResponse",
    "BookingCreateRequest",
    "BookingUpdatedResponse",
    "BookingUpdateRequest",
    "CancelJobResponse",
    "DispatchResponse",
    "DistanceResponse",
    "DistanceUpdateRequest",
    "JobResponse",
    "ReopenJobResponse",
    "SessionClosedResponse",
    "SmsResponse",
    "BaseResponse",
    "ErrorResponse",
    "YesNo",
    "parse_yes_no",
]
