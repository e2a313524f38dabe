"""
Application interfaces package.
"""

from .gateways import (
    ClockInterface,
    MailGatewayInterface,
    PushDeliveryResult,
    PushGatewayInterface,
    SmsDeliveryResult,
    SmsGatewayInterface,
)
from .repositories import (
    DistanceRepositoryInterface,
    JobRepositoryInterface,
    LanguageRepositoryInterface,
    TranslatorAssignmentRepositoryInterface,
    UserRepositoryInterface,
)

__all__ = [
    "ClockInterface",
    "MailGatewayInterface",
    "PushDeliveryResult",
    "PushGatewayInterface",
    "SmsDeliveryResult",
    "SmsGatewayInterface",
    "DistanceRepositoryInterface",
    "JobRepositoryInterface",
    "LanguageRepositoryInterface",
    "TranslatorAssignmentRepositoryInterface",
    "UserRepositoryInterface",
]
