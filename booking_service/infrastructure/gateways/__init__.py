"""
Outbound gateways package.
"""

from .business_clock import BusinessClock
from .mail_gateway import HttpMailGateway
from .push_gateway import OneSignalPushGateway
from .sms_gateway import TwilioSmsGateway

__all__ = [
    "BusinessClock",
    "HttpMailGateway",
    "OneSignalPushGateway",
    "TwilioSmsGateway",
]
