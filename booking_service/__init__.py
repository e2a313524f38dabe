"""
Interpreter Booking Service.

Booking lifecycle engine matching customers with interpreters: status
state machine, translator eligibility and notification fan-out.
"""

__version__ = "0.1.0"
__description__ = "Interpreter Booking Service"
