"""
Background workers package.
"""

from .outbox_worker import OutboxWorker

__all__ = [
    "OutboxWorker",
]
