"""
Job created domain event.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class JobCreated:
    """Event raised when a customer confirms a new booking."""

    job_id: UUID
    customer_id: UUID
    immediate: bool
    due: datetime

    def to_dict(self) -> dict:
        return {
            "job_id": str(self.job_id),
            "customer_id": str(self.customer_id),
            "immediate": self.immediate,
            "due": self.due.isoformat(),
        }
