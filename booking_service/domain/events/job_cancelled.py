"""
Job cancelled domain event.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID


@dataclass
class JobCancelled:
    """Event raised when a booking is withdrawn by its customer."""

    job_id: UUID
    cancelled_by: UUID
    status: str
    cancelled_at: datetime
    translator_id: Optional[UUID] = None

    def to_dict(self) -> dict:
        return {
            "job_id": str(self.job_id),
            "cancelled_by": str(self.cancelled_by),
            "status": self.status,
            "cancelled_at": self.cancelled_at.isoformat(),
            "translator_id": str(self.translator_id) if self.translator_id else None,
        }
