"""
Session ended domain event.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID


@dataclass
class SessionEnded:
    """Event raised when an interpreting session is closed."""

    job_id: UUID
    ended_by: UUID
    ended_at: datetime
    session_time: str
    translator_id: Optional[UUID] = None

    def to_dict(self) -> dict:
        return {
            "job_id": str(self.job_id),
            "ended_by": str(self.ended_by),
            "ended_at": self.ended_at.isoformat(),
            "session_time": self.session_time,
            "translator_id": str(self.translator_id) if self.translator_id else None,
        }
