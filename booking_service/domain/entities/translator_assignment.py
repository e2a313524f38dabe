"""Translator assignment domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4


@dataclass
class TranslatorAssignment:
    """Link between a booking and the translator who took it."""

    job_id: UUID
    user_id: UUID
    id: UUID = field(default_factory=uuid4)
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    cancel_at: Optional[datetime] = None
    completed_by: Optional[UUID] = None

    def __post_init__(self):
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)

    @property
    def is_active(self) -> bool:
        """Neither completed nor cancelled."""
        return self.completed_at is None and self.cancel_at is None

    def complete(self, completed_by: UUID, completed_at: datetime) -> None:
        if not self.is_active:
            raise ValueError("Only an active assignment can be completed")
        self.completed_at = completed_at
        self.completed_by = completed_by

    def cancel(self, cancelled_at: datetime) -> None:
        if not self.is_active:
            raise ValueError("Only an active assignment can be cancelled")
        self.cancel_at = cancelled_at
