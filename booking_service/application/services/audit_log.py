"""
Audit log for booking changes.

Entries go to a dedicated "audit" structlog logger, bound to the actor and
booking of a single call, so they can be routed to their own sink.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from uuid import UUID

from booking_service.config.logging import get_audit_logger


@dataclass
class AuditEntry:
    field: str
    old: Any
    new: Any

    def to_dict(self) -> Dict[str, Any]:
        return {"field": self.field, "old": self.old, "new": self.new}


@dataclass
class BookingAuditLog:
    """Collects the field changes of one booking mutation."""

    job_id: UUID
    actor_id: Optional[UUID] = None
    entries: List[AuditEntry] = field(default_factory=list)

    def __post_init__(self):
        self._logger = get_audit_logger(
            job_id=str(self.job_id),
            actor_id=str(self.actor_id) if self.actor_id else None,
        )

    def record(self, field_name: str, old: Any, new: Any) -> AuditEntry:
        entry = AuditEntry(field=field_name, old=_plain(old), new=_plain(new))
        self.entries.append(entry)
        self._logger.info("Booking field changed", **entry.to_dict())
        return entry

    def event(self, action: str, **context: Any) -> None:
        """Record an action that is not a field change."""
        self._logger.info("Booking action", action=action, **context)

    def changes(self) -> List[Dict[str, Any]]:
        return [entry.to_dict() for entry in self.entries]


def _plain(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if hasattr(value, "isoformat"):
        return value.isoformat()
    if hasattr(value, "value"):
        return value.value
    return str(value)
