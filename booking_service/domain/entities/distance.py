"""Distance domain entity."""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID


@dataclass
class Distance:
    """Travel distance and time recorded for an on-site booking."""

    job_id: UUID
    distance: Optional[str] = None
    time: Optional[str] = None
