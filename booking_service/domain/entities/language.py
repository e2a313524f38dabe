"""Language domain entity."""

from dataclasses import dataclass, field
from uuid import UUID, uuid4


@dataclass
class Language:
    """Source language a booking is for."""

    name: str
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Language name is required")
