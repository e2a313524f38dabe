"""
Session time value object.
"""

from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True)
class SessionTime:
    """Length of an interpreting session, stored as ``H:MM:SS``."""

    hours: int
    minutes: int
    seconds: int = 0

    def __post_init__(self):
        """Validate session time components."""
        if self.hours < 0:
            raise ValueError("Session hours cannot be negative")
        if not 0 <= self.minutes < 60:
            raise ValueError("Session minutes must be between 0 and 59")
        if not 0 <= self.seconds < 60:
            raise ValueError("Session seconds must be between 0 and 59")

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> "SessionTime":
        """Build a session time from an elapsed interval (negative clamps to zero)."""
        total = max(0, int(delta.total_seconds()))
        hours, remainder = divmod(total, 3600)
        minutes, seconds = divmod(remainder, 60)
        return cls(hours=hours, minutes=minutes, seconds=seconds)

    @classmethod
    def parse(cls, value: str) -> "SessionTime":
        """Parse ``H:MM`` or ``H:MM:SS``."""
        parts = value.strip().split(":")
        if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
            raise ValueError(f"Invalid session time '{value}', expected H:MM:SS")
        numbers = [int(p) for p in parts]
        if len(numbers) == 2:
            numbers.append(0)
        return cls(hours=numbers[0], minutes=numbers[1], seconds=numbers[2])

    def __str__(self) -> str:
        return f"{self.hours}:{self.minutes:02d}:{self.seconds:02d}"

    def to_display(self) -> str:
        """Human readable form used in session-ended emails."""
        return f"{self.hours} tim {self.minutes} min"
