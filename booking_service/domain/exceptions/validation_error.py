"""
Validation-related domain exceptions.
"""

from typing import Dict


class ValidationError(Exception):
    """Raised when booking input is rejected, keyed by field name."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"Validation failed for: {fields}")

    @classmethod
    def for_field(cls, field_name: str, message: str) -> "ValidationError":
        return cls({field_name: message})
