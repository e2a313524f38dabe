"""
User type and gender value objects.
"""

from enum import Enum
from typing import Iterable, Optional


class UserType(str, Enum):
    """Role of a platform user."""

    CUSTOMER = "customer"
    TRANSLATOR = "translator"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"

    def is_staff(self) -> bool:
        return self in [self.ADMIN, self.SUPERADMIN]


class Gender(str, Enum):
    """Gender requirement or attribute."""

    MALE = "male"
    FEMALE = "female"

    @classmethod
    def from_job_for(cls, job_for: Iterable[str]) -> Optional["Gender"]:
        """Pick the requested interpreter gender from the booking form."""
        options = set(job_for or [])
        if cls.MALE.value in options:
            return cls.MALE
        if cls.FEMALE.value in options:
            return cls.FEMALE
        return None
