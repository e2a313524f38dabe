"""User domain entity."""

from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID, uuid4

from booking_service.domain.value_objects.user_type import UserType


@dataclass
class User:
    """Customer, translator or staff member with profile meta."""

    name: str
    email: str
    user_type: UserType
    id: UUID = field(default_factory=uuid4)
    mobile: Optional[str] = None

    # Profile meta
    consumer_type: Optional[str] = None
    customer_type: Optional[str] = None
    translator_type: Optional[str] = None
    translator_level: Optional[str] = None
    gender: Optional[str] = None
    city: Optional[str] = None
    address: Optional[str] = None
    instructions: Optional[str] = None
    language_ids: list[UUID] = field(default_factory=list)

    # Notification preferences
    not_get_emergency: bool = False
    not_get_nighttime: bool = False
    not_get_notification: bool = False

    def __post_init__(self):
        """Validate user data."""
        if not self.email or "@" not in self.email:
            raise ValueError("A valid email address is required")
        if isinstance(self.user_type, str):
            self.user_type = UserType(self.user_type)

    @property
    def is_customer(self) -> bool:
        return self.user_type == UserType.CUSTOMER

    @property
    def is_translator(self) -> bool:
        return self.user_type == UserType.TRANSLATOR

    @property
    def is_staff(self) -> bool:
        return self.user_type.is_staff()

    def lives_in(self, town: Optional[str]) -> bool:
        """Case-insensitive comparison of the profile city with a town; a blank side never matches."""
        city = (self.city or "").strip().lower()
        return bool(city) and city == (town or "").strip().lower()
