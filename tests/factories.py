"""
Builders and fakes shared by the test suite.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import uuid4

from booking_service.application.interfaces.gateways import ClockInterface
from booking_service.domain.entities.job import Job
from booking_service.domain.entities.user import User
from booking_service.domain.value_objects.job_type import JobType
from booking_service.domain.value_objects.user_type import UserType

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


class FakeClock(ClockInterface):
    """Clock frozen at a settable instant."""

    def __init__(self, now: datetime = NOW, night: bool = False):
        self.current = now
        self.night = night

    def now(self) -> datetime:
        return self.current

    def localize(self, value: datetime) -> datetime:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def is_night_time(self) -> bool:
        return self.night

    def next_business_time(self) -> datetime:
        return (self.current + timedelta(days=1)).replace(hour=7, minute=0)

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


class PassThroughTransactionService:
    """Runs operations without a database and counts commits and rollbacks."""

    def __init__(self):
        self.commits = 0
        self.rollbacks = 0

    async def execute_in_transaction(self, operation):
        try:
            result = await operation()
        except Exception:
            self.rollbacks += 1
            raise
        self.commits += 1
        return result


def make_customer(**overrides) -> User:
    values = dict(
        name="Anna Kund",
        email=f"customer-{uuid4().hex[:8]}@example.com",
        user_type=UserType.CUSTOMER,
        consumer_type="paid",
        customer_type="company",
        city="Stockholm",
        address="Drottninggatan 1",
        instructions="Ring på porten",
    )
    values.update(overrides)
    return User(**values)


def make_translator(**overrides) -> User:
    values = dict(
        name="Erik Tolk",
        email=f"translator-{uuid4().hex[:8]}@example.com",
        user_type=UserType.TRANSLATOR,
        translator_type="professional",
        translator_level="Certified",
        city="Stockholm",
        mobile="+46701234567",
    )
    values.update(overrides)
    return User(**values)


def make_job(customer: Optional[User] = None, **overrides) -> Job:
    values = dict(
        user_id=customer.id if customer else uuid4(),
        from_language_id=uuid4(),
        due=NOW + timedelta(hours=48),
        duration=60,
        job_type=JobType.PAID,
        customer_phone_type=True,
        created_at=NOW,
        will_expire_at=NOW + timedelta(hours=16),
    )
    values.update(overrides)
    return Job(**values)


