"""Create booking use case."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional
from uuid import UUID

from booking_service.application.interfaces.gateways import ClockInterface
from booking_service.application.interfaces.repositories import (
    JobRepositoryInterface,
    UserRepositoryInterface,
)
from booking_service.application.services import texts
from booking_service.application.services.booking_rules import will_expire_at
from booking_service.application.use_cases.lookups import load_user
from booking_service.config.logging import get_logger
from booking_service.config.settings import settings
from booking_service.domain.entities.job import Job
from booking_service.domain.exceptions.validation_error import ValidationError
from booking_service.domain.value_objects.certification import (
    certification_from_job_for,
    job_for_labels,
)
from booking_service.domain.value_objects.job_type import JobType
from booking_service.domain.value_objects.user_type import Gender
from booking_service.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from booking_service.infrastructure.monitoring.metrics import (
    record_booking_created,
    track_duration,
)

logger = get_logger(__name__)

DUE_FORMAT = "%m/%d/%Y %H:%M"


@dataclass
class CreateBookingRequest:
    """Request for creating a booking."""

    customer_id: UUID
    from_language_id: Optional[UUID]
    immediate: bool
    duration: Optional[int]
    due_date: Optional[str] = None  # MM/DD/YYYY
    due_time: Optional[str] = None  # HH:MM
    customer_phone_type: bool = False
    customer_physical_type: bool = False
    job_for: List[str] = field(default_factory=list)
    specific_translator_id: Optional[UUID] = None
    by_admin: bool = False


@dataclass
class CreateBookingResult:
    """Result of booking creation."""

    job: Job
    booking_type: str
    job_for: List[str]
    customer_town: Optional[str]
    customer_type: Optional[str]


class CreateBookingUseCase:
    """Use case for a customer placing an immediate or scheduled booking."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        user_repo: UserRepositoryInterface,
        clock: ClockInterface,
        transaction_service: TransactionService,
        immediate_lead_minutes: int = settings.IMMEDIATE_BOOKING_LEAD_MINUTES,
    ):
        self.job_repo = job_repo
        self.user_repo = user_repo
        self.clock = clock
        self.transaction_service = transaction_service
        self.immediate_lead_minutes = immediate_lead_minutes

    @track_duration("create_booking")
    async def execute(self, request: CreateBookingRequest) -> CreateBookingResult:
        customer = await load_user(self.user_repo, request.customer_id)
        if not customer.is_customer:
            raise ValidationError.for_field("user", texts.CUSTOMER_ONLY_MESSAGE)

        self._validate(request)
        now = self.clock.now()

        if request.immediate:
            due = now + timedelta(minutes=self.immediate_lead_minutes)
            phone_type = True
        else:
            due = self._parse_due(request.due_date, request.due_time)
            if due <= now:
                raise ValidationError.for_field("due", texts.PAST_DUE_MESSAGE)
            phone_type = request.customer_phone_type

        job_type = JobType.from_consumer_type(customer.consumer_type) or JobType.PAID
        gender = Gender.from_job_for(request.job_for)
        certified = certification_from_job_for(request.job_for)

        job = Job(
            user_id=customer.id,
            from_language_id=request.from_language_id,
            due=due,
            duration=request.duration,
            job_type=job_type,
            immediate=request.immediate,
            gender=gender.value if gender else None,
            certified=certified,
            customer_phone_type=phone_type,
            customer_physical_type=request.customer_physical_type,
            specific_translator_id=request.specific_translator_id,
            by_admin=request.by_admin,
            created_at=now,
            will_expire_at=will_expire_at(due, now),
        )

        logger.info(
            "Creating booking",
            customer_id=str(customer.id),
            immediate=request.immediate,
            job_type=job_type.value,
            due=due.isoformat(),
        )

        created = await self.transaction_service.execute_in_transaction(
            lambda: self.job_repo.create(job)
        )

        booking_type = "immediate" if created.immediate else "regular"
        record_booking_created(booking_type, created.job_type.value)

        labels = ([created.gender] if created.gender else []) + job_for_labels(
            created.certified
        )
        logger.info(
            "Booking created",
            job_id=str(created.id),
            booking_type=booking_type,
            will_expire_at=created.will_expire_at.isoformat(),
        )
        return CreateBookingResult(
            job=created,
            booking_type=booking_type,
            job_for=labels,
            customer_town=customer.city,
            customer_type=customer.customer_type,
        )

    @staticmethod
    def _validate(request: CreateBookingRequest) -> None:
        errors = {}
        if not request.from_language_id:
            errors["from_language_id"] = texts.FILL_ALL_FIELDS_MESSAGE
        if not request.duration or request.duration <= 0:
            errors["duration"] = texts.FILL_ALL_FIELDS_MESSAGE
        if not request.immediate:
            if not request.due_date:
                errors["due_date"] = texts.FILL_ALL_FIELDS_MESSAGE
            if not request.due_time:
                errors["due_time"] = texts.FILL_ALL_FIELDS_MESSAGE
            if not (request.customer_phone_type or request.customer_physical_type):
                errors["customer_phone_type"] = "Du måste göra ett val här"
        if errors:
            raise ValidationError(errors)

    def _parse_due(self, due_date: str, due_time: str) -> datetime:
        try:
            wall_clock = datetime.strptime(f"{due_date.strip()} {due_time.strip()}", DUE_FORMAT)
        except ValueError:
            raise ValidationError.for_field(
                "due", "Expected MM/DD/YYYY and HH:MM"
            ) from None
        return self.clock.localize(wall_clock)
