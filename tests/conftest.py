"""
Pytest configuration and fixtures.
"""

from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from booking_service.application.interfaces.gateways import (
    MailGatewayInterface,
    PushDeliveryResult,
    PushGatewayInterface,
    SmsDeliveryResult,
    SmsGatewayInterface,
)
from booking_service.application.interfaces.repositories import (
    DistanceRepositoryInterface,
    JobRepositoryInterface,
    LanguageRepositoryInterface,
    TranslatorAssignmentRepositoryInterface,
    UserRepositoryInterface,
)
from booking_service.application.services.booking_mailer import BookingMailer
from booking_service.application.services.booking_notifier import BookingNotifier
from booking_service.application.services.eligibility_engine import EligibilityEngine
from booking_service.application.services.notification_dispatcher import DispatchReport
from booking_service.application.services.transactional_outbox import TransactionalOutbox
from booking_service.domain.value_objects.notification_type import NotificationType
from booking_service.infrastructure.database.models import Base
from tests.factories import (
    FakeClock,
    PassThroughTransactionService,
    make_customer,
    make_translator,
)

# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def clock():
    """Frozen business clock."""
    return FakeClock()


@pytest.fixture
def transaction_service():
    """Transaction service that needs no session."""
    return PassThroughTransactionService()


@pytest.fixture
def customer():
    return make_customer()


@pytest.fixture
def translator():
    return make_translator()


@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Cleanup
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def mock_job_repository():
    """Mock job repository."""
    mock_repo = AsyncMock(spec=JobRepositoryInterface)

    mock_repo.get_by_id = AsyncMock(return_value=None)
    mock_repo.create = AsyncMock(side_effect=lambda job: job)
    mock_repo.update = AsyncMock(side_effect=lambda job: job)
    mock_repo.compare_and_set_status = AsyncMock(return_value=True)
    mock_repo.find_pending_for_translator = AsyncMock(return_value=[])
    mock_repo.find_expired_pending = AsyncMock(return_value=[])

    return mock_repo


@pytest.fixture
def mock_assignment_repository():
    """Mock translator assignment repository."""
    mock_repo = AsyncMock(spec=TranslatorAssignmentRepositoryInterface)

    mock_repo.create = AsyncMock(side_effect=lambda assignment: assignment)
    mock_repo.update = AsyncMock(side_effect=lambda assignment: assignment)
    mock_repo.get_active_for_job = AsyncMock(return_value=None)
    mock_repo.find_open_for_job = AsyncMock(return_value=[])
    mock_repo.translator_booked_at = AsyncMock(return_value=False)

    return mock_repo


@pytest.fixture
def mock_user_repository():
    """Mock user repository."""
    mock_repo = AsyncMock(spec=UserRepositoryInterface)

    mock_repo.get_by_id = AsyncMock(return_value=None)
    mock_repo.get_by_email = AsyncMock(return_value=None)
    mock_repo.find_translators = AsyncMock(return_value=[])
    mock_repo.get_blacklisted_translator_ids = AsyncMock(return_value=set())

    return mock_repo


@pytest.fixture
def mock_language_repository():
    """Mock language repository."""
    mock_repo = AsyncMock(spec=LanguageRepositoryInterface)
    mock_repo.get_by_id = AsyncMock(return_value=None)
    return mock_repo


@pytest.fixture
def mock_distance_repository():
    """Mock distance repository."""
    mock_repo = AsyncMock(spec=DistanceRepositoryInterface)
    mock_repo.get_by_job_id = AsyncMock(return_value=None)
    mock_repo.save = AsyncMock(side_effect=lambda distance: distance)
    return mock_repo


@pytest.fixture
def mock_push_gateway():
    """Mock push provider."""
    gateway = AsyncMock(spec=PushGatewayInterface)
    gateway.send = AsyncMock(
        return_value=PushDeliveryResult(success=True, notification_id="n-1", recipients=1)
    )
    return gateway


@pytest.fixture
def mock_sms_gateway():
    """Mock SMS provider."""
    gateway = AsyncMock(spec=SmsGatewayInterface)
    gateway.send = AsyncMock(
        return_value=SmsDeliveryResult(success=True, message_id="SM1", status="queued")
    )
    return gateway


@pytest.fixture
def mock_mail_gateway():
    """Mock mail provider."""
    gateway = AsyncMock(spec=MailGatewayInterface)
    gateway.send = AsyncMock(return_value=None)
    return gateway


@pytest.fixture
def mock_notifier():
    """Mock booking notifier."""
    notifier = AsyncMock(spec=BookingNotifier)
    report = DispatchReport(intent=NotificationType.SUITABLE_JOB, immediate=1)

    notifier.broadcast_suitable_job = AsyncMock(return_value=report)
    notifier.sms_eligible_translators = AsyncMock(return_value=0)
    notifier.language_name = AsyncMock(return_value="Arabiska")
    for name in (
        "job_accepted",
        "customer_cancelled",
        "translator_cancelled",
        "job_expired",
        "session_start_reminder",
    ):
        setattr(notifier, name, AsyncMock(return_value=report))

    return notifier


@pytest.fixture
def mock_mailer():
    """Mock booking mailer."""
    return AsyncMock(spec=BookingMailer)


@pytest.fixture
def mock_eligibility_engine():
    """Mock eligibility engine."""
    engine = AsyncMock(spec=EligibilityEngine)
    engine.find_eligible_translators = AsyncMock(return_value=[])
    engine.find_potential_jobs = AsyncMock(return_value=[])
    return engine


@pytest.fixture
def mock_outbox():
    """Mock transactional outbox."""
    outbox = AsyncMock(spec=TransactionalOutbox)
    outbox.create_event = AsyncMock(return_value=MagicMock())
    return outbox
