"""
Transaction boundary for booking mutations.
"""

from typing import Awaitable, Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from booking_service.config.logging import get_logger
from booking_service.domain.exceptions import ConflictError, NotFoundError, ValidationError
from booking_service.infrastructure.monitoring.metrics import record_error

logger = get_logger(__name__)

T = TypeVar("T")

_REJECTIONS = (ConflictError, NotFoundError, ValidationError)


class TransactionService:
    """Runs one booking mutation per database transaction."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def execute_in_transaction(self, operation: Callable[[], Awaitable[T]]) -> T:
        """
        Run ``operation`` and commit, or roll back and re-raise.

        Repositories only flush, so this is the one place a use case's
        changes are committed. A rejected change (conflict, missing record,
        invalid input) rolls back like any failure but is logged at info.

        Args:
            operation: Zero-argument coroutine function doing the writes

        Returns:
            Whatever ``operation`` returned
        """
        try:
            result = await operation()
            await self.session.commit()
        except _REJECTIONS as e:
            await self.session.rollback()
            logger.info("Booking change rejected", reason=str(e), error_type=type(e).__name__)
            raise
        except SQLAlchemyError as e:
            await self.session.rollback()
            record_error("database_error", "transaction")
            logger.error("Transaction failed", error=str(e), error_type=type(e).__name__)
            raise
        except Exception as e:
            await self.session.rollback()
            logger.warning(
                "Transaction rolled back", error=str(e), error_type=type(e).__name__
            )
            raise

        logger.debug("Transaction committed")
        return result
