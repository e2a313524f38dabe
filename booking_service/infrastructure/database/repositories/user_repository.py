"""
User repository implementation.
"""

from typing import List, Optional, Set
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from booking_service.application.interfaces.repositories import UserRepositoryInterface
from booking_service.config.logging import get_logger
from booking_service.domain.entities.user import User
from booking_service.domain.value_objects.user_type import UserType
from booking_service.infrastructure.database.models.user import (
    BlacklistModel,
    UserLanguageModel,
    UserModel,
)

logger = get_logger(__name__)


class UserRepository(UserRepositoryInterface):
    """User repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, user: User) -> User:
        """Create a user with its language links."""
        model = UserModel(
            id=user.id,
            name=user.name,
            email=user.email,
            user_type=user.user_type.value,
            mobile=user.mobile,
            consumer_type=user.consumer_type,
            customer_type=user.customer_type,
            translator_type=user.translator_type,
            translator_level=user.translator_level,
            gender=user.gender,
            city=user.city,
            address=user.address,
            instructions=user.instructions,
            not_get_emergency=user.not_get_emergency,
            not_get_nighttime=user.not_get_nighttime,
            not_get_notification=user.not_get_notification,
            languages=[
                UserLanguageModel(language_id=language_id)
                for language_id in user.language_ids
            ],
        )
        self.db.add(model)
        await self.db.flush()
        await self.db.refresh(model, ["languages"])
        return self._model_to_entity(model)

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID."""
        stmt = select(UserModel).where(UserModel.id == user_id)
        result = await self.db.execute(stmt)
        model = result.scalar_one_or_none()
        return self._model_to_entity(model) if model else None

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email (case-insensitive)."""
        stmt = select(UserModel).where(func.lower(UserModel.email) == email.lower())
        result = await self.db.execute(stmt)
        model = result.scalars().first()
        return self._model_to_entity(model) if model else None

    async def find_translators(
        self,
        translator_type: str,
        language_id: UUID,
        gender: Optional[str] = None,
        levels: Optional[List[str]] = None,
    ) -> List[User]:
        """Find translators of a type speaking a language, optionally by gender and level."""
        stmt = (
            select(UserModel)
            .join(UserLanguageModel, UserLanguageModel.user_id == UserModel.id)
            .where(
                UserModel.user_type == UserType.TRANSLATOR.value,
                UserModel.translator_type == translator_type,
                UserLanguageModel.language_id == language_id,
            )
        )
        if gender:
            stmt = stmt.where(UserModel.gender == gender)
        if levels:
            stmt = stmt.where(UserModel.translator_level.in_(levels))

        result = await self.db.execute(stmt.distinct())
        translators = [self._model_to_entity(model) for model in result.scalars().all()]

        logger.debug(
            "Translators found",
            translator_type=translator_type,
            language_id=str(language_id),
            gender=gender,
            count=len(translators),
        )
        return translators

    async def get_blacklisted_translator_ids(self, customer_id: UUID) -> Set[UUID]:
        """Translators the customer has blocked."""
        stmt = select(BlacklistModel.translator_user_id).where(
            BlacklistModel.customer_user_id == customer_id
        )
        result = await self.db.execute(stmt)
        return set(result.scalars().all())

    async def add_to_blacklist(self, customer_id: UUID, translator_id: UUID) -> None:
        self.db.add(
            BlacklistModel(customer_user_id=customer_id, translator_user_id=translator_id)
        )
        await self.db.flush()

    @staticmethod
    def _model_to_entity(model: UserModel) -> User:
        """Convert database model to domain entity."""
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            user_type=UserType(model.user_type),
            mobile=model.mobile,
            consumer_type=model.consumer_type,
            customer_type=model.customer_type,
            translator_type=model.translator_type,
            translator_level=model.translator_level,
            gender=model.gender,
            city=model.city,
            address=model.address,
            instructions=model.instructions,
            language_ids=[link.language_id for link in model.languages],
            not_get_emergency=model.not_get_emergency,
            not_get_nighttime=model.not_get_nighttime,
            not_get_notification=model.not_get_notification,
        )
