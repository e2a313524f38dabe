"""
Language repository implementation.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from booking_service.application.interfaces.repositories import LanguageRepositoryInterface
from booking_service.domain.entities.language import Language
from booking_service.infrastructure.database.models.language import LanguageModel


class LanguageRepository(LanguageRepositoryInterface):
    """Language repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, language: Language) -> Language:
        model = LanguageModel(id=language.id, name=language.name)
        self.db.add(model)
        await self.db.flush()
        return Language(id=model.id, name=model.name)

    async def get_by_id(self, language_id: UUID) -> Optional[Language]:
        """Get language by ID."""
        stmt = select(LanguageModel).where(LanguageModel.id == language_id)
        result = await self.db.execute(stmt)
        model = result.scalar_one_or_none()
        return Language(id=model.id, name=model.name) if model else None
