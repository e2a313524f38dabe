"""
Language SQLAlchemy model.
"""

from sqlalchemy import Column, String

from .base import BaseModel


class LanguageModel(BaseModel):
    """Language database model."""

    __tablename__ = "languages"

    name = Column(String(100), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<Language(id={self.id}, name={self.name})>"
