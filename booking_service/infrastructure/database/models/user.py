"""
User SQLAlchemy models.
"""

from sqlalchemy import Boolean, Column, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import relationship

from .base import BaseModel


class UserModel(BaseModel):
    """User database model with profile meta."""

    __tablename__ = "users"

    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    user_type = Column(String(20), nullable=False, index=True)
    mobile = Column(String(30))

    consumer_type = Column(String(30))
    customer_type = Column(String(30))
    translator_type = Column(String(30), index=True)
    translator_level = Column(String(100))
    gender = Column(String(10))
    city = Column(String(255))
    address = Column(String(500))
    instructions = Column(String(1000))

    not_get_emergency = Column(Boolean, default=False, nullable=False)
    not_get_nighttime = Column(Boolean, default=False, nullable=False)
    not_get_notification = Column(Boolean, default=False, nullable=False)

    # Relationships
    languages = relationship(
        "UserLanguageModel", back_populates="user", lazy="selectin", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, type={self.user_type})>"


class UserLanguageModel(BaseModel):
    """Language a translator works with."""

    __tablename__ = "user_languages"

    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False)
    language_id = Column(Uuid, ForeignKey("languages.id"), nullable=False)

    user = relationship("UserModel", back_populates="languages")

    __table_args__ = (
        Index("idx_user_languages_unique", "user_id", "language_id", unique=True),
        Index("idx_user_languages_language", "language_id"),
    )


class BlacklistModel(BaseModel):
    """Translator a customer does not want to be matched with."""

    __tablename__ = "user_blacklist"

    customer_user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    translator_user_id = Column(Uuid, ForeignKey("users.id"), nullable=False)

    __table_args__ = (
        Index(
            "idx_user_blacklist_unique", "customer_user_id", "translator_user_id", unique=True
        ),
    )
