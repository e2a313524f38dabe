"""
Translator assignment SQLAlchemy model.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship

from .base import BaseModel


class TranslatorAssignmentModel(BaseModel):
    """Translator assignment database model."""

    __tablename__ = "translator_assignments"

    job_id = Column(Uuid, ForeignKey("jobs.id"), nullable=False, index=True)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    completed_at = Column(DateTime(timezone=True))
    cancel_at = Column(DateTime(timezone=True))
    completed_by = Column(Uuid, ForeignKey("users.id"))

    # Relationships
    job = relationship("JobModel", back_populates="assignments")

    __table_args__ = (
        # At most one active assignment per job
        Index(
            "uq_translator_assignments_active_job",
            "job_id",
            unique=True,
            postgresql_where=(completed_at.is_(None) & cancel_at.is_(None)),
            sqlite_where=(completed_at.is_(None) & cancel_at.is_(None)),
        ),
        Index("idx_translator_assignments_user_open", "user_id", "completed_at", "cancel_at"),
    )

    def __repr__(self) -> str:
        return f"<TranslatorAssignment(id={self.id}, job_id={self.job_id}, user_id={self.user_id})>"
