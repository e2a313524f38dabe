"""
Job SQLAlchemy model.
"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from booking_service.domain.value_objects.job_status import JobStatus

from .base import BaseModel


class JobModel(BaseModel):
    """Job database model."""

    __tablename__ = "jobs"

    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    from_language_id = Column(Uuid, ForeignKey("languages.id"), nullable=False)
    status = Column(String(50), default=JobStatus.PENDING.value, nullable=False, index=True)
    job_type = Column(String(20), nullable=False)
    due = Column(DateTime(timezone=True), nullable=False, index=True)
    immediate = Column(Boolean, default=False, nullable=False)
    duration = Column(Integer, nullable=False)
    gender = Column(String(10))
    certified = Column(String(20))
    customer_phone_type = Column(Boolean, default=False, nullable=False)
    customer_physical_type = Column(Boolean, default=False, nullable=False)

    admin_comments = Column(Text)
    reference = Column(String(255))
    session_time = Column(String(20))
    user_email = Column(String(255))
    address = Column(String(500))
    instructions = Column(Text)
    town = Column(String(255))
    specific_translator_id = Column(Uuid, ForeignKey("users.id"))

    end_at = Column(DateTime(timezone=True))
    will_expire_at = Column(DateTime(timezone=True), index=True)
    withdraw_at = Column(DateTime(timezone=True))

    ignore = Column(Boolean, default=False, nullable=False)
    ignore_expired = Column(Boolean, default=False, nullable=False)
    ignore_feedback = Column(Boolean, default=False, nullable=False)
    flagged = Column(Boolean, default=False, nullable=False)
    manually_handled = Column(Boolean, default=False, nullable=False)
    by_admin = Column(Boolean, default=False, nullable=False)
    cust_16_hour_email = Column(Integer, default=0, nullable=False)
    cust_48_hour_email = Column(Integer, default=0, nullable=False)
    # Bumped on every write; a stale write fails instead of overwriting
    version = Column(Integer, nullable=False)

    # Relationships
    assignments = relationship("TranslatorAssignmentModel", back_populates="job")
    distance = relationship("DistanceModel", back_populates="job", uselist=False)

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        Index("idx_jobs_status_type_language", "status", "job_type", "from_language_id"),
        Index("idx_jobs_status_expiry", "status", "will_expire_at"),
    )

    def __repr__(self) -> str:
        return f"<Job(id={self.id}, status={self.status}, due={self.due})>"
