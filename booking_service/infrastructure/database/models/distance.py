"""
Distance SQLAlchemy model.
"""

from sqlalchemy import Column, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from .base import BaseModel


class DistanceModel(BaseModel):
    """Travel distance recorded for a job."""

    __tablename__ = "distances"

    job_id = Column(Uuid, ForeignKey("jobs.id"), nullable=False, unique=True)
    distance = Column(String(50))
    time = Column(String(50))

    job = relationship("JobModel", back_populates="distance")
