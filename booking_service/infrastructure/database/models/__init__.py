"""
Database models package.
"""

from .base import Base, BaseModel
from .distance import DistanceModel
from .job import JobModel
from .language import LanguageModel
from .outbox_event import OutboxEventModel
from .translator_assignment import TranslatorAssignmentModel
from .user import BlacklistModel, UserLanguageModel, UserModel

__all__ = [
    "Base",
    "BaseModel",
    "BlacklistModel",
    "DistanceModel",
    "JobModel",
    "LanguageModel",
    "OutboxEventModel",
    "TranslatorAssignmentModel",
    "UserLanguageModel",
    "UserModel",
]
