"""
Domain value objects package.
"""

from .certification import Certification, TranslatorLevel, levels_for_certification
from .job_status import JobStatus
from .job_type import ConsumerType, JobType, TranslatorType
from .notification_type import NotificationType
from .session_time import SessionTime
from .user_type import Gender, UserType

__all__ = [
    "Certification",
    "ConsumerType",
    "Gender",
    "JobStatus",
    "JobType",
    "NotificationType",
    "SessionTime",
    "TranslatorLevel",
    "TranslatorType",
    "UserType",
    "levels_for_certification",
]
