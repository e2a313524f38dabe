"""
Database repositories package.
"""

from .distance_repository import DistanceRepository
from .job_repository import JobRepository
from .language_repository import LanguageRepository
from .transaction_repository import TransactionService
from .translator_assignment_repository import TranslatorAssignmentRepository
from .user_repository import UserRepository

__all__ = [
    "DistanceRepository",
    "JobRepository",
    "LanguageRepository",
    "TransactionService",
    "TranslatorAssignmentRepository",
    "UserRepository",
]
