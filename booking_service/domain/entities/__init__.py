"""
Domain entities package.
"""

from .distance import Distance
from .job import Job
from .language import Language
from .translator_assignment import TranslatorAssignment
from .user import User

__all__ = [
    "Distance",
    "Job",
    "Language",
    "TranslatorAssignment",
    "User",
]
