"""
Domain events package.
"""

from .job_cancelled import JobCancelled
from .job_created import JobCreated
from .session_ended import SessionEnded

__all__ = [
    "JobCancelled",
    "JobCreated",
    "SessionEnded",
]
