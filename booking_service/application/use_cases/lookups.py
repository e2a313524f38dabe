"""Lookups shared by booking use cases."""

from typing import Optional
from uuid import UUID

from booking_service.application.interfaces.repositories import (
    JobRepositoryInterface,
    UserRepositoryInterface,
)
from booking_service.domain.entities.job import Job
from booking_service.domain.entities.user import User
from booking_service.domain.exceptions.not_found_error import NotFoundError


async def load_job(job_repo: JobRepositoryInterface, job_id: UUID) -> Job:
    job = await job_repo.get_by_id(job_id)
    if job is None:
        raise NotFoundError("Job", job_id)
    return job


async def load_user(user_repo: UserRepositoryInterface, user_id: UUID) -> User:
    user = await user_repo.get_by_id(user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return user


async def find_user(
    user_repo: UserRepositoryInterface, user_id: Optional[UUID]
) -> Optional[User]:
    if user_id is None:
        return None
    return await user_repo.get_by_id(user_id)
